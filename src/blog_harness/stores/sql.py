"""
In-process SQL store backed by Flask-SQLAlchemy.

Each call runs in its own app context, so each call gets its own session
and its own transaction. Likes are incremented in SQL (likes = likes + 1)
instead of read-modify-write in Python, which keeps concurrent likes from
losing updates.
"""
import logging
import threading
from contextlib import contextmanager
from typing import List, Optional

from flask import Flask
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, OperationalError

from ..database import create_store_app
from ..errors import Conflict, Forbidden, NotFound, TransportError, ValidationError
from ..models import Blog, User, db, validate_blog_fields, validate_username
from ..records import BlogRecord, UserCredentials, UserRecord
from .base import BlogStore

logger = logging.getLogger(__name__)


class SQLAlchemyBlogStore(BlogStore):
    """BlogStore over the User/Blog tables."""

    name = "sql"

    def __init__(self, app: Optional[Flask] = None, database_uri: Optional[str] = None):
        """
        Args:
            app: Flask app already bound to `db` (e.g. the reference API).
                 If omitted, a private app is created for `database_uri`.
            database_uri: SQLAlchemy URI, only used when `app` is omitted.
        """
        self.app = app if app is not None else create_store_app(database_uri)
        # One transaction at a time: SQLite allows a single writer and
        # in-memory databases share one connection across threads.
        self._lock = threading.RLock()

    @contextmanager
    def _transaction(self):
        """App context + session scope; rolls back on any error."""
        with self._lock, self.app.app_context():
            try:
                yield db.session
                db.session.commit()
            except OperationalError as e:
                db.session.rollback()
                logger.error(f"Database unreachable: {e}")
                raise TransportError(f"Database unreachable: {e.orig}") from e
            except Exception:
                db.session.rollback()
                raise

    # ------------------------------------------------------------------
    # Fixture operations
    # ------------------------------------------------------------------

    def purge_blogs(self) -> int:
        with self._transaction() as session:
            return session.execute(delete(Blog)).rowcount

    def purge_users(self) -> int:
        with self._transaction() as session:
            return session.execute(delete(User)).rowcount

    def reset_all(self) -> None:
        # Single transaction: a reset is all-or-nothing
        with self._transaction() as session:
            blogs = session.execute(delete(Blog)).rowcount
            users = session.execute(delete(User)).rowcount
        logger.info(f"Store reset: removed {blogs} blogs and {users} users")

    def add_user(self, credentials: UserCredentials) -> UserRecord:
        is_valid, error_msg = validate_username(credentials.username)
        if not is_valid:
            raise ValidationError(error_msg, field='username')
        if not credentials.password:
            raise ValidationError("Password is required", field='password')

        try:
            with self._transaction() as session:
                if session.execute(
                    select(User.id).filter_by(username=credentials.username)
                ).first():
                    raise Conflict(f"Username '{credentials.username}' already exists", field='username')
                user = User(username=credentials.username)
                user.set_password(credentials.password)
                session.add(user)
                session.flush()
                record = user.to_record()
        except IntegrityError as e:
            raise Conflict(f"Username '{credentials.username}' already exists", field='username') from e

        logger.info(f"User provisioned: {record.username}")
        return record

    def get_user(self, username: str) -> Optional[UserRecord]:
        with self._transaction() as session:
            user = session.execute(select(User).filter_by(username=username)).scalar_one_or_none()
            return user.to_record() if user else None

    def verify_credentials(self, username: str, password: str) -> bool:
        with self._transaction() as session:
            user = session.execute(select(User).filter_by(username=username)).scalar_one_or_none()
            return bool(user and user.verify_password(password))

    # ------------------------------------------------------------------
    # Blog operations
    # ------------------------------------------------------------------

    def insert_blog(self, creator: str, title: str, author: str, url: str,
                    token: Optional[str] = None) -> BlogRecord:
        validate_blog_fields(title, author, url)
        with self._transaction() as session:
            blog = Blog(title=title, author=author, url=url, likes=0, creator=creator)
            session.add(blog)
            session.flush()
            record = blog.to_record()
        logger.info(f"Blog {record.id} created by {creator}")
        return record

    def get_blog(self, blog_id: int) -> Optional[BlogRecord]:
        with self._transaction() as session:
            blog = session.get(Blog, blog_id)
            return blog.to_record() if blog else None

    def list_blogs(self) -> List[BlogRecord]:
        with self._transaction() as session:
            blogs = session.execute(select(Blog).order_by(Blog.id)).scalars().all()
            return [blog.to_record() for blog in blogs]

    def increment_likes(self, blog_id: int) -> int:
        with self._transaction() as session:
            result = session.execute(
                update(Blog)
                .where(Blog.id == blog_id)
                .values(likes=Blog.likes + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFound(blog_id=blog_id)
            likes = session.execute(select(Blog.likes).where(Blog.id == blog_id)).scalar_one()
        logger.debug(f"Blog {blog_id} liked, now {likes}")
        return likes

    def delete_blog(self, blog_id: int, identity: str, token: Optional[str] = None) -> None:
        with self._transaction() as session:
            result = session.execute(
                delete(Blog)
                .where(Blog.id == blog_id, Blog.creator == identity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                if session.get(Blog, blog_id) is None:
                    raise NotFound(blog_id=blog_id)
                raise Forbidden(f"Blog {blog_id} does not belong to {identity}")
        logger.info(f"Blog {blog_id} deleted by {identity}")

    def close(self) -> None:
        with self.app.app_context():
            db.session.remove()
            db.engine.dispose()
