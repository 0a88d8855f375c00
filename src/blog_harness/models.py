"""
Database models for the SQL backing store (User → Blog).

- User: provisioned account that can log in
- Blog: post with a like counter, owned by reference to its creator

Blog.creator stores the username, not a foreign key: deleting users
(bulk reset) never cascades into blogs.
"""
import logging
import os
from datetime import datetime

import bcrypt
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import CheckConstraint

from .errors import ValidationError
from .records import BlogRecord, UserRecord

logger = logging.getLogger(__name__)

db = SQLAlchemy()

# bcrypt work factor; the test suite lowers it to the minimum (4)
BCRYPT_ROUNDS = int(os.environ.get("BLOG_HARNESS_BCRYPT_ROUNDS", "12"))


def validate_username(username: str) -> tuple[bool, str | None]:
    """
    Validate username for provisioning.

    The contract only requires a non-empty string; format rules belong to
    the application under test.

    Returns:
        (is_valid, error_message)
    """
    if not username or not username.strip():
        return False, "Username is required"
    return True, None


def validate_blog_fields(title: str, author: str, url: str) -> None:
    """Raise ValidationError if the blog cannot be stored."""
    if not title or not title.strip():
        raise ValidationError("Title is required", field="title")
    if author is None:
        raise ValidationError("Author must be a string", field="author")
    if url is None:
        raise ValidationError("URL must be a string", field="url")


class User(db.Model):
    """Provisioned user. Destroyed only by bulk reset."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, password: str):
        """Hash and set password."""
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode('utf-8')

    def verify_password(self, password: str) -> bool:
        """Verify password against hash."""
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except (ValueError, TypeError):
            return False

    def to_record(self) -> UserRecord:
        return UserRecord(username=self.username)

    def __repr__(self):
        return f'<User {self.username}>'


class Blog(db.Model):
    """
    Blog post.

    likes only ever grows (+1 per like); creator is set once on insert.
    AUTOINCREMENT keeps deleted ids from being handed out again, so a stale
    reference always resolves to NotFound.
    """
    __tablename__ = 'blogs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(500), nullable=False)
    author = db.Column(db.String(255), nullable=False, default='')
    url = db.Column(db.String(2048), nullable=False, default='')
    likes = db.Column(db.Integer, nullable=False, default=0)
    creator = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint('likes >= 0', name='check_likes_non_negative'),
        {'sqlite_autoincrement': True},
    )

    def to_record(self) -> BlogRecord:
        return BlogRecord(
            id=self.id,
            title=self.title,
            author=self.author,
            url=self.url,
            likes=self.likes,
            creator=self.creator,
        )

    def __repr__(self):
        return f'<Blog {self.id} {self.title!r} by {self.creator}>'
