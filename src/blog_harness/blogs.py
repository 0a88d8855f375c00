"""
Blog resource lifecycle: create, like, delete, read.

Rules:
- create requires an authenticated session (Unauthorized otherwise);
  the creator is the session identity and never changes.
- like is open to every session, authenticated or not, and adds exactly 1.
- delete checks existence first (NotFound), then the authorization guard
  (Forbidden), then removes the blog for good.
- list/get are read-only and always allowed.
"""
import logging
from typing import List, Optional

from .authorization import ensure_can_delete
from .errors import NotFound, Unauthorized
from .records import BlogRecord
from .session import Session
from .stores.base import BlogStore

logger = logging.getLogger(__name__)


class BlogLifecycle:
    """Blog operations over an explicit store handle."""

    def __init__(self, store: BlogStore):
        self.store = store

    def create(self, session: Session, title: str, author: str, url: str) -> BlogRecord:
        if not session.is_authenticated:
            raise Unauthorized("Login required to create a blog")
        blog = self.store.insert_blog(session.identity, title, author, url, token=session.token)
        logger.info(f"Blog {blog.id} '{blog.title}' created by {blog.creator}")
        return blog

    def like(self, blog_id: int) -> int:
        """Add one like and return the new count. A blog deleted concurrently raises NotFound."""
        return self.store.increment_likes(blog_id)

    def delete(self, session: Session, blog_id: int) -> None:
        blog = self.get(blog_id)
        ensure_can_delete(session, blog)
        self.store.delete_blog(blog.id, session.identity, token=session.token)
        logger.info(f"Blog {blog.id} deleted by {session.identity}")

    def find(self, blog_id: int) -> Optional[BlogRecord]:
        return self.store.get_blog(blog_id)

    def get(self, blog_id: int) -> BlogRecord:
        blog = self.store.get_blog(blog_id)
        if blog is None:
            raise NotFound(blog_id=blog_id)
        return blog

    def list(self) -> List[BlogRecord]:
        return self.store.list_blogs()
