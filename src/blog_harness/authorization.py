"""
Delete authorization.

A blog may be deleted only by a session authenticated as its creator.
Anonymous sessions and every other identity are denied; there is no admin
override and no role hierarchy.
"""
import logging

from .errors import Forbidden
from .records import BlogRecord
from .session import Session

logger = logging.getLogger(__name__)


def can_delete(session: Session, blog: BlogRecord) -> bool:
    """Pure predicate, evaluated against the session as it is right now."""
    return session.is_authenticated and session.identity == blog.creator


def ensure_can_delete(session: Session, blog: BlogRecord) -> None:
    """Raise Forbidden unless can_delete()."""
    if not can_delete(session, blog):
        logger.info(f"Delete of blog {blog.id} denied for {session}")
        raise Forbidden(f"Only {blog.creator} may delete blog {blog.id}")
