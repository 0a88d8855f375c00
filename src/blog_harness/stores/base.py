"""
Abstract base class for blog backing stores.

Every store the harness can run against (in-process SQL, remote HTTP API)
implements this interface. Components receive a store handle explicitly;
there is no module-level store.
"""

import logging
import secrets
from abc import ABC, abstractmethod
from typing import List, Optional

from ..records import BlogRecord, UserCredentials, UserRecord

logger = logging.getLogger(__name__)


class BlogStore(ABC):
    """Abstract base class for blog backing stores.

    All operations are atomic from the caller's point of view: they either
    apply fully or raise without mutating anything. Unreachable stores raise
    TransportError.
    """

    name = "abstract"

    @abstractmethod
    def purge_blogs(self) -> int:
        """Delete every blog; return how many were removed."""
        pass

    @abstractmethod
    def purge_users(self) -> int:
        """Delete every user; return how many were removed. Blogs are untouched."""
        pass

    def reset_all(self) -> None:
        """Delete every blog, then every user. Empty collections are a no-op."""
        blogs = self.purge_blogs()
        users = self.purge_users()
        logger.info(f"{self.name} store reset: removed {blogs} blogs and {users} users")

    @abstractmethod
    def add_user(self, credentials: UserCredentials) -> UserRecord:
        """Create one user.

        Raises:
            ValidationError: empty username/password
            Conflict: username already taken
        """
        pass

    @abstractmethod
    def get_user(self, username: str) -> Optional[UserRecord]:
        """Look up a user, or None."""
        pass

    @abstractmethod
    def verify_credentials(self, username: str, password: str) -> bool:
        """True iff a user with exactly this username and password exists."""
        pass

    def authenticate(self, username: str, password: str) -> Optional[str]:
        """Open a session: an opaque token on success, None on bad credentials.

        The caller owns the token and passes it back to insert_blog(),
        delete_blog() and end_session(). In-process stores trust the
        identity they are given, so their token is never checked.
        """
        if not self.verify_credentials(username, password):
            return None
        return secrets.token_hex(16)

    @abstractmethod
    def insert_blog(self, creator: str, title: str, author: str, url: str,
                    token: Optional[str] = None) -> BlogRecord:
        """Insert a blog with likes=0 and the given creator."""
        pass

    @abstractmethod
    def get_blog(self, blog_id: int) -> Optional[BlogRecord]:
        """Return the blog, or None if it does not exist."""
        pass

    @abstractmethod
    def list_blogs(self) -> List[BlogRecord]:
        """All blogs in insertion order."""
        pass

    @abstractmethod
    def increment_likes(self, blog_id: int) -> int:
        """Atomically add one like and return the new count.

        Raises:
            NotFound: blog does not exist (including deleted mid-flight)
        """
        pass

    @abstractmethod
    def delete_blog(self, blog_id: int, identity: str, token: Optional[str] = None) -> None:
        """Remove the blog if its creator is `identity`.

        The ownership condition is part of the removal itself, so a blog is
        never removed on behalf of an identity that does not own it.

        Raises:
            NotFound: blog does not exist
            Forbidden: blog exists but belongs to someone else
        """
        pass

    def end_session(self, token: Optional[str]) -> None:
        """Invalidate one session token after logout. Default: nothing to revoke."""
        pass

    def close(self) -> None:
        """Release connections. Default: nothing to release."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
