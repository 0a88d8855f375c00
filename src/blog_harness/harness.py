"""
BlogHarness: the contract surface a scenario runner drives.

Composes FixtureReset, SessionManager, BlogLifecycle and the delete guard
over a single store handle. One harness = one actor with one session;
for_actor() creates another actor over the same store.

Usage:
    with BlogHarness(create_store()) as harness:
        harness.prepare(UserCredentials('alice', 'pw1'))
        harness.login('alice', 'pw1')
        blog = harness.create_blog('Test Blog', 'Test Author', 'http://example.com')
        harness.like_blog(blog.id)
"""
import logging
from typing import List, Optional

from .blogs import BlogLifecycle
from .config import HarnessSettings
from .errors import InvalidCredentials
from .fixtures import FixtureReset
from .records import BlogRecord, UserCredentials, UserRecord
from .session import Session, SessionManager
from .stores import create_store
from .stores.base import BlogStore

logger = logging.getLogger(__name__)


class BlogHarness:
    """Contract operations for one actor."""

    def __init__(self, store: BlogStore, actor: str = 'default', owns_store: bool = True):
        self.store = store
        self.actor = actor
        self.fixture = FixtureReset(store)
        self.sessions = SessionManager(store, actor=actor)
        self.blogs = BlogLifecycle(store)
        self._owns_store = owns_store

    @classmethod
    def from_settings(cls, settings: Optional[HarnessSettings] = None, remote: bool = False) -> 'BlogHarness':
        """Build a harness against the configured API (remote) or database."""
        settings = settings or HarnessSettings.from_env()
        if remote:
            store = create_store(settings.api_base_url, timeout=settings.timeout)
        else:
            store = create_store(settings.database_uri)
        logger.info(f"Harness using {store.name} store")
        return cls(store)

    def for_actor(self, actor: str) -> 'BlogHarness':
        """Another actor, with its own anonymous session, sharing this store."""
        return BlogHarness(self.store, actor=actor, owns_store=False)

    # ------------------------------------------------------------------
    # Fixture
    # ------------------------------------------------------------------

    def reset_all(self) -> None:
        self.fixture.reset_all()

    def provision(self, credentials: UserCredentials) -> UserRecord:
        return self.fixture.provision(credentials)

    def prepare(self, credentials: UserCredentials) -> UserRecord:
        """Reset + provision, and drop this actor's session."""
        self.sessions.logout()
        return self.fixture.prepare(credentials)

    def get_user(self, username: str) -> Optional[UserRecord]:
        return self.store.get_user(username)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self.sessions.session

    def login(self, username: str, password: str) -> bool:
        """True on success; False (session stays anonymous) on bad credentials."""
        try:
            self.sessions.login(username, password)
        except InvalidCredentials:
            return False
        return True

    def logout(self) -> None:
        self.sessions.logout()

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    def create_blog(self, title: str, author: str, url: str) -> BlogRecord:
        return self.blogs.create(self.session, title, author, url)

    def like_blog(self, blog_id: int) -> int:
        return self.blogs.like(blog_id)

    def delete_blog(self, blog_id: int) -> None:
        self.blogs.delete(self.session, blog_id)

    def get_blog(self, blog_id: int) -> BlogRecord:
        return self.blogs.get(blog_id)

    def list_blogs(self) -> List[BlogRecord]:
        return self.blogs.list()

    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_store:
            self.store.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
