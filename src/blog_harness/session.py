"""
Session state machine for one actor.

States:
- ANONYMOUS: no identity
- AUTHENTICATED: identity = username of the user who logged in

Transitions:
- login(username, password): ANONYMOUS → AUTHENTICATED iff the store holds a
  user with exactly these credentials; otherwise InvalidCredentials and the
  session stays ANONYMOUS.
- logout(): any state → ANONYMOUS. Never fails, never touches stored data.
- login() while AUTHENTICATED raises SessionStateError (logout first).

The store hands out an opaque token on login; the session carries it back
to the store for writes and for logout. The identity is not re-validated
after login; deleting the user (bulk reset) does not end the session.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import HarnessError, InvalidCredentials, SessionStateError
from .stores.base import BlogStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ANONYMOUS = 'anonymous'
    AUTHENTICATED = 'authenticated'


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of a session; transitions return new snapshots."""

    identity: Optional[str] = None
    token: Optional[str] = field(default=None, repr=False, compare=False)

    @property
    def state(self) -> SessionState:
        if self.identity is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def authenticated_as(self, username: str, token: Optional[str] = None) -> 'Session':
        if self.is_authenticated:
            raise SessionStateError(f"Already logged in as {self.identity}; logout first")
        return Session(identity=username, token=token)

    def logged_out(self) -> 'Session':
        return ANONYMOUS

    def __str__(self):
        if self.is_authenticated:
            return f"Authenticated({self.identity})"
        return "Anonymous"


ANONYMOUS = Session()


class SessionManager:
    """Owns the current session of one actor."""

    def __init__(self, store: BlogStore, actor: str = 'default'):
        self.store = store
        self.actor = actor
        self._session: Session = ANONYMOUS

    @property
    def session(self) -> Session:
        return self._session

    @property
    def identity(self) -> Optional[str]:
        return self._session.identity

    def login(self, username: str, password: str) -> Session:
        """
        Authenticate against the store.

        Raises:
            SessionStateError: already authenticated
            InvalidCredentials: no user with exactly this username/password
        """
        if self._session.is_authenticated:
            raise SessionStateError(
                f"Actor {self.actor} already logged in as {self._session.identity}; logout first"
            )

        token = self.store.authenticate(username, password)
        if token is None:
            logger.warning(f"Login failed for actor {self.actor} (username: {username})")
            raise InvalidCredentials()

        self._session = self._session.authenticated_as(username, token)
        logger.info(f"Actor {self.actor} logged in as {username}")
        return self._session

    def logout(self) -> Session:
        """Drop this actor's session and revoke its token. Other actors keep theirs."""
        previous = self._session
        self._session = previous.logged_out()
        if previous.is_authenticated:
            try:
                self.store.end_session(previous.token)
            except HarnessError as e:
                # Logout never fails; an unrevoked token only lingers server-side
                logger.warning(f"Could not revoke token for actor {self.actor}: {e}")
            logger.info(f"Actor {self.actor} logged out ({previous.identity})")
        return self._session
