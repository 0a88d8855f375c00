"""
blog-contract-harness: behavioral contract for a small blog application.

Core components (leaves first):
- FixtureReset: purge + provision before every scenario
- SessionManager: Anonymous / Authenticated(identity) state machine
- BlogLifecycle: create / like / delete / list, gated by the session
- can_delete: the delete authorization guard
"""
from .authorization import can_delete, ensure_can_delete
from .blogs import BlogLifecycle
from .errors import (
    Conflict,
    Forbidden,
    HarnessError,
    InvalidCredentials,
    NotFound,
    SessionStateError,
    TransportError,
    Unauthorized,
    ValidationError,
)
from .fixtures import FixtureReset
from .harness import BlogHarness
from .records import BlogRecord, UserCredentials, UserRecord
from .session import ANONYMOUS, Session, SessionManager, SessionState

__version__ = "1.0.0"

__all__ = [
    'ANONYMOUS',
    'BlogHarness',
    'BlogLifecycle',
    'BlogRecord',
    'Conflict',
    'FixtureReset',
    'Forbidden',
    'HarnessError',
    'InvalidCredentials',
    'NotFound',
    'Session',
    'SessionManager',
    'SessionState',
    'SessionStateError',
    'TransportError',
    'Unauthorized',
    'UserCredentials',
    'UserRecord',
    'ValidationError',
    'can_delete',
    'ensure_can_delete',
]
