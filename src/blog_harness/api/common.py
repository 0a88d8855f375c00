"""
Request helpers shared by the API blueprints.

Bearer tokens are opaque random strings held in process memory
(token → username). Restarting the API logs everybody out.
"""
import logging
import secrets
import threading
from typing import Dict, Optional

from flask import current_app, request

from ..blogs import BlogLifecycle
from ..fixtures import FixtureReset
from ..session import ANONYMOUS, Session
from ..stores.base import BlogStore

logger = logging.getLogger(__name__)

STORE_EXTENSION = 'blog_harness.store'
TOKENS_EXTENSION = 'blog_harness.tokens'

TOKEN_BYTES = 16


class TokenRegistry:
    """Thread-safe token → username table."""

    def __init__(self):
        self._tokens: Dict[str, str] = {}
        self._lock = threading.Lock()

    def issue(self, username: str) -> str:
        token = secrets.token_hex(TOKEN_BYTES)
        with self._lock:
            self._tokens[token] = username
        return token

    def resolve(self, token: str) -> Optional[str]:
        with self._lock:
            return self._tokens.get(token)

    def revoke(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()


def get_store() -> BlogStore:
    return current_app.extensions[STORE_EXTENSION]


def get_tokens() -> TokenRegistry:
    return current_app.extensions[TOKENS_EXTENSION]


def get_lifecycle() -> BlogLifecycle:
    return BlogLifecycle(get_store())


def get_fixture() -> FixtureReset:
    return FixtureReset(get_store())


def bearer_token() -> Optional[str]:
    auth_header = request.headers.get('Authorization', '')
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def current_session() -> Session:
    """Session of the caller: Authenticated(username) for a known token, else anonymous."""
    token = bearer_token()
    if not token:
        return ANONYMOUS
    username = get_tokens().resolve(token)
    if username is None:
        logger.debug("Unknown bearer token presented")
        return ANONYMOUS
    return Session(identity=username, token=token)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
