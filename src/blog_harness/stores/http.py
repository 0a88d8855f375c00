"""
Remote store that speaks the blog REST API over httpx.

Endpoints used:
- DELETE /api/blogs, DELETE /api/users   bulk purge (reset: blogs first)
- POST   /api/users                       provision a user
- GET    /api/users/<username>            user lookup
- POST   /api/login                       credentials → bearer token
- POST   /api/logout                      revoke the presented bearer token
- GET    /api/blogs[/<id>]                read
- POST   /api/blogs                       create (bearer)
- POST   /api/blogs/<id>/like             like
- DELETE /api/blogs/<id>                  delete (bearer)

The server is the authority for every rule; this class only translates
status codes into the harness error taxonomy. The store keeps no login
state: authenticate() hands the bearer token to the caller, which passes
it back on every authenticated call. Two actors logged in as the same
user therefore hold independent tokens.
"""
import logging
from typing import List, Optional

import httpx

from ..errors import (
    ERRORS_BY_CODE,
    Conflict,
    Forbidden,
    HarnessError,
    InvalidCredentials,
    NotFound,
    TransportError,
    Unauthorized,
    ValidationError,
)
from ..records import BlogRecord, UserCredentials, UserRecord
from .base import BlogStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_ERRORS_BY_STATUS = {
    400: ValidationError,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    502: TransportError,
    503: TransportError,
    504: TransportError,
}



class HttpBlogStore(BlogStore):
    """BlogStore client for a running blog API."""

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Args:
            base_url: API root, e.g. http://localhost:3003
            timeout: Per-request timeout in seconds (connect, read, write, pool)
            transport: Optional httpx transport (tests pass a WSGITransport)
        """
        self.base_url = base_url.rstrip('/')
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> httpx.Response:
        headers = kwargs.pop('headers', {})
        if token:
            headers['Authorization'] = f"Bearer {token}"
        try:
            response = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"{method} {self.base_url}{path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise self._decode_error(response)
        return response

    @staticmethod
    def _decode_error(response: httpx.Response) -> HarnessError:
        message = None
        code = None
        try:
            payload = response.json()
            if isinstance(payload, dict):
                code = payload.get('error')
                message = payload.get('message')
        except ValueError:
            pass

        error_cls = ERRORS_BY_CODE.get(code) or _ERRORS_BY_STATUS.get(response.status_code)
        if error_cls is None:
            return HarnessError(message or f"Unexpected HTTP {response.status_code}")
        return error_cls(message)

    @staticmethod
    def _require_token(token: Optional[str], identity: str) -> str:
        # Without a bearer token the API would treat the call as anonymous
        if not token:
            raise Unauthorized(f"No session token for {identity}")
        return token

    # ------------------------------------------------------------------
    # Fixture operations
    # ------------------------------------------------------------------

    def purge_blogs(self) -> int:
        response = self._request('DELETE', '/api/blogs')
        return int(response.headers.get('X-Deleted-Count', 0))

    def purge_users(self) -> int:
        """Server-side this also revokes every issued token."""
        response = self._request('DELETE', '/api/users')
        return int(response.headers.get('X-Deleted-Count', 0))

    def add_user(self, credentials: UserCredentials) -> UserRecord:
        response = self._request('POST', '/api/users', json=credentials.to_dict())
        record = UserRecord(username=response.json()['username'])
        logger.info(f"User provisioned: {record.username}")
        return record

    def get_user(self, username: str) -> Optional[UserRecord]:
        try:
            response = self._request('GET', f'/api/users/{username}')
        except NotFound:
            return None
        return UserRecord(username=response.json()['username'])

    def authenticate(self, username: str, password: str) -> Optional[str]:
        try:
            response = self._request(
                'POST', '/api/login', json={'username': username, 'password': password}
            )
        except (InvalidCredentials, Unauthorized):
            return None
        return response.json()['token']

    def verify_credentials(self, username: str, password: str) -> bool:
        """Check credentials without leaving a session open on the server."""
        token = self.authenticate(username, password)
        if token is None:
            return False
        self.end_session(token)
        return True

    def end_session(self, token: Optional[str]) -> None:
        if token:
            self._request('POST', '/api/logout', token=token)

    # ------------------------------------------------------------------
    # Blog operations
    # ------------------------------------------------------------------

    def insert_blog(self, creator: str, title: str, author: str, url: str,
                    token: Optional[str] = None) -> BlogRecord:
        response = self._request(
            'POST',
            '/api/blogs',
            token=self._require_token(token, creator),
            json={'title': title, 'author': author, 'url': url},
        )
        return BlogRecord.from_dict(response.json())

    def get_blog(self, blog_id: int) -> Optional[BlogRecord]:
        try:
            response = self._request('GET', f'/api/blogs/{blog_id}')
        except NotFound:
            return None
        return BlogRecord.from_dict(response.json())

    def list_blogs(self) -> List[BlogRecord]:
        response = self._request('GET', '/api/blogs')
        return [BlogRecord.from_dict(item) for item in response.json()]

    def increment_likes(self, blog_id: int) -> int:
        try:
            response = self._request('POST', f'/api/blogs/{blog_id}/like')
        except NotFound:
            raise NotFound(blog_id=blog_id)
        return int(response.json()['likes'])

    def delete_blog(self, blog_id: int, identity: str, token: Optional[str] = None) -> None:
        try:
            self._request('DELETE', f'/api/blogs/{blog_id}', token=self._require_token(token, identity))
        except NotFound:
            raise NotFound(blog_id=blog_id)

    def close(self) -> None:
        self._client.close()
