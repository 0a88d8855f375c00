"""
Error taxonomy for the blog contract.

Expected outcomes (the contract saying "no"):
- InvalidCredentials: login with unknown username or wrong password
- Unauthorized: create attempted without an authenticated session
- Forbidden: delete attempted by someone other than the creator
- NotFound: operation targets a blog that does not exist

Unexpected outcomes:
- TransportError: backing store or network unreachable (retryable)
- SessionStateError: login issued while already authenticated
- ValidationError: malformed provisioning/creation input
"""
from typing import Optional


class HarnessError(Exception):
    """Base class for all contract errors."""

    code = "error"
    status_code = 500
    expected = False
    retryable = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class InvalidCredentials(HarnessError):
    """Invalid username or password"""

    code = "invalid_credentials"
    status_code = 401
    expected = True


class Unauthorized(HarnessError):
    """Authentication required"""

    code = "unauthorized"
    status_code = 401
    expected = True


class Forbidden(HarnessError):
    """Only the creator may delete this blog"""

    code = "forbidden"
    status_code = 403
    expected = True


class NotFound(HarnessError):
    """Blog not found"""

    code = "not_found"
    status_code = 404
    expected = True

    def __init__(self, message: Optional[str] = None, blog_id: Optional[int] = None):
        self.blog_id = blog_id
        if message is None and blog_id is not None:
            message = f"Blog {blog_id} not found"
        super().__init__(message)


class ValidationError(HarnessError):
    """Invalid input"""

    code = "validation_error"
    status_code = 400

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class Conflict(ValidationError):
    """Username already exists"""

    code = "conflict"
    status_code = 409


class SessionStateError(HarnessError):
    """Session already authenticated; logout first"""

    code = "session_state"
    status_code = 409


class TransportError(HarnessError):
    """Backing store unreachable"""

    code = "transport"
    status_code = 503
    retryable = True


# Wire error code → error class, used by the HTTP store to decode responses.
ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (InvalidCredentials, Unauthorized, Forbidden, NotFound,
                ValidationError, Conflict, SessionStateError, TransportError)
}
