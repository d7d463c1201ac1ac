"""
Domain exceptions.

Services raise these instead of ``HTTPException`` so that business rules stay
independent of the web layer. The server registers a handler that renders
them as the standard ``{success, data, error}`` envelope.
"""

from typing import Any, Dict, Optional


class ConstituencyHubError(Exception):
    """Base error carrying an HTTP status, a machine code and optional details."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class BadRequestError(ConstituencyHubError):
    status_code = 400
    code = "bad_request"


class AuthenticationError(ConstituencyHubError):
    status_code = 401
    code = "unauthorized"


class PermissionDeniedError(ConstituencyHubError):
    status_code = 403
    code = "forbidden"


class NotFoundError(ConstituencyHubError):
    status_code = 404
    code = "not_found"


class ConflictError(ConstituencyHubError):
    status_code = 409
    code = "conflict"


class UpstreamServiceError(ConstituencyHubError):
    """An external dependency (SMS gateway, alert feed) failed or is not configured."""

    status_code = 503
    code = "upstream_unavailable"
