"""Error types raised by :class:`~constituency_hub.client.api.ConstituencyHubClient`."""

from __future__ import annotations

from typing import Any, Optional


class ApiError(Exception):
    """The API answered with ``success: false`` or could not be reached.

    Args:
        message: The ``error`` field of the envelope, or a transport message.
        status_code: HTTP status of the response, ``None`` when no response arrived.
        payload: The envelope ``data`` of the error response, e.g.
            ``{"code": "already_voted", "already_voted": True, "voted_option_id": ...}``.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def code(self) -> Optional[str]:
        if isinstance(self.payload, dict):
            return self.payload.get("code")
        return None
