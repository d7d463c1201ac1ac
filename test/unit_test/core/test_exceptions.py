"""Unit tests for domain exceptions."""

import pytest

from constituency_hub.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    ConstituencyHubError,
    NotFoundError,
    PermissionDeniedError,
    UpstreamServiceError,
)


class TestDomainExceptions:
    @pytest.mark.parametrize(
        "exc_type,status_code,code",
        [
            (BadRequestError, 400, "bad_request"),
            (AuthenticationError, 401, "unauthorized"),
            (PermissionDeniedError, 403, "forbidden"),
            (NotFoundError, 404, "not_found"),
            (ConflictError, 409, "conflict"),
            (UpstreamServiceError, 503, "upstream_unavailable"),
        ],
    )
    def test_defaults(self, exc_type, status_code, code):
        error = exc_type("boom")

        assert isinstance(error, ConstituencyHubError)
        assert error.status_code == status_code
        assert error.code == code
        assert error.message == "boom"
        assert str(error) == "boom"

    def test_overrides_do_not_leak_to_class(self):
        error = UpstreamServiceError("gateway down", status_code=502, code="sms_failed", details={"provider": 500})

        assert error.status_code == 502
        assert error.to_dict() == {"code": "sms_failed", "message": "gateway down", "details": {"provider": 500}}
        assert UpstreamServiceError.status_code == 503
        assert UpstreamServiceError.code == "upstream_unavailable"
