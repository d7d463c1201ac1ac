"""
Unit tests for Logfire middleware.

This test suite covers:
- Request timing and the X-Process-Time header
- Reporting through log_api_request
- Error propagation
- Slow request detection
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from starlette.responses import Response

from constituency_hub.server.middleware import LogfireMiddleware

MIDDLEWARE_MODULE = "constituency_hub.server.middleware.logfire_middleware"


def _request(method="GET", path="/api/v1/test"):
    request = MagicMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    @pytest.mark.asyncio
    async def test_successful_request(self):
        middleware = LogfireMiddleware(app=MagicMock())

        async def call_next(request):
            return Response(content="ok", status_code=201)

        with patch(f"{MIDDLEWARE_MODULE}.log_api_request") as log_api_request:
            response = await middleware.dispatch(_request("POST", "/api/v1/polls"), call_next)

        assert response.status_code == 201
        assert float(response.headers["X-Process-Time"]) >= 0
        kwargs = log_api_request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["path"] == "/api/v1/polls"
        assert kwargs["status_code"] == 201

    @pytest.mark.asyncio
    async def test_exception_is_reported_and_reraised(self):
        middleware = LogfireMiddleware(app=MagicMock())

        async def call_next(request):
            raise RuntimeError("boom")

        with patch(f"{MIDDLEWARE_MODULE}.log_api_request") as log_api_request, patch(
            f"{MIDDLEWARE_MODULE}.logger"
        ) as mock_logger:
            with pytest.raises(RuntimeError, match="boom"):
                await middleware.dispatch(_request(), call_next)

        assert log_api_request.call_args.kwargs["status_code"] == 500
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_slow_request_warning(self):
        middleware = LogfireMiddleware(app=MagicMock())

        async def call_next(request):
            return Response(status_code=200)

        # start at 0s, finish 2s later
        with patch(f"{MIDDLEWARE_MODULE}.time.perf_counter", side_effect=[0.0, 2.0]), patch(
            f"{MIDDLEWARE_MODULE}.log_api_request"
        ), patch(f"{MIDDLEWARE_MODULE}.logger") as mock_logger:
            response = await middleware.dispatch(_request(), call_next)

        assert response.headers["X-Process-Time"] == "2000.00"
        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_fast_request_no_warning(self):
        middleware = LogfireMiddleware(app=MagicMock())

        async def call_next(request):
            return Response(status_code=200)

        with patch(f"{MIDDLEWARE_MODULE}.time.perf_counter", side_effect=[0.0, 0.05]), patch(
            f"{MIDDLEWARE_MODULE}.log_api_request"
        ), patch(f"{MIDDLEWARE_MODULE}.logger") as mock_logger:
            await middleware.dispatch(_request(), call_next)

        mock_logger.warning.assert_not_called()


class TestLogfireMiddlewareIntegration:
    """The middleware mounted on an app."""

    @pytest.mark.asyncio
    async def test_header_on_real_response(self):
        app = FastAPI()
        app.add_middleware(LogfireMiddleware)

        @app.get("/ping")
        async def ping():
            return {"pong": True}

        with patch(f"{MIDDLEWARE_MODULE}.log_api_request") as log_api_request:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
                response = await client.get("/ping")

        assert response.status_code == 200
        assert "x-process-time" in response.headers
        log_api_request.assert_called_once()
