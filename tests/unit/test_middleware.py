"""Unit tests for middleware."""
import pytest
from unittest.mock import Mock

from sanctuary.middleware.logging import LoggingMiddleware


def _mock_request(method="GET", path="/test", headers=None):
    mock_request = Mock()
    mock_request.state = Mock()
    mock_request.method = method
    mock_request.url = Mock()
    mock_request.url.path = path
    mock_request.client = Mock()
    mock_request.client.host = "127.0.0.1"
    mock_request.query_params = {}
    mock_request.headers = headers or {}
    return mock_request


def _mock_response(status_code=200):
    mock_response = Mock()
    mock_response.headers = {}
    mock_response.status_code = status_code
    return mock_response


@pytest.mark.unit
class TestLoggingMiddleware:
    """Test logging middleware."""

    @pytest.mark.asyncio
    async def test_request_id_added_to_state(self):
        """The request id is available to the endpoint via request.state."""
        mock_request = _mock_request()
        mock_response = _mock_response()

        async def mock_call_next(request):
            assert isinstance(request.state.request_id, str)
            assert len(request.state.request_id) > 0
            return mock_response

        middleware = LoggingMiddleware(Mock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Request-ID"] == mock_request.state.request_id

    @pytest.mark.asyncio
    async def test_incoming_request_id_reused(self):
        """A request id sent by the kiosk is echoed back instead of replaced."""
        mock_request = _mock_request(headers={"X-Request-ID": "kiosk-3-0042"})
        mock_response = _mock_response(201)

        async def mock_call_next(request):
            return mock_response

        middleware = LoggingMiddleware(Mock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert mock_request.state.request_id == "kiosk-3-0042"
        assert response.headers["X-Request-ID"] == "kiosk-3-0042"

    @pytest.mark.asyncio
    async def test_request_ids_are_unique(self):
        middleware = LoggingMiddleware(Mock())
        seen = set()

        async def mock_call_next(request):
            return _mock_response()

        for _ in range(5):
            mock_request = _mock_request()
            await middleware.dispatch(mock_request, mock_call_next)
            seen.add(mock_request.state.request_id)

        assert len(seen) == 5

    @pytest.mark.asyncio
    async def test_exception_propagates(self):
        """Errors raised downstream are logged and re-raised."""
        mock_request = _mock_request(method="POST", path="/api/v1/sessions/1/checkins")

        async def mock_call_next(request):
            raise RuntimeError("database went away")

        middleware = LoggingMiddleware(Mock())
        with pytest.raises(RuntimeError, match="database went away"):
            await middleware.dispatch(mock_request, mock_call_next)
