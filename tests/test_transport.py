import pytest
import requests
from unittest.mock import MagicMock, patch

from cinefeed.core.exceptions import NetworkUnavailableError, ServerError
from cinefeed.core.transport import HTTPTransport

def fake_response(status_code=200, chunks=(b'{"ok": true}',)):
    response = MagicMock()
    response.status_code = status_code
    response.iter_content.return_value = iter(chunks)
    return response

@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session

def test_sets_json_headers(config, session):
    HTTPTransport(config, session)
    assert session.headers["Accept"] == "application/json"
    assert session.headers["Content-Type"] == "application/json"

def test_returns_body_bytes(config, session):
    session.get.return_value = fake_response(chunks=(b'{"a":', b' 1}'))
    assert HTTPTransport(config, session).get("https://example.org/x") == b'{"a": 1}'
    _, kwargs = session.get.call_args
    assert kwargs["timeout"] == (30, 30)
    assert kwargs["stream"] is True

@pytest.mark.parametrize("status", [301, 401, 404, 429, 500, 503])
def test_non_2xx_is_server_error(config, session, status):
    response = fake_response(status_code=status, chunks=(b'{"status_message": "nope"}',))
    session.get.return_value = response
    with pytest.raises(ServerError) as exc_info:
        HTTPTransport(config, session).get("https://example.org/x")
    assert exc_info.value.status_code == status
    response.close.assert_called_once()

@pytest.mark.parametrize("error", [
    requests.exceptions.ConnectionError("reset"),
    requests.exceptions.Timeout("slow"),
    requests.exceptions.InvalidURL("bad"),
])
def test_transport_failure_is_network_unavailable(config, session, error):
    session.get.side_effect = error
    with pytest.raises(NetworkUnavailableError):
        HTTPTransport(config, session).get("https://example.org/x")

def test_body_read_failure_is_network_unavailable(config, session):
    response = fake_response()
    response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("cut")
    session.get.return_value = response
    with pytest.raises(NetworkUnavailableError):
        HTTPTransport(config, session).get("https://example.org/x")

def test_resource_timeout_aborts_slow_body(config, session):
    session.get.return_value = fake_response(chunks=(b"a", b"b", b"c"))
    transport = HTTPTransport(config, session)
    # deadline computed at 0; the first chunk is read at t=61
    with patch("cinefeed.core.transport.time") as mock_time:
        mock_time.monotonic.side_effect = [0, 61, 62, 63]
        with pytest.raises(NetworkUnavailableError):
            transport.get("https://example.org/x")
