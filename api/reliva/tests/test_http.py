import json

import httpx
import pytest

from reliva.core.config import settings
from reliva.sources.http import UpstreamError, fetch_json

PRIMARY = "https://saavn.dev/api"
MIRROR = "https://jiosavan-api-with-playlist.vercel.app/api"


class MockUpstream:
    """Records every request ``fetch_json`` sends and answers it with ``handler``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture()
def mock_http(monkeypatch: pytest.MonkeyPatch) -> MockUpstream:
    mock = MockUpstream()
    real_client = httpx.AsyncClient

    def _client(*args, **kwargs):
        kwargs.setdefault("transport", httpx.MockTransport(mock))
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)
    return mock


@pytest.mark.asyncio
async def test_decodes_json_and_sends_params(mock_http):
    mock_http.handler = lambda request: httpx.Response(200, json={"data": {"results": [1, 2]}})

    payload = await fetch_json(f"{MIRROR}/search/songs", params={"query": "roja", "limit": 5}, headers={"X-Test": "1"})

    assert payload == {"data": {"results": [1, 2]}}
    request = mock_http.requests[0]
    assert request.method == "GET"
    assert request.url.params["query"] == "roja"
    assert request.url.params["limit"] == "5"
    assert request.headers["X-Test"] == "1"


@pytest.mark.asyncio
async def test_posts_json_body(mock_http):
    mock_http.handler = lambda request: httpx.Response(200, json={"access_token": "t"})

    await fetch_json("https://api.example.test/token", method="POST", json_body={"grant_type": "client_credentials"})

    request = mock_http.requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {"grant_type": "client_credentials"}


@pytest.mark.asyncio
async def test_server_error_carries_status_and_redacted_body(mock_http):
    mock_http.handler = lambda request: httpx.Response(503, text="overloaded token=abc123")

    with pytest.raises(UpstreamError) as excinfo:
        await fetch_json(f"{PRIMARY}/artists", params={"id": "1"})

    assert excinfo.value.status_code == 503
    assert excinfo.value.retryable
    assert "abc123" not in excinfo.value.body
    assert "token=***" in excinfo.value.body
    assert len(mock_http.requests) == 1


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(mock_http, monkeypatch):
    monkeypatch.setattr(settings, "upstream_max_attempts", 3)
    mock_http.handler = lambda request: httpx.Response(404, json={"message": "missing"})

    with pytest.raises(UpstreamError) as excinfo:
        await fetch_json(f"{PRIMARY}/artists")

    assert excinfo.value.status_code == 404
    assert not excinfo.value.retryable
    assert len(mock_http.requests) == 1


@pytest.mark.asyncio
async def test_timeout_maps_to_upstream_error(mock_http):
    def _timeout(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    mock_http.handler = _timeout

    with pytest.raises(UpstreamError) as excinfo:
        await fetch_json(f"{PRIMARY}/artists")

    assert str(excinfo.value) == f"Timed out calling {PRIMARY}/artists"
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_invalid_json_is_an_upstream_error(mock_http):
    mock_http.handler = lambda request: httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(UpstreamError) as excinfo:
        await fetch_json(f"{MIRROR}/search/songs")

    assert str(excinfo.value) == "Upstream returned invalid JSON"
    assert excinfo.value.status_code == 200
    assert excinfo.value.body == "<html>maintenance</html>"


@pytest.mark.asyncio
async def test_connection_errors_do_not_leak_keys(mock_http):
    def _refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    mock_http.handler = _refused

    with pytest.raises(UpstreamError) as excinfo:
        await fetch_json("https://www.googleapis.com/books/v1/volumes?q=dune&key=secret-value")

    message = str(excinfo.value)
    assert message.startswith("ConnectError calling")
    assert "secret-value" not in message
    assert "key=***" in message


@pytest.mark.asyncio
async def test_artist_lookup_moves_to_mirror_after_primary_timeout(client, mock_http):
    def _route(request):
        if request.url.host == "saavn.dev":
            raise httpx.ReadTimeout("read timed out", request=request)
        return httpx.Response(200, json={"data": {"id": "459320", "name": "Arijit Singh"}})

    mock_http.handler = _route

    response = await client.get("/api/saavn/artist", params={"id": "459320"})

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Arijit Singh"
    assert [request.url.host for request in mock_http.requests] == [
        "saavn.dev",
        "jiosavan-api-with-playlist.vercel.app",
    ]
