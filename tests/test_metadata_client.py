import io
import json
from urllib import error

import pytest

from shared import metadata_client
from shared.metadata_client import (
    HttpStatusError,
    PayloadError,
    TransportError,
    build_metadata_url,
    fetch_metadata,
    fetch_metadata_async,
)


class FakeResponse:
    def __init__(self, body, status=200):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def urlopen(monkeypatch):
    calls = []

    def install(response=None, raises=None):
        def fake_urlopen(req, **kwargs):
            calls.append((req, kwargs))
            if raises is not None:
                raise raises
            return response

        monkeypatch.setattr(metadata_client.request, "urlopen", fake_urlopen)
        return calls

    return install


def test_build_metadata_url_percent_encodes_address():
    url = build_metadata_url("https://psu.edu/news?a=1&b=2", base_url="https://meta.test/api")
    assert url == "https://meta.test/api?q=https%3A%2F%2Fpsu.edu%2Fnews%3Fa%3D1%26b%3D2"


def test_build_metadata_url_keeps_existing_query():
    url = build_metadata_url("x y", base_url="https://meta.test/api?key=1")
    assert url == "https://meta.test/api?key=1&q=x%20y"


def test_fetch_returns_data_object(urlopen):
    calls = urlopen(FakeResponse(json.dumps({"data": {"title": "Hello"}})))

    data = fetch_metadata("https://example.com", base_url="https://meta.test/api")

    assert data == {"title": "Hello"}
    req, kwargs = calls[0]
    assert req.full_url == "https://meta.test/api?q=https%3A%2F%2Fexample.com"
    assert req.get_method() == "GET"
    assert "timeout" not in kwargs


def test_fetch_passes_configured_timeout(urlopen):
    calls = urlopen(FakeResponse('{"data": {}}'))
    fetch_metadata("https://example.com", timeout=2.5)
    assert calls[0][1]["timeout"] == 2.5


def test_http_error_status(urlopen):
    urlopen(raises=error.HTTPError("https://meta.test", 502, "Bad Gateway", {}, io.BytesIO(b"upstream down")))

    with pytest.raises(HttpStatusError) as exc:
        fetch_metadata("https://example.com")
    assert exc.value.status == 502
    assert exc.value.body == "upstream down"


def test_non_2xx_without_http_error(urlopen):
    urlopen(FakeResponse("moved", status=304))
    with pytest.raises(HttpStatusError):
        fetch_metadata("https://example.com")


def test_transport_failure(urlopen):
    urlopen(raises=error.URLError("name resolution failed"))
    with pytest.raises(TransportError):
        fetch_metadata("https://example.com")


@pytest.mark.parametrize("body", ["not json", "[1, 2]", '{"nodata": 1}', '{"data": "string"}'])
def test_malformed_payloads(urlopen, body):
    urlopen(FakeResponse(body))
    with pytest.raises(PayloadError):
        fetch_metadata("https://example.com")


async def test_async_wrapper_runs_blocking_fetch(urlopen):
    urlopen(FakeResponse('{"data": {"url": "https://example.com/"}}'))
    data = await fetch_metadata_async("https://example.com")
    assert data == {"url": "https://example.com/"}
