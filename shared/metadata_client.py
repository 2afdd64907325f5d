"""
shared/metadata_client.py

Blocking client for the website metadata service:
 - GET <METADATA_SERVICE_URL>?q=<percent-encoded address>
 - No retries, no caching
 - Timeout only when METADATA_TIMEOUT is configured
 - Failures raise MetadataFetchError subclasses; callers decide what to absorb
"""

import asyncio
import json
import logging
import ssl
from typing import Any, Dict, Optional
from urllib import error, request
from urllib.parse import quote

from shared.config import METADATA_SERVICE_URL, METADATA_TIMEOUT, USER_AGENT


class MetadataFetchError(Exception):
    """Base class for every way a metadata lookup can fail."""


class TransportError(MetadataFetchError):
    pass


class HttpStatusError(MetadataFetchError):
    def __init__(self, status: int, body: str = ""):
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body


class PayloadError(MetadataFetchError):
    pass


def build_metadata_url(address: str, base_url: Optional[str] = None) -> str:
    base = (base_url or METADATA_SERVICE_URL).rstrip("?")
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}q={quote(address, safe='')}"


def _http_get(url: str, timeout: Optional[float]) -> str:
    ctx = ssl.create_default_context()

    req = request.Request(url, method="GET")
    req.add_header("Accept", "application/json")
    req.add_header("User-Agent", USER_AGENT)

    kwargs = {"context": ctx}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        with request.urlopen(req, **kwargs) as resp:
            body = resp.read().decode("utf-8", errors="replace")
            if 200 <= resp.status < 300:
                return body
            logging.warning("[LinkPreview][HTTP] HTTP %d body=%s", resp.status, body[:500])
            raise HttpStatusError(resp.status, body)

    except error.HTTPError as he:
        body = ""
        try:
            if he.fp:
                body = he.fp.read().decode("utf-8", errors="ignore")
        except OSError:
            pass
        logging.warning("[LinkPreview][HTTP] HTTPError %s body=%s", he.code, body[:500])
        raise HttpStatusError(he.code, body) from he

    except (error.URLError, OSError, ValueError) as ex:
        raise TransportError(str(ex)) from ex


def parse_payload(body: str) -> Dict[str, Any]:
    """Decode the service body and return its `data` object."""
    try:
        payload = json.loads(body)
    except ValueError as ex:
        raise PayloadError(f"invalid JSON: {ex}") from ex

    if not isinstance(payload, dict):
        raise PayloadError("response is not a JSON object")

    data = payload.get("data")
    if not isinstance(data, dict):
        raise PayloadError("response has no `data` object")
    return data


def fetch_metadata(
    address: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = METADATA_TIMEOUT,
) -> Dict[str, Any]:
    url = build_metadata_url(address, base_url)
    logging.info("[LinkPreview][HTTP] GET %s", url)
    return parse_payload(_http_get(url, timeout))


async def fetch_metadata_async(
    address: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = METADATA_TIMEOUT,
) -> Dict[str, Any]:
    # urllib blocks; keep the event loop free while the request is outstanding
    return await asyncio.to_thread(fetch_metadata, address, base_url, timeout)
