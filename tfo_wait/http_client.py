from __future__ import annotations

import httpx

from .config import Settings
from .errors import ParseError, TransportError
from .status import StatusDocument, parse_document_json

STATUS_PATH = "/api/v1/task/status"
TOKEN_HEADER = "Token"


def status_url(endpoint_base: str) -> str:
    return f"{endpoint_base.rstrip('/')}{STATUS_PATH}"


class TFOClient(httpx.AsyncClient):
    """Async HTTP client that signs every request with the static API token."""

    def __init__(self, *, token: str, **kwargs):
        super().__init__(**kwargs)
        self.token = token

    @classmethod
    def from_settings(cls, s: Settings, **kwargs) -> "TFOClient":
        kwargs.setdefault("timeout", httpx.Timeout(s.TIMEOUT_S))
        return cls(token=s.TFO_API_LOG_TOKEN, **kwargs)

    async def request(self, method: str, url, headers: dict | None = None, **kwargs):  # type: ignore[override]
        headers = dict(headers) if headers else {}
        headers.setdefault(TOKEN_HEADER, self.token)
        return await super().request(method, url, headers=headers, **kwargs)


def _describe(exc: Exception) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


async def fetch_status(client: httpx.AsyncClient, endpoint_base: str) -> StatusDocument:
    """GET the status document.

    The HTTP status line is ignored; the application status lives in the
    body.  Raises TransportError when the endpoint is unreachable and
    ParseError when the body is not a status document.
    """
    url = status_url(endpoint_base)
    try:
        r = await client.get(url)
    except httpx.TransportError as exc:
        raise TransportError(f"GET {url} failed: {_describe(exc)}") from exc
    try:
        return parse_document_json(r.content)
    except ParseError as exc:
        raise ParseError(f"{exc} (HTTP {r.status_code})") from exc.__cause__


async def post_status(client: httpx.AsyncClient, endpoint_base: str, state: str) -> None:
    """POST a transition report.

    Only an unreachable endpoint fails the report; the reply, status line
    included, is ignored.  A token that expired in between shows up as a
    401 in the next status document.
    """
    url = status_url(endpoint_base)
    try:
        await client.post(url, json={"status": state})
    except httpx.TransportError as exc:
        raise TransportError(f"POST {url} failed: {_describe(exc)}") from exc


__all__ = ["STATUS_PATH", "TOKEN_HEADER", "status_url", "TFOClient", "fetch_status", "post_status"]
