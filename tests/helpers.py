from __future__ import annotations

import json
from typing import Any, List

import httpx

from tfo_wait.http_client import TFOClient


def work_item(state: str, started: bool = False, completed: bool = False) -> dict:
    return {"did_start": started, "did_complete": completed, "current_state": state}


def status_payload(code: int = 200, message: str = "success", items: List[dict] | None = None) -> dict:
    return {"status_info": {"status_code": code, "message": message}, "data": items or []}


class FakeEndpoint:
    """Scripted status endpoint: serves queued GET replies and records POSTed reports.

    A queued reply is a dict (sent as JSON), raw ``bytes``/``str`` (sent as
    the body) or an exception instance (raised from the transport).
    """

    def __init__(self, *replies: Any):
        self.replies: List[Any] = list(replies)
        self.requests: List[httpx.Request] = []
        self.reports: List[str] = []
        self.post_status_code = 200
        self.post_error: Exception | None = None

    def queue(self, *replies: Any) -> "FakeEndpoint":
        self.replies.extend(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            if self.post_error is not None:
                raise self.post_error
            self.reports.append(json.loads(request.content.decode("utf-8"))["status"])
            return httpx.Response(self.post_status_code, json={"accepted": True})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, (bytes, str)):
            return httpx.Response(200, content=reply)
        return httpx.Response(200, json=reply)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, token: str = "secret-token") -> TFOClient:
        return TFOClient(token=token, transport=self.transport)
