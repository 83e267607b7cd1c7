"""Pytest fixtures for graphshare tests."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import pytest

from graphshare.core.api import GraphApiClient, GraphConfig, HttpResponse, StaticTokenProvider

TEST_TOKEN = "test-token"
SITE_ID = "contoso.sharepoint.com,guid1,guid2"


@dataclass
class RecordedRequest:
    """A request seen by FakeTransport."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[Union[bytes, str]] = None

    def json(self) -> Any:
        return json.loads(self.data)


def json_response(status: int, payload: Any = None, reason: str = "OK") -> HttpResponse:
    """Build a buffered response with a JSON body."""
    body = b"" if payload is None else json.dumps(payload).encode()
    return HttpResponse(status=status, reason=reason, body=body)


def text_response(status: int, text: str = "", reason: str = "") -> HttpResponse:
    """Build a buffered response with a plain text body."""
    return HttpResponse(status=status, reason=reason, body=text.encode())


class FakeTransport:
    """
    Transport that records requests and replays queued responses in order.

    Raises AssertionError when a request arrives with nothing queued.
    """

    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self._responses: List[HttpResponse] = []
        self.closed = False

    def queue(self, *responses: HttpResponse) -> "FakeTransport":
        self._responses.extend(responses)
        return self

    @property
    def pending(self) -> int:
        return len(self._responses)

    async def request(self, method, url, *, headers=None, data=None) -> HttpResponse:
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), data))
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self._responses.pop(0)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport():
    """Fresh fake transport."""
    return FakeTransport()


@pytest.fixture
def config():
    """Default Graph configuration."""
    return GraphConfig.default()


@pytest.fixture
def api(transport, config):
    """Graph API client wired to the fake transport."""
    return GraphApiClient(StaticTokenProvider(TEST_TOKEN), config, transport)


@pytest.fixture
def drive_item():
    """Drive item payload returned by upload endpoints."""
    return {"id": "item-123", "webUrl": "https://contoso/item-123", "name": "report.pdf"}
