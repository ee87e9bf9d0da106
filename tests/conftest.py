"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

import dataclasses as dc
import json
from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from dohflare.modules.cloudflare import CloudflareProvider

NOERROR_BODY = {
    "Status": 0,
    "TC": False,
    "RD": True,
    "RA": True,
    "AD": False,
    "CD": False,
    "Question": [{"name": "example.com", "type": 1}],
    "Answer": [
        {"name": "example.com", "type": 1, "TTL": 300, "data": "93.184.216.34"}
    ],
}

SERVFAIL_BODY = {
    "Status": 2,
    "TC": False,
    "RD": True,
    "RA": True,
    "AD": False,
    "CD": False,
    "Question": [{"name": "broken.example", "type": 1}],
    "Comment": "upstream unreachable",
}


class TrackingStream(httpx.AsyncByteStream):
    """Byte stream that counts how often it was released."""

    def __init__(self, body: bytes) -> None:
        self.body = body
        self.close_calls = 0

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield self.body

    async def aclose(self) -> None:
        self.close_calls += 1


@dc.dataclass
class RecordingUpstream:
    """Deterministic upstream double that records every request."""

    body: bytes = dc.field(default_factory=lambda: json.dumps(NOERROR_BODY).encode())
    status_code: int = 200
    error: Exception | None = None
    requests: list[httpx.Request] = dc.field(default_factory=list)
    streams: list[TrackingStream] = dc.field(default_factory=list)

    def set_json(self, payload: dict) -> None:
        self.body = json.dumps(payload).encode()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        stream = TrackingStream(self.body)
        self.streams.append(stream)
        return httpx.Response(
            self.status_code,
            headers={"content-type": "application/dns-json"},
            stream=stream,
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def upstream() -> RecordingUpstream:
    return RecordingUpstream()


@pytest.fixture
def make_provider() -> Callable[[Callable], CloudflareProvider]:
    """Build a provider whose transport is the given handler."""

    def _make(handler: Callable) -> CloudflareProvider:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return CloudflareProvider(client=client)

    return _make


@pytest.fixture
async def provider(make_provider, upstream) -> AsyncIterator[CloudflareProvider]:
    instance = make_provider(upstream)
    yield instance
    await instance.client.aclose()
