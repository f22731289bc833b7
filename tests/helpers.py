r"""Shared test helpers for the Cloud Targets client tests.

This module contains an in-process HTTP service built on
``httpx.MockTransport`` that replays queued responses and records the
requests it receives.
"""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "FailingStream",
    "MockService",
    "json_response",
]

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

BASE_URL = "https://api.example.com"


def json_response(status_code: int, content: Any, **kwargs: Any) -> httpx.Response:
    r"""Create a response with a JSON body and an exact JSON content
    type."""
    return httpx.Response(status_code, json=content, **kwargs)


class FailingStream(httpx.AsyncByteStream):
    r"""Body stream that fails after sending its first chunk."""

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield b'{"status":'
        msg = "connection reset by peer"
        raise httpx.ReadError(msg)


class MockService:
    r"""Replay queued responses and record the requests received.

    Each queued item is either an ``httpx.Response``, an exception to
    raise, or a callable building a response from the request.

    Args:
        *responses: The responses to replay, in order.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        if not self.responses:
            msg = f"unexpected request {request.method} {request.url}"
            raise AssertionError(msg)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item) and not isinstance(item, httpx.Response):
            return item(request)
        return item

    def client(self) -> httpx.AsyncClient:
        r"""Create an ``httpx.AsyncClient`` sending to this service."""
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), base_url=BASE_URL)

    @property
    def calls(self) -> list[tuple[str, str]]:
        r"""Return the method and path of each request received."""
        return [(request.method, request.url.path) for request in self.requests]
