r"""Request executor for operations completing in one HTTP exchange.

This module provides the RequestExecutor class that builds the
authenticated request, sends it through the transport and turns the
response into either a parsed JSON value or an ``ApiError``.
"""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import json
import logging
from typing import TYPE_CHECKING, Any

from cloudtargets.config import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
    HEADER_TOKEN,
    HEADER_VERSION,
)
from cloudtargets.transport import Request
from cloudtargets.utils.body import read_json_body
from cloudtargets.utils.errors import read_api_error
from cloudtargets.utils.response import has_json_content, is_success

if TYPE_CHECKING:
    import httpx

    from cloudtargets.core.config import ClientConfig
    from cloudtargets.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    """Executes authenticated requests against the API.

    Every request carries the ``X-Version`` and ``X-Token`` headers of the
    client configuration. A payload is serialized as JSON and announced
    with a JSON content type.

    Args:
        config: The client configuration providing token and version.
        transport: The transport used to send requests.

    Example:
        ```pycon
        >>> import asyncio
        >>> from cloudtargets.core.config import ClientConfig
        >>> from cloudtargets.executor import RequestExecutor
        >>> from cloudtargets.transport import Transport
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(token="secret", api_version=2)
        ...     transport = Transport(config)
        ...     executor = RequestExecutor(config, transport)
        ...     try:
        ...         return await executor.execute("GET", "/cloudrecognition/targetCollection")
        ...     finally:
        ...         await transport.aclose()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig, transport: Transport) -> None:
        self.config = config
        self.transport = transport

    def build_headers(self, payload: Any = None) -> dict[str, str]:
        """Build the headers of a request.

        Args:
            payload: The payload of the request, if any.

        Returns:
            The version and token headers, plus the JSON content type if
            a payload is present.
        """
        headers = {
            HEADER_VERSION: str(self.config.api_version),
            HEADER_TOKEN: self.config.token,
        }
        if payload is not None:
            headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
        return headers

    def build_request(self, method: str, path: str, payload: Any = None) -> Request:
        """Build a request with its headers and serialized payload.

        Args:
            method: The HTTP method.
            path: The resolved path or absolute URL.
            payload: Optional JSON-serializable payload.

        Returns:
            The request to send. A ``POST`` without payload gets an empty
            body.

        Raises:
            ValueError: If a ``GET`` or ``DELETE`` request has a payload.
        """
        if payload is not None:
            body = json.dumps(payload)
        elif method == "POST":
            body = ""
        else:
            body = None
        return Request(method=method, path=path, headers=self.build_headers(payload), body=body)

    async def send_api_request(
        self, method: str, path: str, payload: Any = None
    ) -> httpx.Response:
        """Send a request and check that the API reports success.

        Args:
            method: The HTTP method.
            path: The resolved path or absolute URL.
            payload: Optional JSON-serializable payload.

        Returns:
            The successful response. Its body has not been read yet.

        Raises:
            ApiError: The error built from the response if the status code
                is not a success, or a transport error.
        """
        response = await self.transport.send(self.build_request(method, path, payload))
        if is_success(response):
            return response
        logger.debug(f"{method} request to {path} failed with status {response.status_code}")
        raise await read_api_error(response)

    async def execute(self, method: str, path: str, payload: Any = None) -> Any:
        """Execute an operation that completes in one HTTP exchange.

        Args:
            method: The HTTP method.
            path: The resolved path or absolute URL.
            payload: Optional JSON-serializable payload.

        Returns:
            The parsed JSON body, or ``None`` if the response has no JSON
            content (e.g. ``204 No Content``).

        Raises:
            ApiError: If the request or the response fails.
        """
        response = await self.send_api_request(method, path, payload)
        if has_json_content(response):
            return await read_json_body(response)
        await response.aclose()
        return None
