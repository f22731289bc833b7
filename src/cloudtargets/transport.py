r"""HTTP transport of the Cloud Targets client.

This module contains the immutable ``Request`` value and the
``Transport`` class that issues one request over an
``httpx.AsyncClient`` and hands back the raw, still unread response.
"""

from __future__ import annotations

__all__ = ["Request", "Transport"]

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

import httpx

from cloudtargets.config import SUPPORTED_METHODS
from cloudtargets.exceptions import ApiError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cloudtargets.core.config import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    """One HTTP request to the API.

    Args:
        method: The HTTP method, one of ``GET``, ``POST`` or ``DELETE``.
        path: The resolved path relative to the service root, or an
            absolute URL such as the ``Location`` of an operation.
        headers: The request headers.
        body: The serialized payload. Present iff the method is ``POST``.

    Raises:
        ValueError: If the method is not supported or the body does not
            match the method.

    Example:
        ```pycon
        >>> from cloudtargets.transport import Request
        >>> request = Request("GET", "/cloudrecognition/targetCollection", {"X-Version": "2"})
        >>> request.method
        'GET'

        ```
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes | None = None

    def __post_init__(self) -> None:
        if self.method not in SUPPORTED_METHODS:
            msg = f"method must be one of {SUPPORTED_METHODS}, got {self.method!r}"
            raise ValueError(msg)
        if (self.body is not None) != (self.method == "POST"):
            msg = f"a body must be present iff the method is POST, got {self.method} with body={self.body is not None}"
            raise ValueError(msg)
        # Freeze a private copy so later changes to the caller's mapping are not visible
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


class Transport:
    r"""Send requests to the API over HTTPS.

    The underlying ``httpx.AsyncClient`` is created from the client
    configuration (base URL, TLS verification policy and timeout), unless
    one is injected. An injected client is not closed by ``aclose``.

    Args:
        config: The client configuration.
        client: Optional ``httpx.AsyncClient`` to send requests with.

    Example:
        ```pycon
        >>> import asyncio
        >>> from cloudtargets.core.config import ClientConfig
        >>> from cloudtargets.transport import Request, Transport
        >>> async def main():  # doctest: +SKIP
        ...     transport = Transport(ClientConfig(token="secret", api_version=2))
        ...     try:
        ...         response = await transport.send(
        ...             Request("GET", "/cloudrecognition/targetCollection")
        ...         )
        ...     finally:
        ...         await transport.aclose()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url, verify=config.verify, timeout=config.timeout
        )
        if config.verify is False:
            logger.debug(f"TLS certificate verification is disabled for {config.base_url}")

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: Request) -> httpx.Response:
        """Send one request and return the raw response.

        The response is opened in streaming mode: its body has not been
        read yet and must be consumed or closed by the caller.

        Args:
            request: The request to send.

        Returns:
            The raw response, whatever its status code.

        Raises:
            ApiError: A transport error if the URL is invalid, or if the
                connection, TLS handshake or timeout failed before a status
                code was received.
        """
        logger.debug(f"Sending {request.method} request to {request.path}")
        try:
            http_request = self._client.build_request(
                request.method,
                request.path,
                headers=dict(request.headers),
                content=request.body,
            )
            response = await self._client.send(http_request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.debug(
                f"{request.method} request to {request.path} encountered {type(exc).__name__}: {exc}"
            )
            raise ApiError.transport(exc) from exc
        logger.debug(
            f"{request.method} request to {request.path} returned status {response.status_code}"
        )
        return response

    async def aclose(self) -> None:
        r"""Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
