r"""Asynchronous context manager client for the Cloud Targets API.

This module provides the AsyncTargetsClient that manages target
collections and the targets within them. The client manages the
underlying httpx.AsyncClient lifecycle and offers one method per
resource operation.
"""

from __future__ import annotations

__all__ = ["AsyncTargetsClient"]

from typing import TYPE_CHECKING, Any

from cloudtargets.endpoints import (
    PATH_ADD_TARGET,
    PATH_ADD_TARGETS,
    PATH_ADD_TC,
    PATH_GENERATE_TC,
    PATH_GET_TARGET,
    PATH_GET_TC,
    resolve_path,
)
from cloudtargets.executor import RequestExecutor
from cloudtargets.poller import OperationPoller
from cloudtargets.transport import Transport

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    import httpx

    from cloudtargets.core.config import ClientConfig


class AsyncTargetsClient:
    r"""Asynchronous context manager for the Cloud Targets API.

    Operations issued one after the other with ``await`` run in that
    order. Independent operations started concurrently, for example with
    ``asyncio.gather``, share the read-only configuration but nothing
    else, and may interleave.

    Args:
        config: The client configuration (token, API version, poll
            interval and bounds, TLS policy).
        client: Optional ``httpx.AsyncClient`` to send requests with. It
            is left open when the context exits.

    Example:
        ```pycon
        >>> import asyncio
        >>> from cloudtargets import AsyncTargetsClient
        >>> from cloudtargets.core.config import ClientConfig
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(token="secret", api_version=2)
        ...     async with AsyncTargetsClient(config) as client:
        ...         collection = await client.create_target_collection("my collection")
        ...         await client.add_target(
        ...             collection["id"], {"name": "t0", "imageUrl": "https://example.com/t0.jpeg"}
        ...         )
        ...         archive = await client.generate_target_collection(collection["id"])
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._http_client = client
        self._transport: Transport | None = None
        self._executor: RequestExecutor | None = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the transport.

        Returns:
            The AsyncTargetsClient instance for making requests.

        Raises:
            RuntimeError: If the client is already open.
        """
        if self._transport is not None:
            msg = "AsyncTargetsClient is already open, it cannot be entered twice"
            raise RuntimeError(msg)
        self._transport = Transport(self._config, client=self._http_client)
        self._executor = RequestExecutor(self._config, self._transport)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the transport.

        Args:
            exc_type: Exception type if an exception occurred.
            exc_val: Exception value if an exception occurred.
            exc_tb: Exception traceback if an exception occurred.
        """
        if self._transport is not None:
            await self._transport.aclose()
        self._transport = None
        self._executor = None

    def _ensure_executor(self) -> RequestExecutor:
        """Ensure the client is available for use.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if self._executor is None:
            msg = "AsyncTargetsClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._executor

    async def execute(self, method: str, path: str, payload: Any = None) -> Any:
        r"""Execute an operation that completes in one HTTP exchange.

        Args:
            method: The HTTP method (GET, POST or DELETE).
            path: The resolved path of the endpoint.
            payload: Optional JSON-serializable payload.

        Returns:
            The parsed JSON body, or ``None`` if the response has none.

        Raises:
            RuntimeError: If called outside of a context manager.
            ApiError: If the operation fails.
        """
        return await self._ensure_executor().execute(method, path, payload)

    async def execute_async_operation(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        max_poll_time: float | None = None,
        max_poll_attempts: int | None = None,
    ) -> dict[str, Any]:
        r"""Execute an operation that the server completes
        asynchronously.

        Args:
            method: The HTTP method of the initiating request.
            path: The resolved path of the endpoint.
            payload: Optional JSON-serializable payload.
            max_poll_time: Override client's max_poll_time for this operation.
            max_poll_attempts: Override client's max_poll_attempts for this
                operation.

        Returns:
            The status payload that reported completion.

        Raises:
            RuntimeError: If called outside of a context manager.
            ApiError: If the operation fails or the poll bound is reached.
        """
        executor = self._ensure_executor()
        config = self._config.merge(
            max_poll_time=max_poll_time, max_poll_attempts=max_poll_attempts
        )
        return await OperationPoller(executor, config).run(method, path, payload)

    async def create_target_collection(self, name: str) -> Any:
        r"""Create a target collection.

        The returned collection carries the ``id`` required by every
        further operation on it.
        """
        return await self.execute("POST", PATH_ADD_TC, {"name": name})

    async def get_all_target_collections(self) -> Any:
        r"""Return all target collections of the account."""
        return await self.execute("GET", PATH_ADD_TC)

    async def rename_target_collection(self, tc_id: str, name: str) -> Any:
        return await self.execute("POST", resolve_path(PATH_GET_TC, tc_id=tc_id), {"name": name})

    async def get_target_collection(self, tc_id: str) -> Any:
        return await self.execute("GET", resolve_path(PATH_GET_TC, tc_id=tc_id))

    async def delete_target_collection(self, tc_id: str) -> None:
        r"""Delete a target collection including all of its targets.

        This cannot be undone.
        """
        await self.execute("DELETE", resolve_path(PATH_GET_TC, tc_id=tc_id))

    async def get_all_targets(self, tc_id: str) -> Any:
        return await self.execute("GET", resolve_path(PATH_ADD_TARGET, tc_id=tc_id))

    async def add_target(self, tc_id: str, target: dict[str, Any]) -> Any:
        r"""Add one target to a target collection.

        The target must contain ``name`` and ``imageUrl``. The change is
        only live once the collection is generated again.
        """
        return await self.execute("POST", resolve_path(PATH_ADD_TARGET, tc_id=tc_id), target)

    async def add_targets(
        self, tc_id: str, targets: list[dict[str, Any]], **kwargs: Any
    ) -> dict[str, Any]:
        r"""Add several targets to a target collection.

        The server ingests the targets asynchronously; this waits until it
        reports completion, which may take from seconds to minutes.

        Args:
            tc_id: The id of the target collection.
            targets: The targets, each with ``name`` and ``imageUrl``.
            **kwargs: Poll bound overrides passed to
                ``execute_async_operation``.

        Returns:
            The final status of the operation.
        """
        return await self.execute_async_operation(
            "POST", resolve_path(PATH_ADD_TARGETS, tc_id=tc_id), targets, **kwargs
        )

    async def get_target(self, tc_id: str, target_id: str) -> Any:
        return await self.execute(
            "GET", resolve_path(PATH_GET_TARGET, tc_id=tc_id, target_id=target_id)
        )

    async def update_target(self, tc_id: str, target_id: str, target: dict[str, Any]) -> Any:
        r"""Update properties of a target, e.g. ``{"physicalHeight": 200}``."""
        return await self.execute(
            "POST", resolve_path(PATH_GET_TARGET, tc_id=tc_id, target_id=target_id), target
        )

    async def delete_target(self, tc_id: str, target_id: str) -> None:
        await self.execute(
            "DELETE", resolve_path(PATH_GET_TARGET, tc_id=tc_id, target_id=target_id)
        )

    async def generate_target_collection(self, tc_id: str, **kwargs: Any) -> dict[str, Any]:
        r"""Generate the cloud archive of a target collection.

        Target changes are only live once the collection is generated.
        This waits until the server reports completion.

        Args:
            tc_id: The id of the target collection.
            **kwargs: Poll bound overrides passed to
                ``execute_async_operation``.

        Returns:
            The final status of the operation.
        """
        return await self.execute_async_operation(
            "POST", resolve_path(PATH_GENERATE_TC, tc_id=tc_id), **kwargs
        )
