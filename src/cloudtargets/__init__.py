r"""cloudtargets - Asynchronous client for the Cloud Targets API.

This package manages target collections and the targets within them
through an HTTPS/JSON API. Operations that the server completes
asynchronously are polled until they report completion.

Key Features:
    - One method per target collection and target operation
    - Typed errors telling apart service, general, transport, malformed
      body and poll timeout failures
    - Polling of long-running operations with configurable interval and
      optional time or attempt bounds
    - Immutable per-client configuration, no global state
    - Configurable TLS verification policy

Example:
    ```pycon
    >>> import asyncio
    >>> from cloudtargets import AsyncTargetsClient, ClientConfig
    >>> async def main():  # doctest: +SKIP
    ...     config = ClientConfig(token="secret", api_version=2, max_poll_time=600.0)
    ...     async with AsyncTargetsClient(config) as client:
    ...         collection = await client.create_target_collection("my collection")
    ...         status = await client.generate_target_collection(collection["id"])
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "AsyncTargetsClient",
    "ClientConfig",
    "ErrorKind",
    "OperationPoller",
    "PollState",
    "Request",
    "RequestExecutor",
    "Transport",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from cloudtargets.client import AsyncTargetsClient
from cloudtargets.core.config import ClientConfig
from cloudtargets.exceptions import ApiError, ErrorKind
from cloudtargets.executor import RequestExecutor
from cloudtargets.poller import OperationPoller, PollState
from cloudtargets.transport import Request, Transport

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
