r"""Poller for long-running asynchronous operations.

An asynchronous operation is accepted by the server with ``202
Accepted`` and a ``Location`` header pointing at a status resource. The
poller waits, then requests that status resource until it reports
``COMPLETED``.
"""

from __future__ import annotations

__all__ = ["OperationPoller", "PollState", "is_completed"]

import asyncio
import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Any

from cloudtargets.callbacks import invoke_on_complete, invoke_on_poll
from cloudtargets.config import STATUS_COMPLETED
from cloudtargets.exceptions import ApiError
from cloudtargets.utils.body import read_json_body
from cloudtargets.utils.response import get_location, has_json_content
from cloudtargets.utils.sleep import calculate_initial_delay, exceeds_time_budget

if TYPE_CHECKING:
    import httpx

    from cloudtargets.core.config import ClientConfig
    from cloudtargets.executor import RequestExecutor

logger: logging.Logger = logging.getLogger(__name__)


class PollState(Enum):
    """States of an asynchronous operation.

    Attributes:
        SUBMITTED: The initiating request is being sent.
        WAITING: Waiting before the next status request.
        POLLING: A status request is in flight.
        COMPLETED: The server reported completion.
    """

    SUBMITTED = "submitted"
    WAITING = "waiting"
    POLLING = "polling"
    COMPLETED = "completed"


def is_completed(status: Any) -> bool:
    """Indicate if a status payload reports a completed operation.

    Any other status, including failure statuses reported by the server,
    means the operation is still in progress.

    Example:
        ```pycon
        >>> from cloudtargets.poller import is_completed
        >>> is_completed({"status": "COMPLETED"})
        True
        >>> is_completed({"status": "PENDING"})
        False

        ```
    """
    return isinstance(status, dict) and status.get("status") == STATUS_COMPLETED


class OperationPoller:
    """Runs one asynchronous operation until the server reports
    completion.

    A poller tracks the state of a single operation, so use one instance
    per operation.

    The loop stops with a poll timeout error when the configured
    ``max_poll_attempts`` status requests did not report completion, or
    when the next wait would take it past ``max_poll_time`` seconds since
    submission. Without either bound it polls until completion.

    Args:
        executor: The executor used to send requests.
        config: Optional configuration overriding the executor's one for
            the poll interval, bounds and callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from cloudtargets.core.config import ClientConfig
        >>> from cloudtargets.executor import RequestExecutor
        >>> from cloudtargets.poller import OperationPoller
        >>> from cloudtargets.transport import Transport
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(token="secret", api_version=2, max_poll_time=600.0)
        ...     transport = Transport(config)
        ...     poller = OperationPoller(RequestExecutor(config, transport))
        ...     try:
        ...         return await poller.run(
        ...             "POST", "/cloudrecognition/targetCollection/abc/generation/cloudarchive"
        ...         )
        ...     finally:
        ...         await transport.aclose()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, executor: RequestExecutor, config: ClientConfig | None = None) -> None:
        self.executor = executor
        self.config = config if config is not None else executor.config
        self.state: PollState | None = None

    def _transition(self, state: PollState) -> None:
        logger.debug(f"Operation state {self.state} -> {state}")
        self.state = state

    async def run(self, method: str, path: str, payload: Any = None) -> dict[str, Any]:
        """Submit an asynchronous operation and wait for its completion.

        Args:
            method: The HTTP method of the initiating request.
            path: The resolved path of the initiating request.
            payload: Optional JSON-serializable payload.

        Returns:
            The status payload that reported completion.

        Raises:
            ApiError: If any request fails, or a poll timeout error if the
                configured bound is reached first.
        """
        start_time = time.monotonic()
        self._transition(PollState.SUBMITTED)
        response = await self.executor.send_api_request(method, path, payload)
        try:
            location = get_location(response)
        except ApiError:
            await response.aclose()
            raise
        delay = await self._read_initial_delay(response)
        logger.debug(f"{method} request to {path} accepted, status at {location}")

        try:
            return await self._poll(location, delay, start_time)
        except asyncio.CancelledError:
            logger.debug(f"Polling of {location} cancelled in state {self.state}")
            raise

    async def _read_initial_delay(self, response: httpx.Response) -> float:
        body = None
        if has_json_content(response):
            body = await read_json_body(response)
        else:
            await response.aclose()
        return calculate_initial_delay(body, self.config.poll_interval)

    async def _poll(self, location: str, delay: float, start_time: float) -> dict[str, Any]:
        config = self.config
        status: Any = None
        attempt = 0
        if not config.is_poll_bounded:
            logger.debug(f"Polling {location} until the operation completes, no bound set")
        while True:
            if exceeds_time_budget(time.monotonic() - start_time, delay, config.max_poll_time):
                raise ApiError.poll_timeout(
                    location,
                    status,
                    f"operation at {location} did not complete within {config.max_poll_time}s",
                )

            self._transition(PollState.WAITING)
            logger.debug(f"Waiting {delay:.2f}s before polling {location}")
            await asyncio.sleep(delay)

            self._transition(PollState.POLLING)
            status = await self._read_status(location)
            attempt += 1

            if is_completed(status):
                self._transition(PollState.COMPLETED)
                invoke_on_complete(
                    config.on_complete,
                    location=location,
                    attempts=attempt,
                    status=status,
                    start_time=start_time,
                )
                return status

            logger.debug(f"Operation at {location} in progress after {attempt} poll(s): {status}")
            if config.max_poll_attempts is not None and attempt >= config.max_poll_attempts:
                raise ApiError.poll_timeout(
                    location,
                    status,
                    f"operation at {location} did not complete after {attempt} polls",
                )
            delay = config.poll_interval
            invoke_on_poll(
                config.on_poll,
                location=location,
                attempt=attempt,
                status=status,
                wait_time=delay,
                start_time=start_time,
            )

    async def _read_status(self, location: str) -> Any:
        response = await self.executor.send_api_request("GET", location)
        return await read_json_body(response)
