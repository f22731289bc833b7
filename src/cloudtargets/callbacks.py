r"""Callback types and data structures for observing asynchronous
operations.

The callback system provides two lifecycle hooks of the poll loop:
- on_poll: Called after each status request that did not report completion
- on_complete: Called once the operation reported completion

Example:
    ```pycon
    >>> from cloudtargets.callbacks import PollInfo
    >>> from cloudtargets.core import ClientConfig
    >>> def log_poll(info: PollInfo):
    ...     print(f"Poll {info.attempt}: {info.status.get('status')}")
    ...
    >>> config = ClientConfig(token="secret", api_version=2, on_poll=log_poll)

    ```
"""

from __future__ import annotations

__all__ = ["CompletionInfo", "PollInfo", "invoke_on_complete", "invoke_on_poll"]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class PollInfo:
    """Information passed to on_poll callback.

    Attributes:
        location: The status URL being polled.
        attempt: The number of status requests sent so far (1-indexed).
        status: The status payload returned by the last request.
        wait_time: The sleep time in seconds before the next request.
        elapsed_time: Time spent since the operation was submitted (seconds).
    """

    location: str
    attempt: int
    status: dict[str, Any]
    wait_time: float
    elapsed_time: float


@dataclass
class CompletionInfo:
    """Information passed to on_complete callback.

    Attributes:
        location: The status URL that reported completion.
        attempts: The number of status requests sent.
        status: The final status payload.
        total_time: Time spent since the operation was submitted (seconds).
    """

    location: str
    attempts: int
    status: dict[str, Any]
    total_time: float


def invoke_on_poll(
    on_poll: Callable[[PollInfo], None] | None,
    *,
    location: str,
    attempt: int,
    status: dict[str, Any],
    wait_time: float,
    start_time: float,
) -> None:
    """Invoke on_poll callback if provided.

    Args:
        on_poll: Optional callback to invoke after an unfinished poll.
        location: The status URL being polled.
        attempt: The number of status requests sent so far.
        status: The status payload returned by the last request.
        wait_time: The sleep time in seconds before the next request.
        start_time: The ``time.monotonic`` value when the operation was
            submitted.
    """
    if on_poll is not None:
        on_poll(
            PollInfo(
                location=location,
                attempt=attempt,
                status=status,
                wait_time=wait_time,
                elapsed_time=time.monotonic() - start_time,
            )
        )


def invoke_on_complete(
    on_complete: Callable[[CompletionInfo], None] | None,
    *,
    location: str,
    attempts: int,
    status: dict[str, Any],
    start_time: float,
) -> None:
    """Invoke on_complete callback if provided.

    Args:
        on_complete: Optional callback to invoke once the operation completed.
        location: The status URL that reported completion.
        attempts: The number of status requests sent.
        status: The final status payload.
        start_time: The ``time.monotonic`` value when the operation was
            submitted.
    """
    if on_complete is not None:
        on_complete(
            CompletionInfo(
                location=location,
                attempts=attempts,
                status=status,
                total_time=time.monotonic() - start_time,
            )
        )
