r"""Delay calculation utilities for the operation poll loop."""

from __future__ import annotations

__all__ = ["calculate_initial_delay", "exceeds_time_budget"]

import logging
from typing import Any

logger: logging.Logger = logging.getLogger(__name__)


def calculate_initial_delay(accepted_body: Any, poll_interval: float) -> float:
    """Calculate the delay before the first status request.

    The server may announce how long the operation should take with an
    ``estimatedLatency`` field, in milliseconds, in the body of the
    accepted response. Without a usable estimate the poll interval is
    used.

    Args:
        accepted_body: The parsed body of the accepted response, or
            ``None`` if it had no JSON content.
        poll_interval: The configured poll interval in seconds.

    Returns:
        The delay in seconds.

    Example:
        ```pycon
        >>> from cloudtargets.utils.sleep import calculate_initial_delay
        >>> calculate_initial_delay({"estimatedLatency": 500}, poll_interval=10.0)
        0.5
        >>> calculate_initial_delay(None, poll_interval=10.0)
        10.0

        ```
    """
    latency = accepted_body.get("estimatedLatency") if isinstance(accepted_body, dict) else None
    if isinstance(latency, (int, float)) and not isinstance(latency, bool) and latency >= 0:
        logger.debug(f"Using estimated latency of the operation: {latency}ms")
        return latency / 1000
    return poll_interval


def exceeds_time_budget(
    elapsed_time: float, wait_time: float, max_poll_time: float | None
) -> bool:
    """Indicate if waiting would take the poll loop past its time budget.

    Args:
        elapsed_time: Seconds spent since the operation was submitted.
        wait_time: Seconds the loop is about to wait.
        max_poll_time: The time budget in seconds, or ``None`` for no
            budget.

    Returns:
        ``True`` if the loop must stop instead of waiting.

    Example:
        ```pycon
        >>> from cloudtargets.utils.sleep import exceeds_time_budget
        >>> exceeds_time_budget(elapsed_time=55.0, wait_time=10.0, max_poll_time=60.0)
        True
        >>> exceeds_time_budget(elapsed_time=55.0, wait_time=10.0, max_poll_time=None)
        False

        ```
    """
    if max_poll_time is None:
        return False
    return elapsed_time + wait_time > max_poll_time
