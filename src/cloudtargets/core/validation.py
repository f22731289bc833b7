r"""Parameter validation utilities for the Cloud Targets client.

This module provides validation functions for the client configuration
to ensure values meet the required constraints before any request is
sent.
"""

from __future__ import annotations

__all__ = [
    "validate_client_params",
    "validate_poll_params",
    "validate_timeout",
    "validate_verify",
]

import ssl
from typing import Any


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for one HTTP exchange.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from cloudtargets.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_poll_params(
    poll_interval: float,
    max_poll_time: float | None = None,
    max_poll_attempts: int | None = None,
) -> None:
    """Validate the parameters of the operation poll loop.

    Args:
        poll_interval: Seconds to wait between two status requests.
            Must be > 0.
        max_poll_time: Optional overall time budget of the poll loop in
            seconds. Must be > 0 if provided.
        max_poll_attempts: Optional maximum number of status requests.
            Must be > 0 if provided.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from cloudtargets.core.validation import validate_poll_params
        >>> validate_poll_params(poll_interval=10.0)
        >>> validate_poll_params(poll_interval=1.0, max_poll_time=60.0, max_poll_attempts=5)
        >>> validate_poll_params(poll_interval=-1.0)  # doctest: +SKIP

        ```
    """
    if poll_interval <= 0:
        msg = f"poll_interval must be > 0, got {poll_interval}"
        raise ValueError(msg)
    if max_poll_time is not None and max_poll_time <= 0:
        msg = f"max_poll_time must be > 0, got {max_poll_time}"
        raise ValueError(msg)
    if max_poll_attempts is not None and max_poll_attempts <= 0:
        msg = f"max_poll_attempts must be > 0, got {max_poll_attempts}"
        raise ValueError(msg)


def validate_client_params(token: str, api_version: int | str, base_url: str) -> None:
    """Validate the credentials and endpoint of a client.

    Args:
        token: The API token sent in the ``X-Token`` header.
        api_version: The API version sent in the ``X-Version`` header.
        base_url: The root URL of the service.

    Raises:
        ValueError: If the token, version or base URL is empty.
    """
    if not token:
        msg = "token must be a non-empty string"
        raise ValueError(msg)
    if api_version is None or str(api_version) == "":
        msg = f"api_version must be set, got {api_version!r}"
        raise ValueError(msg)
    if not base_url:
        msg = "base_url must be a non-empty string"
        raise ValueError(msg)


def validate_verify(verify: Any) -> None:
    """Validate the TLS verification policy.

    Args:
        verify: ``True``, ``False`` or an ``ssl.SSLContext``.

    Raises:
        ValueError: If the policy is of any other type, such as a path
            to a CA bundle.
    """
    if not isinstance(verify, (bool, ssl.SSLContext)):
        msg = (
            f"verify must be a bool or an ssl.SSLContext, got {type(verify).__name__}; "
            "use ssl.create_default_context(cafile=...) for a CA bundle"
        )
        raise ValueError(msg)
