r"""Configuration dataclass and defaults for AsyncTargetsClient.

This module provides configuration constants and an immutable
dataclass-based configuration object. Each client instance owns its
own configuration, so several clients with different credentials can
run side by side.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from cloudtargets.core.validation import (
    validate_client_params,
    validate_poll_params,
    validate_timeout,
    validate_verify,
)

if TYPE_CHECKING:
    import ssl
    from collections.abc import Callable

    from cloudtargets.callbacks import CompletionInfo, PollInfo


# Root URL of the Cloud Targets API
DEFAULT_BASE_URL = "https://api.wikitude.com"

# Default timeout in seconds for one HTTP exchange
DEFAULT_TIMEOUT = 60.0

# Default delay in seconds between two status requests of an asynchronous
# operation (10000 milliseconds)
DEFAULT_POLL_INTERVAL = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for AsyncTargetsClient.

    The configuration is frozen: it is set once when the client is created
    and shared read-only by every operation in flight on that client.

    Args:
        token: The API token sent in the ``X-Token`` header.
        api_version: The API version sent in the ``X-Version`` header.
        poll_interval: Delay in seconds between two status requests of an
            asynchronous operation. Must be > 0.
        max_poll_time: Optional overall time budget of the poll loop in
            seconds. ``None`` polls until the operation completes.
        max_poll_attempts: Optional maximum number of status requests.
            ``None`` polls until the operation completes.
        base_url: Root URL of the service.
        verify: TLS verification policy passed to httpx. ``False`` disables
            certificate validation. To trust a custom CA bundle, pass
            ``ssl.create_default_context(cafile=...)``.
        timeout: Maximum seconds to wait for one HTTP exchange. Must be > 0.
        on_poll: Optional callback called after each status request that
            did not report completion.
        on_complete: Optional callback called once the operation completed.

    Example:
        ```pycon
        >>> from cloudtargets.core.config import ClientConfig
        >>> config = ClientConfig(token="secret", api_version=2)
        >>> config.poll_interval
        10.0
        >>> merged = config.merge(poll_interval=1.0)
        >>> merged.poll_interval
        1.0
        >>> config.poll_interval  # Original unchanged
        10.0

        ```
    """

    token: str
    api_version: int | str
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_poll_time: float | None = None
    max_poll_attempts: int | None = None
    base_url: str = DEFAULT_BASE_URL
    verify: bool | ssl.SSLContext = True
    timeout: float = DEFAULT_TIMEOUT
    on_poll: Callable[[PollInfo], None] | None = None
    on_complete: Callable[[CompletionInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_client_params(
            token=self.token, api_version=self.api_version, base_url=self.base_url
        )
        validate_poll_params(
            poll_interval=self.poll_interval,
            max_poll_time=self.max_poll_time,
            max_poll_attempts=self.max_poll_attempts,
        )
        validate_timeout(self.timeout)
        validate_verify(self.verify)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.

        Example:
            ```pycon
            >>> from cloudtargets.core.config import ClientConfig
            >>> config = ClientConfig(token="secret", api_version=2)
            >>> config.merge(max_poll_attempts=5).max_poll_attempts
            5

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    @property
    def is_poll_bounded(self) -> bool:
        r"""Indicate if the poll loop stops before the operation
        completes."""
        return self.max_poll_time is not None or self.max_poll_attempts is not None
