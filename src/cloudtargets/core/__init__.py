r"""Core configuration shared by the executor and the operation poller.

This module contains the client configuration and the validation of its
parameters.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "validate_client_params",
    "validate_poll_params",
    "validate_timeout",
    "validate_verify",
]

from cloudtargets.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from cloudtargets.core.validation import (
    validate_client_params,
    validate_poll_params,
    validate_timeout,
    validate_verify,
)
