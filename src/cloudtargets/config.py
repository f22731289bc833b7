r"""Protocol constants for the Cloud Targets API.

This module groups the wire-level constants shared by the transport,
the response classifier and the operation poller. Client defaults
(base URL, timeout, poll interval) live in ``cloudtargets.core.config``.
"""

from __future__ import annotations

__all__ = [
    "CONTENT_TYPE_JSON",
    "HEADER_CONTENT_LENGTH",
    "HEADER_CONTENT_TYPE",
    "HEADER_LOCATION",
    "HEADER_TOKEN",
    "HEADER_VERSION",
    "STATUS_COMPLETED",
    "SUCCESS_STATUS_CODES",
    "SUPPORTED_METHODS",
]

# Status codes returned by the API for successful operations
# 200: OK - synchronous operation finished, body may contain JSON
# 202: Accepted - asynchronous operation started, see Location header
# 204: No Content - synchronous operation finished without body
SUCCESS_STATUS_CODES = (200, 202, 204)

SUPPORTED_METHODS = ("GET", "POST", "DELETE")

CONTENT_TYPE_JSON = "application/json"

# Header names. Response lookups in httpx are case-insensitive.
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_LOCATION = "Location"
HEADER_TOKEN = "X-Token"
HEADER_VERSION = "X-Version"

# The only terminal value of the status resource understood by the poller
STATUS_COMPLETED = "COMPLETED"
