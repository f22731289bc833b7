r"""Utility functions for reading and classifying HTTP responses.

This package provides the response classifier, the body reader and the
error reader used by the request executor and the operation poller.
"""

from __future__ import annotations

__all__ = [
    "calculate_initial_delay",
    "exceeds_time_budget",
    "get_location",
    "has_json_content",
    "is_success",
    "read_api_error",
    "read_body",
    "read_json_body",
]

from cloudtargets.utils.body import read_body, read_json_body
from cloudtargets.utils.errors import read_api_error
from cloudtargets.utils.response import get_location, has_json_content, is_success
from cloudtargets.utils.sleep import calculate_initial_delay, exceeds_time_budget
