r"""HTTP response classification utilities.

This module provides functions for deciding whether a response is a
success and whether its body can be parsed as JSON.
"""

from __future__ import annotations

__all__ = ["get_location", "has_json_content", "is_success"]

import logging
from typing import TYPE_CHECKING

from cloudtargets.config import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_TYPE,
    HEADER_LOCATION,
    SUCCESS_STATUS_CODES,
)
from cloudtargets.exceptions import ApiError

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def is_success(response: httpx.Response) -> bool:
    """Indicate if the response reports a successful operation.

    Only 200, 202 and 204 are successes. Every other status code,
    including other 2xx and 3xx codes, is a failure whatever the body.

    Args:
        response: The raw response to classify.

    Returns:
        ``True`` if the status code is 200, 202 or 204.

    Example:
        ```pycon
        >>> import httpx
        >>> from cloudtargets.utils.response import is_success
        >>> is_success(httpx.Response(204))
        True
        >>> is_success(httpx.Response(201))
        False

        ```
    """
    return response.status_code in SUCCESS_STATUS_CODES


def has_json_content(response: httpx.Response) -> bool:
    """Indicate if the response carries a JSON body.

    The content type must be exactly ``application/json`` and the content
    length must not be the literal ``"0"``. A missing content length does
    not disqualify the body.

    Args:
        response: The raw response to inspect.

    Returns:
        ``True`` if the body should be parsed as JSON.

    Example:
        ```pycon
        >>> import httpx
        >>> from cloudtargets.utils.response import has_json_content
        >>> has_json_content(httpx.Response(200, json={"id": "abc"}))
        True
        >>> has_json_content(
        ...     httpx.Response(200, headers={"content-type": "application/json", "content-length": "0"})
        ... )
        False

        ```
    """
    headers = response.headers
    content_type = headers.get(HEADER_CONTENT_TYPE)
    content_length = headers.get(HEADER_CONTENT_LENGTH)
    return content_type == CONTENT_TYPE_JSON and content_length != "0"


def get_location(response: httpx.Response) -> str:
    """Return the status URL of an accepted asynchronous operation.

    Args:
        response: The accepted response.

    Returns:
        The value of the ``Location`` header.

    Raises:
        ApiError: A general error if the header is missing.
    """
    location = response.headers.get(HEADER_LOCATION)
    if not location:
        logger.debug(f"Response with status {response.status_code} has no Location header")
        raise ApiError.general(
            "accepted response has no Location header", response.status_code
        )
    return location
