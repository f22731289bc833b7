r"""Error reading utilities.

This module builds an ``ApiError`` from the body of a failed response.
"""

from __future__ import annotations

__all__ = ["read_api_error"]

import logging
from typing import TYPE_CHECKING

from cloudtargets.exceptions import ApiError
from cloudtargets.utils.body import read_body, read_json_body
from cloudtargets.utils.response import has_json_content

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


async def read_api_error(response: httpx.Response) -> ApiError:
    """Build the error described by a failed response.

    A JSON body becomes a service error carrying its ``message``, ``code``
    and ``reason`` fields; missing fields are ``None``. Any other body
    becomes a general error whose message is the raw text and whose code
    is the HTTP status code.

    Args:
        response: The failed response whose body has not been read yet.

    Returns:
        The error to raise.

    Raises:
        ApiError: A malformed body error if the body claims to be JSON but
            cannot be parsed, or a transport error if the stream failed.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from cloudtargets.utils.errors import read_api_error
        >>> error = asyncio.run(read_api_error(httpx.Response(502, text="Bad Gateway")))
        >>> str(error)
        '(502): Bad Gateway'

        ```
    """
    if has_json_content(response):
        content = await read_json_body(response)
        if not isinstance(content, dict):
            content = {}
        error = ApiError.service(
            message=content.get("message"),
            code=content.get("code"),
            reason=content.get("reason"),
        )
    else:
        error = ApiError.general(await read_body(response), response.status_code)
    logger.debug(f"Request failed with status {response.status_code}: {error}")
    return error
