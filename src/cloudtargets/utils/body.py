r"""Response body reading utilities.

This module provides functions for consuming the body stream of a raw
response into text and for parsing that text as JSON.
"""

from __future__ import annotations

__all__ = ["read_body", "read_json_body"]

import json
import logging
from typing import Any

import httpx

from cloudtargets.exceptions import ApiError

logger: logging.Logger = logging.getLogger(__name__)


async def read_body(response: httpx.Response) -> str:
    """Read the whole body of a response as text.

    The response is closed once the body has been read, whether reading
    succeeded or not.

    Args:
        response: The raw response whose body has not been read yet.

    Returns:
        The full body decoded as text.

    Raises:
        ApiError: A transport error if the stream failed before the end
            of the body.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from cloudtargets.utils.body import read_body
        >>> asyncio.run(read_body(httpx.Response(200, text="hello")))
        'hello'

        ```
    """
    try:
        await response.aread()
    except (httpx.RequestError, httpx.StreamError) as exc:
        logger.debug(f"Reading response body failed with {type(exc).__name__}: {exc}")
        raise ApiError.transport(exc) from exc
    finally:
        await response.aclose()
    return response.text


async def read_json_body(response: httpx.Response) -> Any:
    """Read the whole body of a response and parse it as JSON.

    Args:
        response: The raw response whose body has not been read yet.

    Returns:
        The parsed JSON value.

    Raises:
        ApiError: A malformed body error carrying the raw text if the body
            is not valid JSON, or a transport error if the stream failed.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from cloudtargets.utils.body import read_json_body
        >>> asyncio.run(read_json_body(httpx.Response(200, json={"status": "COMPLETED"})))
        {'status': 'COMPLETED'}

        ```
    """
    body = await read_body(response)
    try:
        return json.loads(body)
    except ValueError as exc:
        logger.debug(f"Response body is not valid JSON: {body!r}")
        raise ApiError.malformed_body(body, cause=exc) from exc
