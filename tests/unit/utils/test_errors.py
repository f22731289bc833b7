from __future__ import annotations

import httpx
import pytest

from cloudtargets import ApiError, ErrorKind
from cloudtargets.utils.errors import read_api_error
from tests.helpers import json_response

####################################
#     Tests for read_api_error     #
####################################


@pytest.mark.asyncio
async def test_read_api_error_service() -> None:
    response = json_response(400, {"message": "bad name", "code": 400, "reason": "INVALID_NAME"})
    error = await read_api_error(response)
    assert error.kind is ErrorKind.SERVICE
    assert error.message == "bad name"
    assert error.code == 400
    assert error.reason == "INVALID_NAME"
    assert response.is_closed


@pytest.mark.asyncio
async def test_read_api_error_service_code_differs_from_status() -> None:
    response = json_response(409, {"message": "exists", "code": 1203, "reason": "DUPLICATE"})
    error = await read_api_error(response)
    assert error.code == 1203


@pytest.mark.asyncio
async def test_read_api_error_service_missing_fields() -> None:
    error = await read_api_error(json_response(500, {"message": "internal"}))
    assert error.kind is ErrorKind.SERVICE
    assert error.message == "internal"
    assert error.code is None
    assert error.reason is None


@pytest.mark.asyncio
async def test_read_api_error_service_non_object_body() -> None:
    error = await read_api_error(json_response(500, ["unexpected"]))
    assert error.kind is ErrorKind.SERVICE
    assert error.message is None


@pytest.mark.asyncio
async def test_read_api_error_general() -> None:
    error = await read_api_error(httpx.Response(502, text="Bad Gateway"))
    assert error.kind is ErrorKind.GENERAL
    assert error.message == "Bad Gateway"
    assert error.code == 502


@pytest.mark.asyncio
async def test_read_api_error_general_empty_json_body() -> None:
    response = httpx.Response(
        404, headers={"content-type": "application/json", "content-length": "0"}
    )
    error = await read_api_error(response)
    assert error.kind is ErrorKind.GENERAL
    assert error.message == ""
    assert error.code == 404


@pytest.mark.asyncio
async def test_read_api_error_malformed_json() -> None:
    response = httpx.Response(
        400, content=b"not-json", headers={"content-type": "application/json"}
    )
    with pytest.raises(ApiError) as exc_info:
        await read_api_error(response)
    assert exc_info.value.kind is ErrorKind.MALFORMED_BODY
    assert exc_info.value.raw_body == "not-json"
