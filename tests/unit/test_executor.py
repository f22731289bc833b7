r"""Unit tests for the request executor."""

from __future__ import annotations

import json

import httpx
import pytest

from cloudtargets import ApiError, ClientConfig, ErrorKind, RequestExecutor, Transport
from cloudtargets.config import (
    CONTENT_TYPE_JSON,
    HEADER_CONTENT_TYPE,
    HEADER_TOKEN,
    HEADER_VERSION,
)
from tests.helpers import MockService, json_response

TEST_PATH = "/cloudrecognition/targetCollection"


async def execute(config: ClientConfig, service: MockService, method: str, payload=None):
    async with service.client() as client:
        executor = RequestExecutor(config, Transport(config, client=client))
        return await executor.execute(method, TEST_PATH, payload)


#####################################
#     Tests for request building    #
#####################################


def test_build_headers_without_payload(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    assert executor.build_headers() == {"X-Version": "2", "X-Token": "secret-token"}


def test_build_headers_with_payload(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    assert executor.build_headers({"name": "tc"}) == {
        "X-Version": "2",
        "X-Token": "secret-token",
        "Content-Type": "application/json",
    }


def test_build_request_with_payload(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    request = executor.build_request("POST", TEST_PATH, {"name": "tc"})
    assert request.method == "POST"
    assert request.path == TEST_PATH
    assert json.loads(request.body) == {"name": "tc"}
    assert request.headers["Content-Type"] == "application/json"


def test_build_request_post_without_payload(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    request = executor.build_request("POST", TEST_PATH)
    assert request.body == ""
    assert "Content-Type" not in request.headers


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_build_request_without_body(config: ClientConfig, method: str) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    assert executor.build_request(method, TEST_PATH).body is None


def test_build_request_get_with_payload(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match=r"a body must be present iff the method is POST"):
        executor.build_request("GET", TEST_PATH, {"name": "tc"})


#############################
#     Tests for execute     #
#############################


@pytest.mark.asyncio
async def test_execute_returns_json(config: ClientConfig) -> None:
    service = MockService(json_response(200, {"id": "abc", "name": "tc"}))
    assert await execute(config, service, "POST", {"name": "tc"}) == {"id": "abc", "name": "tc"}

    request = service.requests[0]
    assert request.method == "POST"
    assert request.headers["X-Version"] == "2"
    assert request.headers["X-Token"] == "secret-token"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(service.bodies[0]) == {"name": "tc"}


@pytest.mark.asyncio
async def test_execute_get_has_no_body(config: ClientConfig) -> None:
    service = MockService(json_response(200, []))
    assert await execute(config, service, "GET") == []

    request = service.requests[0]
    assert "Content-Type" not in request.headers
    assert service.bodies == [b""]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 202, 204])
async def test_execute_success_without_json_content(config: ClientConfig, status_code: int) -> None:
    service = MockService(httpx.Response(status_code, text="ignored"))
    assert await execute(config, service, "DELETE") is None


@pytest.mark.asyncio
async def test_execute_success_with_zero_content_length(config: ClientConfig) -> None:
    service = MockService(
        httpx.Response(200, headers={"content-type": "application/json", "content-length": "0"})
    )
    assert await execute(config, service, "GET") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [201, 301, 400, 401, 403, 404, 409, 500, 503])
async def test_execute_failure_service_error(config: ClientConfig, status_code: int) -> None:
    service = MockService(
        json_response(status_code, {"message": "bad name", "code": 400, "reason": "INVALID_NAME"})
    )
    with pytest.raises(ApiError) as exc_info:
        await execute(config, service, "POST", {"name": ""})

    error = exc_info.value
    assert error.kind is ErrorKind.SERVICE
    assert error.message == "bad name"
    assert error.code == 400
    assert error.reason == "INVALID_NAME"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [201, 302, 404, 500, 502])
async def test_execute_failure_general_error(config: ClientConfig, status_code: int) -> None:
    service = MockService(httpx.Response(status_code, text="Something went wrong"))
    with pytest.raises(ApiError) as exc_info:
        await execute(config, service, "GET")

    error = exc_info.value
    assert error.kind is ErrorKind.GENERAL
    assert error.message == "Something went wrong"
    assert error.code == status_code


@pytest.mark.asyncio
async def test_execute_failure_malformed_json(config: ClientConfig) -> None:
    service = MockService(
        httpx.Response(400, content=b"not-json", headers={"content-type": "application/json"})
    )
    with pytest.raises(ApiError) as exc_info:
        await execute(config, service, "GET")

    assert exc_info.value.kind is ErrorKind.MALFORMED_BODY
    assert exc_info.value.raw_body == "not-json"


@pytest.mark.asyncio
async def test_execute_success_malformed_json(config: ClientConfig) -> None:
    service = MockService(
        httpx.Response(200, content=b"{oops", headers={"content-type": "application/json"})
    )
    with pytest.raises(ApiError, match=r"\{oops") as exc_info:
        await execute(config, service, "GET")
    assert exc_info.value.is_malformed_body


@pytest.mark.asyncio
async def test_execute_transport_error(config: ClientConfig) -> None:
    service = MockService(httpx.ConnectError("connection refused"))
    with pytest.raises(ApiError) as exc_info:
        await execute(config, service, "GET")
    assert exc_info.value.kind is ErrorKind.TRANSPORT


@pytest.mark.asyncio
async def test_send_api_request_returns_unread_response(config: ClientConfig) -> None:
    service = MockService(json_response(202, {"estimatedLatency": 500}, headers={"Location": "/op/1"}))
    async with service.client() as client:
        executor = RequestExecutor(config, Transport(config, client=client))
        response = await executor.send_api_request("POST", TEST_PATH, [{"name": "t"}])
        assert response.status_code == 202
        await response.aclose()


def test_build_headers_uses_protocol_header_names(config: ClientConfig) -> None:
    executor = RequestExecutor(config, transport=None)  # type: ignore[arg-type]
    headers = executor.build_headers({"name": "tc"})
    assert set(headers) == {HEADER_CONTENT_TYPE, HEADER_TOKEN, HEADER_VERSION}
    assert headers[HEADER_CONTENT_TYPE] == CONTENT_TYPE_JSON
