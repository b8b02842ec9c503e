"""Tests for pipeline assembly and end-to-end pipelines."""

import asyncio
import json
from dataclasses import dataclass

import httpx
import pytest

from api_sdk_creator import (
    BaseApiClient,
    ErrorKind,
    Failure,
    HttpRequest,
    HttpRequestMethod,
    HttpResult,
    SdkError,
    Success,
    constant_headers,
    create_headers,
    create_pipeline,
    extract_http_body,
    json_marshaller,
    json_unmarshaller,
    pipe,
    pydantic_marshaller,
    pydantic_unmarshaller,
)
from api_sdk_creator.errors import NotFoundError
from api_sdk_creator.errors.handler import check_status
from api_sdk_creator.http.headers import add_headers
from api_sdk_creator.testing import StubHttpClient
from api_sdk_creator.transport import httpx_client


pytestmark = pytest.mark.unit


@dataclass(frozen=True)
class IpData:
    ip: str
    country: str


@dataclass(frozen=True)
class NewUser:
    name: str


@dataclass(frozen=True)
class User:
    id: int
    name: str


def no_op_marshaller(value):
    return Success("")


def check_ip_pipeline(client):
    """Headers, no-op marshaller, transport, then unmarshal into IpData."""
    prefix = pipe(
        add_headers(create_headers(constant_headers({"x-client-name": "test"}))),
        json_marshaller(no_op_marshaller),
        client,
    )
    return pipe(prefix, json_unmarshaller(pydantic_unmarshaller()(IpData)))


def illegal_state():
    return SdkError(ErrorKind.ILLEGAL_STATE, "Didn't get any JSON data")


class TestEndToEnd:
    """The check IP operation against a stub transport."""

    async def test_success(self, get_request, ip_json):
        client = StubHttpClient(ip_json)

        outcome = await check_ip_pipeline(client)(get_request)
        data = outcome.map(extract_http_body).left_if_none(illegal_state)

        assert data == Success(IpData(ip="1.2.3.4", country="AU"))
        assert client.last_request.headers["x-client-name"] == ("test",)
        assert client.last_request.body is None

    async def test_empty_body_is_illegal_state(self, get_request):
        client = StubHttpClient("")

        outcome = await check_ip_pipeline(client)(get_request)
        data = outcome.map(extract_http_body).left_if_none(illegal_state)

        assert isinstance(data, Failure)
        assert data.error.kind is ErrorKind.ILLEGAL_STATE

    async def test_empty_body_with_required_unmarshaller_is_illegal_state(self, get_request):
        pipeline = pipe(StubHttpClient(""), json_unmarshaller(pydantic_unmarshaller()(IpData), required=True))

        outcome = await pipeline(get_request)

        assert outcome.error.kind is ErrorKind.ILLEGAL_STATE

    async def test_header_failure_never_reaches_transport(self, get_request):
        client = StubHttpClient('{"ip": "1.2.3.4", "country": "AU"}')
        error = SdkError(ErrorKind.CONFIGURATION, "missing API key")
        pipeline = pipe(add_headers(Failure(error)), client)

        outcome = await pipeline(get_request)

        assert outcome == Failure(error)
        assert client.requests == []

    async def test_transport_failure_skips_unmarshalling(self, get_request):
        error = SdkError(ErrorKind.NETWORK, "connection refused")
        calls = []

        def unmarshaller(data):
            calls.append(data)
            return Success(data)

        pipeline = pipe(StubHttpClient(error=error), json_unmarshaller(unmarshaller))

        assert await pipeline(get_request) == Failure(error)
        assert calls == []


class TestCreatePipeline:
    async def test_runs_header_marshal_transport_in_order(self):
        client = StubHttpClient('{"id": 1, "name": "Ada"}')
        pipeline = create_pipeline(
            client,
            headers=create_headers(constant_headers({"x-client-name": "test"})),
            marshaller=pydantic_marshaller(),
        )

        outcome = await pipeline(
            HttpRequest(HttpRequestMethod.POST, "https://api.example.com/users", body=NewUser(name="Ada"))
        )

        sent = client.last_request
        assert outcome.is_success
        assert sent.headers["x-client-name"] == ("test",)
        assert sent.headers["content-type"] == ("application/json; charset=utf-8",)
        assert json.loads(sent.body) == {"name": "Ada"}

    async def test_transport_only(self, get_request):
        client = StubHttpClient("ok")

        outcome = await create_pipeline(client)(get_request)

        assert outcome.get_or_raise().body == "ok"
        assert client.last_request is get_request

    async def test_result_handlers_run_after_transport(self, get_request):
        pipeline = create_pipeline(StubHttpClient("missing", status_code=404), result_handlers=[check_status()])

        outcome = await pipeline(get_request)

        assert outcome.error.kind is ErrorKind.HTTP_STATUS
        assert isinstance(outcome.error.to_exception(), NotFoundError)

    async def test_header_override(self):
        client = StubHttpClient()
        pipeline = create_pipeline(
            client, headers=create_headers(constant_headers({"user-agent": "my-sdk"})), override_headers=True
        )

        await pipeline(HttpRequest(HttpRequestMethod.GET, "https://api.example.com", headers={"User-Agent": "other"}))

        assert client.last_request.headers["user-agent"] == ("my-sdk",)


class UserClient(BaseApiClient):
    async def get_user(self, user_id: int):
        return await self.send(HttpRequest(HttpRequestMethod.GET, f"https://api.example.com/users/{user_id}"), User)

    async def check_ip(self):
        return await self.send(HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json"), IpData)


def routing_client():
    """Stub answering users and ifconfig requests differently."""

    def respond(request):
        url = request.url.value
        if "ifconfig" in url:
            body = '{"ip": "1.2.3.4", "country": "AU"}'
        else:
            body = json.dumps({"id": int(url.rsplit("/", 1)[-1]), "name": "Ada"})
        return Success(HttpResult(request, 200, {"content-type": "application/json"}, body))

    return StubHttpClient(respond=respond)


class TestBaseApiClient:
    async def test_send_decodes_body(self, ip_json):
        client = UserClient(create_pipeline(StubHttpClient(ip_json)), pydantic_unmarshaller())

        assert await client.check_ip() == Success(IpData(ip="1.2.3.4", country="AU"))

    async def test_send_without_body_is_illegal_state(self):
        client = UserClient(create_pipeline(StubHttpClient()), pydantic_unmarshaller())

        outcome = await client.check_ip()

        assert outcome.error.kind is ErrorKind.ILLEGAL_STATE
        assert "IpData" in outcome.error.message

    async def test_execute_returns_full_result(self, ip_json):
        client = UserClient(create_pipeline(StubHttpClient(ip_json, status_code=203)), pydantic_unmarshaller())

        request = HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json")

        result = (await client.execute(request, IpData)).get_or_raise()

        assert result.status_code == 203
        assert result.body == IpData(ip="1.2.3.4", country="AU")

    async def test_typed_pipelines_are_resolved_once_per_type(self, ip_json):
        resolved = []
        unmarshaller = pydantic_unmarshaller()

        def counting_unmarshaller(target_type):
            resolved.append(target_type)
            return unmarshaller(target_type)

        client = UserClient(create_pipeline(StubHttpClient(ip_json)), counting_unmarshaller)

        await client.check_ip()
        await client.check_ip()

        assert resolved == [IpData]
        assert client.pipeline_for(IpData) is client.pipeline_for(IpData)

    async def test_concurrent_operations_with_different_types(self):
        client = UserClient(create_pipeline(routing_client()), pydantic_unmarshaller())

        outcomes = await asyncio.gather(client.get_user(1), client.check_ip(), client.get_user(2))

        assert outcomes == [
            Success(User(id=1, name="Ada")),
            Success(IpData(ip="1.2.3.4", country="AU")),
            Success(User(id=2, name="Ada")),
        ]

    async def test_with_sync_pipeline(self, ip_json):
        def sync_client(request):
            return Success(HttpResult(request, 200, body=ip_json))

        client = UserClient(sync_client, pydantic_unmarshaller())

        assert await client.check_ip() == Success(IpData(ip="1.2.3.4", country="AU"))


async def test_end_to_end_over_httpx_mock_transport(ip_json):
    """The full pipeline with the httpx transport adapter."""
    seen = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=ip_json.encode(), headers={"content-type": "application/json"})

    async with httpx_client(httpx.AsyncClient(transport=httpx.MockTransport(handler))) as transport:
        pipeline = create_pipeline(
            transport,
            headers=create_headers(constant_headers({"x-client-name": "test"})),
            marshaller=pydantic_marshaller(),
            result_handlers=[check_status()],
        )
        client = UserClient(pipeline, pydantic_unmarshaller())
        outcome = await client.check_ip()

    assert outcome == Success(IpData(ip="1.2.3.4", country="AU"))
    assert seen[0].headers["x-client-name"] == "test"
