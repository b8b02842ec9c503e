"""`HttpClient` implementation backed by httpx.

```python
import httpx

from api_sdk_creator.transport import HttpxTransport

async with HttpxTransport(httpx.AsyncClient(timeout=10.0)) as client:
    outcome = await client(HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json"))
```

Timeouts, connection pooling and retries are configured on the
`httpx.AsyncClient` (or its transport) handed in; the pipeline adds none.
Cancelling the awaiting task cancels the httpx request.
"""

from typing import Any

import httpx

from api_sdk_creator.either import Either, Failure
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.types import Headers, HttpRequest, HttpResult, UnstructuredData
from api_sdk_creator.marshalling.stages import is_json_content_type
from api_sdk_creator.pipe import pipe
from api_sdk_creator.transport.base import transport_stage


def _check_request(request: HttpRequest[Any]) -> Either[HttpRequest[Any]]:
    """Reject requests the transport cannot send, before doing any I/O."""
    if request.body is not None and not isinstance(request.body, (str, bytes)):
        return Failure(
            SdkError(
                ErrorKind.ILLEGAL_STATE,
                f"Request body of type {type(request.body).__name__} was not marshalled before sending",
            )
        )
    return request.url.resolve().map(lambda _: request)


def _decode_body(response: httpx.Response) -> UnstructuredData | None:
    if not response.content:
        return None

    content_type = response.headers.get("content-type")
    if content_type is None or content_type.startswith("text/") or is_json_content_type(content_type):
        return response.text
    return response.content


class HttpxTransport:
    """Send pipeline requests with an `httpx.AsyncClient`.

    Args:
        client: The client to send requests with. It is closed when the
            transport is used as an async context manager.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._pipeline = pipe(_check_request, transport_stage(self._send, name="httpx"))

    async def __aenter__(self) -> "HttpxTransport":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def __call__(self, request: HttpRequest[Any]) -> Either[HttpResult[Any, UnstructuredData]]:
        return await self._pipeline(request)

    async def _send(self, request: HttpRequest[Any]) -> HttpResult[Any, UnstructuredData]:
        response = await self._client.request(
            request.method.value,
            request.url.resolve().get_or_raise(),
            params=list(request.query) or None,
            headers=request.headers.pairs(),
            content=request.body,
        )

        return HttpResult(
            request=request,
            status_code=response.status_code,
            headers=Headers(response.headers.multi_items()),
            body=_decode_body(response),
            reason_phrase=response.reason_phrase,
        )


def httpx_client(client: httpx.AsyncClient | None = None, **client_kwargs: Any) -> HttpxTransport:
    """Create an `HttpxTransport`.

    Args:
        client: Existing client to wrap.
        **client_kwargs: Passed to `httpx.AsyncClient` when no client is given.
    """
    if client is None:
        client = httpx.AsyncClient(**client_kwargs)
    elif client_kwargs:
        raise TypeError("Pass either an httpx.AsyncClient or client keyword arguments, not both")
    return HttpxTransport(client)
