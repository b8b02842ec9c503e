"""Stub transports and result factories for testing pipelines."""

from collections.abc import Callable, Mapping
from typing import Any

from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import SdkError
from api_sdk_creator.http.types import HeaderValues, Headers, HttpRequest, HttpRequestMethod, HttpResult, UnstructuredData


def create_result(
    body: UnstructuredData | None = None,
    *,
    status_code: int = 200,
    headers: Mapping[str, HeaderValues] | None = None,
    request: HttpRequest[Any] | None = None,
) -> HttpResult[Any, UnstructuredData]:
    """Build an HttpResult, defaulting to a 200 response to a GET."""
    if request is None:
        request = HttpRequest(HttpRequestMethod.GET, "https://api.example.com/test")
    return HttpResult(request=request, status_code=status_code, headers=Headers.of(headers), body=body)


class StubHttpClient:
    """An `HttpClient` returning a canned response and recording every request.

    Args:
        body: Response body.
        status_code: Response status code.
        headers: Response headers.
        error: If given, every call fails with this error instead.
        respond: If given, builds the outcome for each request; overrides the
            canned response.

    Example:
        ```python
        client = StubHttpClient('{"ok": true}', headers={"content-type": "application/json"})
        outcome = await pipe(add_headers(defaults), client)(request)
        assert client.last_request.headers["x-client-name"] == ("my-sdk",)
        ```
    """

    def __init__(
        self,
        body: UnstructuredData | None = None,
        *,
        status_code: int = 200,
        headers: Mapping[str, HeaderValues] | None = None,
        error: SdkError | None = None,
        respond: Callable[[HttpRequest[Any]], Either[HttpResult[Any, UnstructuredData]]] | None = None,
    ) -> None:
        self.body = body
        self.status_code = status_code
        self.headers = Headers.of(headers)
        self.error = error
        self.respond = respond
        self.requests: list[HttpRequest[Any]] = []

    @property
    def last_request(self) -> HttpRequest[Any] | None:
        return self.requests[-1] if self.requests else None

    async def __call__(self, request: HttpRequest[Any]) -> Either[HttpResult[Any, UnstructuredData]]:
        self.requests.append(request)
        if self.respond is not None:
            return self.respond(request)
        if self.error is not None:
            return Failure(self.error)
        return Success(HttpResult(request=request, status_code=self.status_code, headers=self.headers, body=self.body))
