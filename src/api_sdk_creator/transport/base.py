"""Wrap a raw send function behind the fallible stage contract."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from api_sdk_creator.capabilities import HttpClient
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.types import HttpRequest, HttpResult, LiteralUrl, UnstructuredData

logger = logging.getLogger(__name__)

Send = Callable[[HttpRequest[Any]], Awaitable[HttpResult[Any, UnstructuredData]]]


def _describe_url(request: HttpRequest[Any]) -> str:
    if isinstance(request.url, LiteralUrl):
        return request.url.value
    return request.url.template


def transport_stage(send: Send, *, name: str = "transport") -> HttpClient:
    """Turn an async `send` that raises on failure into an `HttpClient` stage.

    Any exception raised by `send` becomes an SdkError of kind `network`.
    Cancellation is not an exception here and propagates to the caller,
    aborting the call in flight.

    Args:
        send: Performs the request and returns its result.
        name: Label used in error messages and logs.

    Example:
        ```python
        async def send(request: HttpRequest) -> HttpResult:
            ...

        client = transport_stage(send, name="my-transport")
        outcome = await client(request)
        ```
    """

    async def transport(request: HttpRequest[Any]) -> Either[HttpResult[Any, UnstructuredData]]:
        try:
            result = await send(request)
        except Exception as e:
            logger.warning(f"Request {request.method} {_describe_url(request)} failed with {e!r}")
            return Failure(
                SdkError(
                    ErrorKind.NETWORK,
                    f"{name} could not complete {request.method} {_describe_url(request)}: {e}",
                    e,
                )
            )

        logger.debug(f"Request {request.method} {_describe_url(request)} returned {result.status_code}")
        return Success(result)

    transport.__qualname__ = name
    return transport
