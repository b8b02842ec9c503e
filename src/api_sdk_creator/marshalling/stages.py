"""Stages converting bodies between typed values and wire-format data.

The marshalling stage sits before the transport and encodes a request body.
The unmarshalling stage sits after it and decodes the response body into a
type known only at the call site, which is why it is composed separately:

```python
prefix = pipe(add_headers(defaults), json_marshaller(marshaller), client)
get_user = pipe(prefix, json_unmarshaller(unmarshaller(User)))
```
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from api_sdk_creator.capabilities import Marshaller, Unmarshaller
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.types import Headers, HttpRequest, HttpResult, UnstructuredData

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_MIME_TYPE = "application/json; charset=utf-8"


def is_json_content_type(content_type: str) -> bool:
    """Whether a content type is JSON (`application/json` or any `+json` suffix)."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def marshal_body(
    marshaller: Marshaller, content_type: str | None = None
) -> Callable[[HttpRequest[Any]], Either[HttpRequest[UnstructuredData]]]:
    """Stage encoding the request body with `marshaller`.

    A request without a body is returned unchanged. When `content_type` is
    given it replaces any content-type header already on the request.

    Args:
        marshaller: Encodes the typed body.
        content_type: Content type of the encoded data.
    """
    content_type_headers = Headers([("content-type", content_type)]) if content_type else None

    def marshal(request: HttpRequest[Any]) -> Either[HttpRequest[UnstructuredData]]:
        if request.body is None:
            return Success(request)

        outcome = marshaller(request.body)
        if isinstance(outcome, Failure):
            logger.debug(f"Could not marshal {type(request.body).__name__} body: {outcome.error}")
            return outcome

        marshalled = request.with_body(outcome.value)
        if content_type_headers is not None:
            marshalled = marshalled.with_headers(request.headers.merge(content_type_headers, override=True))
        return Success(marshalled)

    return marshal


def json_marshaller(marshaller: Marshaller) -> Callable[[HttpRequest[Any]], Either[HttpRequest[UnstructuredData]]]:
    """Marshalling stage producing JSON."""
    return marshal_body(marshaller, JSON_MIME_TYPE)


def unmarshal_body(
    unmarshaller: Unmarshaller[T],
    accepts: Callable[[str], bool] | None = None,
    *,
    required: bool = False,
) -> Callable[[HttpResult[Any, UnstructuredData]], Either[HttpResult[Any, T]]]:
    """Stage decoding the result body with `unmarshaller`.

    A result without a body (None or empty) is forwarded with a None body
    unless `required` is set, in which case it is an illegal state error.

    Args:
        unmarshaller: Decodes the body into the target type.
        accepts: Predicate on the response content type. A result declaring a
            content type it rejects is a deserialization error. Results
            without a content-type header are always decoded.
        required: Whether a missing body violates the operation's contract.
    """

    def unmarshal(result: HttpResult[Any, UnstructuredData]) -> Either[HttpResult[Any, T]]:
        if not result.body:
            if required:
                return Failure(
                    SdkError(
                        ErrorKind.ILLEGAL_STATE,
                        f"Expected a response body for {result.request.method} request, got none",
                    )
                )
            return Success(result.with_body(None))

        content_type = result.headers.first("content-type")
        if accepts is not None and content_type is not None and not accepts(content_type):
            return Failure(SdkError(ErrorKind.DESERIALIZATION, f"Unsupported media type: {content_type}"))

        return unmarshaller(result.body).map(result.with_body)

    return unmarshal


def json_unmarshaller(
    unmarshaller: Unmarshaller[T], *, required: bool = False
) -> Callable[[HttpResult[Any, UnstructuredData]], Either[HttpResult[Any, T]]]:
    """Unmarshalling stage accepting JSON responses."""
    return unmarshal_body(unmarshaller, is_json_content_type, required=required)


def extract_http_body(result: HttpResult[Any, T]) -> T | None:
    """Return the body of a result, for use with `Either.map`."""
    return result.body
