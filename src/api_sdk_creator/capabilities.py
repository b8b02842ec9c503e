"""Capability contracts that pipeline stages are built from.

Each capability is a single-method protocol so any library can be adapted
behind it. Implementations must be stateless or internally synchronised if
they are shared between concurrent pipeline invocations.

| Capability | Shape | Failure |
|------------|-------|---------|
| `HttpClient` | request -> result with unstructured body | `network` |
| `HeaderProvider` | () -> headers | `configuration` |
| `Marshaller` | typed value -> unstructured data | `serialization` |
| `Unmarshaller` | unstructured data -> typed value | `deserialization` |
| `GenericTypeUnmarshaller` | target type -> `Unmarshaller` | |
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from api_sdk_creator.either import Either
from api_sdk_creator.http.types import HeaderValues, Headers, HttpRequest, HttpResult, UnstructuredData

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class HttpClient(Protocol):
    """Sends a request and returns the response with its body still undecoded.

    This is the only capability allowed to perform I/O. Cancelling the
    awaiting task must abort the underlying network call.
    """

    async def __call__(self, request: HttpRequest[Any]) -> Either[HttpResult[Any, UnstructuredData]]: ...


class HeaderProvider(Protocol):
    """Produces headers to add to a request, as `Headers` or a name to value mapping."""

    def __call__(self) -> Either[Headers | Mapping[str, HeaderValues]]: ...


class Marshaller(Protocol):
    """Encodes a typed value into wire-format data."""

    def __call__(self, value: Any) -> Either[UnstructuredData]: ...


class Unmarshaller(Protocol[T_co]):
    """Decodes wire-format data into one target type."""

    def __call__(self, data: UnstructuredData) -> Either[T_co]: ...


class GenericTypeUnmarshaller(Protocol):
    """Resolves an `Unmarshaller` for a target type.

    Called once per target type; the returned unmarshaller is reused for
    every response of that type.
    """

    def __call__(self, target_type: type[T]) -> Unmarshaller[T]: ...
