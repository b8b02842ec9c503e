"""JSON marshalling backed by pydantic.

Works for anything pydantic can build a schema for: `BaseModel` subclasses,
dataclasses, `TypedDict`s and plain containers.

Example:
    ```python
    marshaller = pydantic_marshaller()
    unmarshaller = pydantic_unmarshaller()

    @dataclass
    class IpData:
        ip: str
        country: str

    unmarshaller(IpData)('{"ip": "1.2.3.4", "country": "AU"}')
    # Success(IpData(ip="1.2.3.4", country="AU"))
    ```
"""

import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from api_sdk_creator.capabilities import GenericTypeUnmarshaller, Marshaller, Unmarshaller
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.types import UnstructuredData

logger = logging.getLogger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter_for(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


def pydantic_marshaller(*, by_alias: bool = True, exclude_none: bool = False) -> Marshaller:
    """Marshaller encoding values to a JSON string.

    Args:
        by_alias: Use field aliases as JSON keys.
        exclude_none: Leave out fields whose value is None.
    """

    def marshal(value: Any) -> Either[UnstructuredData]:
        try:
            data = _adapter_for(type(value)).dump_json(value, by_alias=by_alias, exclude_none=exclude_none)
        except (TypeError, ValueError) as e:
            return Failure(SdkError(ErrorKind.SERIALIZATION, f"Cannot marshal {type(value).__name__}: {e}", e))
        return Success(data.decode("utf-8"))

    return marshal


def pydantic_unmarshaller() -> GenericTypeUnmarshaller:
    """Unmarshaller factory decoding JSON into a target type.

    The pydantic schema is built once when an unmarshaller is requested for a
    type; the returned unmarshaller only validates.
    """

    def for_type(target_type: type[T]) -> Unmarshaller[T]:
        adapter = _adapter_for(target_type)
        name = getattr(target_type, "__name__", str(target_type))

        def unmarshal(data: UnstructuredData) -> Either[T]:
            try:
                return Success(adapter.validate_json(data))
            except ValidationError as e:
                logger.debug(f"Response body does not match {name}: {e.error_count()} error(s)")
                return Failure(SdkError(ErrorKind.DESERIALIZATION, f"Cannot unmarshal {name}: {e}", e))

        return unmarshal

    return for_type
