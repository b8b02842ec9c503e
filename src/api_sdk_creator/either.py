"""Two-variant outcome type returned by every pipeline stage.

A stage either succeeds with a value or fails with an `SdkError`:

```python
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors import ErrorKind, SdkError

def parse_port(text: str) -> Either[int]:
    if not text.isdigit():
        return Failure(SdkError(ErrorKind.CONFIGURATION, f"Invalid port: {text}"))
    return Success(int(text))

parse_port("8080").map(lambda port: port + 1)  # Success(8081)
parse_port("http").map(lambda port: port + 1)  # Failure(...), the lambda never runs
```
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeAlias, TypeVar

from api_sdk_creator.errors.models import SdkError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful outcome holding a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Either[U]":
        return Success(fn(self.value))

    def flat_map(self, fn: "Callable[[T], Either[U]]") -> "Either[U]":
        return fn(self.value)

    def map_error(self, fn: Callable[[SdkError], SdkError]) -> "Either[T]":
        return self

    def fold(self, on_failure: Callable[[SdkError], U], on_success: Callable[[T], U]) -> U:
        return on_success(self.value)

    def left_if_none(self, error_factory: Callable[[], SdkError]) -> "Either[T]":
        """Turn a successful `None` into a failure built by `error_factory`.

        The factory is only called when needed.
        """
        if self.value is None:
            return Failure(error_factory())
        return self

    def get_or_none(self) -> T:
        return self.value

    def get_or_raise(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed outcome holding an SdkError."""

    error: SdkError

    @property
    def is_success(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def flat_map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def map_error(self, fn: Callable[[SdkError], SdkError]) -> "Failure":
        return Failure(fn(self.error))

    def fold(self, on_failure: Callable[[SdkError], U], on_success: Callable[[Any], U]) -> U:
        return on_failure(self.error)

    def left_if_none(self, error_factory: Callable[[], SdkError]) -> "Failure":
        return self

    def get_or_none(self) -> None:
        return None

    def get_or_raise(self) -> NoReturn:
        raise self.error.to_exception()


Either: TypeAlias = Success[T] | Failure
