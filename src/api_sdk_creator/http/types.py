"""Immutable HTTP value types that flow through a pipeline.

Requests and results are frozen. A stage that needs to change a header or a
body produces a new value with `with_headers` / `with_body`; nothing is ever
mutated in place, which lets a single request be sent through many pipelines.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, Generic, TypeAlias, TypeVar
from urllib.parse import quote

from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError

ReqBody = TypeVar("ReqBody")
ResBody = TypeVar("ResBody")

UnstructuredData: TypeAlias = str | bytes
"""Wire-format payload that has not been decoded into an application type."""

HeaderValues: TypeAlias = str | Iterable[str]


class HttpRequestMethod(StrEnum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


@dataclass(frozen=True)
class LiteralUrl:
    """A URL used exactly as given."""

    value: str

    def resolve(self) -> Either[str]:
        return Success(self.value)


@dataclass(frozen=True)
class TemplateUrl:
    """A URL template with `{name}` placeholders filled from path parameters.

    Parameter values are percent-encoded, so `{"id": "a/b"}` expands to
    `a%2Fb`.

    Example:
        ```python
        url = TemplateUrl("https://api.example.com/users/{id}", {"id": 42})
        url.resolve()  # Success("https://api.example.com/users/42")
        ```
    """

    template: str
    path_params: Mapping[str, Any] = field(default_factory=dict)

    _PLACEHOLDER = re.compile(r"\{([^{}]+)\}")

    def resolve(self) -> Either[str]:
        missing = [name for name in self._PLACEHOLDER.findall(self.template) if name not in self.path_params]
        if missing:
            return Failure(
                SdkError(
                    ErrorKind.ILLEGAL_STATE,
                    f"Missing path parameters {missing} for URL template '{self.template}'",
                )
            )

        return Success(
            self._PLACEHOLDER.sub(lambda match: quote(str(self.path_params[match.group(1)]), safe=""), self.template)
        )


HttpRequestUrl: TypeAlias = LiteralUrl | TemplateUrl


class Headers(Mapping[str, tuple[str, ...]]):
    """Ordered, immutable, multi-valued HTTP headers.

    Names are case-insensitive and stored lower-cased. Each name maps to a
    tuple of its values in the order they were added.

    Example:
        ```python
        headers = Headers.of({"Accept": "application/json", "x-tag": ["a", "b"]})
        headers["accept"]  # ("application/json",)
        headers.merge(Headers.of({"x-tag": "c"}))["x-tag"]  # ("a", "b", "c")
        headers.merge(Headers.of({"x-tag": "c"}), override=True)["x-tag"]  # ("c",)
        ```
    """

    __slots__ = ("_values",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()):
        values: dict[str, tuple[str, ...]] = {}
        for name, value in pairs:
            key = name.lower()
            values[key] = values.get(key, ()) + (str(value),)
        self._values = values

    @classmethod
    def of(cls, headers: "Headers | Mapping[str, HeaderValues] | Iterable[tuple[str, str]] | None" = None) -> "Headers":
        """Build headers from a mapping of single or multiple values, or from pairs."""
        if headers is None:
            return cls()
        if isinstance(headers, Headers):
            return headers
        if isinstance(headers, Mapping):
            pairs = []
            for name, value in headers.items():
                if isinstance(value, str):
                    pairs.append((name, value))
                else:
                    pairs.extend((name, item) for item in value)
            return cls(pairs)
        return cls(headers)

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._values[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"

    def first(self, name: str) -> str | None:
        """Return the first value for `name`, or None if absent."""
        values = self._values.get(name.lower())
        return values[0] if values else None

    def pairs(self) -> list[tuple[str, str]]:
        """Flatten into (name, value) pairs, one per value."""
        return [(name, value) for name, values in self._values.items() for value in values]

    def merge(
        self, other: "Headers | Mapping[str, HeaderValues] | Iterable[tuple[str, str]]", *, override: bool = False
    ) -> "Headers":
        """Return new headers with `other` merged in.

        Existing names keep their position. With `override=False` the values of
        `other` are appended to existing values; with `override=True` they
        replace them. A plain mapping or pair list is normalised first.
        """
        merged = dict(self._values)
        for name, values in Headers.of(other).items():
            if override or name not in merged:
                merged[name] = values
            else:
                merged[name] = merged[name] + values

        headers = Headers()
        headers._values = merged
        return headers


@dataclass(frozen=True)
class HttpRequest(Generic[ReqBody]):
    """An outbound HTTP request.

    `method` and `url` accept plain strings for convenience; they are
    converted to `HttpRequestMethod` and `LiteralUrl`. `headers` and `query`
    accept any of the forms `Headers.of` understands and are normalised on
    construction.
    """

    method: HttpRequestMethod
    url: HttpRequestUrl
    headers: Headers = field(default_factory=Headers)
    body: ReqBody | None = None
    query: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpRequestMethod):
            object.__setattr__(self, "method", HttpRequestMethod(str(self.method).upper()))
        if isinstance(self.url, str):
            object.__setattr__(self, "url", LiteralUrl(self.url))
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers.of(self.headers))
        if isinstance(self.query, Mapping):
            object.__setattr__(self, "query", tuple((name, str(value)) for name, value in self.query.items()))
        elif not isinstance(self.query, tuple):
            object.__setattr__(self, "query", tuple(self.query))

    def with_headers(self, headers: Headers) -> "HttpRequest[ReqBody]":
        return replace(self, headers=headers)

    def with_body(self, body: Any) -> "HttpRequest[Any]":
        return replace(self, body=body)

    def with_url(self, url: HttpRequestUrl) -> "HttpRequest[ReqBody]":
        return replace(self, url=url)


@dataclass(frozen=True)
class HttpResult(Generic[ReqBody, ResBody]):
    """The outcome of one request/response cycle.

    Attributes:
        request: The request exactly as it was handed to the transport.
        status_code: HTTP status code.
        headers: Response headers.
        body: Response body; unstructured data until an unmarshalling stage
            decodes it.
        reason_phrase: Status reason phrase, if the transport provides one.
    """

    request: HttpRequest[ReqBody]
    status_code: int
    headers: Headers = field(default_factory=Headers)
    body: ResBody | None = None
    reason_phrase: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers.of(self.headers))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def with_body(self, body: Any) -> "HttpResult[ReqBody, Any]":
        return replace(self, body=body)
