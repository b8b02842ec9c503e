"""Header providers and the stage that adds their headers to requests.

Headers are usually computed once, when the pipeline is assembled, and the
same result is applied to every request:

```python
defaults = create_headers(
    constant_headers({"x-client-name": "my-sdk"}),
    config_header("x-api-key", env_var_name="MY_API_KEY"),
)
pipeline = pipe(add_headers(defaults), ...)
```

If `defaults` is a failure (for example the API key is missing) every request
through the pipeline fails with that configuration error. SDKs that prefer to
fail fast can inspect `defaults` before building anything else.

By default values accumulate: adding `x-a: 2` to a request already carrying
`x-a: 1` leaves both values. Pass `override=True` to `add_headers` to replace
existing values instead.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from api_sdk_creator.capabilities import HeaderProvider
from api_sdk_creator.config.credentials import CredentialResolver
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.types import HeaderValues, Headers, HttpRequest

logger = logging.getLogger(__name__)

# RFC 9110 token characters
_HEADER_NAME = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _validate(headers: Headers) -> Either[Headers]:
    for name, value in headers.pairs():
        if not _HEADER_NAME.match(name):
            return Failure(SdkError(ErrorKind.CONFIGURATION, f"Invalid header name: {name!r}"))
        if "\r" in value or "\n" in value:
            return Failure(SdkError(ErrorKind.CONFIGURATION, f"Invalid value for header '{name}'"))
    return Success(headers)


def _provided(outcome: Either[Any]) -> Either[Headers]:
    """Normalise and validate what a header source produced."""
    return outcome.flat_map(lambda headers: _validate(Headers.of(headers)))


def constant_headers(headers: Headers | Mapping[str, HeaderValues] | Iterable[tuple[str, str]]) -> HeaderProvider:
    """Provider that always returns the same headers."""
    outcome = _validate(Headers.of(headers))

    def provide() -> Either[Headers]:
        return outcome

    return provide


def config_header(
    name: str,
    *,
    value: str | None = None,
    env_var_name: str | None = None,
    default: str | None = None,
    template: str = "{value}",
    required: bool = True,
    resolver: CredentialResolver | None = None,
) -> HeaderProvider:
    """Provider for a single header whose value comes from configuration.

    The value is resolved with `CredentialResolver.resolve` every time the
    provider is called and substituted into `template`, so
    `template="Bearer {value}"` builds an authorization header.

    Args:
        name: Header name.
        value: Explicit value (highest priority).
        env_var_name: Environment variable holding the value.
        default: Fallback value.
        template: Format string with a `{value}` placeholder.
        required: If True a missing value is a configuration error; otherwise
            no header is produced.
        resolver: Resolver to use. A new one is created if not given.
    """
    resolver = resolver if resolver is not None else CredentialResolver()

    def to_headers(resolved: str | None) -> Either[Headers]:
        if resolved is None:
            return Success(Headers())
        return _validate(Headers([(name, template.format(value=resolved))]))

    def provide() -> Either[Headers]:
        return resolver.resolve(
            value=value,
            env_var_name=env_var_name,
            default=default,
            required=required,
        ).flat_map(to_headers)

    return provide


def create_headers(*providers: HeaderProvider) -> Either[Headers]:
    """Evaluate providers in order and merge their headers.

    Values for the same name accumulate. The first failing provider's error
    is returned.
    """
    headers = Headers()
    for provider in providers:
        outcome = _provided(provider())
        if isinstance(outcome, Failure):
            return outcome
        headers = headers.merge(outcome.value)
    return Success(headers)


def add_headers(
    headers: Either[Headers] | HeaderProvider,
    *,
    override: bool = False,
) -> Callable[[HttpRequest[Any]], Either[HttpRequest[Any]]]:
    """Stage that merges headers into each request.

    Args:
        headers: Precomputed headers (typically from `create_headers`), or a
            provider called for every request.
        override: If True, incoming values replace existing values for the
            same name; otherwise they are appended.

    Returns:
        A stage returning the request with headers merged in, or the header
        source's error.
    """

    def add(request: HttpRequest[Any]) -> Either[HttpRequest[Any]]:
        outcome = _provided(headers if isinstance(headers, (Success, Failure)) else headers())
        if isinstance(outcome, Failure):
            logger.debug(f"Header source failed: {outcome.error}")
            return outcome
        return Success(request.with_headers(request.headers.merge(outcome.value, override=override)))

    return add
