"""Pipeline assembly for SDK authors.

An SDK builds its pipeline in two phases. The type-agnostic prefix (headers,
request marshalling, transport) is composed once, when the SDK is configured.
Each operation then composes that prefix with an unmarshalling stage for its
own response type:

```python
pipeline = create_pipeline(
    httpx_client(),
    headers=create_headers(constant_headers({"x-client-name": "my-sdk"})),
    marshaller=pydantic_marshaller(),
)


class IpClient(BaseApiClient):
    async def check_ip(self) -> Either[IpData]:
        return await self.send(HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json"), IpData)


client = IpClient(pipeline, pydantic_unmarshaller())
```
"""

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from api_sdk_creator.capabilities import GenericTypeUnmarshaller, HeaderProvider, HttpClient, Marshaller, Unmarshaller
from api_sdk_creator.either import Either
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.headers import add_headers
from api_sdk_creator.http.types import Headers, HttpRequest, HttpResult
from api_sdk_creator.marshalling.stages import JSON_MIME_TYPE, extract_http_body, json_unmarshaller, marshal_body
from api_sdk_creator.pipe import pipe

logger = logging.getLogger(__name__)

T = TypeVar("T")

Stage = Callable[[Any], Any]


def create_pipeline(
    client: HttpClient,
    *,
    headers: Either[Headers] | HeaderProvider | None = None,
    marshaller: Marshaller | None = None,
    content_type: str | None = JSON_MIME_TYPE,
    override_headers: bool = False,
    result_handlers: Sequence[Stage] = (),
) -> Callable[[HttpRequest[Any]], Any]:
    """Compose the type-agnostic part of a pipeline.

    Stages run in this order: add headers, marshal the request body, send,
    then any `result_handlers` (for example `check_status()`).

    Args:
        client: Transport stage.
        headers: Headers added to every request, precomputed or as a provider.
        marshaller: Request body marshaller. Without one, request bodies must
            already be unstructured data.
        content_type: Content type set on requests whose body is marshalled.
        override_headers: Whether `headers` replace values already on the
            request instead of being appended.
        result_handlers: Stages applied to the unstructured result.

    Returns:
        A stage mapping a request to a result with an unstructured body.
    """
    stages: list[Stage] = []
    if headers is not None:
        stages.append(add_headers(headers, override=override_headers))
    if marshaller is not None:
        stages.append(marshal_body(marshaller, content_type))
    stages.append(client)
    stages.extend(result_handlers)
    return pipe(*stages)


class BaseApiClient:
    """Base class for SDK clients built on a pipeline.

    Holds the type-agnostic pipeline and resolves one typed pipeline per
    response type on first use. Typed pipelines are immutable, so a client can
    serve any number of concurrent operations.

    Args:
        pipeline: Result of `create_pipeline`.
        unmarshaller: Resolves an unmarshaller for each response type.
        body_stage: Builds the unmarshalling stage from an unmarshaller.
            Defaults to `json_unmarshaller`.
    """

    def __init__(
        self,
        pipeline: Callable[[HttpRequest[Any]], Any],
        unmarshaller: GenericTypeUnmarshaller,
        body_stage: Callable[[Unmarshaller[Any]], Stage] = json_unmarshaller,
    ) -> None:
        self._pipeline = pipeline
        self._unmarshaller = unmarshaller
        self._body_stage = body_stage
        self._typed_pipelines: dict[Any, Stage] = {}

    def pipeline_for(self, response_type: type[T]) -> Callable[[HttpRequest[Any]], Any]:
        """Return the full pipeline decoding responses into `response_type`."""
        typed = self._typed_pipelines.get(response_type)
        if typed is None:
            logger.debug(f"Composing pipeline for {getattr(response_type, '__name__', response_type)}")
            typed = pipe(self._pipeline, self._body_stage(self._unmarshaller(response_type)))
            self._typed_pipelines[response_type] = typed
        return typed

    async def execute(self, request: HttpRequest[Any], response_type: type[T]) -> Either[HttpResult[Any, T]]:
        """Send `request` and return the full result with its decoded body."""
        outcome = self.pipeline_for(response_type)(request)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return outcome

    async def send(self, request: HttpRequest[Any], response_type: type[T]) -> Either[T]:
        """Send `request` and return only its decoded body.

        A response without a body is an illegal state error, since the
        operation promised a `response_type` value.
        """
        outcome = await self.execute(request, response_type)
        name = getattr(response_type, "__name__", str(response_type))
        return outcome.map(extract_http_body).left_if_none(
            lambda: SdkError(ErrorKind.ILLEGAL_STATE, f"Didn't get any data for {name}")
        )
