"""api-sdk-creator - Composable request pipelines for Python API client SDKs.

An SDK request is a pipeline of small fallible stages, each returning either a
value or an `SdkError`:
- Header stages add default or configured headers
- Marshalling stages encode request bodies and decode response bodies
- Transport stages send the request (httpx out of the box)
- `pipe` chains stages left to right, stopping at the first error

Example:
    ```python
    from api_sdk_creator import (
        HttpRequest,
        HttpRequestMethod,
        constant_headers,
        create_headers,
        create_pipeline,
        json_unmarshaller,
        pipe,
        pydantic_marshaller,
        pydantic_unmarshaller,
    )
    from api_sdk_creator.transport import httpx_client

    prefix = create_pipeline(
        httpx_client(),
        headers=create_headers(constant_headers({"x-client-name": "my-sdk"})),
        marshaller=pydantic_marshaller(),
    )
    check_ip = pipe(prefix, json_unmarshaller(pydantic_unmarshaller()(IpData)))

    outcome = await check_ip(HttpRequest(HttpRequestMethod.GET, "https://ifconfig.co/json"))
    ```
"""

from api_sdk_creator.capabilities import GenericTypeUnmarshaller, HeaderProvider, HttpClient, Marshaller, Unmarshaller
from api_sdk_creator.client import BaseApiClient, create_pipeline
from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.handler import check_status
from api_sdk_creator.errors.models import ErrorKind, SdkError
from api_sdk_creator.http.headers import add_headers, config_header, constant_headers, create_headers
from api_sdk_creator.http.types import (
    Headers,
    HttpRequest,
    HttpRequestMethod,
    HttpRequestUrl,
    HttpResult,
    LiteralUrl,
    TemplateUrl,
    UnstructuredData,
)
from api_sdk_creator.marshalling import (
    extract_http_body,
    json_marshaller,
    json_unmarshaller,
    marshal_body,
    pydantic_marshaller,
    pydantic_unmarshaller,
    unmarshal_body,
)
from api_sdk_creator.pipe import pipe
from api_sdk_creator.transport.base import transport_stage

__version__ = "0.1.0"

__all__ = [
    "BaseApiClient",
    "Either",
    "ErrorKind",
    "Failure",
    "GenericTypeUnmarshaller",
    "HeaderProvider",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpRequestMethod",
    "HttpRequestUrl",
    "HttpResult",
    "LiteralUrl",
    "Marshaller",
    "SdkError",
    "Success",
    "TemplateUrl",
    "Unmarshaller",
    "UnstructuredData",
    "__version__",
    "add_headers",
    "check_status",
    "config_header",
    "constant_headers",
    "create_headers",
    "create_pipeline",
    "extract_http_body",
    "json_marshaller",
    "json_unmarshaller",
    "marshal_body",
    "pipe",
    "pydantic_marshaller",
    "pydantic_unmarshaller",
    "transport_stage",
    "unmarshal_body",
]
