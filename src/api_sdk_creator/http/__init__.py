"""HTTP value types shared by every stage.

Header providers and the header stage live in `api_sdk_creator.http.headers`.
"""

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

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpRequestMethod",
    "HttpRequestUrl",
    "HttpResult",
    "LiteralUrl",
    "TemplateUrl",
    "UnstructuredData",
]
