"""Body marshalling and unmarshalling stages, plus a pydantic JSON adapter."""

from api_sdk_creator.marshalling.pydantic_json import pydantic_marshaller, pydantic_unmarshaller
from api_sdk_creator.marshalling.stages import (
    JSON_MIME_TYPE,
    extract_http_body,
    is_json_content_type,
    json_marshaller,
    json_unmarshaller,
    marshal_body,
    unmarshal_body,
)

__all__ = [
    "JSON_MIME_TYPE",
    "extract_http_body",
    "is_json_content_type",
    "json_marshaller",
    "json_unmarshaller",
    "marshal_body",
    "pydantic_marshaller",
    "pydantic_unmarshaller",
    "unmarshal_body",
]
