"""Error values and their exception counterparts.

The status check stage lives in `api_sdk_creator.errors.handler`.
"""

from api_sdk_creator.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    DeserializationError,
    ForbiddenError,
    IllegalStateError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SdkException,
    SerializationError,
    ServerError,
    UnauthorizedError,
)
from api_sdk_creator.errors.models import ErrorKind, HttpStatusCause, ProblemDetail, SdkError

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "DeserializationError",
    "ErrorKind",
    "ForbiddenError",
    "HttpStatusCause",
    "IllegalStateError",
    "NetworkError",
    "NotFoundError",
    "ProblemDetail",
    "RateLimitError",
    "SdkError",
    "SdkException",
    "SerializationError",
    "ServerError",
    "UnauthorizedError",
]
