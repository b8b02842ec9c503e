"""Structured exceptions for presenting SDK errors to end users."""

from typing import TYPE_CHECKING

from api_sdk_creator.errors.models import ErrorKind, HttpStatusCause

if TYPE_CHECKING:
    from api_sdk_creator.errors.models import ProblemDetail, SdkError


class SdkException(Exception):
    """Base exception for SDK errors."""

    def __init__(self, message: str, error: "SdkError | None" = None):
        super().__init__(message)
        self.error = error


class ConfigurationError(SdkException):
    """Missing or invalid SDK configuration."""

    pass


class SerializationError(SdkException):
    """A request body could not be marshalled."""

    pass


class DeserializationError(SdkException):
    """A response body could not be unmarshalled."""

    pass


class NetworkError(SdkException):
    """The transport failed to complete the request."""

    pass


class IllegalStateError(SdkException):
    """A pipeline contract was violated."""

    pass


class APIError(SdkException):
    """The server answered with a non-success status."""

    def __init__(
        self,
        message: str,
        error: "SdkError | None" = None,
        status_code: int | None = None,
        problem_detail: "ProblemDetail | None" = None,
    ):
        super().__init__(message, error)
        self.status_code = status_code
        self.problem_detail = problem_detail


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    pass


class ServerError(APIError):
    """5xx server errors."""

    pass


_KIND_EXCEPTIONS: dict[ErrorKind, type[SdkException]] = {
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.SERIALIZATION: SerializationError,
    ErrorKind.DESERIALIZATION: DeserializationError,
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.ILLEGAL_STATE: IllegalStateError,
}

_STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def exception_for(error: "SdkError") -> SdkException:
    """Build the exception matching an SdkError.

    HTTP status errors carry an `HttpStatusCause` with the status code and any
    parsed problem detail, which selects the most specific APIError subclass.
    """
    if error.kind is ErrorKind.HTTP_STATUS:
        cause = error.cause if isinstance(error.cause, HttpStatusCause) else None
        status_code = cause.status_code if cause else None

        if status_code in _STATUS_EXCEPTIONS:
            exc_class = _STATUS_EXCEPTIONS[status_code]
        elif status_code is not None and 400 <= status_code < 500:
            exc_class = ClientError
        elif status_code is not None and 500 <= status_code < 600:
            exc_class = ServerError
        else:
            exc_class = APIError

        exception = exc_class(
            error.message,
            error,
            status_code=status_code,
            problem_detail=cause.problem_detail if cause else None,
        )
    else:
        exception = _KIND_EXCEPTIONS.get(error.kind, SdkException)(error.message, error)

    if error.cause is not None:
        exception.__cause__ = error.cause
    return exception
