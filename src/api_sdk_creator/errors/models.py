"""Error value models shared by every pipeline stage.

`SdkError` is the single error currency of a pipeline. Stages never raise for
an expected failure; they return a `Failure` carrying one of these.

`ProblemDetail` parses RFC 7807 problem details out of a response body so the
status check stage can build a readable message.
"""

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api_sdk_creator.errors.exceptions import SdkException
    from api_sdk_creator.http.types import HttpResult


class ErrorKind(StrEnum):
    """The kind of failure an `SdkError` describes."""

    CONFIGURATION = "configuration"
    SERIALIZATION = "serialization"
    DESERIALIZATION = "deserialization"
    NETWORK = "network"
    ILLEGAL_STATE = "illegal_state"
    HTTP_STATUS = "http_status"


@dataclass(frozen=True)
class SdkError:
    """A failure produced by a pipeline stage.

    Attributes:
        kind: What category of failure occurred.
        message: Human-readable explanation.
        cause: The underlying exception, if the failure was caused by one.
    """

    kind: ErrorKind
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    def to_exception(self) -> "SdkException":
        """Convert this error into an exception the caller can raise.

        This is never done by the pipeline itself. It is the explicit final
        step for callers that want language-level failures.
        """
        from api_sdk_creator.errors.exceptions import exception_for

        return exception_for(self)


class HttpStatusCause(Exception):
    """Cause attached to an `http_status` SdkError.

    Attributes:
        status_code: HTTP status code of the failed result.
        problem_detail: Parsed RFC 7807 body, if the server sent one.
    """

    def __init__(self, status_code: int, problem_detail: "ProblemDetail | None" = None):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.problem_detail = problem_detail


@dataclass(frozen=True)
class ProblemDetail:
    """RFC 7807 Problem Details object.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str | None = None  # URI reference identifying the problem type
    title: str | None = None  # Short, human-readable summary
    status: int | None = None  # HTTP status code
    detail: str | None = None  # Human-readable explanation
    instance: str | None = None  # URI reference identifying specific occurrence

    # Extension members (additional fields from API)
    extensions: dict[str, Any] | None = None

    STANDARD_FIELDS = frozenset({"type", "title", "status", "detail", "instance"})

    @classmethod
    def from_result(cls, result: "HttpResult") -> "ProblemDetail | None":
        """Parse RFC 7807 problem details from an HTTP result.

        Args:
            result: HTTP result whose body is still unstructured data.

        Returns:
            ProblemDetail object or None if the body is not RFC 7807 shaped
        """
        if not result.body or not isinstance(result.body, (str, bytes)):
            return None

        try:
            data = json.loads(result.body)
        except (ValueError, TypeError):
            return None

        if not isinstance(data, dict):
            return None

        # Without the problem+json content type, require at least one standard field
        content_type = result.headers.first("content-type") or ""
        if "application/problem+json" not in content_type and not any(
            field in data for field in cls.STANDARD_FIELDS
        ):
            return None

        extensions = {k: v for k, v in data.items() if k not in cls.STANDARD_FIELDS}

        return cls(
            type=data.get("type"),
            title=data.get("title"),
            status=data.get("status"),
            detail=data.get("detail"),
            instance=data.get("instance"),
            extensions=extensions if extensions else None,
        )

    def to_message(self) -> str:
        """Convert problem details to an error message."""
        lines = []

        if self.title:
            lines.append(self.title)
        elif self.detail:
            lines.append(self.detail)

        if self.title and self.detail and self.title != self.detail:
            lines.append(self.detail)

        if self.type:
            lines.append(f"Problem Type: {self.type}")

        if self.instance:
            lines.append(f"Instance: {self.instance}")

        if self.extensions:
            lines.append("Extension fields:")
            for key, value in self.extensions.items():
                lines.append(f"  - {key}: {value}")

        return "\n".join(lines) if lines else "Unknown API error"
