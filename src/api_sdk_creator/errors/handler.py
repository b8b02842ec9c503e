"""Stage turning non-success HTTP results into SdkErrors."""

from collections.abc import Callable
from typing import Any

from api_sdk_creator.either import Either, Failure, Success
from api_sdk_creator.errors.models import ErrorKind, HttpStatusCause, ProblemDetail, SdkError
from api_sdk_creator.http.types import HttpResult, UnstructuredData


def status_error(result: HttpResult[Any, UnstructuredData]) -> SdkError:
    """Build the SdkError describing a non-success result.

    Parses RFC 7807 problem details if present, otherwise uses the status code
    and the start of the response text.
    """
    problem_detail = ProblemDetail.from_result(result)

    if problem_detail:
        message = problem_detail.to_message()
    else:
        body = result.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        response_text = (body or "")[:200]
        message = f"HTTP {result.status_code}: {response_text}" if response_text else f"HTTP {result.status_code}"

    return SdkError(ErrorKind.HTTP_STATUS, message, HttpStatusCause(result.status_code, problem_detail))


def check_status(
    is_acceptable: Callable[[int], bool] | None = None,
) -> Callable[[HttpResult[Any, UnstructuredData]], Either[HttpResult[Any, UnstructuredData]]]:
    """Stage failing results whose status code is not acceptable.

    Place it between the transport and the unmarshalling stage so the error
    body is still unstructured data.

    Args:
        is_acceptable: Predicate on the status code. Defaults to 2xx.
    """

    def check(result: HttpResult[Any, UnstructuredData]) -> Either[HttpResult[Any, UnstructuredData]]:
        acceptable = is_acceptable(result.status_code) if is_acceptable else result.is_success
        if acceptable:
            return Success(result)
        return Failure(status_error(result))

    return check
