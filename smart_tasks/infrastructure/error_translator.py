"""
Translation of raw transport and storage failures into TaskDataError.

Sources call these functions at their boundary so that nothing outside
the ErrorKind taxonomy ever reaches the repository.
"""

import asyncio
import json
from typing import Optional

import httpx
from pydantic import ValidationError
from redis import exceptions as redis_exceptions

from ..domain.exceptions import ErrorKind, TaskDataError


def classify_status_code(status_code: int) -> ErrorKind:
    """
    Map an HTTP error status to an error kind.

    Args:
        status_code: HTTP response status code

    Returns:
        UNAUTHORIZED for 401, NOT_FOUND for 404, CONFLICT for the rest of
        4xx, SERVER_FAULT for 5xx, UNKNOWN otherwise
    """
    if status_code == 401:
        return ErrorKind.UNAUTHORIZED
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if 400 <= status_code <= 499:
        return ErrorKind.CONFLICT
    if 500 <= status_code <= 599:
        return ErrorKind.SERVER_FAULT
    return ErrorKind.UNKNOWN


def _message(error: BaseException) -> str:
    return str(error) or type(error).__name__


def _details(error: BaseException, operation: Optional[str]) -> dict:
    details = {"error_type": type(error).__name__}
    if operation:
        details["operation"] = operation
    return details


def translate_transport_error(
    error: BaseException, operation: Optional[str] = None
) -> TaskDataError:
    """
    Classify a failure raised while talking to the remote API.

    Args:
        error: The raw exception
        operation: Source operation name, recorded in details

    Returns:
        Classified error
    """
    if isinstance(error, TaskDataError):
        return error

    if isinstance(error, asyncio.CancelledError):
        return TaskDataError(
            ErrorKind.CANCELLED, "Request cancelled", details=_details(error, operation)
        )

    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        return TaskDataError(
            classify_status_code(status_code),
            f"Server responded with {status_code}",
            status_code=status_code,
            details={
                **_details(error, operation),
                "url": str(error.request.url),
                "response_body": error.response.text[:200],
            },
        )

    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return TaskDataError(
            ErrorKind.TIMEOUT, _message(error), details=_details(error, operation)
        )

    if isinstance(error, (httpx.NetworkError, ConnectionError, OSError)):
        return TaskDataError(
            ErrorKind.UNREACHABLE, _message(error), details=_details(error, operation)
        )

    return TaskDataError(
        ErrorKind.UNKNOWN, _message(error), details=_details(error, operation)
    )


def translate_storage_error(
    error: BaseException, operation: Optional[str] = None
) -> TaskDataError:
    """
    Classify a failure raised by the local snapshot storage.

    Args:
        error: The raw exception
        operation: Cache operation name, recorded in details

    Returns:
        Classified error
    """
    if isinstance(error, TaskDataError):
        return error

    if isinstance(error, asyncio.CancelledError):
        return TaskDataError(
            ErrorKind.CANCELLED, "Cache access cancelled", details=_details(error, operation)
        )

    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError, ValidationError)):
        return TaskDataError(
            ErrorKind.CORRUPT,
            f"Cached snapshot cannot be decoded: {_message(error)}",
            details=_details(error, operation),
        )

    if isinstance(error, (redis_exceptions.TimeoutError, TimeoutError)):
        return TaskDataError(
            ErrorKind.TIMEOUT, _message(error), details=_details(error, operation)
        )

    if isinstance(error, (redis_exceptions.ConnectionError, ConnectionError)):
        return TaskDataError(
            ErrorKind.UNREACHABLE, _message(error), details=_details(error, operation)
        )

    return TaskDataError(
        ErrorKind.UNKNOWN, _message(error), details=_details(error, operation)
    )
