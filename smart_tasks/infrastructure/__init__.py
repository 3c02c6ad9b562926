"""Infrastructure: HTTP access to the task API and error translation."""

from .error_translator import (
    classify_status_code,
    translate_storage_error,
    translate_transport_error,
)
from .http_client import build_http_client
from .remote_source import TaskRemoteSource
from .task_payload import TaskPayload

__all__ = [
    "TaskPayload",
    "TaskRemoteSource",
    "build_http_client",
    "classify_status_code",
    "translate_storage_error",
    "translate_transport_error",
]
