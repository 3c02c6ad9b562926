"""
Operation result value.

Repository and source operations return a Result instead of raising, so
fallback decisions are plain branches on the error kind.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import ErrorKind, TaskDataError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Either a success value or a classified failure.

    Build instances with Result.success() and Result.failure(); never both
    a value and an error.
    """

    value: Optional[T] = None
    error: Optional[TaskDataError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskDataError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind of a failure, None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """
        Return the success value.

        Raises:
            TaskDataError: The carried error, if this is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
