# tasks/task_results.py

"""
Error taxonomy and the result type returned by TaskStore operations.

Store operations never raise across their boundary: expected failures
(validation, missing ids) and unexpected ones (InternalError) come back
inside a failed OperationResult. Callers check `success` before trusting
`data`, or call `unwrap()` to turn a failure back into an exception.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class TaskError(Exception):
    """Base class for every failure a task operation can report."""


class ValidationError(TaskError):
    def __init__(self, messages: str | Iterable[str]) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages: list[str] = list(messages)
        super().__init__("; ".join(self.messages))


class NotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")


class InternalError(TaskError):
    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Unexpected error while trying to {operation}: {cause}")


@dataclass(slots=True)
class OperationResult(Generic[T]):
    success: bool
    data: T | None = None
    error: TaskError | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> OperationResult[T]:
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: TaskError) -> OperationResult[T]:
        return cls(success=False, error=error)

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error is not None else None

    def unwrap(self) -> T:
        """Return data on success; raise the carried error otherwise."""
        if not self.success:
            if self.error is not None:
                raise self.error
            raise TaskError("operation failed without an error")
        return self.data  # type: ignore[return-value]
