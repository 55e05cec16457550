"""Define the error taxonomy raised by the session manager, task store, and gateway."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TodoError(Exception):
    """Base class for every error raised by the tracker core."""

    default_message = "Todo tracker error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AccountError(TodoError):
    """Registration or login was rejected."""


class DuplicateAccount(AccountError):
    default_message = "Username already exists"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__()


class InvalidCredentials(AccountError):
    # Same message for unknown user and wrong password.
    default_message = "Invalid username or password"


class TaskError(TodoError):
    """A task operation was rejected."""


class NotAuthenticated(TaskError):
    default_message = "Not logged in"


class TaskNotFound(TaskError):
    default_message = "Task not found"

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__()


class NotAuthorized(TaskError):
    default_message = "Not authorized to modify this task"

    def __init__(self, task_id: int, action: str = "modify") -> None:
        self.task_id = task_id
        self.action = action
        super().__init__(f"Not authorized to {action} this task")


class StorageFailure(TodoError):
    """A snapshot could not be read, parsed, or written.

    The underlying exception is chained as ``__cause__``.
    """

    default_message = "Storage failure"

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(f"{path.name}: {message}" if path is not None else message)
