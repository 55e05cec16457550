"""Provide the public `todo_tracker` package exports."""

from __future__ import annotations

from .app import TodoApp
from .config import TrackerConfig, load_tracker_config
from .errors import (
    AccountError,
    DuplicateAccount,
    InvalidCredentials,
    NotAuthenticated,
    NotAuthorized,
    StorageFailure,
    TaskError,
    TaskNotFound,
    TodoError,
)
from .models import Account, Task, TaskView
from .persistence import PersistenceGateway
from .session import SessionManager
from .store import TaskStore

__all__ = [
    "TodoApp",
    "TrackerConfig",
    "load_tracker_config",
    "PersistenceGateway",
    "SessionManager",
    "TaskStore",
    "Account",
    "Task",
    "TaskView",
    "TodoError",
    "AccountError",
    "TaskError",
    "DuplicateAccount",
    "InvalidCredentials",
    "NotAuthenticated",
    "TaskNotFound",
    "NotAuthorized",
    "StorageFailure",
]
