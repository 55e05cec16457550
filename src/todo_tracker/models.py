"""Define the account and task records plus the read-only task view handed to callers."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict


def now_ts() -> int:
    """Current time as whole epoch seconds."""
    return int(time.time())


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    # bool is an int subclass; keep the two apart.
    if kind is int and isinstance(value, bool):
        raise TypeError(f"field '{key}' must be int, got bool")
    if not isinstance(value, kind):
        raise TypeError(f"field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class Account:
    username: str
    password: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        return cls(
            username=_require(data, "username", str),
            password=_require(data, "password", str),
        )


@dataclass
class Task:
    """A task owned by the account that created it.

    ``owner`` is a plain username, not a reference to a live :class:`Account`.
    """

    id: int
    title: str
    owner: str
    description: str = ""
    completed: bool = False
    created_at: int = field(default_factory=now_ts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "created_at": self.created_at,
            "owner": self.owner,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        task_id = _require(data, "id", int)
        if task_id < 0:
            raise ValueError(f"task id must be unsigned, got {task_id}")
        return cls(
            id=task_id,
            title=_require(data, "title", str),
            description=_require(data, "description", str),
            completed=_require(data, "completed", bool),
            created_at=_require(data, "created_at", int),
            owner=_require(data, "owner", str),
        )


class TaskView(BaseModel):
    """Immutable copy of a task handed across the presentation boundary."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str
    completed: bool
    created_at: int
    owner: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskView":
        return cls(**task.to_dict())

    @property
    def created(self) -> datetime:
        return datetime.fromtimestamp(self.created_at, tz=timezone.utc)

    @property
    def status_label(self) -> str:
        return "Completed" if self.completed else "Pending"
