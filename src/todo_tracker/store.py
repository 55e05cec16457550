"""Task CRUD scoped to the active account.

Every operation first resolves the active account through the
:class:`SessionManager`; mutations then write the full task snapshot before
returning. ``TaskNotFound`` and ``NotAuthorized`` are kept distinct so callers
can tell a missing id from someone else's task.
"""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

from loguru import logger

from .constants import FIRST_TASK_ID, SAVE_FAILURE_ROLLBACK
from .errors import NotAuthorized, StorageFailure, TaskNotFound
from .models import Task, TaskView, now_ts
from .persistence import PersistenceGateway
from .session import SessionManager


def next_task_id(task_ids) -> int:
    """``1 + max(ids)``, or the first id for an empty set."""
    return max(task_ids, default=FIRST_TASK_ID - 1) + 1


class OwnedTasks:
    """Restartable view over the active account's tasks.

    Each iteration resolves the active account and reads the store's live
    state, in ascending id order. Iterating while logged out raises
    :class:`NotAuthenticated`.
    """

    def __init__(self, tasks: Mapping[int, Task], sessions: SessionManager) -> None:
        self._tasks = tasks
        self._sessions = sessions

    def __iter__(self) -> Iterator[TaskView]:
        owner = self._sessions.require_account()
        for task_id in sorted(self._tasks):
            task = self._tasks.get(task_id)
            # Deleted while the caller was between items.
            if task is not None and task.owner == owner:
                yield TaskView.from_task(task)

    def __len__(self) -> int:
        owner = self._sessions.require_account()
        return sum(1 for task in self._tasks.values() if task.owner == owner)

    def __bool__(self) -> bool:
        owner = self._sessions.require_account()
        return any(task.owner == owner for task in self._tasks.values())


class TaskStore:
    """Own the ``id -> Task`` mapping and the next-id counter."""

    def __init__(
        self,
        sessions: SessionManager,
        gateway: PersistenceGateway,
        *,
        on_save_failure: str = SAVE_FAILURE_ROLLBACK,
    ) -> None:
        self._sessions = sessions
        self._gateway = gateway
        self._on_save_failure = on_save_failure
        self._tasks: dict[int, Task] = {}
        self._next_id = FIRST_TASK_ID

    # -- internal helpers ---------------------------------------------------

    def _owned(self, task_id: int, action: str) -> Task:
        owner = self._sessions.require_account()
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        if task.owner != owner:
            logger.info("Denied {} of task {} to {} (owner {})", action, task_id, owner, task.owner)
            raise NotAuthorized(task_id, action)
        return task

    def _persist(self, undo: Callable[[], None]) -> None:
        try:
            self._gateway.save_tasks(self._tasks)
        except StorageFailure:
            if self._on_save_failure == SAVE_FAILURE_ROLLBACK:
                undo()
                logger.warning("Rolled back in-memory task change after failed save")
            raise

    # -- public API ---------------------------------------------------------

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def load(self, tasks: Mapping[int, Task]) -> None:
        self._tasks = dict(tasks)
        self._next_id = next_task_id(self._tasks)

    def snapshot(self) -> dict[int, TaskView]:
        """All tasks regardless of owner, for persistence checks and tests."""
        return {task_id: TaskView.from_task(task) for task_id, task in self._tasks.items()}

    def add(self, title: str, description: str) -> int:
        owner = self._sessions.require_account()
        task_id = self._next_id
        task = Task(id=task_id, title=title, description=description, owner=owner, created_at=now_ts())
        self._tasks[task_id] = task
        self._next_id += 1

        def undo() -> None:
            del self._tasks[task_id]
            self._next_id = task_id

        self._persist(undo)
        logger.info("Task added id={} owner={}", task_id, owner)
        return task_id

    def list(self) -> OwnedTasks:
        self._sessions.require_account()
        return OwnedTasks(self._tasks, self._sessions)

    def get(self, task_id: int) -> TaskView:
        return TaskView.from_task(self._owned(task_id, "read"))

    def complete(self, task_id: int) -> None:
        task = self._owned(task_id, "modify")
        previous = task.completed
        task.completed = True

        def undo() -> None:
            task.completed = previous

        self._persist(undo)
        logger.info("Task completed id={}", task_id)

    def edit(self, task_id: int, title: str, description: str) -> None:
        task = self._owned(task_id, "modify")
        previous = (task.title, task.description)
        task.title = title
        task.description = description

        def undo() -> None:
            task.title, task.description = previous

        self._persist(undo)
        logger.info("Task edited id={}", task_id)

    def delete(self, task_id: int) -> None:
        task = self._owned(task_id, "delete")
        del self._tasks[task_id]

        def undo() -> None:
            self._tasks[task_id] = task

        self._persist(undo)
        logger.info("Task deleted id={}", task_id)
