"""Compose the session manager, task store, and persistence gateway.

:class:`TodoApp` is constructed explicitly and handed to whatever drives it
(the interactive shell, tests). Nothing is held in module-level state.

Usage::

    app = TodoApp.from_config(config)
    app.load()
    try:
        app.register("bob", "pw1")
        app.login("bob", "pw1")
        task_id = app.add("Buy milk", "2%")
    finally:
        app.close()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from .config import TrackerConfig
from .constants import DEFAULT_SAVE_FAILURE_POLICY, SAVE_FAILURE_POLICIES
from .models import TaskView
from .persistence import PersistenceGateway
from .session import SessionManager
from .store import OwnedTasks, TaskStore


class TodoApp:
    def __init__(
        self,
        gateway: PersistenceGateway,
        *,
        on_save_failure: str = DEFAULT_SAVE_FAILURE_POLICY,
    ) -> None:
        if on_save_failure not in SAVE_FAILURE_POLICIES:
            raise ValueError(f"Unknown save-failure policy: {on_save_failure}")
        self.gateway = gateway
        self.sessions = SessionManager(gateway, on_save_failure=on_save_failure)
        self.tasks = TaskStore(self.sessions, gateway, on_save_failure=on_save_failure)
        self._loaded = False

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "TodoApp":
        gateway = PersistenceGateway(
            config.tasks_path,
            config.accounts_path,
            atomic_writes=config.atomic_writes,
        )
        return cls(gateway, on_save_failure=config.on_save_failure)

    @classmethod
    def in_directory(cls, data_dir: Path, **kwargs) -> "TodoApp":
        return cls.from_config(TrackerConfig(data_dir=Path(data_dir), **kwargs))

    # -- lifecycle ----------------------------------------------------------

    def load(self) -> "TodoApp":
        """Restore both snapshots. Raises StorageFailure on a corrupt file."""
        tasks = self.gateway.load_tasks()
        accounts = self.gateway.load_accounts()
        self.tasks.load(tasks)
        self.sessions.load(accounts)
        self._loaded = True
        logger.info(
            "TodoApp ready tasks={} accounts={} next_id={}",
            len(self.tasks),
            len(self.sessions),
            self.tasks.next_id,
        )
        return self

    def close(self) -> None:
        # Every mutation is already on disk; only the session is dropped.
        self.sessions.logout()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __enter__(self) -> "TodoApp":
        return self.load()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- session operations -------------------------------------------------

    def register(self, username: str, password: str) -> None:
        self.sessions.register(username, password)

    def login(self, username: str, password: str) -> None:
        self.sessions.login(username, password)

    def logout(self) -> None:
        self.sessions.logout()

    def current_account(self) -> Optional[str]:
        return self.sessions.current_account()

    # -- task operations ----------------------------------------------------

    def add(self, title: str, description: str) -> int:
        return self.tasks.add(title, description)

    def list(self) -> OwnedTasks:
        return self.tasks.list()

    def get(self, task_id: int) -> TaskView:
        return self.tasks.get(task_id)

    def complete(self, task_id: int) -> None:
        self.tasks.complete(task_id)

    def edit(self, task_id: int, title: str, description: str) -> None:
        self.tasks.edit(task_id, title, description)

    def delete(self, task_id: int) -> None:
        self.tasks.delete(task_id)
