"""Full-snapshot persistence for the account set and the task set.

Each snapshot is a single JSON (or YAML, by file suffix) object that is
rewritten in full after every mutation. Tasks are keyed by their decimal id,
accounts by username:

    {"1": {"id": 1, "title": "...", "description": "...", "completed": false,
           "created_at": 1700000000, "owner": "bob"}}

A missing file is an empty mapping. Anything else that cannot be read back
into valid records raises :class:`StorageFailure`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

import yaml
from loguru import logger

from .errors import StorageFailure
from .io_utils import _load_data, _save_data
from .models import Account, Task

T = TypeVar("T")

_LOAD_ERRORS = (OSError, json.JSONDecodeError, yaml.YAMLError, ValueError, TypeError)
_SAVE_ERRORS = (OSError, yaml.YAMLError, ValueError, TypeError)


class PersistenceGateway:
    """Serialize and restore the two snapshots.

    Parameters
    ----------
    tasks_path / accounts_path:
        Snapshot files; the suffix picks JSON or YAML.
    atomic_writes:
        Write through a temp file and ``os.replace`` when true, otherwise
        truncate and overwrite the file in place.
    """

    def __init__(self, tasks_path: Path, accounts_path: Path, *, atomic_writes: bool = True) -> None:
        self.tasks_path = Path(tasks_path)
        self.accounts_path = Path(accounts_path)
        self.atomic_writes = atomic_writes

    # -- saving ---------------------------------------------------------------

    def save_tasks(self, tasks: Mapping[int, Task]) -> None:
        payload = {str(task_id): tasks[task_id].to_dict() for task_id in sorted(tasks)}
        self._write(self.tasks_path, payload)
        logger.debug("Saved tasks snapshot path={} count={}", self.tasks_path, len(payload))

    def save_accounts(self, accounts: Mapping[str, Account]) -> None:
        payload = {name: account.to_dict() for name, account in accounts.items()}
        self._write(self.accounts_path, payload)
        logger.debug("Saved accounts snapshot path={} count={}", self.accounts_path, len(payload))

    def _write(self, path: Path, payload: dict[str, Any]) -> None:
        try:
            _save_data(path, payload, atomic=self.atomic_writes)
        except _SAVE_ERRORS as exc:
            logger.exception("Snapshot write failed path={}", path)
            raise StorageFailure(f"write failed: {exc.__class__.__name__}: {exc}", path) from exc

    # -- loading --------------------------------------------------------------

    def load_tasks(self) -> dict[int, Task]:
        records = self._read(self.tasks_path, Task.from_dict, lambda task: str(task.id))
        tasks = {task.id: task for task in records}
        logger.debug("Loaded tasks snapshot path={} count={}", self.tasks_path, len(tasks))
        return tasks

    def load_accounts(self) -> dict[str, Account]:
        records = self._read(self.accounts_path, Account.from_dict, lambda account: account.username)
        accounts = {account.username: account for account in records}
        logger.debug("Loaded accounts snapshot path={} count={}", self.accounts_path, len(accounts))
        return accounts

    def _read(
        self,
        path: Path,
        loader: Callable[[dict[str, Any]], T],
        key_of: Callable[[T], str],
    ) -> list[T]:
        try:
            raw = _load_data(path)
            if raw is None:
                logger.info("No snapshot at {}; starting empty", path)
                return []
            out: list[T] = []
            for key, item in raw.items():
                if not isinstance(item, dict):
                    raise TypeError(f"record {key!r} is {type(item).__name__}, expected object")
                record = loader(item)
                if str(key) != key_of(record):
                    raise ValueError(f"record key {key!r} does not match {key_of(record)!r}")
                out.append(record)
            return out
        except _LOAD_ERRORS as exc:
            logger.exception("Snapshot load failed path={}", path)
            raise StorageFailure(f"load failed: {exc.__class__.__name__}: {exc}", path) from exc
