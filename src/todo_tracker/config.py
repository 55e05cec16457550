"""Load optional tracker configuration from `todo_tracker.yaml` in the data directory."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger

from .constants import (
    CONFIG_FILE,
    DEFAULT_ACCOUNTS_FILE,
    DEFAULT_ATOMIC_WRITES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SAVE_FAILURE_POLICY,
    DEFAULT_TASKS_FILE,
    SAVE_FAILURE_POLICIES,
    VALID_LOG_LEVELS,
)
from .io_utils import _load_data_with_error


@dataclass(frozen=True)
class TrackerConfig:
    data_dir: Path
    tasks_file: str = DEFAULT_TASKS_FILE
    accounts_file: str = DEFAULT_ACCOUNTS_FILE
    atomic_writes: bool = DEFAULT_ATOMIC_WRITES
    on_save_failure: str = DEFAULT_SAVE_FAILURE_POLICY
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / self.tasks_file

    @property
    def accounts_path(self) -> Path:
        return self.data_dir / self.accounts_file


def _file_name(raw: Any) -> str | None:
    if not isinstance(raw, str) or not raw or Path(raw).name != raw:
        return None
    # The config itself and atomic-write temp files are not snapshots.
    if raw == CONFIG_FILE or raw.endswith(".tmp"):
        return None
    return raw


def _parse(data_dir: Path, raw: dict[str, Any]) -> TrackerConfig:
    config = TrackerConfig(data_dir=data_dir)
    changes: dict[str, Any] = {}

    for key in ("tasks_file", "accounts_file"):
        if key in raw:
            name = _file_name(raw[key])
            if name is None:
                logger.warning("Ignoring {}={!r}: expected a bare snapshot file name", key, raw[key])
            else:
                changes[key] = name

    if "atomic_writes" in raw:
        if isinstance(raw["atomic_writes"], bool):
            changes["atomic_writes"] = raw["atomic_writes"]
        else:
            logger.warning("Ignoring atomic_writes={!r}: expected true/false", raw["atomic_writes"])

    if "on_save_failure" in raw:
        policy = str(raw["on_save_failure"]).lower()
        if policy in SAVE_FAILURE_POLICIES:
            changes["on_save_failure"] = policy
        else:
            logger.warning(
                "Ignoring on_save_failure={!r}: expected one of {}",
                raw["on_save_failure"],
                sorted(SAVE_FAILURE_POLICIES),
            )

    if "log_level" in raw:
        level = str(raw["log_level"]).upper()
        if level in VALID_LOG_LEVELS:
            changes["log_level"] = level
        else:
            logger.warning("Ignoring log_level={!r}", raw["log_level"])

    if changes.get("tasks_file", config.tasks_file) == changes.get("accounts_file", config.accounts_file):
        logger.warning("tasks_file and accounts_file must differ; using defaults")
        changes.pop("tasks_file", None)
        changes.pop("accounts_file", None)

    return replace(config, **changes)


def load_tracker_config(data_dir: Path) -> tuple[TrackerConfig, str | None]:
    """Load the optional tracker config file.

    Args:
        data_dir: Directory holding the snapshots and the config file.

    Returns:
        A tuple of `(config, error_message)`. A missing file yields defaults
        and no error; an unreadable file yields defaults and the error.
    """
    data_dir = data_dir.expanduser().resolve()
    path = data_dir / CONFIG_FILE
    data, err = _load_data_with_error(path, {})
    if err:
        return TrackerConfig(data_dir=data_dir), err
    return _parse(data_dir, data), None
