"""Tests for loading todo_tracker.yaml."""

from __future__ import annotations

from pathlib import Path

from todo_tracker.config import TrackerConfig, load_tracker_config


def _write(tmp_path: Path, text: str) -> None:
    (tmp_path / "todo_tracker.yaml").write_text(text, encoding="utf-8")


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config, err = load_tracker_config(tmp_path)
    assert err is None
    assert config == TrackerConfig(data_dir=tmp_path.resolve())
    assert config.tasks_path == tmp_path.resolve() / "tasks.json"
    assert config.accounts_path == tmp_path.resolve() / "accounts.json"
    assert config.atomic_writes is True
    assert config.on_save_failure == "rollback"


def test_values_are_read(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "tasks_file: my_tasks.yaml\n"
        "accounts_file: my_accounts.yaml\n"
        "atomic_writes: false\n"
        "on_save_failure: keep\n"
        "log_level: debug\n",
    )
    config, err = load_tracker_config(tmp_path)
    assert err is None
    assert config.tasks_file == "my_tasks.yaml"
    assert config.accounts_file == "my_accounts.yaml"
    assert config.atomic_writes is False
    assert config.on_save_failure == "keep"
    assert config.log_level == "DEBUG"


def test_invalid_values_are_ignored(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "tasks_file: ../escape.json\n"
        "atomic_writes: maybe\n"
        "on_save_failure: shrug\n"
        "log_level: loud\n",
    )
    config, err = load_tracker_config(tmp_path)
    assert err is None
    assert config == TrackerConfig(data_dir=tmp_path.resolve())


def test_colliding_file_names_fall_back(tmp_path: Path) -> None:
    _write(tmp_path, "tasks_file: data.json\naccounts_file: data.json\n")
    config, _ = load_tracker_config(tmp_path)
    assert config.tasks_file != config.accounts_file


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    _write(tmp_path, "")
    config, err = load_tracker_config(tmp_path)
    assert err is None
    assert config.tasks_file == "tasks.json"


def test_parse_error_is_reported(tmp_path: Path) -> None:
    _write(tmp_path, "tasks_file: [unclosed\n")
    config, err = load_tracker_config(tmp_path)
    assert err is not None
    assert "YAMLError" in err
    assert config.tasks_file == "tasks.json"


def test_non_mapping_is_reported(tmp_path: Path) -> None:
    _write(tmp_path, "- a\n- b\n")
    _, err = load_tracker_config(tmp_path)
    assert err is not None
    assert "expected object" in err


def test_default_log_level_is_quiet(tmp_path: Path) -> None:
    config, _ = load_tracker_config(tmp_path)
    assert config.log_level == "WARNING"


def test_config_file_is_not_a_snapshot_name(tmp_path: Path) -> None:
    _write(tmp_path, "tasks_file: todo_tracker.yaml\naccounts_file: todo_tracker.yaml\n")
    config, err = load_tracker_config(tmp_path)
    assert err is None
    assert config.tasks_file == "tasks.json"
    assert config.accounts_file == "accounts.json"


def test_temp_file_names_are_rejected(tmp_path: Path) -> None:
    _write(tmp_path, "tasks_file: tasks.json.tmp\naccounts_file: accounts.tmp\n")
    config, _ = load_tracker_config(tmp_path)
    assert config.tasks_file == "tasks.json"
    assert config.accounts_file == "accounts.json"
