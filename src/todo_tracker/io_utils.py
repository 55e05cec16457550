"""Read and write whole-file JSON/YAML snapshots."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml


def _is_yaml(path: Path) -> bool:
    return path.suffix in {".yaml", ".yml"}


def _dump_text(path: Path, data: dict[str, Any]) -> str:
    if _is_yaml(path):
        return yaml.safe_dump(
            data,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _overwrite_text(path: Path, text: str) -> None:
    # Truncates in place; a crash mid-write leaves a torn file.
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())


def _save_data(path: Path, data: dict[str, Any], *, atomic: bool = True) -> None:
    """Serialize *data* and replace the whole content of *path*.

    Serialization happens before the file is touched, so an unserializable
    payload never truncates the previous snapshot.
    """
    text = _dump_text(path, data)
    if atomic:
        _atomic_write_text(path, text)
    else:
        _overwrite_text(path, text)


def _load_data(path: Path) -> dict[str, Any] | None:
    """Load a JSON/YAML object from *path*.

    Returns None when the file does not exist. Read and parse errors propagate
    (``OSError``, ``json.JSONDecodeError``, ``yaml.YAMLError``); a top-level
    value that is not a mapping raises ``ValueError``. An empty YAML file is
    treated as an empty mapping.
    """
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as handle:
        if _is_yaml(path):
            data = yaml.safe_load(handle)
            if data is None:
                return {}
        else:
            data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"expected object, got {type(data).__name__}")
    return data


def _load_data_with_error(
    path: Path,
    default: dict[str, Any],
) -> tuple[dict[str, Any], str | None]:
    """
    Load JSON/YAML and return (data, error_message).

    Used for optional files such as the config, where a bad file is reported
    to the caller instead of aborting.
    """
    try:
        data = _load_data(path)
    except OSError as exc:
        return default, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except json.JSONDecodeError as exc:
        return default, f"{path.name}: JSONDecodeError: {exc}"
    except yaml.YAMLError as exc:
        return default, f"{path.name}: YAMLError: {exc}"
    except ValueError as exc:
        return default, f"{path.name}: {exc}"
    if data is None:
        return default, None
    return data, None
