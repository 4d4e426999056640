"""Whole-collection JSON file I/O shared by the JSON stores.

Each collection lives in one file holding a JSON array of objects.
Writes go to a sibling temp file first and are moved into place, so a
crash mid-write leaves the previous version intact.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from stockroom.domain.exceptions import PersistenceError


def read_records(file_path: Path) -> list[dict[str, Any]]:
    """Return the records in *file_path*; a missing or empty file means none."""
    if not file_path.exists():
        return []
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(file_path, str(exc)) from exc
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PersistenceError(file_path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise PersistenceError(file_path, "expected a JSON array of records")
    return data


def write_records(file_path: Path, records: list[dict[str, Any]], record: Any = None) -> None:
    """Replace *file_path* with *records*.

    Raises PersistenceError carrying *record* if the write fails.
    """
    tmp_path = file_path.with_name(file_path.name + ".tmp")
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, file_path)
    except OSError as exc:
        raise PersistenceError(file_path, str(exc), record=record) from exc


def lowercase_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Key lookup helper that accepts both camelCase and PascalCase files."""
    return {str(k).lower(): v for k, v in raw.items()}
