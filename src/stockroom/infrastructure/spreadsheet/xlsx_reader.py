"""Read .xlsx sheets as one dict per row.

The first row of the first sheet is the header.  Blank rows are skipped,
whole-number floats become ints and strings are stripped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from stockroom.domain.exceptions import ValidationError


def _cell_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        return value.strip()
    return value


def read_rows(path: Path, sheet: int | str = 0) -> list[dict[str, Any]]:
    """Return the data rows of *sheet* keyed by header text."""
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, OSError, KeyError) as exc:
        raise ValidationError(f"Cannot open spreadsheet {path}: {exc}", field="file") from exc

    try:
        ws = wb[sheet] if isinstance(sheet, str) else wb.worksheets[sheet]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        headers = [str(h).strip() if h is not None else "" for h in header]

        result: list[dict[str, Any]] = []
        for values in rows:
            cells = [_cell_value(v) for v in values]
            if all(c == "" for c in cells):
                continue
            result.append(
                {h: cells[i] if i < len(cells) else "" for i, h in enumerate(headers) if h}
            )
        return result
    finally:
        wb.close()
