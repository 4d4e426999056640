"""Write activity rows to an .xlsx workbook."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from stockroom.domain.exceptions import PersistenceError

SHEET_TITLE = "ActivityLog"


def write_rows(path: Path, columns: Sequence[str], rows: Sequence[dict[str, Any]]) -> Path:
    """Write a header row plus one row per dict, in *columns* order."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(list(columns))
    for row in rows:
        ws.append([_cell(row.get(column)) for column in columns])

    for index, column in enumerate(columns, start=1):
        width = max([len(column)] + [len(str(row.get(column) or "")) for row in rows])
        ws.column_dimensions[get_column_letter(index)].width = min(width + 2, 60)
    ws.freeze_panes = "A2"

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except OSError as exc:
        raise PersistenceError(path, str(exc)) from exc
    return path


def _cell(value: Any) -> Any:
    return "" if value is None else value
