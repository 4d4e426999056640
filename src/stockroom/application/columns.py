"""Column-name resolution for spreadsheet imports.

Header cells are matched case-insensitively, ignoring spaces, underscores
and hyphens, against a table of recognized aliases per field.  Rows come
in as ``{header: value}`` dicts; ``ColumnResolver.get`` pulls out a field
regardless of how the sheet author spelled its header.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

INVENTORY_COLUMNS: dict[str, tuple[str, ...]] = {
    "ItemID": ("itemid", "id"),
    "ItemName": ("itemname", "name"),
    "ItemSpecs": ("itemspecs", "specs", "specification", "specifications"),
    "Category": ("category",),
    "Stock": ("stock", "initialstock", "quantity", "qty"),
}

USER_COLUMNS: dict[str, tuple[str, ...]] = {
    "UserID": ("userid", "id"),
    "UserName": ("username", "name"),
    "Role": ("role",),
    "UserSpecs": ("userspecs", "specs", "section"),
    "Passcode": ("passcode", "pin", "code"),
}


def normalize_header(header: Any) -> str:
    if header is None:
        return ""
    return re.sub(r"[\s_\-]+", "", str(header)).lower()


class ColumnResolver:
    """Maps canonical field names to the headers actually present."""

    def __init__(self, aliases: Mapping[str, tuple[str, ...]]) -> None:
        self._aliases = {
            field: tuple(normalize_header(a) for a in names)
            for field, names in aliases.items()
        }

    def get(self, row: Mapping[str, Any], field: str) -> Any:
        """Return the value of *field* in *row*, or None if no header matches.

        An exact (normalized) match on the canonical name wins over aliases.
        """
        by_header = {normalize_header(k): v for k, v in row.items()}
        canonical = normalize_header(field)
        if canonical in by_header:
            return by_header[canonical]
        for alias in self._aliases.get(field, ()):
            if alias in by_header:
                return by_header[alias]
        return None

    def extract(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``{field: value}`` for every known field."""
        return {field: self.get(row, field) for field in self._aliases}


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def parse_whole_number(value: Any) -> int | None:
    """Coerce a spreadsheet cell to an int; None if it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None
