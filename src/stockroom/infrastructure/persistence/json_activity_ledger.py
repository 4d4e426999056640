"""JSON-file-backed implementation of ActivityLedger."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from stockroom.domain.exceptions import PersistenceError, ValidationError
from stockroom.domain.model.activity import ActivityEntry
from stockroom.domain.model.value_objects import ActivityAction
from stockroom.domain.repository.activity_ledger import ActivityLedger
from stockroom.infrastructure.persistence.json_file import (
    lowercase_keys,
    read_records,
    write_records,
)
from stockroom.logging_config import get_logger

logger = get_logger("infrastructure.activity_ledger")


class JsonActivityLedger(ActivityLedger):
    """Keeps the ledger in memory and writes it through to disk on append."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._entries: list[ActivityEntry] = []

    @classmethod
    def open(cls, file_path: Path) -> JsonActivityLedger:
        ledger = cls(file_path)
        ledger.load()
        return ledger

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> None:
        try:
            entries = [self._to_domain(raw) for raw in read_records(self._file_path)]
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            raise PersistenceError(self._file_path, f"malformed activity record ({exc})") from exc
        seen: set[int] = set()
        for entry in entries:
            if entry.activity_id in seen:
                raise PersistenceError(
                    self._file_path, f"duplicate activityID {entry.activity_id}"
                )
            seen.add(entry.activity_id)
        # Append order is ID order.
        entries.sort(key=lambda e: e.activity_id)
        self._entries = entries
        logger.info(
            "ledger_loaded",
            extra={"path": str(self._file_path), "entries": len(entries), "next_id": self.next_id()},
        )

    def save(self, record: ActivityEntry | None = None) -> None:
        write_records(
            self._file_path, [self._to_raw(e) for e in self._entries], record=record
        )

    # --- ActivityLedger interface ---------------------------------------------

    def next_id(self) -> int:
        if not self._entries:
            return 1
        return max(e.activity_id for e in self._entries) + 1

    def append(self, entry: ActivityEntry) -> ActivityEntry:
        stored = entry.with_id(self.next_id())
        # In-memory append stands even if the write below fails.
        self._entries.append(stored)
        self.save(record=stored)
        return stored

    def list_all(self) -> list[ActivityEntry]:
        return list(self._entries)

    def get_by_id(self, activity_id: int) -> ActivityEntry | None:
        for entry in self._entries:
            if entry.activity_id == activity_id:
                return entry
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: ActivityEntry) -> dict:
        raw = {
            "activityID": entry.activity_id,
            "timestamp": entry.timestamp.isoformat(),
            "action": entry.action.value,
            "userID": entry.user_id,
            "userName": entry.user_name,
            "userSpecs": entry.user_specs,
            "itemID": entry.item_id,
            "itemName": entry.item_name,
            "itemSpecs": entry.item_specs,
            "qty": entry.qty,
            "notes": entry.notes,
            "itemQtyRemainingAfterThisAction": entry.item_qty_remaining_after_this_action,
        }
        if entry.original_borrow_activity_id is not None:
            raw["originalBorrowActivityID"] = entry.original_borrow_activity_id
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> ActivityEntry:
        r = lowercase_keys(raw)
        original = r.get("originalborrowactivityid")
        remaining = r.get("itemqtyremainingafterthisaction")
        return ActivityEntry(
            activity_id=int(r["activityid"]),
            action=ActivityAction.parse(r["action"]),
            user_id=int(r["userid"]),
            user_name=str(r.get("username", "")),
            user_specs=str(r.get("userspecs") or ""),
            item_id=int(r["itemid"]),
            item_name=str(r.get("itemname", "")),
            item_specs=str(r.get("itemspecs") or ""),
            qty=abs(int(r["qty"])),
            notes=str(r.get("notes") or ""),
            original_borrow_activity_id=int(original) if original not in (None, "") else None,
            item_qty_remaining_after_this_action=int(remaining) if remaining not in (None, "") else None,
            timestamp=_parse_timestamp(r.get("timestamp")),
        )


def _parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
