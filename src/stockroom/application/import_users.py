"""Application service: Import Users use case.

Same row-by-row policy as the inventory import: bad rows are skipped
with a reason, valid rows replace the user directory.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from stockroom.application.columns import (
    USER_COLUMNS,
    ColumnResolver,
    is_blank,
    parse_whole_number,
)
from stockroom.application.dto import ImportReport, SkippedRow
from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.user import Role, User
from stockroom.domain.repository.user_directory import UserDirectory
from stockroom.logging_config import get_logger

logger = get_logger("application.import_users")


class ImportUsersHandler:

    def __init__(
        self,
        users: UserDirectory,
        resolver: ColumnResolver | None = None,
    ) -> None:
        self._users = users
        self._resolver = resolver or ColumnResolver(USER_COLUMNS)

    def handle(self, rows: Sequence[Mapping[str, Any]]) -> ImportReport:
        users: list[User] = []
        skipped: list[SkippedRow] = []
        seen_ids: set[int] = set()
        seen_passcodes: set[str] = set()

        for index, row in enumerate(rows):
            row_number = index + 2
            try:
                user = self._parse_row(row)
                if user.user_id in seen_ids:
                    raise ValidationError(f"Duplicate UserID {user.user_id}", field="userID")
                # Login is by passcode alone, so passcodes must be unique.
                if user.passcode in seen_passcodes:
                    raise ValidationError("Passcode already assigned to another user", field="passcode")
            except ValidationError as exc:
                logger.warning(
                    "user_row_skipped",
                    extra={"row_number": row_number, "reason": str(exc)},
                )
                # Passcodes are not echoed back in reports.
                data = {k: v for k, v in row.items() if "pass" not in str(k).lower()}
                skipped.append(SkippedRow(row_number, str(exc), data))
                continue
            seen_ids.add(user.user_id)
            seen_passcodes.add(user.passcode)
            users.append(user)

        if users:
            self._users.replace_all(users)

        logger.info(
            "users_imported",
            extra={"imported": len(users), "skipped": len(skipped)},
        )
        return ImportReport(imported_count=len(users), skipped=skipped)

    def _parse_row(self, row: Mapping[str, Any]) -> User:
        fields = self._resolver.extract(row)

        raw_id = fields["UserID"]
        if is_blank(raw_id):
            raise ValidationError("UserID is missing", field="userID")
        user_id = parse_whole_number(raw_id)
        if user_id is None:
            raise ValidationError("UserID must be a number", field="userID")

        if is_blank(fields["UserName"]):
            raise ValidationError("UserName is missing", field="userName")
        if is_blank(fields["Role"]):
            raise ValidationError("Role is missing", field="role")
        role = Role.parse(fields["Role"])

        raw_passcode = fields["Passcode"]
        if is_blank(raw_passcode):
            raise ValidationError("Passcode is missing", field="passcode")
        passcode = raw_passcode
        if isinstance(passcode, float) and passcode.is_integer():
            passcode = int(passcode)

        return User.create(
            user_id=user_id,
            user_name=str(fields["UserName"]),
            role=role,
            passcode=str(passcode),
            user_specs="" if is_blank(fields["UserSpecs"]) else str(fields["UserSpecs"]),
        )
