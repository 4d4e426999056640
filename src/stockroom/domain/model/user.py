"""User aggregate — students borrow, staff settle."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from stockroom.domain.exceptions import ValidationError


class Role(Enum):
    STUDENT = "Student"
    STAFF = "Staff"

    @staticmethod
    def parse(raw: str) -> Role:
        normalized = str(raw or "").strip().lower()
        for role in Role:
            if role.value.lower() == normalized:
                return role
        raise ValidationError('Role must be "Student" or "Staff"', field="role")


# Passcode formats are role-specific.
_PASSCODE_PATTERNS = {
    Role.STUDENT: (re.compile(r"^[0-9]{4}$"), "a 4-digit number"),
    Role.STAFF: (re.compile(r"^[a-zA-Z0-9]{6}$"), "a 6-character alphanumeric string"),
}


def passcode_fits_role(passcode: str, role: Role) -> bool:
    pattern, _ = _PASSCODE_PATTERNS[role]
    return bool(pattern.match(str(passcode)))


@dataclass
class User:

    user_id: int
    user_name: str
    role: Role
    user_specs: str
    passcode: str

    @staticmethod
    def create(
        user_id: int,
        user_name: str,
        role: Role,
        passcode: str,
        user_specs: str = "",
    ) -> User:
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValidationError("UserID must be a number", field="userID")
        if not user_name or not str(user_name).strip():
            raise ValidationError("UserName is missing", field="userName")
        passcode = str(passcode or "").strip()
        if not passcode:
            raise ValidationError("Passcode is missing", field="passcode")
        if not passcode_fits_role(passcode, role):
            _, description = _PASSCODE_PATTERNS[role]
            raise ValidationError(
                f"{role.value} Passcode must be {description}", field="passcode"
            )
        return User(
            user_id=user_id,
            user_name=str(user_name).strip(),
            role=role,
            user_specs=str(user_specs or "").strip(),
            passcode=passcode,
        )

    @property
    def is_staff(self) -> bool:
        return self.role == Role.STAFF
