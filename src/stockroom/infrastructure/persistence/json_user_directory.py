"""JSON-file-backed implementation of UserDirectory."""

from __future__ import annotations

from pathlib import Path

from stockroom.domain.exceptions import PersistenceError, ValidationError
from stockroom.domain.model.user import Role, User
from stockroom.domain.repository.user_directory import UserDirectory
from stockroom.infrastructure.persistence.json_file import (
    lowercase_keys,
    read_records,
    write_records,
)


class JsonUserDirectory(UserDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._users: list[User] = []

    @classmethod
    def open(cls, file_path: Path) -> JsonUserDirectory:
        directory = cls(file_path)
        directory.load()
        return directory

    def load(self) -> None:
        try:
            self._users = [self._to_domain(raw) for raw in read_records(self._file_path)]
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            raise PersistenceError(self._file_path, f"malformed user record ({exc})") from exc

    def save(self) -> None:
        write_records(self._file_path, [self._to_raw(u) for u in self._users])

    # --- UserDirectory interface ----------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        for user in self._users:
            if user.user_id == user_id:
                return user
        return None

    def get_by_passcode(self, passcode: str) -> User | None:
        for user in self._users:
            if user.passcode == str(passcode):
                return user
        return None

    def list_all(self) -> list[User]:
        return list(self._users)

    def replace_all(self, users: list[User]) -> None:
        self._users = list(users)
        self.save()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "userID": user.user_id,
            "userName": user.user_name,
            "role": user.role.value,
            "userSpecs": user.user_specs,
            "passcode": user.passcode,
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        r = lowercase_keys(raw)
        return User(
            user_id=int(r["userid"]),
            user_name=str(r.get("username", "")),
            role=Role.parse(r.get("role")),
            user_specs=str(r.get("userspecs") or ""),
            passcode=str(r.get("passcode", "")),
        )
