"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.user import User


class UserDirectory(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_passcode(self, passcode: str) -> User | None:
        """Return the user holding *passcode*, or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def replace_all(self, users: list[User]) -> None:
        """Replace the whole directory with *users* (user import)."""
