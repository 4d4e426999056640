"""Application service: Login use case (passcode only)."""

from __future__ import annotations

from stockroom.application.dto import UserDTO
from stockroom.domain.exceptions import AuthenticationError
from stockroom.domain.model.user import passcode_fits_role
from stockroom.domain.repository.user_directory import UserDirectory
from stockroom.logging_config import get_logger

logger = get_logger("application.login")


class LoginHandler:

    def __init__(self, users: UserDirectory) -> None:
        self._users = users

    def handle(self, passcode: str) -> UserDTO:
        passcode = str(passcode or "").strip()
        user = self._users.get_by_passcode(passcode) if passcode else None
        if user is None:
            logger.warning("login_failed", extra={"reason": "unknown_passcode"})
            raise AuthenticationError("Invalid passcode")

        # Stored passcodes predating validation may not fit the role.
        if not passcode_fits_role(passcode, user.role):
            logger.warning(
                "login_failed",
                extra={"reason": "format_mismatch", "user_id": user.user_id},
            )
            raise AuthenticationError("Passcode format incorrect for assigned role")

        logger.info("login_succeeded", extra={"user_id": user.user_id, "role": user.role.value})
        return UserDTO.from_domain(user)
