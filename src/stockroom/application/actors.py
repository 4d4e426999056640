"""Resolve who is acting on a transaction from the user directory."""

from __future__ import annotations

from stockroom.domain.exceptions import AuthenticationError, UserNotFoundError
from stockroom.domain.model.user import Role, User
from stockroom.domain.repository.user_directory import UserDirectory


def resolve_actor(users: UserDirectory, user_id: int, role: Role | None = None) -> User:
    """Return the user with *user_id*, optionally requiring *role*."""
    user = users.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    if role is not None and user.role != role:
        raise AuthenticationError(
            f"{user.user_name} is {user.role.value}; this action needs {role.value}"
        )
    return user
