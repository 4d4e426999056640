"""Tests for passcode login and actor resolution."""

import pytest

from stockroom.application.actors import resolve_actor
from stockroom.application.login import LoginHandler
from stockroom.domain.exceptions import AuthenticationError, UserNotFoundError
from stockroom.domain.model.user import Role, User
from tests.fakes import FakeUserDirectory


def _directory():
    return FakeUserDirectory([
        User.create(user_id=11, user_name="Ana", role=Role.STUDENT, passcode="4821", user_specs="10-B"),
        User.create(user_id=90, user_name="Mr. Reyes", role=Role.STAFF, passcode="lab901"),
        # Persisted before format rules applied
        User(user_id=50, user_name="Legacy", role=Role.STAFF, user_specs="", passcode="1234"),
    ])


class TestLogin:

    def test_student_login(self):
        user = LoginHandler(_directory()).handle("4821")
        assert user.user_id == 11
        assert user.role == "Student"
        assert not hasattr(user, "passcode")

    def test_staff_login_strips_whitespace(self):
        user = LoginHandler(_directory()).handle(" lab901 ")
        assert user.role == "Staff"

    def test_unknown_passcode(self):
        with pytest.raises(AuthenticationError, match="Invalid passcode"):
            LoginHandler(_directory()).handle("0000")

    def test_empty_passcode(self):
        with pytest.raises(AuthenticationError, match="Invalid passcode"):
            LoginHandler(_directory()).handle("")

    def test_passcode_not_fitting_role(self):
        with pytest.raises(AuthenticationError, match="format incorrect"):
            LoginHandler(_directory()).handle("1234")


class TestResolveActor:

    def test_returns_user(self):
        assert resolve_actor(_directory(), 11).user_name == "Ana"

    def test_unknown_user(self):
        with pytest.raises(UserNotFoundError):
            resolve_actor(_directory(), 404)

    def test_wrong_role(self):
        with pytest.raises(AuthenticationError, match="needs Staff"):
            resolve_actor(_directory(), 11, role=Role.STAFF)
