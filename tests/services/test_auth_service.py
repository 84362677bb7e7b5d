"""Tests for AuthService and password rules."""

import pytest
from flask import Flask
from sqlalchemy import delete, select

from petfeeder.consts import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from petfeeder.exceptions import (
    AuthenticationException,
    RecordNotFoundException,
    ValidationException,
)
from petfeeder.models.user import User
from petfeeder.services.auth_service import validate_password_strength
from petfeeder.services.container import ServiceContainer


class TestAuthenticate:
    """Tests for credential checks."""

    def test_seeded_admin(self, app: Flask, container: ServiceContainer) -> None:
        """The seeded administrator can log in with the default password."""
        with app.app_context():
            ctx = container.auth_service().authenticate(
                DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
            )

            assert ctx.username == DEFAULT_ADMIN_USERNAME
            assert ctx.user_id > 0

    def test_password_is_hashed(self, app: Flask, container: ServiceContainer) -> None:
        """The stored password is never the plain text."""
        with app.app_context():
            user = container.db_session().scalars(select(User)).one()

            assert user.password_hash != DEFAULT_ADMIN_PASSWORD

    def test_unknown_user(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(AuthenticationException) as exc_info:
                container.auth_service().authenticate("nobody", "whatever")

            assert exc_info.value.message == "User not found"

    def test_wrong_password(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(AuthenticationException) as exc_info:
                container.auth_service().authenticate(DEFAULT_ADMIN_USERNAME, "wrong")

            assert exc_info.value.message == "Invalid password"


class TestChangePassword:
    """Tests for password changes."""

    def _admin_id(self, container: ServiceContainer) -> int:
        stmt = select(User.id).where(User.username == DEFAULT_ADMIN_USERNAME)
        return container.db_session().scalars(stmt).one()

    def test_change_password(self, app: Flask, container: ServiceContainer) -> None:
        """The new password works and the old one stops working."""
        with app.app_context():
            service = container.auth_service()

            service.change_password(
                self._admin_id(container), DEFAULT_ADMIN_PASSWORD, "Feeder2026"
            )

            assert service.authenticate(DEFAULT_ADMIN_USERNAME, "Feeder2026")
            with pytest.raises(AuthenticationException):
                service.authenticate(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)

    def test_wrong_old_password(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(AuthenticationException) as exc_info:
                container.auth_service().change_password(
                    self._admin_id(container), "not-it", "Feeder2026"
                )

            assert exc_info.value.message == "Old password is incorrect"

    def test_weak_new_password(self, app: Flask, container: ServiceContainer) -> None:
        """Weak passwords are rejected and the old one keeps working."""
        with app.app_context():
            service = container.auth_service()

            with pytest.raises(ValidationException):
                service.change_password(
                    self._admin_id(container), DEFAULT_ADMIN_PASSWORD, "short"
                )

            assert service.authenticate(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)

    def test_unknown_user(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            with pytest.raises(RecordNotFoundException):
                container.auth_service().change_password(
                    9999, DEFAULT_ADMIN_PASSWORD, "Feeder2026"
                )


class TestResetAdminPassword:
    """Tests for restoring the administrator account."""

    def test_restores_default_password(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            service = container.auth_service()
            admin_id = container.db_session().scalars(select(User.id)).one()
            service.change_password(admin_id, DEFAULT_ADMIN_PASSWORD, "Feeder2026")

            service.reset_admin_password()

            assert service.authenticate(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)

    def test_recreates_missing_admin(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            session = container.db_session()
            session.execute(delete(User))

            container.auth_service().reset_admin_password()

            assert container.auth_service().authenticate(
                DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
            )


class TestPasswordStrength:
    """Tests for validate_password_strength."""

    @pytest.mark.parametrize(
        "password",
        ["abcdefg1", "ABCDEFGh", "abcdefg!", "Passw0rd!", "12345678-"],
    )
    def test_accepts(self, password: str) -> None:
        validate_password_strength(password)

    @pytest.mark.parametrize("password", ["", "a1", "Ab1!xyz"])
    def test_rejects_short(self, password: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_password_strength(password)

        assert "at least 8 characters" in exc_info.value.message

    @pytest.mark.parametrize("password", ["abcdefgh", "ABCDEFGH", "12345678", "!!!!!!!!"])
    def test_rejects_single_class(self, password: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_password_strength(password)

        assert "at least two of" in exc_info.value.message
