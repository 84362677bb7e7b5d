"""Password authentication for dashboard users."""

import logging
import re
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from petfeeder.consts import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from petfeeder.exceptions import (
    AuthenticationException,
    RecordNotFoundException,
    ValidationException,
)
from petfeeder.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# Character classes a new password draws from; at least two are required
_PASSWORD_CLASSES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9\s]"),
)
MIN_PASSWORD_CLASSES = 2


@dataclass
class AuthContext:
    """Authenticated dashboard user, stored on flask.g per request."""

    user_id: int
    username: str


class AuthService:
    """Verifies credentials and manages password hashes.

    Hashing and verification are delegated to werkzeug.security; plain
    passwords are never stored.
    """

    def __init__(self, db: Session) -> None:
        """Initialize auth service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def authenticate(self, username: str, password: str) -> AuthContext:
        """Check a username and password.

        Returns:
            AuthContext for the user

        Raises:
            AuthenticationException: If the user is unknown or the password wrong
        """
        user = self._get_user_by_username(username)
        if user is None:
            raise AuthenticationException("User not found")

        if not check_password_hash(user.password_hash, password):
            raise AuthenticationException("Invalid password")

        logger.info("User %s logged in", user.username)
        return AuthContext(user_id=user.id, username=user.username)

    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        """Replace a user's password after verifying the current one.

        Raises:
            RecordNotFoundException: If the user no longer exists
            AuthenticationException: If the old password is wrong
            ValidationException: If the new password is too weak
        """
        user = self.db.get(User, user_id)
        if user is None:
            raise RecordNotFoundException("User", str(user_id))

        if not check_password_hash(user.password_hash, old_password):
            raise AuthenticationException("Old password is incorrect")

        validate_password_strength(new_password)

        user.password_hash = generate_password_hash(new_password)
        self.db.flush()
        logger.info("Password changed for user %s", user.username)

    def reset_admin_password(self) -> None:
        """Restore the seeded administrator password."""
        user = self._get_user_by_username(DEFAULT_ADMIN_USERNAME)
        password_hash = generate_password_hash(DEFAULT_ADMIN_PASSWORD)

        if user is None:
            self.db.add(User(username=DEFAULT_ADMIN_USERNAME, password_hash=password_hash))
            logger.warning("Administrator account was missing and has been recreated")
        else:
            user.password_hash = password_hash

        self.db.flush()

    def _get_user_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return self.db.scalars(stmt).one_or_none()


def validate_password_strength(password: str) -> None:
    """Require a minimum length and a mix of character classes.

    Raises:
        ValidationException: If the password is too weak
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    classes = sum(1 for pattern in _PASSWORD_CLASSES if pattern.search(password))
    if classes < MIN_PASSWORD_CLASSES:
        raise ValidationException(
            "Password must contain at least two of: digits, uppercase, "
            "lowercase, or special characters"
        )
