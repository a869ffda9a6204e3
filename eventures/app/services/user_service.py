"""
Business logic for users.

Users are created by registration and never deleted here.  Passwords
are stored as PBKDF2 hashes; authentication compares in constant time.
"""

import logging
import sqlite3
from typing import Optional, Union

from eventures.app.core.db import get_connection
from eventures.app.core.security import hash_password, verify_password
from eventures.app.schemas.user import Principal, RegisterUserModel, UserRead

from .results import Conflict, Success, ValidationFailed
from .validation import validate_registration

logger = logging.getLogger(__name__)


class UserService:
    """Service for registering and authenticating users."""

    @classmethod
    async def register_user(cls, data: RegisterUserModel) -> Union[Success, ValidationFailed, Conflict]:
        """Validate a registration draft and create the user.

        Returns ``Conflict`` if the username or email is already taken.
        """
        errors = validate_registration(data)
        if errors:
            logger.warning("Rejected registration for %r: %s", data.username, errors)
            return ValidationFailed(tuple(errors))

        username = data.username.strip()
        email = data.email.strip()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            taken = []
            if cursor.execute("SELECT 1 FROM users WHERE username = ?", (username,)).fetchone():
                taken.append("Username is already taken.")
            if cursor.execute("SELECT 1 FROM users WHERE email = ?", (email,)).fetchone():
                taken.append("Email is already taken.")
            if taken:
                logger.warning("Rejected registration for %r: %s", username, taken)
                return Conflict(tuple(taken))
            try:
                cursor.execute(
                    "INSERT INTO users (username, email, password, first_name, last_name) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        username,
                        email,
                        hash_password(data.password),
                        data.first_name.strip(),
                        data.last_name.strip(),
                    ),
                )
            except sqlite3.IntegrityError:
                # lost a race with a concurrent registration
                conn.rollback()
                return Conflict(("Username is already taken.",))
            user_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()
        logger.info("Registered user %s (id %s)", username, user_id)
        return Success(
            UserRead(
                id=user_id,
                username=username,
                email=email,
                first_name=data.first_name.strip(),
                last_name=data.last_name.strip(),
            )
        )

    @classmethod
    async def authenticate(cls, username: Optional[str], password: Optional[str]) -> Optional[Principal]:
        """Return the principal for valid credentials, otherwise ``None``."""
        if not username or not password:
            return None
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, username, password FROM users WHERE username = ?",
                (username,),
            ).fetchone()
        finally:
            conn.close()
        if not row or not verify_password(password, row["password"]):
            logger.warning("Failed login for %r", username)
            return None
        logger.info("User %s logged in", row["username"])
        return Principal(id=row["id"], username=row["username"])

