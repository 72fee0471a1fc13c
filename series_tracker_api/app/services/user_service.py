"""
Business logic for users.

``UserService`` registers accounts and checks credentials against the
``users`` table.  E-mail uniqueness is enforced by the table's UNIQUE
constraint: registration inserts directly and translates the
constraint violation into a conflict, so two concurrent registrations
for the same address cannot both succeed.  Login only verifies
credentials and returns the identity; no token or session is issued.
"""

import logging
import sqlite3

from series_tracker_api.app.core.db import get_connection
from series_tracker_api.app.core.errors import ConflictError, InternalError, UnauthorizedError
from series_tracker_api.app.core.security import burn_verification, hash_password, verify_password
from series_tracker_api.app.schemas.user import LoginInput, RegisterInput, UserRead
from series_tracker_api.app.services.normalizer import normalize_login, normalize_registration

logger = logging.getLogger(__name__)


class UserService:
    """Registration and login against the ``users`` table."""

    @classmethod
    async def register(cls, data: RegisterInput) -> UserRead:
        """Create a new user and return its identity.

        Raises ``ValidationError`` for bad input, ``ConflictError`` when
        the e-mail is already registered and ``InternalError`` when
        hashing or storage fails.
        """
        data = normalize_registration(data)
        try:
            password_hash = hash_password(data.password)
        except (TypeError, ValueError, UnicodeError):
            logger.exception("Password hashing failed for %s", data.email)
            raise InternalError("failed to process password")

        conn = None
        try:
            conn = get_connection()
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO users (name, email, password_hash) VALUES (?, ?, ?)",
                (data.name, data.email, password_hash),
            )
            user_id = cursor.lastrowid
            conn.commit()
        except sqlite3.IntegrityError as exc:
            if "users.email" in str(exc).lower():
                logger.info("Registration rejected, e-mail %s already in use", data.email)
                raise ConflictError("email already registered")
            logger.exception("Failed to create user %s", data.email)
            raise InternalError("failed to create user")
        except sqlite3.Error:
            logger.exception("Failed to create user %s", data.email)
            raise InternalError("failed to create user")
        finally:
            if conn is not None:
                conn.close()

        logger.info("Registered user %s (%s)", user_id, data.email)
        return UserRead(id=user_id, name=data.name, email=data.email)

    @classmethod
    async def authenticate(cls, data: LoginInput) -> UserRead:
        """Check an e-mail/password pair and return the matching identity.

        An unknown e-mail and a wrong password raise the same
        ``UnauthorizedError``; the unknown-e-mail path still runs a
        password verification so both take comparable time.
        """
        data = normalize_login(data)
        conn = None
        try:
            conn = get_connection()
            row = conn.execute(
                "SELECT id, name, email, password_hash FROM users WHERE email = ? LIMIT 1",
                (data.email,),
            ).fetchone()
        except sqlite3.Error:
            logger.exception("Failed to look up user %s", data.email)
            raise InternalError("failed to authenticate user")
        finally:
            if conn is not None:
                conn.close()

        if row is None:
            burn_verification(data.password)
            raise UnauthorizedError("invalid credentials")
        if not verify_password(data.password, row["password_hash"]):
            raise UnauthorizedError("invalid credentials")
        return UserRead(id=row["id"], name=row["name"], email=row["email"])
