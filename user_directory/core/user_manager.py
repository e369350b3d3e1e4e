"""User directory service.

This module owns the lifecycle of user records: creation, lookup, partial
update and deletion. All state lives in the store; a UserManager only holds
the session it was handed for the current request.
"""

import logging
import uuid
from functools import wraps
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from user_directory.core.exceptions import ConflictError, NotFoundError, PersistenceError, UserDirectoryError
from user_directory.core.security import PasswordHasher
from user_directory.core.validation import apply_role_defaults, validate_create, validate_update
from user_directory.models.user import User, utc_now

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig).lower()
    return "unique" in text or "duplicate" in text


def store_errors(func):
    """Decorator to roll back the session and map store exceptions onto the user directory errors."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except UserDirectoryError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            # Two writers can pass the pre-check at once; the unique index catches the loser
            self.db.rollback()
            if _is_unique_violation(e):
                logger.warning("Unique constraint rejected %s", func.__name__)
                raise ConflictError("Username or email already exists") from e
            logger.error("Integrity error in %s: %s", func.__name__, e.orig)
            raise PersistenceError("The store rejected the record") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Store error in %s: %s", func.__name__, e)
            raise PersistenceError("The store could not complete the operation") from e
    return wrapper


class UserManager:
    """Create, read, update and delete user records."""

    def __init__(self, db: Session, hasher: Optional[PasswordHasher] = None):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session for the current unit of work.
            hasher: Password hasher; a default bcrypt hasher when omitted.
        """
        self.db = db
        self.hasher = hasher or PasswordHasher()

    ############################
    # Lookup helpers
    ############################

    @staticmethod
    def _parse_id(user_id: Any) -> str:
        # Identifiers are UUID strings; anything else can never name a record
        try:
            return str(uuid.UUID(str(user_id)))
        except ValueError:
            raise PersistenceError(f"Malformed user id '{user_id}'", field="id") from None

    def _get(self, user_id: Any) -> User:
        user = self.db.get(User, self._parse_id(user_id))
        if user is None:
            raise NotFoundError(str(user_id))
        return user

    def _ensure_unique(self, username: Optional[str], email: Optional[str], exclude_id: Optional[str] = None) -> None:
        clauses = []
        if username is not None:
            clauses.append(User.username == username)
        if email is not None:
            clauses.append(User.email == email)
        if not clauses:
            return
        query = self.db.query(User).filter(or_(*clauses))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        for other in query.all():
            if username is not None and other.username == username:
                logger.warning("Rejected duplicate username: %s", username)
                raise ConflictError(f"Username '{username}' already exists", field="username")
            if email is not None and other.email == email:
                logger.warning("Rejected duplicate email: %s", email)
                raise ConflictError(f"Email '{email}' already exists", field="email")

    ############################
    # Operations
    ############################

    @store_errors
    def create_user(self, payload: Any) -> User:
        """Create a new user.

        Args:
            payload: Decoded request body with username, email, password and optional roles.

        Returns:
            The stored User, with its id and timestamps assigned.

        Raises:
            ValidationError: If the payload fails validation. Nothing is stored.
            ConflictError: If the username or email is taken.
            PersistenceError: On any other store failure.
        """
        data = validate_create(payload)
        self._ensure_unique(data.username, data.email)

        now = utc_now()
        user = User(
            username=data.username,
            email=data.email,
            password_hash=self.hasher.hash(data.password),
            created_at=now,
            updated_at=now,
            **apply_role_defaults(data.roles),
        )
        self.db.add(user)
        self.db.commit()
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    @store_errors
    def get_user(self, user_id: Any) -> User:
        """Get a user by id.

        Raises:
            NotFoundError: If no user has this id.
            PersistenceError: If the id is malformed or the store fails.
        """
        return self._get(user_id)

    @store_errors
    def update_user(self, user_id: Any, payload: Any) -> User:
        """Overwrite the supplied fields of a user and refresh updated_at.

        Omitted fields keep their values. Role flags are merged one by one, so
        ``{"roles": {"isAdmin": true}}`` leaves isSeller and isCustomer alone.
        """
        data = validate_update(payload)
        user = self._get(user_id)

        fields = data.model_dump(exclude_unset=True, exclude={"roles"})
        self._ensure_unique(fields.get("username"), fields.get("email"), exclude_id=user.id)

        for name, value in fields.items():
            setattr(user, name, value)
        if data.roles is not None:
            for name, value in data.roles.model_dump(exclude_unset=True).items():
                setattr(user, name, value)
        user.updated_at = utc_now()  # refreshed even when nothing else changed

        self.db.commit()
        logger.info("Updated user %s (fields: %s)", user.id, sorted(data.model_fields_set) or "none")
        return user

    @store_errors
    def delete_user(self, user_id: Any) -> None:
        """Permanently remove a user. The id is never reused."""
        user = self._get(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s (%s)", user.id, user.username)

    @store_errors
    def verify_password(self, user_id: Any, password: str) -> bool:
        """Check a plaintext password against the user's stored hash."""
        user = self._get(user_id)
        return self.hasher.verify(password, user.password_hash)
