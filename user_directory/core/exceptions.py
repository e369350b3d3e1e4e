"""Error kinds raised by the user directory.

Every error carries the HTTP status it maps to, so the exception handlers
registered in ``user_directory.main`` can translate them without a lookup table.
"""

from typing import Optional


class UserDirectoryError(Exception):
    """Base class for all user directory errors."""

    status_code = 500
    kind = "error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(UserDirectoryError):
    """Input is malformed or out of range. Raised before the store is touched."""

    status_code = 400
    kind = "validation_error"


class ConflictError(UserDirectoryError):
    """A username or email is already taken by another user.

    Reported as a 400 like other rejected input; the body kind tells them apart.
    """

    status_code = 400
    kind = "conflict"


class NotFoundError(UserDirectoryError):
    """No user exists with the requested identifier."""

    status_code = 404
    kind = "not_found"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class PersistenceError(UserDirectoryError):
    """Any other store-level failure, including malformed identifiers."""

    status_code = 500
    kind = "persistence_error"
