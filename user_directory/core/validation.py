"""Input validation for user records.

These functions are pure: they look only at the payload, never at the store,
so the service can reject bad input before any persistence attempt.
"""

from typing import Any, Dict, Optional

import pydantic

from user_directory.core.exceptions import ValidationError
from user_directory.schemas.user import UserCreate, UserRoles, UserUpdate

# Flags a new user gets when the request leaves them out
DEFAULT_ROLES: Dict[str, bool] = {
    "is_seller": False,
    "is_customer": True,
    "is_admin": False,
}


def _first_error(exc: pydantic.ValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or None
    message = f"{field}: {error['msg']}" if field else error["msg"]
    return ValidationError(message, field=field)


def _require_object(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")


def validate_create(payload: Any) -> UserCreate:
    """Validate a create request.

    Args:
        payload: Decoded JSON body.

    Returns:
        The validated UserCreate.

    Raises:
        ValidationError: With the message of the first failing field.
    """
    _require_object(payload)
    try:
        return UserCreate.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise _first_error(exc) from None


def validate_update(payload: Any) -> UserUpdate:
    """Validate a partial update. Every field is optional; a password is refused."""
    _require_object(payload)
    if "password" in payload:
        raise ValidationError("password cannot be changed through an update", field="password")
    try:
        return UserUpdate.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise _first_error(exc) from None


def apply_role_defaults(roles: Optional[UserRoles]) -> Dict[str, bool]:
    """Merge the supplied role flags over DEFAULT_ROLES."""
    merged = dict(DEFAULT_ROLES)
    if roles is not None:
        merged.update(roles.model_dump(exclude_unset=True))
    return merged
