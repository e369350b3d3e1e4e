# Here we define the Pydantic models for the User schemas.
# Pydantic is a data validation library that uses Python type annotations to validate data.
# The request models carry the field rules (lengths, email syntax, boolean flags); the
# response model defines what a user looks like on the wire. The password hash never leaves the server.

from datetime import datetime, timezone
from typing import Annotated, Optional

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr, StringConstraints, field_serializer

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_BYTES = 72


def _reject_null(value):
    if value is None:
        raise ValueError("must not be null")
    return value


def _check_email(value: str) -> str:
    # Syntax check only; the address is stored exactly as given
    validate_email(value, check_deliverability=False)
    return value


def _check_password(value: str) -> str:
    if "\x00" in value:
        raise ValueError("must not contain NUL characters")
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes")
    return value


Username = Annotated[StrictStr, StringConstraints(min_length=3, max_length=30)]
Email = Annotated[StrictStr, AfterValidator(_check_email)]
Password = Annotated[StrictStr, StringConstraints(min_length=6), AfterValidator(_check_password)]
# A flag may be omitted, but when present it must be a real boolean
Flag = Annotated[Optional[StrictBool], BeforeValidator(_reject_null)]


class UserRoles(BaseModel):
    # Any subset of the flags may be supplied; omitted ones are left unset
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_seller: Flag = Field(default=None, alias="isSeller")
    is_customer: Flag = Field(default=None, alias="isCustomer")
    is_admin: Flag = Field(default=None, alias="isAdmin")


class UserCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Username
    email: Email
    password: Password
    roles: Annotated[Optional[UserRoles], BeforeValidator(_reject_null)] = None


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: Annotated[Optional[Username], BeforeValidator(_reject_null)] = None
    email: Annotated[Optional[Email], BeforeValidator(_reject_null)] = None
    roles: Annotated[Optional[UserRoles], BeforeValidator(_reject_null)] = None


class UserRolesResponse(BaseModel):
    isSeller: bool
    isCustomer: bool
    isAdmin: bool


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)  # Build the response straight from the ORM object

    id: str
    username: str
    email: str
    roles: UserRolesResponse
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _as_utc(self, value: datetime) -> str:
        # SQLite hands back naive datetimes; they were written as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class MessageResponse(BaseModel):
    message: str
