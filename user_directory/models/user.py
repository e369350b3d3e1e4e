# This is a sqlalchemy ORM model. It represents the users table in the database.
# username and email carry unique constraints, so the store itself rejects duplicates.

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Text

from user_directory.db.base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_user_id() -> str:
    return str(uuid.uuid4())


# Define the User model to contain the user information
class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_user_id)
    username = Column(String(30), unique=True, nullable=False)
    email = Column(String(254), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    # Role flags are independent of each other
    is_seller = Column(Boolean, default=False, nullable=False)
    is_customer = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    @property
    def roles(self) -> dict:
        return {"isSeller": self.is_seller, "isCustomer": self.is_customer, "isAdmin": self.is_admin}

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
