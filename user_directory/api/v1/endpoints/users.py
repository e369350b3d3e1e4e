from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from user_directory.core.user_manager import UserManager
from user_directory.db.base import get_db
from user_directory.schemas.user import MessageResponse, UserResponse  # Response schemas; request bodies are validated by the UserManager

router = APIRouter()


# Dependency to get a UserManager bound to this request's session
def get_user_manager(request: Request, db: Session = Depends(get_db)) -> UserManager:
    return UserManager(db, hasher=request.app.state.hasher)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: Any = Body(...), users: UserManager = Depends(get_user_manager)):
    return users.create_user(payload)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: str, users: UserManager = Depends(get_user_manager)):
    return users.get_user(user_id)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=UserResponse)
def update_user(user_id: str, payload: Any = Body(...), users: UserManager = Depends(get_user_manager)):
    # Only the fields present in the body are changed
    return users.update_user(user_id, payload)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, users: UserManager = Depends(get_user_manager)):
    users.delete_user(user_id)
    return {"message": "User deleted"}
