"""
User management endpoints.

- POST /users: admin creates a user (optionally an admin), returns a token
- GET /users: admin lists users
- GET/PATCH/DELETE /users/{username}: admin or that same user
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_correct_user_or_admin
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import TokenResponse, UserCreateRequest, UserResponse, UserUpdateRequest

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=TokenResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """Create a user. Unlike /auth/register, may grant admin rights."""
    user = UserResponse.model_validate(user_crud.register(db, request, is_admin=request.is_admin))
    return TokenResponse(token=create_token_for_user(user))


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: UserResponse = Depends(get_correct_user_or_admin)
):
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: UserResponse = Depends(get_correct_user_or_admin)
):
    """Body can include: { firstName, lastName, password, email }"""
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return user_crud.update(db, username, data)


@router.delete("/{username}")
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: UserResponse = Depends(get_correct_user_or_admin)
):
    user_crud.remove(db, username)
    logger.info(f"User {current_user.username} deleted user {username}")
    return {"deleted": username}
