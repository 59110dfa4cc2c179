"""
Authentication endpoints.

- POST /token: exchange username/password for a JWT
- POST /register: create a (non-admin) account and return a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT.

    The token is used as `Authorization: Bearer <token>` on protected routes.
    """
    user = UserResponse.model_validate(user_crud.authenticate(db, request.username, request.password))
    logger.info(f"User logged in: {user.username}")
    return TokenResponse(token=create_token_for_user(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    New accounts are never admins. Returns a JWT for immediate use.
    """
    user = UserResponse.model_validate(user_crud.register(db, request))
    return TokenResponse(token=create_token_for_user(user))
