"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context:
- get_current_user: any logged-in user
- get_admin_user: logged-in admin
- get_correct_user_or_admin: admin, or the user named in the path
"""

import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.security import decode_token
from app.crud import user as user_crud
from app.schemas.user import UserResponse

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> UserResponse:
    """
    Extract and validate the current user from JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Fetches the user from the database

    Raises:
        HTTPException 401: If token is missing, invalid, or user not found
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_token(credentials.credentials)
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    try:
        return UserResponse.model_validate(user_crud.get(db, username))
    except NotFoundError:
        raise credentials_exception


async def get_admin_user(
    user: UserResponse = Depends(get_current_user),
) -> UserResponse:
    """
    Require the current user to be an admin.

    Raises:
        HTTPException 403: If the user is not an admin
    """
    if not user.is_admin:
        logger.warning(f"Non-admin user {user.username} denied admin route")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return user


async def get_correct_user_or_admin(
    username: str,
    user: UserResponse = Depends(get_current_user),
) -> UserResponse:
    """
    Require an admin, or the user whose ``username`` is in the route path.

    Raises:
        HTTPException 403: If neither condition holds
    """
    if not (user.is_admin or user.username == username):
        logger.warning(f"User {user.username} denied access to user {username}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access this user"
        )
    return user
