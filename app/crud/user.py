"""
CRUD operations for users.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

JS_TO_SQL = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}

UPDATABLE_COLUMNS = frozenset({"password", "first_name", "last_name", "email"})


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    row = run_query(
        db, f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1", [username]
    ).mappings().first()

    if row is None or not verify_password(password, row["password"]):
        logger.warning(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")

    user = dict(row)
    del user["password"]
    return user


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    duplicate = run_query(
        db, "SELECT username FROM users WHERE username = $1", [user_data.username]
    ).first()
    if duplicate is not None:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    result = run_query(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            user_data.username,
            get_password_hash(user_data.password),
            user_data.first_name,
            user_data.last_name,
            user_data.email,
            is_admin,
        ],
    )
    user = dict(result.mappings().first())
    db.commit()

    logger.info(f"Registered user {user['username']} (admin: {is_admin})")
    return user


def find_all(db: Session) -> List[Dict[str, Any]]:
    result = run_query(db, f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    return [dict(row) for row in result.mappings().all()]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    user = run_query(
        db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username]
    ).mappings().first()
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return dict(user)


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user.

    Data can include: {firstName, lastName, password, email}. A new
    password is hashed before it is stored.

    Raises:
        BadRequestError: If ``data`` is empty
        NotFoundError: If no user has this username
    """
    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    update_sql = sql_for_partial_update(data, JS_TO_SQL, allowed_columns=UPDATABLE_COLUMNS)
    username_var_idx = f"${len(update_sql.values) + 1}"

    result = run_query(
        db,
        f"""UPDATE users
            SET {update_sql.set_cols}
            WHERE username = {username_var_idx}
            RETURNING {USER_COLUMNS}""",
        [*update_sql.values, username],
    )
    user = result.mappings().first()
    if user is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    user = dict(user)
    db.commit()
    logger.info(f"Updated user {username}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    result = run_query(
        db, "DELETE FROM users WHERE username = $1 RETURNING username", [username]
    )
    if result.first() is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")
