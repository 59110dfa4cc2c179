"""
CRUD operations for companies.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_company_filters, sql_for_partial_update
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

JS_TO_SQL = {"numEmployees": "num_employees", "logoUrl": "logo_url"}

UPDATABLE_COLUMNS = frozenset({"name", "description", "num_employees", "logo_url"})


def _ensure_name_available(db: Session, name: str, handle: str) -> None:
    # companies.name is unique; the company being updated may keep its own name
    taken = run_query(
        db,
        "SELECT handle FROM companies WHERE name = $1 AND handle <> $2",
        [name, handle],
    ).first()
    if taken is not None:
        raise BadRequestError(f"Duplicate company name: {name}")


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a company.

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If the handle or the name is already taken
    """
    duplicate = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [company_data.handle]
    ).first()
    if duplicate is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    _ensure_name_available(db, company_data.name, company_data.handle)

    result = run_query(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    )
    company = dict(result.mappings().first())
    db.commit()

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Find companies, optionally filtered by name, minEmployees and maxEmployees.

    Bounds are exclusive on both ends.

    Raises:
        BadRequestError: If minEmployees is greater than maxEmployees
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    # same truthiness as sql_for_company_filters: a zero bound is no bound
    if min_employees and max_employees and min_employees > max_employees:
        raise BadRequestError("Min employees cannot be greater than max")

    where_sql, values = sql_for_company_filters(filters)
    result = run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            {where_sql}
            ORDER BY name""",
        values,
    )
    return [dict(row) for row in result.mappings().all()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs: [{id, title, salary, equity}, ...]}

    Raises:
        NotFoundError: If no company has this handle
    """
    company = run_query(
        db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle]
    ).mappings().first()
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    jobs = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()

    return {**company, "jobs": [dict(job) for job in jobs]}


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Data can include: {name, description, numEmployees, logoUrl}

    A missing company is reported before any problem with ``data``'s
    values, such as a name already used by another company.

    Raises:
        BadRequestError: If ``data`` is empty or the new name is taken
        NotFoundError: If no company has this handle
    """
    update_sql = sql_for_partial_update(data, JS_TO_SQL, allowed_columns=UPDATABLE_COLUMNS)

    exists = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [handle]
    ).first()
    if exists is None:
        raise NotFoundError(f"No company: {handle}")
    if data.get("name") is not None:
        _ensure_name_available(db, data["name"], handle)

    handle_var_idx = f"${len(update_sql.values) + 1}"

    result = run_query(
        db,
        f"""UPDATE companies
            SET {update_sql.set_cols}
            WHERE handle = {handle_var_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*update_sql.values, handle],
    )
    company = result.mappings().first()
    if company is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(company)
    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the foreign key, its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    result = run_query(
        db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]
    )
    if result.first() is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
