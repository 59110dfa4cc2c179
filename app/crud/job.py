"""
CRUD operations for jobs.

Statements are written as parameterized SQL; the dynamic parts (SET clause
for updates, WHERE clause for searches) come from app.core.sql.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_job_filters, sql_for_partial_update
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# domain field name -> column name, for fields whose names differ
JS_TO_SQL = {"companyHandle": "company_handle"}

UPDATABLE_COLUMNS = frozenset({"title", "salary", "equity", "company_handle"})


def _ensure_company(db: Session, handle: str) -> None:
    result = run_query(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if result.first() is None:
        raise BadRequestError(f"No company: {handle}")


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If the company does not exist
    """
    _ensure_company(db, job_data.company_handle)

    result = run_query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    )
    job = dict(result.mappings().first())
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    Find jobs, optionally filtered.

    Args:
        db: Database session
        filters: Any of {title, minSalary, hasEquity}; see sql_for_job_filters

    Returns:
        [{id, title, salary, equity, companyHandle}, ...] ordered by title
    """
    where_sql, values = sql_for_job_filters(filters or {})
    result = run_query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            {where_sql}
            ORDER BY title, id""",
        values,
    )
    return [dict(row) for row in result.mappings().all()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    result = run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    job = result.mappings().first()
    if job is None:
        raise NotFoundError(f"No job with id = {job_id}")
    return dict(job)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Only fields present in ``data`` change. Keys are domain field names:
    {title, salary, equity, companyHandle}.

    Returns:
        {id, title, salary, equity, companyHandle}

    A missing job is reported before an unknown company.

    Raises:
        BadRequestError: If ``data`` is empty or names an unknown company
        NotFoundError: If no job has this id
    """
    update_sql = sql_for_partial_update(data, JS_TO_SQL, allowed_columns=UPDATABLE_COLUMNS)

    exists = run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]).first()
    if exists is None:
        raise NotFoundError(f"No job with id = {job_id}")
    if "companyHandle" in data:
        _ensure_company(db, data["companyHandle"])

    id_var_idx = f"${len(update_sql.values) + 1}"
    result = run_query(
        db,
        f"""UPDATE jobs
            SET {update_sql.set_cols}
            WHERE id = {id_var_idx}
            RETURNING {JOB_COLUMNS}""",
        [*update_sql.values, job_id],
    )
    job = result.mappings().first()
    if job is None:
        db.rollback()
        raise NotFoundError(f"No job with id = {job_id}")

    job = dict(job)
    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Delete a job by ID.

    Returns:
        {id, title}

    Raises:
        NotFoundError: If no job has this id
    """
    result = run_query(
        db,
        "DELETE FROM jobs WHERE id = $1 RETURNING id, title",
        [job_id],
    )
    job = result.mappings().first()
    if job is None:
        db.rollback()
        raise NotFoundError(f"No job with id = {job_id}")

    job = dict(job)
    db.commit()
    logger.info(f"Deleted job {job_id}")
    return job
