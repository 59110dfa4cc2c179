import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobDeleteResponse, JobResponse, JobUpdateRequest
from app.schemas.user import UserResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """
    Create a new job posting.

    Body: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    return job_crud.create(db, request)


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive partial match on title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[str] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Filters:
    - title: case-insensitive, partial matches
    - minSalary: salary at or above this amount
    - hasEquity: only the exact value "true" restricts to jobs with
      non-zero equity; any other value is ignored

    Authorization required: none
    """
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    return job_crud.find_all(db, filters)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """
    Partially update a job.

    Body can include: { title, salary, equity, companyHandle }

    Authorization required: admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return job_crud.update(db, job_id, data)


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    deleted = job_crud.remove(db, job_id)
    logger.info(f"Admin {admin_user.username} deleted job {job_id}")
    return {"deleted": deleted}
