"""
Company endpoints.

Reads are public; writes require an admin token.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)
from app.schemas.user import UserResponse

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """Create a company. Authorization required: admin"""
    return company_crud.create(db, request)


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    name: Optional[str] = Query(None, description="Case-insensitive partial match on name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered by name and employee count.

    minEmployees and maxEmployees are exclusive bounds; a minimum above the
    maximum is rejected with 400.
    """
    filters = {"name": name, "minEmployees": min_employees, "maxEmployees": max_employees}
    return company_crud.find_all(db, filters)


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """
    Partially update a company.

    Body can include: { name, description, numEmployees, logoUrl }
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return company_crud.update(db, handle, data)


@router.delete("/{handle}")
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: UserResponse = Depends(get_admin_user)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin_user.username} deleted company {handle}")
    return {"deleted": handle}
