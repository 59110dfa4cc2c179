from pydantic import BaseModel, Field
from typing import Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """Schema for a partial job update. Omitted fields are left unchanged."""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(None, min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        populate_by_name = True


class JobDeleted(BaseModel):
    id: int
    title: str


class JobDeleteResponse(BaseModel):
    """Schema for job deletion response"""
    deleted: JobDeleted
