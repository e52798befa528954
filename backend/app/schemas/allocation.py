"""
Allocation Schemas - Pydantic models for mentor allocation endpoints
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.allocation import AllocationStatus


class AllocationCreate(BaseModel):
    """Manually assign a student to a faculty member"""
    faculty_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)


class AllocationResponse(BaseModel):
    id: str
    faculty_id: str
    student_id: str
    status: AllocationStatus
    created_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FacultyWorkload(BaseModel):
    faculty_id: str
    name: str
    student_count: int


class UnallocatedStudent(BaseModel):
    id: str
    name: str
    email: Optional[str] = None


class BulkAllocationResult(BaseModel):
    success: int
    failed: int
