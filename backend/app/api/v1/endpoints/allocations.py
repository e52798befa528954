"""
Allocation API - Faculty mentor assignment endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.models.user import User
from app.modules.auth.dependencies import get_current_user, get_current_faculty, get_current_student
from app.schemas.allocation import (
    AllocationCreate,
    AllocationResponse,
    FacultyWorkload,
    UnallocatedStudent,
    BulkAllocationResult,
)
from app.schemas.user import MentorResponse
from app.services.allocation_service import get_allocation_service

router = APIRouter(prefix="/allocations", tags=["Allocations"])


@router.post("", response_model=AllocationResponse, status_code=status.HTTP_201_CREATED)
async def create_allocation(
    data: AllocationCreate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    """Manually assign a student to a faculty mentor"""
    service = get_allocation_service(db)
    return await service.create_allocation(data.faculty_id, data.student_id)


@router.get("", response_model=List[AllocationResponse])
async def list_allocations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Allocations visible to the current user"""
    service = get_allocation_service(db)
    return await service.get_allocations(current_user)


@router.get("/mentor", response_model=MentorResponse)
async def my_mentor(
    current_user: User = Depends(get_current_student),
    db: AsyncSession = Depends(get_db)
):
    """The current student's faculty mentor, or null when unallocated"""
    service = get_allocation_service(db)
    return {"mentor": await service.get_faculty_for_student(current_user.id)}


@router.post("/auto-allocate/{student_id}", response_model=AllocationResponse)
async def auto_allocate_student(
    student_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    """Run the tiered auto-allocation for one student"""
    service = get_allocation_service(db)
    allocation = await service.allocate_student(student_id)
    if not allocation:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No faculty member has remaining capacity"
        )
    return allocation


@router.get("/unallocated-students", response_model=List[UnallocatedStudent])
async def list_unallocated_students(
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_allocation_service(db)
    return await service.get_unallocated_students()


@router.post("/bulk-allocate", response_model=BulkAllocationResult)
async def bulk_allocate(
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    """Auto-allocate every unallocated student, one after another"""
    service = get_allocation_service(db)
    return await service.bulk_allocate_students()


@router.get("/faculty-workloads", response_model=List[FacultyWorkload])
async def faculty_workloads(
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_allocation_service(db)
    return await service.get_faculty_workloads()


@router.patch("/{allocation_id}/complete", response_model=AllocationResponse)
async def complete_allocation(
    allocation_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    """Close a mentorship, freeing the faculty's capacity"""
    service = get_allocation_service(db)
    return await service.complete_allocation(allocation_id)
