"""
Internship API - Postings and student applications
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.models.user import User
from app.models.internship import InternshipType, InternshipCategory
from app.modules.auth.dependencies import get_current_user, get_current_faculty, get_current_student
from app.schemas.internship import (
    InternshipCreate,
    InternshipUpdate,
    InternshipResponse,
    InternshipListResponse,
    ApplicationCreate,
    ApplicationStatusUpdate,
    ApplicationResponse,
)
from app.services.internship_service import get_internship_service
from app.services.application_service import get_application_service

router = APIRouter(prefix="/internships", tags=["Internships"])


# ============================================
# Application Endpoints
# ============================================

@router.get("/applications/mine", response_model=List[ApplicationResponse])
async def my_applications(
    current_user: User = Depends(get_current_student),
    db: AsyncSession = Depends(get_db)
):
    service = get_application_service(db)
    return await service.list_student_applications(current_user)


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_application_service(db)
    return await service.get_application(current_user, application_id)


@router.patch("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    data: ApplicationStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Withdraw (student), accept or reject (internship creator), or override (admin).
    """
    service = get_application_service(db)
    return await service.update_application_status(
        current_user, application_id, data.status, feedback=data.feedback
    )


@router.delete("/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_application_service(db)
    await service.delete_application(current_user, application_id)


# ============================================
# Internship Endpoints
# ============================================

@router.post("", response_model=InternshipResponse, status_code=status.HTTP_201_CREATED)
async def create_internship(
    data: InternshipCreate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_internship_service(db)
    return await service.create_internship(current_user, data.model_dump())


@router.get("", response_model=InternshipListResponse)
async def list_internships(
    internship_type: Optional[InternshipType] = None,
    category: Optional[InternshipCategory] = None,
    search: Optional[str] = None,
    mine: bool = False,
    sort_by: str = Query("deadline"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List internships with filters. ``mine=true`` limits to the caller's postings."""
    service = get_internship_service(db)
    return await service.list_internships(
        internship_type=internship_type,
        category=category,
        search=search,
        created_by=current_user.id if mine else None,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit
    )


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(
    internship_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_internship_service(db)
    return await service.get_internship(internship_id)


@router.put("/{internship_id}", response_model=InternshipResponse)
async def update_internship(
    internship_id: str,
    data: InternshipUpdate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_internship_service(db)
    return await service.update_internship(current_user, internship_id, data.model_dump(exclude_unset=True))


@router.delete("/{internship_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_internship(
    internship_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_internship_service(db)
    await service.delete_internship(current_user, internship_id)


@router.post("/{internship_id}/apply", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_for_internship(
    internship_id: str,
    data: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Apply before the deadline. A resume is required."""
    service = get_application_service(db)
    return await service.apply(
        current_user,
        internship_id,
        phone=data.phone,
        semester=data.semester,
        degree_program=data.degree_program,
        resume_path=data.resume_path,
        cover_letter=data.cover_letter
    )


@router.get("/{internship_id}/applications", response_model=List[ApplicationResponse])
async def internship_applications(
    internship_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_application_service(db)
    return await service.list_internship_applications(current_user, internship_id)
