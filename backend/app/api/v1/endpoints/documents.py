"""
Document API - Student uploads and faculty review
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.models.user import User
from app.models.document import DocumentType
from app.modules.auth.dependencies import get_current_user, get_current_faculty
from app.schemas.document import (
    DocumentCreate,
    DocumentStatusUpdate,
    DocumentResponse,
    FeedbackCreate,
    FeedbackResponse,
    DocumentStatistics,
)
from app.services.document_service import get_document_service

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Register an uploaded document as a draft"""
    service = get_document_service(db)
    return await service.create_document(
        current_user,
        data.doc_type,
        data.file_path,
        data.file_name,
        company_name=data.company_name,
        internship_domain=data.internship_domain
    )


@router.get("", response_model=List[DocumentResponse])
async def list_my_documents(
    doc_type: Optional[DocumentType] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_document_service(db)
    return await service.list_documents(current_user, doc_type)


@router.get("/review", response_model=List[DocumentResponse])
async def review_queue(
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    """Submitted and under-review documents, newest first"""
    service = get_document_service(db)
    return await service.get_documents_for_review()


@router.get("/statistics", response_model=DocumentStatistics)
async def document_statistics(
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_document_service(db)
    return await service.get_document_statistics()


@router.patch("/{document_id}/status", response_model=DocumentResponse)
async def update_document_status(
    document_id: str,
    data: DocumentStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Change a document's status.
    Students submit their own drafts. Faculty and admins may set any status.
    """
    service = get_document_service(db)
    return await service.update_document_status(
        current_user, document_id, data.status,
        feedback=data.feedback, rating=data.rating
    )


@router.get("/{document_id}/feedback", response_model=List[FeedbackResponse])
async def list_document_feedback(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_document_service(db)
    return await service.list_feedback(current_user, document_id)


@router.post("/{document_id}/feedback", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def add_document_feedback(
    document_id: str,
    data: FeedbackCreate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_document_service(db)
    return await service.add_feedback(current_user, document_id, data.feedback, data.rating)
