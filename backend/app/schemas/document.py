"""
Document Schemas - Pydantic models for document upload and review
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import datetime

from app.models.document import DocumentType, DocumentStatus


class DocumentCreate(BaseModel):
    """Register an uploaded file"""
    doc_type: DocumentType
    file_path: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1, max_length=500)
    company_name: Optional[str] = Field(None, max_length=255)
    internship_domain: Optional[str] = Field(None, max_length=255)


class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus
    feedback: Optional[str] = None
    rating: Optional[int] = None


class DocumentResponse(BaseModel):
    id: str
    user_id: str
    doc_type: DocumentType
    status: DocumentStatus
    file_path: str
    file_name: str
    version: int
    company_name: Optional[str] = None
    internship_domain: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FeedbackCreate(BaseModel):
    feedback: str = Field(..., min_length=1)
    rating: Optional[int] = None


class FeedbackResponse(BaseModel):
    id: str
    document_id: str
    faculty_id: str
    feedback: str
    rating: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class DocumentStatistics(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    by_type: Dict[str, int]
