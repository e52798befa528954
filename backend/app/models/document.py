from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class DocumentType(str, enum.Enum):
    """Document types a student can upload"""
    OFFER_LETTER = "offer_letter"
    MONTHLY_REPORT = "monthly_report"
    ATTENDANCE = "attendance"


class DocumentStatus(str, enum.Enum):
    """Review states of a document. DRAFT is the initial state."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class Document(Base):
    """Document uploaded by a student"""
    __tablename__ = "documents"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    doc_type = Column(SQLEnum(DocumentType), nullable=False)
    status = Column(SQLEnum(DocumentStatus), default=DocumentStatus.DRAFT, nullable=False)

    # File details (storage key or local path)
    file_path = Column(Text, nullable=False)
    file_name = Column(String(500), nullable=False)
    version = Column(Integer, default=1)

    # Offer letter details
    company_name = Column(String(255), nullable=True, index=True)
    internship_domain = Column(String(255), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User")
    feedback = relationship("DocumentFeedback", back_populates="document", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Document {self.doc_type.value if self.doc_type else '-'} {self.status.value if self.status else '-'}>"


class DocumentFeedback(Base):
    """Append-only review note left by faculty on a document"""
    __tablename__ = "document_feedback"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_document_feedback_rating"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    document_id = Column(GUID, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    faculty_id = Column(GUID, ForeignKey("users.id"), nullable=False)

    feedback = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    document = relationship("Document", back_populates="feedback")

    def __repr__(self):
        return f"<DocumentFeedback doc={self.document_id} faculty={self.faculty_id}>"
