"""
Document Service Layer
Student document uploads and the faculty review workflow
"""

from typing import List, Optional, Dict, Any
from pathlib import Path
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthorizationError, DocumentNotFoundError, ValidationError
from app.core.logging_config import logger
from app.models.user import User, UserRole
from app.models.document import Document, DocumentFeedback, DocumentType, DocumentStatus
from app.modules.auth.permissions import (
    DOCUMENT_TRANSITIONS, DOCUMENT_REVIEWERS, authorize_transition, require_role
)


REVIEW_QUEUE_STATUSES = (DocumentStatus.SUBMITTED, DocumentStatus.UNDER_REVIEW)


def validate_rating(rating: Optional[int]) -> None:
    """Ratings are optional, but when present must be 1-5"""
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5", field="rating")


class DocumentService:
    """Service for student documents and their review"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_document(self, document_id: str) -> Document:
        result = await self.db.execute(
            select(Document).where(Document.id == document_id)
        )
        document = result.scalar_one_or_none()
        if not document:
            raise DocumentNotFoundError(document_id)
        return document

    # =====================================================
    # UPLOAD & LISTING
    # =====================================================

    async def create_document(
        self,
        owner: User,
        doc_type: DocumentType,
        file_path: str,
        file_name: str,
        company_name: Optional[str] = None,
        internship_domain: Optional[str] = None
    ) -> Document:
        """Register an uploaded file as a draft document"""
        require_role(owner, {UserRole.STUDENT}, "upload documents")

        extension = Path(file_name).suffix.lstrip(".").lower()
        if extension not in settings.ALLOWED_DOCUMENT_EXTENSIONS:
            raise ValidationError(
                f"File type '.{extension}' is not allowed. "
                f"Allowed: {', '.join(settings.ALLOWED_DOCUMENT_EXTENSIONS)}",
                field="file_name"
            )

        # Re-uploads of the same document type get the next version number
        result = await self.db.execute(
            select(func.count(Document.id)).where(
                Document.user_id == owner.id,
                Document.doc_type == doc_type
            )
        )
        version = (result.scalar() or 0) + 1

        document = Document(
            user_id=owner.id,
            doc_type=doc_type,
            status=DocumentStatus.DRAFT,
            file_path=file_path,
            file_name=file_name,
            version=version,
            company_name=company_name,
            internship_domain=internship_domain
        )
        self.db.add(document)
        await self.db.commit()
        await self.db.refresh(document)

        logger.info(
            f"Document {document.id} uploaded by {owner.id} ({doc_type.value} v{version})",
            extra={"event_type": "document_upload", "document_id": str(document.id), "doc_type": doc_type.value}
        )
        return document

    async def list_documents(self, owner: User, doc_type: Optional[DocumentType] = None) -> List[Document]:
        """A user's own documents, optionally of one type"""
        query = select(Document).where(Document.user_id == owner.id)
        if doc_type:
            query = query.where(Document.doc_type == doc_type)

        result = await self.db.execute(query.order_by(Document.created_at, Document.id))
        return list(result.scalars().all())

    async def get_documents_for_review(self) -> List[Document]:
        """Submitted and under-review documents, newest first"""
        result = await self.db.execute(
            select(Document)
            .where(Document.status.in_(REVIEW_QUEUE_STATUSES))
            .order_by(Document.created_at.desc(), Document.id.desc())
        )
        return list(result.scalars().all())

    async def get_document_statistics(self) -> Dict[str, Any]:
        result = await self.db.execute(
            select(Document.doc_type, Document.status, func.count(Document.id))
            .group_by(Document.doc_type, Document.status)
        )

        stats = {"total": 0, "pending": 0, "approved": 0, "rejected": 0, "by_type": {}}
        for doc_type, status, count in result.all():
            stats["total"] += count
            if status in REVIEW_QUEUE_STATUSES:
                stats["pending"] += count
            elif status == DocumentStatus.APPROVED:
                stats["approved"] += count
            elif status == DocumentStatus.REJECTED:
                stats["rejected"] += count
            stats["by_type"][doc_type.value] = stats["by_type"].get(doc_type.value, 0) + count

        return stats

    # =====================================================
    # REVIEW WORKFLOW
    # =====================================================

    async def update_document_status(
        self,
        actor: User,
        document_id: str,
        status: DocumentStatus,
        feedback: Optional[str] = None,
        rating: Optional[int] = None
    ) -> Document:
        """
        Move a document to a new status.

        Students may only submit their own drafts. Faculty and admins may set
        any status. Feedback from a reviewer is appended as a DocumentFeedback
        row in the same commit.
        """
        document = await self.get_document(document_id)
        try:
            target = DocumentStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown document status '{status}'", field="status")
        validate_rating(rating)
        if feedback is not None:
            feedback = feedback.strip()
            if not feedback:
                raise ValidationError("Feedback text is required", field="feedback")
        if rating is not None and not feedback:
            raise ValidationError("A rating needs feedback text", field="rating")

        try:
            authorize_transition(
                DOCUMENT_TRANSITIONS, "document", actor,
                document.status, target, owner_id=document.user_id
            )
        except AuthorizationError:
            logger.warning(
                f"Document status change refused for {actor.id} on {document.id}",
                extra={"event_type": "transition_refused", "document_id": str(document.id), "target": target.value}
            )
            raise

        previous = document.status
        document.status = target

        if feedback and actor.role in DOCUMENT_REVIEWERS:
            self.db.add(DocumentFeedback(
                document_id=document.id,
                faculty_id=actor.id,
                feedback=feedback,
                rating=rating
            ))

        await self.db.commit()
        await self.db.refresh(document)

        logger.log_transition(
            "document", str(document.id),
            previous.value if previous else None, target.value, str(actor.id)
        )
        return document

    async def add_feedback(
        self,
        actor: User,
        document_id: str,
        feedback: str,
        rating: Optional[int] = None
    ) -> DocumentFeedback:
        """Append a review note without changing the document status"""
        require_role(actor, DOCUMENT_REVIEWERS, "leave document feedback")
        document = await self.get_document(document_id)

        if not feedback or not feedback.strip():
            raise ValidationError("Feedback text is required", field="feedback")
        validate_rating(rating)

        entry = DocumentFeedback(
            document_id=document.id,
            faculty_id=actor.id,
            feedback=feedback.strip(),
            rating=rating
        )
        self.db.add(entry)
        await self.db.commit()
        await self.db.refresh(entry)
        return entry

    async def list_feedback(self, actor: User, document_id: str) -> List[DocumentFeedback]:
        """Feedback on a document, newest first. Visible to the owner and reviewers."""
        document = await self.get_document(document_id)
        if actor.role not in DOCUMENT_REVIEWERS and str(document.user_id) != str(actor.id):
            raise AuthorizationError("You can only view feedback on your own documents")

        result = await self.db.execute(
            select(DocumentFeedback)
            .where(DocumentFeedback.document_id == document.id)
            .order_by(DocumentFeedback.created_at.desc(), DocumentFeedback.id.desc())
        )
        return list(result.scalars().all())


def get_document_service(db: AsyncSession) -> DocumentService:
    """Factory function to create document service"""
    return DocumentService(db)
