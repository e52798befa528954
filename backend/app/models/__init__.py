# Re-export all models for convenient imports
from app.models.user import User, UserRole
from app.models.document import Document, DocumentFeedback, DocumentType, DocumentStatus
from app.models.allocation import FacultyAllocation, AllocationStatus
from app.models.internship import (
    Internship, InternshipApplication, InternshipType, InternshipCategory, ApplicationStatus
)
from app.models.tech_session import TechSession, SessionRegistration, SessionCategory, SessionStatus
from app.models.resource import LearningResource, ResourceType

__all__ = [
    # User
    "User",
    "UserRole",
    # Documents
    "Document",
    "DocumentFeedback",
    "DocumentType",
    "DocumentStatus",
    # Allocation
    "FacultyAllocation",
    "AllocationStatus",
    # Internships
    "Internship",
    "InternshipApplication",
    "InternshipType",
    "InternshipCategory",
    "ApplicationStatus",
    # Tech sessions
    "TechSession",
    "SessionRegistration",
    "SessionCategory",
    "SessionStatus",
    # Learning resources
    "LearningResource",
    "ResourceType",
]
