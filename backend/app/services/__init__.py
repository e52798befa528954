# Services module
from app.services.allocation_service import AllocationService, MAX_STUDENTS_PER_FACULTY, get_allocation_service
from app.services.document_service import DocumentService, get_document_service
from app.services.internship_service import InternshipService, get_internship_service
from app.services.application_service import ApplicationService, get_application_service
from app.services.tech_session_service import TechSessionService, get_tech_session_service
from app.services.resource_service import ResourceService, get_resource_service
from app.services.user_service import UserService, get_user_service

__all__ = [
    "AllocationService",
    "MAX_STUDENTS_PER_FACULTY",
    "get_allocation_service",
    "DocumentService",
    "get_document_service",
    "InternshipService",
    "get_internship_service",
    "ApplicationService",
    "get_application_service",
    "TechSessionService",
    "get_tech_session_service",
    "ResourceService",
    "get_resource_service",
    "UserService",
    "get_user_service",
]
