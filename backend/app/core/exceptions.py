"""
Custom Exceptions for InternTrack
=================================

Services raise these instead of HTTPException so they stay usable outside
the API layer. The API layer maps them to status codes in one place
(see ``app.main``).

Usage:
    from app.core.exceptions import DocumentNotFoundError, AuthorizationError

    if not document:
        raise DocumentNotFoundError(document_id)
"""

from typing import Optional, Any, Dict


class InternTrackError(Exception):
    """Base exception for all InternTrack errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(InternTrackError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(InternTrackError):
    """Actor role or ownership does not permit the action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(InternTrackError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class DocumentNotFoundError(ResourceNotFoundError):
    def __init__(self, document_id: str):
        super().__init__("Document", document_id)


class AllocationNotFoundError(ResourceNotFoundError):
    def __init__(self, allocation_id: str):
        super().__init__("Allocation", allocation_id)


class InternshipNotFoundError(ResourceNotFoundError):
    def __init__(self, internship_id: str):
        super().__init__("Internship", internship_id)


class ApplicationNotFoundError(ResourceNotFoundError):
    def __init__(self, application_id: str):
        super().__init__("Application", application_id)


class TechSessionNotFoundError(ResourceNotFoundError):
    def __init__(self, session_id: str):
        super().__init__("TechSession", session_id)


class LearningResourceNotFoundError(ResourceNotFoundError):
    def __init__(self, resource_id: str):
        super().__init__("LearningResource", resource_id)


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(InternTrackError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DeadlinePassedError(ValidationError):
    """Internship no longer accepts applications"""

    def __init__(self, internship_id: str, deadline: Any):
        super().__init__("The application deadline has passed", field="deadline")
        self.code = "DEADLINE_PASSED"
        self.details.update({"internship_id": internship_id, "deadline": str(deadline)})


# ============================================
# State Errors (409-type)
# ============================================

class InvalidTransitionError(InternTrackError):
    """Requested status is not reachable from the current status for this actor"""

    status_code = 409

    def __init__(self, entity: str, current: Any, target: Any, message: Optional[str] = None):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            message or f"Cannot move {entity} from '{current_value}' to '{target_value}'",
            code="INVALID_TRANSITION",
            details={"entity": entity, "current_status": current_value, "target_status": target_value}
        )


class ConflictError(InternTrackError):
    """Request conflicts with existing state"""

    status_code = 409

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class AllocationExistsError(ConflictError):
    """Student already has a mentor allocation"""

    def __init__(self, student_id: str, allocation_id: str):
        super().__init__(
            "Student is already allocated to a faculty member",
            code="ALREADY_ALLOCATED",
            details={"student_id": student_id, "allocation_id": allocation_id}
        )


class FacultyAtCapacityError(ConflictError):
    """Faculty member already mentors the maximum number of students"""

    def __init__(self, faculty_id: str, capacity: int):
        super().__init__(
            "Faculty member has no remaining mentoring capacity",
            code="FACULTY_AT_CAPACITY",
            details={"faculty_id": faculty_id, "capacity": capacity}
        )


class DuplicateApplicationError(ConflictError):
    """Student already has a pending application for the internship"""

    def __init__(self, internship_id: str, application_id: str):
        super().__init__(
            "You already have a pending application for this internship",
            code="DUPLICATE_APPLICATION",
            details={"internship_id": internship_id, "application_id": application_id}
        )


class SessionFullError(ConflictError):
    """Tech session reached its capacity"""

    def __init__(self, session_id: str, capacity: int):
        super().__init__(
            "This session is at capacity",
            code="SESSION_FULL",
            details={"session_id": session_id, "capacity": capacity}
        )


class AlreadyRegisteredError(ConflictError):
    def __init__(self, session_id: str):
        super().__init__(
            "You are already registered for this session",
            code="ALREADY_REGISTERED",
            details={"session_id": session_id}
        )


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: InternTrackError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
