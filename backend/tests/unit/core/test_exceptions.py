"""
Unit Tests for the exception hierarchy and error payloads
"""
from app.core.exceptions import (
    InternTrackError,
    AuthorizationError,
    DocumentNotFoundError,
    InvalidTransitionError,
    DeadlinePassedError,
    DuplicateApplicationError,
    SessionFullError,
    ValidationError,
    error_response,
)
from app.models.document import DocumentStatus


class TestStatusCodes:

    def test_status_codes(self):
        assert AuthorizationError().status_code == 403
        assert DocumentNotFoundError("abc").status_code == 404
        assert ValidationError("bad").status_code == 400
        assert InvalidTransitionError("document", "draft", "approved").status_code == 409
        assert SessionFullError("s1", 30).status_code == 409

    def test_deadline_is_a_validation_error(self):
        error = DeadlinePassedError("i1", "2024-03-01")

        assert isinstance(error, ValidationError)
        assert error.code == "DEADLINE_PASSED"
        assert error.details["field"] == "deadline"
        assert error.details["internship_id"] == "i1"

    def test_all_errors_share_base(self):
        assert issubclass(DuplicateApplicationError, InternTrackError)


class TestPayloads:

    def test_not_found_payload(self):
        body = error_response(DocumentNotFoundError("abc"))

        assert body == {
            "success": False,
            "error": {
                "code": "DOCUMENT_NOT_FOUND",
                "message": "Document with ID 'abc' not found",
                "details": {"resource_type": "Document", "resource_id": "abc"},
            },
        }

    def test_transition_accepts_enums(self):
        error = InvalidTransitionError("document", DocumentStatus.REJECTED, DocumentStatus.SUBMITTED)

        assert error.details["current_status"] == "rejected"
        assert error.details["target_status"] == "submitted"
        assert "rejected" in error.message
