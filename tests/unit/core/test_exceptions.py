"""
Unit Tests for the error taxonomy
"""
from campus_portal.core.exceptions import (
    ForbiddenError,
    InvalidCredentialsError,
    MissingFieldsError,
    NotFoundError,
    ServerError,
    TokenExpiredError,
    UnauthorizedError,
    ValidationError,
)


class TestStatusCodes:

    def test_each_class_maps_to_its_status(self):
        assert ValidationError("bad").status_code == 400
        assert UnauthorizedError().status_code == 401
        assert TokenExpiredError().status_code == 401
        assert InvalidCredentialsError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError("Section", "abc").status_code == 404
        assert ServerError("boom").status_code == 500


class TestBodies:

    def test_missing_fields_listed(self):
        error = MissingFieldsError(["name", "icon"], "Name and icon are required")

        assert error.missing == ["name", "icon"]
        assert error.to_dict() == {
            "message": "Name and icon are required",
            "code": "VALIDATION_ERROR",
            "details": {"missing": ["name", "icon"]},
        }

    def test_missing_fields_default_message(self):
        assert MissingFieldsError(["query"]).message == "Missing required fields: query"

    def test_not_found_message_and_code(self):
        error = NotFoundError("Knowledge base entry", "42")

        assert error.message == "Knowledge base entry not found"
        assert error.code == "KNOWLEDGE_BASE_ENTRY_NOT_FOUND"

    def test_server_error_echoes_failure(self):
        body = ServerError("disk full").to_dict()

        assert body["message"] == "Server error"
        assert body["error"] == "disk full"

    def test_plain_errors_have_no_details(self):
        assert "details" not in ForbiddenError().to_dict()
