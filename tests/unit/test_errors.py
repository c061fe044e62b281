"""Unit tests for error classification utilities."""

import pytest

from agenda.core.db_client import DatabaseError, RecordNotFoundError
from agenda.core.errors import ErrorCode, ErrorSeverity, classify_error_with_response, http_status_for


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    @pytest.mark.parametrize(
        ("collection", "code"),
        [
            ("tasks", ErrorCode.ERR_TASK_NOT_FOUND),
            ("users", ErrorCode.ERR_USER_NOT_FOUND),
            ("calendar_events", ErrorCode.ERR_EVENT_NOT_FOUND),
            ("novelties", ErrorCode.ERR_NOVELTY_NOT_FOUND),
        ],
    )
    def test_record_not_found_per_collection(self, collection, code):
        """Test missing records are classified by collection."""
        response = classify_error_with_response(RecordNotFoundError(f"Record not found in {collection}: abc"))

        assert response.code == code
        assert response.severity == ErrorSeverity.LOW
        assert http_status_for(response) == 404

    def test_permission_error(self):
        """Test permission failures map to 403."""
        response = classify_error_with_response(PermissionError("User u1 is not authorized to move tasks"))

        assert response.code == ErrorCode.ERR_PERMISSION_DENIED
        assert "owner or admin" in response.suggestion
        assert http_status_for(response) == 403

    def test_status_value_error(self):
        """Test rejected status changes map to an invalid transition."""
        response = classify_error_with_response(ValueError("Cannot set status 'archived' on a task directly"))

        assert response.code == ErrorCode.ERR_INVALID_STATUS_TRANSITION
        assert http_status_for(response) == 400

    def test_schedule_value_error(self):
        """Test other value errors are treated as invalid scheduling data."""
        response = classify_error_with_response(ValueError("Invalid month: 13"))

        assert response.code == ErrorCode.ERR_INVALID_SCHEDULE
        assert http_status_for(response) == 400

    def test_database_error(self):
        """Test persistence failures are high severity server errors."""
        response = classify_error_with_response(DatabaseError("Failed to create record in tasks: disk full"))

        assert response.code == ErrorCode.ERR_PERSISTENCE_FAILURE
        assert response.severity == ErrorSeverity.HIGH
        assert http_status_for(response) == 500

    def test_unknown_error(self):
        """Test unrecognized errors fall back to ERR_UNKNOWN."""
        response = classify_error_with_response(Exception("Something odd happened"))

        assert response.code == ErrorCode.ERR_UNKNOWN
        assert http_status_for(response) == 500
