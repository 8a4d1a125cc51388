"""Error Hierarchy — status codes and REST envelope shape."""

from mini_notes.core.errors import (
    AccountDeletionError,
    ConflictError,
    ForbiddenError,
    InputValidationError,
    InvalidCredentialsError,
    RateLimitedError,
    ResourceNotFoundError,
)


def test_status_codes():
    assert InputValidationError("bad", field="title").http_status == 400
    assert InvalidCredentialsError().http_status == 401
    assert ForbiddenError("no").http_status == 403
    assert ResourceNotFoundError("Note", "1").http_status == 404
    assert ConflictError("taken", "EMAIL_TAKEN").http_status == 409
    assert RateLimitedError("slow down").http_status == 429
    assert AccountDeletionError().http_status == 500


def test_envelope_shape():
    body = ConflictError("taken", "EMAIL_TAKEN").to_response()["error"]
    assert body["code"] == "EMAIL_TAKEN"
    assert body["message"] == "taken"
    assert body["category"] == "conflict"
    assert "timestamp" in body
    assert "details" not in body


def test_validation_error_carries_field_details():
    body = InputValidationError("required", field="tosAccepted").to_response()["error"]
    assert body["details"] == [
        {"field": "tosAccepted", "message": "required", "type": "value_error"},
    ]


def test_invalid_credentials_message_is_generic():
    assert InvalidCredentialsError().message == "Email or password is incorrect"


def test_validation_field_names_drop_request_part():
    from mini_notes.api.error_handlers import field_name

    assert field_name(("body", "tosAccepted")) == "tosAccepted"
    assert field_name(("query", "sortBy")) == "sortBy"
    assert field_name(("body",)) == "body"
    assert field_name(("body", "notes", 0, "title")) == "notes.0.title"
