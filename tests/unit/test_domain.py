"""Unit tests for domain entities, value objects, enums and exceptions."""

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.entities.document import Document
from app.domain.entities.session import Session
from app.domain.enums import AuthErrorReason
from app.domain.exceptions import (
    AuthenticationException,
    CasefileException,
    LoginRequiredException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.core import DocumentFields, StoredFile
from app.infrastructure.exceptions import RecordStoreException, StorageDeleteError
from tests.fakes import make_document, make_fields


class TestDocumentFields:
    def test_strips_text_fields(self) -> None:
        fields = make_fields(complainant_name="  Somchai ", notes="  note ")
        assert fields.complainant_name == "Somchai"
        assert fields.notes == "note"

    @pytest.mark.parametrize("name", ["complainant_name", "subject", "source"])
    def test_blank_required_field_raises(self, name: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_fields(**{name: "   "})
        assert exc_info.value.field == name
        assert exc_info.value.rule == "required"

    def test_naive_received_date_is_invalid(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_fields(received_date=datetime(2024, 1, 1))
        assert exc_info.value.field == "received_date"
        assert exc_info.value.rule == "invalid"

    def test_notes_default_to_empty(self) -> None:
        fields = DocumentFields("A", "B", "C", datetime(2024, 1, 1, tzinfo=UTC))
        assert fields.notes == ""


class TestStoredFile:
    def test_all_parts_required(self) -> None:
        with pytest.raises(ValidationException):
            StoredFile("a.pdf", "", "documents/x/1.pdf")


class TestDocument:
    def test_requires_id(self) -> None:
        with pytest.raises(ValidationException):
            Document.from_fields("", make_fields())

    def test_from_fields_keeps_given_file(self) -> None:
        stored = StoredFile("a.pdf", "https://files.test/a", "documents/d/1.pdf")
        edited = Document.from_fields("d", make_fields(subject="New subject"), file=stored)
        assert edited.id == "d"
        assert edited.file == stored
        assert edited.subject == "New subject"

    def test_has_file(self) -> None:
        doc = make_document("d")
        assert not doc.has_file
        assert doc.with_file(StoredFile("a", "b", "c")).has_file

    def test_fields_round_trip(self) -> None:
        fields = make_fields(notes="n")
        assert Document.from_fields("d", fields).fields() == fields


class TestSession:
    def test_requires_uid(self) -> None:
        with pytest.raises(ValidationException):
            Session(uid="", email="a@b.c", expires_at=datetime.now(UTC))

    def test_expiry(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=UTC)
        session = Session(uid="u", email="a@b.c", expires_at=now + timedelta(minutes=5))
        assert not session.is_expired(now)
        assert session.is_expired(now + timedelta(minutes=5))


class TestExceptions:
    def test_validation_exception_details(self) -> None:
        exc = ValidationException("Passwords do not match", field="confirm_password", rule="mismatch")
        assert exc.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "Passwords do not match",
            "details": {"rule": "mismatch", "field": "confirm_password"},
        }

    def test_authentication_exception_keeps_reason(self) -> None:
        exc = AuthenticationException(AuthErrorReason.WEAK_PASSWORD, "WEAK_PASSWORD")
        assert exc.reason is AuthErrorReason.WEAK_PASSWORD
        assert exc.details == {"reason": "weak_password", "provider_code": "WEAK_PASSWORD"}

    def test_default_reason_is_unknown(self) -> None:
        assert AuthenticationException().reason is AuthErrorReason.UNKNOWN

    def test_hierarchy(self) -> None:
        for exc in (
            LoginRequiredException("/documents"),
            ResourceNotFoundException("document", "x"),
            RecordStoreException("list", "boom"),
            StorageDeleteError("documents/x/1.pdf", "boom"),
        ):
            assert isinstance(exc, CasefileException)

    def test_error_code_defaults_to_class_name(self) -> None:
        assert CasefileException("x").error_code == "CasefileException"

    def test_auth_error_reason_values(self) -> None:
        assert AuthErrorReason.values() == [
            "invalid_credential",
            "email_in_use",
            "invalid_email",
            "too_many_attempts",
            "weak_password",
            "unknown",
        ]
