# =============================================================================
# tests/test_validation.py - Input Check and Request Schema Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    BursaryClickRequest,
    LoginRequest,
    SignupRequest,
    UniversityIdRequest,
    UserProfile,
    UserRole,
    UserStatus,
)
from core.models.common import required_string
from lib.utils import is_non_blank, normalize_phone


# =============================================================================
# is_non_blank / required_string
# =============================================================================

class TestNonBlankCheck:
    """Tests for the required-text check every request schema runs."""

    def test_non_blank_string(self):
        assert is_non_blank("a@b.co") is True

    def test_surrounding_whitespace_is_fine(self):
        assert is_non_blank("  a@b.co  ") is True

    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 42, ["a"], {"a": 1}])
    def test_rejects_blank_or_non_string(self, value):
        assert is_non_blank(value) is False

    def test_required_string_passes_value_through(self):
        assert required_string("  a@b.co ") == "  a@b.co "

    @pytest.mark.parametrize("value", ["  ", None, 42])
    def test_required_string_raises(self, value):
        with pytest.raises(ValueError):
            required_string(value)


# =============================================================================
# normalize_phone
# =============================================================================

class TestNormalizePhone:
    """Tests for E.164-like phone detection."""

    @pytest.mark.parametrize("phone", ["+27123456789", "+1234567", "+123456789012345"])
    def test_accepts_e164(self, phone):
        assert normalize_phone(phone) == phone

    def test_trims_before_matching(self):
        assert normalize_phone("  +27123456789 ") == "+27123456789"

    @pytest.mark.parametrize(
        "phone",
        [
            "0123456789",         # no plus
            "+123456",            # 6 digits
            "+1234567890123456",  # 16 digits
            "+27 12 345 6789",    # spaces
            "+27-123-456",        # dashes
            "",
            None,
            27123456789,
        ],
    )
    def test_rejects_everything_else(self, phone):
        assert normalize_phone(phone) is None


# =============================================================================
# Request Schemas
# =============================================================================

class TestSignupRequest:
    """Tests for the signup body schema."""

    def test_reads_camel_case_and_trims(self):
        request = SignupRequest.model_validate({
            "fullName": "  Jane Doe ",
            "email": " jane@x.com ",
            "password": " secret123 ",
            "phone": " +27123456789 ",
        })

        assert request.full_name == "Jane Doe"
        assert request.email == "jane@x.com"
        assert request.phone == "+27123456789"

    def test_password_is_not_trimmed(self):
        request = SignupRequest.model_validate(
            {"fullName": "Jane", "email": "jane@x.com", "password": " secret123 "}
        )
        assert request.password == " secret123 "

    def test_phone_is_optional(self):
        request = SignupRequest.model_validate(
            {"fullName": "Jane", "email": "jane@x.com", "password": "secret123"}
        )
        assert request.phone is None

    def test_non_string_phone_is_ignored(self):
        request = SignupRequest.model_validate(
            {"fullName": "Jane", "email": "jane@x.com", "password": "secret123", "phone": 27123456789}
        )
        assert request.phone is None

    def test_blank_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest.model_validate({"fullName": "   ", "email": "jane@x.com", "password": "x"})

        locs = [error["loc"] for error in exc_info.value.errors()]
        assert locs == [("fullName",)]

    def test_non_string_field_rejected(self):
        with pytest.raises(ValidationError):
            SignupRequest.model_validate({"fullName": "Jane", "email": 42, "password": "secret123"})

    def test_unknown_keys_ignored(self):
        request = SignupRequest.model_validate(
            {"fullName": "Jane", "email": "jane@x.com", "password": "secret123", "role": "admin"}
        )
        assert not hasattr(request, "role")


class TestTrackingRequests:
    """Tests for the click/applied body schemas."""

    def test_bursary_id_trimmed(self):
        assert BursaryClickRequest.model_validate({"bursaryId": " b1 "}).bursary_id == "b1"

    def test_university_id_trimmed(self):
        assert UniversityIdRequest.model_validate({"universityId": "\tuni_1 "}).university_id == "uni_1"

    @pytest.mark.parametrize("body", [{}, {"universityId": ""}, {"universityId": 7}, {"university_id": None}])
    def test_university_id_required(self, body):
        with pytest.raises(ValidationError):
            UniversityIdRequest.model_validate(body)

    def test_login_requires_both_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest.model_validate({"email": "a@b.co"})
        assert exc_info.value.errors()[0]["loc"] == ("password",)


class TestUserProfile:
    """Tests for the stored profile model."""

    def test_defaults(self):
        profile = UserProfile(uid="u1", full_name="Jane", email="jane@x.com")

        assert profile.role == UserRole.USER
        assert profile.status == UserStatus.ACTIVE
        assert profile.phone is None

    def test_row_leaves_created_at_to_database(self):
        row = UserProfile(uid="u1", full_name="Jane", email="jane@x.com").to_row()

        assert "created_at" not in row
        assert row == {
            "uid": "u1",
            "full_name": "Jane",
            "email": "jane@x.com",
            "phone": None,
            "role": "user",
            "status": "active",
        }

    def test_reads_database_row(self):
        profile = UserProfile.model_validate({
            "uid": "u1",
            "full_name": "Jane",
            "email": "jane@x.com",
            "phone": None,
            "role": "admin",
            "status": "disabled",
            "created_at": "2024-01-15T10:00:00+00:00",
        })

        assert profile.role == UserRole.ADMIN
        assert profile.created_at.year == 2024

    def test_serializes_camel_case(self):
        dumped = UserProfile(uid="u1", full_name="Jane", email="jane@x.com").model_dump(by_alias=True)
        assert "fullName" in dumped
        assert "createdAt" in dumped
