"""
Unit tests for student request schemas.
"""

import pytest

from roster.core.exceptions import ValidationError
from roster.modules.students.schemas import (
    CREATE_REQUIRED_AMOUNT_FIELDS,
    CREATE_REQUIRED_TEXT_FIELDS,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)


class TestStudentCreate:
    """Tests for StudentCreate.from_fields."""

    def test_valid_fields_are_coerced(self, create_fields):
        command = StudentCreate.from_fields(create_fields)

        assert command.parent_name == "C"
        assert command.service_cost == 1000
        assert command.service_payed == 200
        assert command.annual_cost == 500

    @pytest.mark.parametrize(
        "field", CREATE_REQUIRED_TEXT_FIELDS + CREATE_REQUIRED_AMOUNT_FIELDS
    )
    def test_each_required_field_is_enforced(self, create_fields, field):
        del create_fields[field]

        with pytest.raises(ValidationError) as exc_info:
            StudentCreate.from_fields(create_fields)

        assert exc_info.value.missing_fields == [field]
        assert exc_info.value.status_code == 400

    def test_empty_name_counts_as_missing(self, create_fields):
        create_fields["name"] = "  "

        with pytest.raises(ValidationError) as exc_info:
            StudentCreate.from_fields(create_fields)

        assert "name" in exc_info.value.missing_fields

    def test_required_amounts_only_need_presence(self, create_fields):
        create_fields.update(serviceCost="", servicePayed="abc", annualCost=None)

        command = StudentCreate.from_fields(create_fields)

        assert command.service_cost == 0
        assert command.service_payed == 0
        assert command.annual_cost == 0

    def test_annual_payed_absent_is_not_defaulted(self, create_fields):
        command = StudentCreate.from_fields(create_fields)

        assert command.annual_payed is None

    def test_annual_payed_parsed_when_present(self, create_fields):
        create_fields["annualPayed"] = "150"

        assert StudentCreate.from_fields(create_fields).annual_payed == 150

    def test_annual_payed_non_numeric_is_rejected(self, create_fields):
        create_fields["annualPayed"] = "lots"

        with pytest.raises(ValidationError) as exc_info:
            StudentCreate.from_fields(create_fields)

        assert "annualPayed" in exc_info.value.message

    def test_optional_fields(self, create_fields):
        create_fields.update(
            year="2024",
            mobile="+1555",
            parentMobile="",
            isSessionOpen="true",
            isNastrfication="false",
        )

        command = StudentCreate.from_fields(create_fields)

        assert command.year == 2024
        assert command.mobile == "+1555"
        assert command.parent_mobile is None
        assert command.is_session_open is True
        assert command.is_nastrfication is False
        assert command.is_nastrfication_payed is None

    def test_invalid_year_is_rejected(self, create_fields):
        create_fields["year"] = "next"

        with pytest.raises(ValidationError):
            StudentCreate.from_fields(create_fields)

    def test_attachment_fields_in_body_are_ignored(self, create_fields):
        create_fields["passport"] = "uploads/forged.pdf"

        assert "passport" not in StudentCreate.from_fields(create_fields).model_dump()


class TestStudentUpdate:
    """Tests for StudentUpdate."""

    def test_only_provided_fields_are_changes(self):
        command = StudentUpdate.from_fields({"servicePayed": "999", "mobile": "+1777"})

        assert command.to_changes() == {"service_payed": 999, "mobile": "+1777"}

    def test_amounts_default_to_zero_including_annual_payed(self):
        command = StudentUpdate.from_fields({"annualPayed": "n/a", "serviceCost": None})

        assert command.to_changes() == {"annual_payed": 0, "service_cost": 0}

    def test_empty_body_changes_nothing(self):
        assert StudentUpdate.from_fields({}).to_changes() == {}

    def test_blank_required_text_is_rejected(self):
        with pytest.raises(ValidationError):
            StudentUpdate.from_fields({"surname": ""})

    def test_flags_are_parsed(self):
        command = StudentUpdate.from_fields({"isNastrficationPayed": "1"})

        assert command.to_changes() == {"is_nastrfication_payed": True}


class TestStudentResponse:
    """Tests for StudentResponse serialization."""

    def test_serializes_with_camel_case_names(self, sample_student):
        sample_student.created_at = None
        sample_student.updated_at = None

        data = StudentResponse.model_validate(sample_student).model_dump(by_alias=True)

        assert data["parentName"] == "Ivan"
        assert data["servicePayed"] == 200.0
        assert data["isSessionOpen"] is False
        assert data["passport"] == "uploads/1-aaaa-passport.pdf"
