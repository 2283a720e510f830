"""
Student Schemas

Pydantic schemas that turn raw request fields (JSON or multipart form) into
typed commands, and serialize student records for responses.

Wire names are camelCase (parentName, servicePayed, ...); attributes are
snake_case.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from roster.core.exceptions import ValidationError
from roster.modules.students.helpers import (
    clean_text,
    is_blank,
    parse_amount,
    parse_amount_or_zero,
    parse_flag,
    parse_year,
)

# Fields that must be present when a student is created (wire names)
CREATE_REQUIRED_TEXT_FIELDS = ("name", "surname", "parentName", "study", "prof")
CREATE_REQUIRED_AMOUNT_FIELDS = ("serviceCost", "servicePayed", "annualCost")

_REQUIRED_TEXT_ATTRS = ("name", "surname", "parent_name", "study", "prof")
_OPTIONAL_TEXT_ATTRS = ("mobile", "parent_mobile")
_FLAG_ATTRS = ("is_session_open", "is_nastrfication", "is_nastrfication_payed")


def _format_errors(e: PydanticValidationError) -> str:
    parts = []
    for error in e.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "body"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


class _StudentInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def _validate_fields(cls, fields: Mapping[str, Any]):
        try:
            return cls.model_validate(dict(fields))
        except PydanticValidationError as e:
            raise ValidationError(_format_errors(e)) from e


class StudentCreate(_StudentInput):
    """Command for creating a student record."""

    name: str
    surname: str
    parent_name: str
    study: str
    prof: str

    service_cost: float
    service_payed: float
    annual_cost: float
    annual_payed: float | None = None

    mobile: str | None = None
    parent_mobile: str | None = None
    year: int | None = None

    is_session_open: bool | None = None
    is_nastrfication: bool | None = None
    is_nastrfication_payed: bool | None = None

    @field_validator(*_REQUIRED_TEXT_ATTRS, mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> str:
        text = clean_text(value)
        if text is None:
            raise ValueError("must not be empty")
        return text

    @field_validator(*_OPTIONAL_TEXT_ATTRS, mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        return clean_text(value)

    @field_validator("service_cost", "service_payed", "annual_cost", mode="before")
    @classmethod
    def _amount_or_zero(cls, value: Any) -> float:
        return parse_amount_or_zero(value)

    @field_validator("annual_payed", mode="before")
    @classmethod
    def _strict_amount(cls, value: Any) -> float | None:
        # Not defaulted on create: absent stays None, junk is rejected
        if is_blank(value):
            return None
        amount = parse_amount(value)
        if amount is None:
            raise ValueError("must be a non-negative number")
        return amount

    @field_validator("year", mode="before")
    @classmethod
    def _year(cls, value: Any) -> int | None:
        return parse_year(value)

    @field_validator(*_FLAG_ATTRS, mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool | None:
        return parse_flag(value)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "StudentCreate":
        """
        Validate raw request fields into a create command.

        Required text fields must be non-empty; required amounts only need to
        be present (any value, coerced to 0 when unusable).

        Raises:
            ValidationError: If a required field is absent or a value cannot be parsed
        """
        missing = [name for name in CREATE_REQUIRED_TEXT_FIELDS if is_blank(fields.get(name))]
        missing += [name for name in CREATE_REQUIRED_AMOUNT_FIELDS if name not in fields]
        if missing:
            raise ValidationError(
                f"All required fields must be provided. Missing: {', '.join(missing)}",
                missing_fields=missing,
            )
        return cls._validate_fields(fields)


class StudentUpdate(_StudentInput):
    """
    Command for updating a student record.

    Only fields present in the request are applied; see to_changes().
    """

    name: str | None = None
    surname: str | None = None
    parent_name: str | None = None
    study: str | None = None
    prof: str | None = None

    service_cost: float | None = None
    service_payed: float | None = None
    annual_cost: float | None = None
    annual_payed: float | None = None

    mobile: str | None = None
    parent_mobile: str | None = None
    year: int | None = None

    is_session_open: bool | None = None
    is_nastrfication: bool | None = None
    is_nastrfication_payed: bool | None = None

    @field_validator(*_REQUIRED_TEXT_ATTRS, mode="before")
    @classmethod
    def _required_text(cls, value: Any) -> str:
        text = clean_text(value)
        if text is None:
            raise ValueError("must not be empty")
        return text

    @field_validator(*_OPTIONAL_TEXT_ATTRS, mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        return clean_text(value)

    @field_validator("service_cost", "service_payed", "annual_cost", "annual_payed", mode="before")
    @classmethod
    def _amount_or_zero(cls, value: Any) -> float:
        return parse_amount_or_zero(value)

    @field_validator("year", mode="before")
    @classmethod
    def _year(cls, value: Any) -> int | None:
        return parse_year(value)

    @field_validator(*_FLAG_ATTRS, mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool | None:
        return parse_flag(value)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "StudentUpdate":
        """
        Validate raw request fields into an update command.

        Raises:
            ValidationError: If a provided value cannot be parsed
        """
        return cls._validate_fields(fields)

    def to_changes(self) -> dict[str, Any]:
        """Return the provided fields keyed by model attribute name."""
        return self.model_dump(exclude_unset=True)


class StudentResponse(BaseModel):
    """Serialized student record."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    surname: str
    parent_name: str
    mobile: str | None = None
    parent_mobile: str | None = None
    study: str
    prof: str
    year: int | None = None

    service_cost: float
    service_payed: float
    annual_cost: float
    annual_payed: float | None = None

    is_session_open: bool | None = None
    is_nastrfication: bool | None = None
    is_nastrfication_payed: bool | None = None

    passport: str | None = None
    diplom: str | None = None
    image: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None


class StudentMutationResponse(BaseModel):
    """Response for create and update."""

    message: str
    student: StudentResponse
