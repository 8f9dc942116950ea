"""
Pydantic schemas for input validation and checkpoint serialization.

These schemas validate the static scenario catalog at load time, user input
arriving from the API, and the records written to the resumability store.
"""

from __future__ import annotations

import re
from datetime import datetime
from html import unescape
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import (
    MAX_SCORE_PER_METRIC,
    METRIC_COUNT,
    TOTAL_SCENARIOS,
    ChoiceLetter,
    SessionStatus,
)
from .models import AssessmentSession, Response, UserProfile

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SCENARIO_ID_PATTERN = r"^scenario-\d+$"


def check_score_vector(v: list[int]) -> list[int]:
    if len(v) != METRIC_COUNT:
        raise ValueError(f"score vector must have {METRIC_COUNT} entries, got {len(v)}")
    for score in v:
        if not 0 <= score <= MAX_SCORE_PER_METRIC:
            raise ValueError(f"score {score} outside 0..{MAX_SCORE_PER_METRIC}")
    return v


class BaseValidationSchema(BaseModel):
    """Base schema with common validation utilities."""

    model_config = {"str_strip_whitespace": True, "validate_assignment": True}

    @field_validator("*", mode="before")
    def sanitize_strings(cls, v):
        """Sanitize string inputs to prevent XSS and injection attacks."""
        if isinstance(v, str):
            cleaned = unescape(v.strip())
            cleaned = re.sub(
                r"<\s*script[^>]*>.*?<\s*/\s*script\s*>",
                "",
                cleaned,
                flags=re.IGNORECASE | re.DOTALL,
            )
            cleaned = re.sub(r"<[^>]+>", "", cleaned)
            cleaned = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]", "", cleaned)
            return cleaned
        return v


# ---------- Catalog ----------


class ChoiceInput(BaseModel):
    """Validation for a single answer choice and its score vector."""

    letter: ChoiceLetter
    text: str = Field(..., min_length=1)
    scores: list[int]

    @field_validator("scores")
    def validate_scores(cls, v):
        return check_score_vector(v)


class ScenarioInput(BaseModel):
    """Validation for one scenario with exactly four distinct choices."""

    id: str = Field(..., pattern=SCENARIO_ID_PATTERN)
    number: int = Field(..., ge=1, le=TOTAL_SCENARIOS)
    title: str = Field(..., min_length=1)
    context: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    choices: list[ChoiceInput]

    @field_validator("choices")
    def validate_choices(cls, v):
        if len(v) != len(ChoiceLetter):
            raise ValueError(f"expected {len(ChoiceLetter)} choices, got {len(v)}")
        letters = [c.letter for c in v]
        if len(set(letters)) != len(letters):
            raise ValueError("duplicate choice letters")
        return v

    @model_validator(mode="after")
    def validate_id_matches_number(self):
        if self.id != f"scenario-{self.number}":
            raise ValueError(f"id {self.id!r} does not match number {self.number}")
        return self


class CatalogInput(BaseModel):
    """Validation for the full ordered scenario catalog."""

    scenarios: list[ScenarioInput]

    @field_validator("scenarios")
    def validate_catalog(cls, v):
        if len(v) != TOTAL_SCENARIOS:
            raise ValueError(f"expected {TOTAL_SCENARIOS} scenarios, got {len(v)}")
        ids = [s.id for s in v]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate scenario ids")
        numbers = [s.number for s in v]
        if numbers != list(range(1, TOTAL_SCENARIOS + 1)):
            raise ValueError("scenario numbers must run 1..20 in order")
        return v


# ---------- User input ----------


class UserProfileInput(BaseValidationSchema):
    """Validation schema for the profile supplied by the user profile provider."""

    id: str | None = Field(None, max_length=64)
    email: str = Field(..., min_length=3, max_length=255)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    company: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=255)

    @field_validator("email")
    def validate_email(cls, v):
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email address is not valid")
        return v.lower()

    @field_validator("company", "role")
    def validate_optional_fields(cls, v):
        if v is not None and len(v.strip()) == 0:
            return None
        return v


class AnswerInput(BaseValidationSchema):
    """One answered scenario."""

    scenario_id: str = Field(..., pattern=SCENARIO_ID_PATTERN)
    choice: ChoiceLetter

    @field_validator("choice", mode="before")
    def normalise_choice(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class AnswerSetInput(BaseValidationSchema):
    """A batch of answers; later answers for the same scenario win."""

    answers: list[AnswerInput] = Field(default_factory=list, max_length=200)


class OrganizationContextInput(BaseValidationSchema):
    """Optional organization the assessment was taken on behalf of."""

    organization_id: str | None = Field(None, max_length=64)

    @field_validator("organization_id")
    def validate_organization_id(cls, v):
        if v is not None and len(v.strip()) == 0:
            return None
        return v


# ---------- Checkpoint records ----------


class ResponseRecord(BaseModel):
    scenario_id: str
    selected_choice: ChoiceLetter
    scores: list[int]
    timestamp: datetime

    @field_validator("scores")
    def validate_scores(cls, v):
        return check_score_vector(v)

    @classmethod
    def from_domain(cls, response: Response) -> ResponseRecord:
        return cls(
            scenario_id=response.scenario_id,
            selected_choice=response.selected_choice,
            scores=list(response.scores),
            timestamp=response.timestamp,
        )

    def to_domain(self) -> Response:
        return Response(
            scenario_id=self.scenario_id,
            selected_choice=self.selected_choice,
            scores=tuple(self.scores),
            timestamp=self.timestamp,
        )


class UserProfileRecord(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    company: str | None = None
    role: str | None = None
    created_at: datetime

    @classmethod
    def from_domain(cls, profile: UserProfile) -> UserProfileRecord:
        return cls(
            id=profile.id,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            company=profile.company,
            role=profile.role,
            created_at=profile.created_at,
        )

    def to_domain(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            company=self.company,
            role=self.role,
            created_at=self.created_at,
        )


class SessionRecord(BaseModel):
    id: str
    user_id: str
    status: SessionStatus
    current_scenario_index: int = Field(0, ge=0)
    responses: list[ResponseRecord] = Field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_saved_at: datetime | None = None

    @field_validator("responses")
    def validate_unique_scenarios(cls, v):
        seen = set()
        for record in v:
            if record.scenario_id in seen:
                raise ValueError(f"duplicate response for {record.scenario_id}")
            seen.add(record.scenario_id)
        return v

    @classmethod
    def from_domain(cls, session: AssessmentSession) -> SessionRecord:
        return cls(
            id=session.id,
            user_id=session.user_id,
            status=session.status,
            current_scenario_index=session.current_scenario_index,
            responses=[ResponseRecord.from_domain(r) for r in session.responses],
            started_at=session.started_at,
            completed_at=session.completed_at,
            last_saved_at=session.last_saved_at,
        )

    def to_domain(self) -> AssessmentSession:
        return AssessmentSession(
            id=self.id,
            user_id=self.user_id,
            status=self.status,
            started_at=self.started_at,
            current_scenario_index=self.current_scenario_index,
            responses=[r.to_domain() for r in self.responses],
            completed_at=self.completed_at,
            last_saved_at=self.last_saved_at,
        )


class SessionCheckpoint(BaseModel):
    """Everything needed to resume an interrupted assessment."""

    user: UserProfileRecord | None = None
    session: SessionRecord | None = None
    current_scenario_index: int = Field(0, ge=0)


# ---------- Validation responses ----------


class ValidationErrorDetail(BaseModel):
    """Schema for validation error details."""

    field: str
    message: str
    value: Any = None


class ValidationResponse(BaseModel):
    """Schema for validation responses."""

    success: bool
    errors: list[ValidationErrorDetail] = []
    data: dict[str, Any] | None = None


def validate_input(schema_class: type[BaseModel], data: dict[str, Any]) -> ValidationResponse:
    """
    Centralized validation function that returns structured validation results.

    Args:
        schema_class: Pydantic model class to use for validation
        data: Input data to validate

    Returns:
        ValidationResponse with success status and any errors

    Example:
        >>> result = validate_input(AnswerInput, {"scenario_id": "scenario-1", "choice": "c"})
        >>> result.data["choice"]
        <ChoiceLetter.C: 'C'>
    """
    try:
        validated = schema_class(**data)
        return ValidationResponse(success=True, data=validated.model_dump())
    except Exception as e:
        errors = []
        if hasattr(e, "errors"):  # Pydantic validation errors
            for error in e.errors():
                errors.append(
                    ValidationErrorDetail(
                        field=".".join(str(x) for x in error["loc"]),
                        message=error["msg"],
                        value=error.get("input"),
                    )
                )
        else:
            errors.append(ValidationErrorDetail(field="general", message=str(e)))

        return ValidationResponse(success=False, errors=errors)
