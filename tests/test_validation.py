import pytest

from app.application.api import build_responses, create_user_profile
from app.domain.enums import ChoiceLetter
from app.domain.schemas import (
    AnswerInput,
    OrganizationContextInput,
    UserProfileInput,
    validate_input,
)
from app.infrastructure.exceptions import UnknownScenarioError, ValidationError


class TestProfileValidation:
    def test_profile_success(self):
        result = validate_input(
            UserProfileInput,
            {
                "email": "  Ada@Example.COM ",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "company": "   ",
            },
        )
        assert result.success is True
        assert result.data["email"] == "ada@example.com"
        assert result.data["company"] is None

    def test_profile_bad_email(self):
        result = validate_input(
            UserProfileInput, {"email": "not-an-email", "first_name": "A", "last_name": "B"}
        )
        assert result.success is False
        assert any(e.field == "email" for e in result.errors)

    def test_markup_is_stripped(self):
        result = validate_input(
            UserProfileInput,
            {
                "email": "a@b.io",
                "first_name": "<b>Grace</b>",
                "last_name": "Hopper<script>alert(1)</script>",
            },
        )
        assert result.data["first_name"] == "Grace"
        assert result.data["last_name"] == "Hopper"

    def test_create_user_profile_assigns_id(self):
        profile = create_user_profile("grace@navy.mil", "Grace", "Hopper", role="Admiral")
        assert profile.id
        assert profile.full_name == "Grace Hopper"
        assert profile.role == "Admiral"

    def test_create_user_profile_keeps_given_id(self):
        profile = create_user_profile("a@b.io", "A", "B", id="user-7")
        assert profile.id == "user-7"

    def test_create_user_profile_invalid(self):
        with pytest.raises(ValidationError) as exc:
            create_user_profile("a@b.io", "", "B")
        assert exc.value.field == "user_profile"


class TestAnswerValidation:
    def test_choice_is_normalised(self):
        result = validate_input(AnswerInput, {"scenario_id": "scenario-4", "choice": " d "})
        assert result.success is True
        assert result.data["choice"] == ChoiceLetter.D

    def test_bad_scenario_id_format(self):
        result = validate_input(AnswerInput, {"scenario_id": "four", "choice": "A"})
        assert result.success is False

    def test_bad_choice(self):
        result = validate_input(AnswerInput, {"scenario_id": "scenario-4", "choice": "E"})
        assert result.success is False

    def test_blank_organization_becomes_none(self):
        result = validate_input(OrganizationContextInput, {"organization_id": "  "})
        assert result.data["organization_id"] is None


class TestBuildResponses:
    def test_later_answer_wins_in_place(self):
        responses = build_responses(
            [
                {"scenario_id": "scenario-1", "choice": "A"},
                {"scenario_id": "scenario-2", "choice": "B"},
                {"scenario_id": "scenario-1", "choice": "c"},
            ]
        )
        assert [r.scenario_id for r in responses] == ["scenario-1", "scenario-2"]
        assert responses[0].selected_choice == ChoiceLetter.C

    def test_unknown_scenario(self):
        with pytest.raises(UnknownScenarioError):
            build_responses([{"scenario_id": "scenario-21", "choice": "A"}])

    def test_malformed_answer(self):
        with pytest.raises(ValidationError):
            build_responses([{"scenario_id": "scenario-1"}])
