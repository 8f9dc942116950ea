"""
Application API layer with error handling and validation.

This module provides high-level functions for the assessment application:
profile registration, stateless scoring, finalising a session, persisting
results and summarising an organization's results.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pandas as pd
from sqlalchemy.orm import Session

from ..domain.enums import OVERALL_MAX, LeadershipFamily, LeadershipType, Metric
from ..domain.insights import ResultInsights, build_insights
from ..domain.models import AssessmentResult, Response, ScoreBreakdown, UserProfile, utcnow
from ..domain.scenarios import ScenarioCatalog, get_catalog
from ..domain.schemas import (
    AnswerSetInput,
    OrganizationContextInput,
    ResponseRecord,
    UserProfileInput,
    validate_input,
)
from ..domain.services import ScoringService, breakdown_from_totals, round_half_up
from ..domain.session import AssessmentStateMachine
from ..domain.typology import metric_percentage
from ..infrastructure.config import AssessmentConfig
from ..infrastructure.exceptions import (
    Equip360Error,
    ValidationError,
    create_user_friendly_error_message,
    handle_database_error,
    log_error_details,
)
from ..infrastructure.logging import LogContext, get_logger, log_operation
from ..infrastructure.models import AssessmentResultORM
from ..infrastructure.repositories_result import ResultRepo

logger = get_logger(__name__)


def _raise_for_validation(result, field_name: str) -> dict[str, Any]:
    if not result.success:
        error_msg = "; ".join([f"{e.field}: {e.message}" for e in result.errors])
        logger.warning(f"{field_name} validation failed: {error_msg}")
        raise ValidationError(field_name, error_msg)
    if result.data is None:
        raise RuntimeError("Validation succeeded but returned no data")
    return result.data


@log_operation("create_user_profile")
def create_user_profile(
    email: str,
    first_name: str,
    last_name: str,
    company: str | None = None,
    role: str | None = None,
    id: str | None = None,
) -> UserProfile:
    """
    Validate profile fields and build a UserProfile.

    Raises:
        ValidationError: If any field is invalid

    Example:
        >>> profile = create_user_profile("ada@example.com", "Ada", "Lovelace", role="CTO")
        >>> profile.full_name
        'Ada Lovelace'
    """
    data = _raise_for_validation(
        validate_input(
            UserProfileInput,
            {
                "id": id,
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "company": company,
                "role": role,
            },
        ),
        "user_profile",
    )
    return UserProfile(
        id=data["id"] or str(uuid.uuid4()),
        email=data["email"],
        first_name=data["first_name"],
        last_name=data["last_name"],
        company=data["company"],
        role=data["role"],
    )


def build_responses(
    answers: Sequence[dict[str, Any]],
    catalog: ScenarioCatalog | None = None,
    timestamp: datetime | None = None,
) -> list[Response]:
    """
    Turn raw ``{"scenario_id", "choice"}`` answers into a response log.

    Later answers for the same scenario replace earlier ones in place.

    Raises:
        ValidationError: If an answer is malformed
        UnknownScenarioError / UnknownChoiceError: If an answer is not in the catalog
    """
    catalog = catalog or get_catalog()
    data = _raise_for_validation(
        validate_input(AnswerSetInput, {"answers": list(answers)}), "answers"
    )
    when = timestamp or utcnow()

    log: list[Response] = []
    position: dict[str, int] = {}
    for answer in data["answers"]:
        choice = catalog.choice(answer["scenario_id"], answer["choice"])
        response = Response(answer["scenario_id"], choice.letter, choice.scores, when)
        if answer["scenario_id"] in position:
            log[position[answer["scenario_id"]]] = response
        else:
            position[answer["scenario_id"]] = len(log)
            log.append(response)
    return log


@dataclass(slots=True)
class ScoredAnswers:
    responses: list[Response]
    scores: ScoreBreakdown
    leadership_family: LeadershipFamily
    leadership_type: LeadershipType


@log_operation("score_answers")
def score_answers(
    answers: Sequence[dict[str, Any]], catalog: ScenarioCatalog | None = None
) -> ScoredAnswers:
    """Stateless scoring of a batch of answers."""
    responses = build_responses(answers, catalog)
    scores, family, leadership_type = ScoringService(logger).score(responses)
    return ScoredAnswers(responses, scores, family, leadership_type)


@log_operation("result_from_answers")
def result_from_answers(
    user_id: str,
    answers: Sequence[dict[str, Any]],
    session_id: str | None = None,
    catalog: ScenarioCatalog | None = None,
) -> tuple[AssessmentResult, list[Response]]:
    """Score a submitted answer batch as a completed session for ``user_id``."""
    scored = score_answers(answers, catalog)
    completed_at = utcnow()
    result = AssessmentResult(
        id=str(uuid.uuid4()),
        session_id=session_id or str(uuid.uuid4()),
        user_id=user_id,
        scores=scored.scores,
        leadership_family=scored.leadership_family,
        leadership_type=scored.leadership_type,
        completed_at=completed_at,
    )
    return result, scored.responses


@log_operation("open_assessment")
def open_assessment(
    profile: UserProfile, config: AssessmentConfig | None = None
) -> AssessmentStateMachine:
    """
    Resume the configured checkpoint for ``profile`` or start a new session.

    A checkpoint that belongs to a different user is discarded.
    """
    machine = AssessmentStateMachine.from_settings(config)
    if machine.user is not None and machine.user.id != profile.id:
        logger.info("Discarding checkpoint of user %s", machine.user.id)
        machine.reset()
    if machine.in_progress:
        return machine
    machine.set_user(profile)
    machine.start()
    return machine


@log_operation("finalize_assessment")
def finalize_assessment(machine: AssessmentStateMachine) -> AssessmentResult | None:
    """Complete the machine's session and compute its result."""
    machine.complete()
    return machine.calculate_result()


@dataclass(slots=True)
class SaveOutcome:
    success: bool
    assessment_id: str | None = None
    error: str | None = None
    # Tells the caller to drop any pending organization invitation context.
    clear_organization_context: bool = False


@log_operation("save_assessment_result")
def save_assessment_result(
    session: Session,
    result: AssessmentResult,
    organization_id: str | None = None,
    responses: Iterable[Response] | None = None,
) -> SaveOutcome:
    """
    Persist a computed result in a single attempt.

    Failures are reported on the returned SaveOutcome rather than raised, so
    the caller keeps the in-memory result either way. The transaction is
    committed here on success and rolled back on failure.

    Example:
        >>> outcome = save_assessment_result(db, result, organization_id="org-1")
        >>> outcome.success, outcome.clear_organization_context
        (True, True)
    """
    org = validate_input(OrganizationContextInput, {"organization_id": organization_id})
    if not org.success or org.data is None:
        error = ValidationError("organization_id", org.errors[0].message, organization_id)
        return SaveOutcome(success=False, error=error.user_message)
    organization_id = org.data["organization_id"]

    with LogContext(
        assessment_id=result.id, user_id=result.user_id, organization_id=organization_id
    ):
        try:
            repo = ResultRepo(session)
            record = repo.create(
                id=result.id,
                user_id=result.user_id,
                organization_id=organization_id,
                session_id=result.session_id,
                scores=result.scores.to_list(),
                overall_percentage=result.scores.overall.percentage,
                leadership_family=result.leadership_family.value,
                leadership_type=result.leadership_type.value,
                responses=(
                    [ResponseRecord.from_domain(r).model_dump(mode="json") for r in responses]
                    if responses is not None
                    else None
                ),
                completed_at=result.completed_at,
            )
            session.commit()
        except Exception as e:
            session.rollback()
            error = handle_database_error(e, "save assessment result")
            logger.error("Failed to save assessment result", extra=log_error_details(error))
            return SaveOutcome(success=False, error=create_user_friendly_error_message(error))

        logger.info(f"Saved assessment {record.id} for user {record.user_id}")
        return SaveOutcome(
            success=True,
            assessment_id=record.id,
            clear_organization_context=organization_id is not None,
        )


def record_to_result(record: AssessmentResultORM) -> AssessmentResult:
    """Rehydrate a stored row into an AssessmentResult."""
    return AssessmentResult(
        id=record.id,
        session_id=record.session_id,
        user_id=record.user_id,
        scores=breakdown_from_totals(record.scores),
        leadership_family=LeadershipFamily(record.leadership_family),
        leadership_type=LeadershipType(record.leadership_type),
        completed_at=record.completed_at,
    )


@log_operation("insights_for_result")
def insights_for_result(result: AssessmentResult) -> ResultInsights:
    return build_insights(result.scores, result.leadership_family, result.leadership_type)


@log_operation("get_assessment_result")
def get_assessment_result(session: Session, assessment_id: str) -> AssessmentResultORM:
    """
    Raises:
        ResultNotFoundError: If no assessment has this id
    """
    return ResultRepo(session).get_by_id_required(assessment_id)


@log_operation("list_user_results")
def list_user_results(
    session: Session, user_id: str, limit: int | None = None
) -> list[AssessmentResultORM]:
    try:
        return ResultRepo(session).list_for_user(user_id, limit=limit)
    except Equip360Error:
        raise
    except Exception as e:
        raise handle_database_error(e, "list user results") from e


@log_operation("list_organization_results")
def list_organization_results(
    session: Session, organization_id: str, limit: int | None = None
) -> list[AssessmentResultORM]:
    try:
        return ResultRepo(session).list_for_organization(organization_id, limit=limit)
    except Equip360Error:
        raise
    except Exception as e:
        raise handle_database_error(e, "list organization results") from e


@dataclass(slots=True)
class TeamSummary:
    completed_count: int
    family_distribution: dict[str, int] = field(default_factory=dict)
    type_distribution: dict[str, int] = field(default_factory=dict)
    metric_averages: dict[str, int] = field(default_factory=dict)
    metric_percentages: dict[str, int] = field(default_factory=dict)
    overall_percentage: int = 0
    strengths: list[str] = field(default_factory=list)
    growth_areas: list[str] = field(default_factory=list)


def results_frame(results: Iterable[AssessmentResult]) -> pd.DataFrame:
    """One row per result: identifiers, family, type and the 13 metric totals."""
    columns = ["AssessmentID", "UserID", "Family", "Type", "Overall%", "CompletedAt"] + [
        m.name for m in Metric
    ]
    rows = [
        [
            r.id,
            r.user_id,
            r.leadership_family.value,
            r.leadership_type.value,
            r.scores.overall.percentage,
            r.completed_at,
            *r.scores.totals,
        ]
        for r in results
    ]
    return pd.DataFrame(rows, columns=columns)


@log_operation("summarize_team_results")
def summarize_team_results(results: Sequence[AssessmentResult]) -> TeamSummary:
    """
    Aggregate an organization's results for the team dashboard.
    - Metric averages are round-half-up of the per-metric mean.
    - Overall percentage is the sum of averaged metrics against 13 x 80.
    - Strengths are the three highest metric percentages, growth areas the
      three lowest (lowest first); ties keep metric order.
    """
    df = results_frame(results)
    count = len(df)
    if count == 0:
        return TeamSummary(completed_count=0)

    codes = [m.name for m in Metric]
    sums = df[codes].sum()
    averages = {code: round_half_up(int(sums[code]), count) for code in codes}
    percentages = {code: metric_percentage(avg) for code, avg in averages.items()}

    families = df["Family"].value_counts()
    ranked = sorted(codes, key=lambda c: percentages[c], reverse=True)
    overall = round_half_up(sum(averages.values()) * 100, OVERALL_MAX)

    summary = TeamSummary(
        completed_count=count,
        family_distribution={f.value: int(families.get(f.value, 0)) for f in LeadershipFamily},
        type_distribution={k: int(v) for k, v in df["Type"].value_counts(sort=False).items()},
        metric_averages=averages,
        metric_percentages=percentages,
        overall_percentage=overall,
        strengths=ranked[:3],
        growth_areas=list(reversed(ranked[-3:])),
    )
    logger.info(f"Summarized {count} results: overall {overall}%")
    return summary
