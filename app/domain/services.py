from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from .enums import (
    METRIC_COUNT,
    OVERALL_MAX,
    Category,
    LeadershipFamily,
    LeadershipType,
    Metric,
)
from .models import (
    AssessmentResult,
    AssessmentSession,
    CategoryScore,
    OverallScore,
    Response,
    ScoreBreakdown,
    UserProfile,
    utcnow,
)
from ..infrastructure.exceptions import ScoreVectorError
from ..infrastructure.logging import get_logger

SA, SR, M, E, SS, B, EX, D, T, PS, CQ, TS, ER = Metric


def round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest int, halves away from zero."""
    if denominator == 0:
        return 0
    exact = Decimal(numerator) / Decimal(denominator)
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def percentage(total: int, max_score: int) -> int:
    return round_half_up(total * 100, max_score)


def breakdown_from_totals(totals: Sequence[int]) -> ScoreBreakdown:
    """
    Split 13 raw metric totals into categories and compute percentages.

    Percentages are always taken against the full 20-scenario maximum, so a
    partial response log yields proportionally low values.
    """
    if len(totals) != METRIC_COUNT:
        raise ScoreVectorError(None, len(totals), METRIC_COUNT)

    categories: dict[Category, CategoryScore] = {}
    for category in Category:
        scores = {m: int(totals[m]) for m in category.metrics}
        total = sum(scores.values())
        categories[category] = CategoryScore(
            category=category,
            scores=scores,
            total=total,
            percentage=percentage(total, category.max_score),
            max_score=category.max_score,
        )

    grand_total = sum(c.total for c in categories.values())
    return ScoreBreakdown(
        totals=tuple(int(t) for t in totals),
        eq=categories[Category.EQ],
        bed=categories[Category.BED],
        culture=categories[Category.CULTURE],
        overall=OverallScore(
            total=grand_total,
            percentage=percentage(grand_total, OVERALL_MAX),
            max_possible=OVERALL_MAX,
        ),
    )


def aggregate_responses(responses: Iterable[Response]) -> ScoreBreakdown:
    """
    Sum the score vectors of a response log into a :class:`ScoreBreakdown`.

    - Accepts 0..20 responses; an empty log produces all zeros.
    - A vector whose length is not 13 raises ScoreVectorError.
    """
    totals = [0] * METRIC_COUNT
    for response in responses:
        if len(response.scores) != METRIC_COUNT:
            raise ScoreVectorError(response.scenario_id, len(response.scores), METRIC_COUNT)
        for i, value in enumerate(response.scores):
            totals[i] += value
    return breakdown_from_totals(totals)


# ---------- Family classification ----------


def family_composites(scores: ScoreBreakdown) -> dict[LeadershipFamily, int]:
    return {
        LeadershipFamily.REGULATORS: scores[SR] + scores[SA],
        LeadershipFamily.CONNECTORS: scores[E] + scores[SS] + scores[T],
        LeadershipFamily.DRIVERS: scores[M] + scores[D],
        LeadershipFamily.STRATEGISTS: scores[SA] + scores[B],
    }


def classify_family(scores: ScoreBreakdown) -> LeadershipFamily:
    """Pick the family with the highest composite; earlier families win ties."""
    composites = family_composites(scores)
    leader = LeadershipFamily.REGULATORS
    best = composites[leader]
    for family in LeadershipFamily:
        if composites[family] > best:
            leader, best = family, composites[family]
    return leader


# ---------- Type classification ----------

Rule = tuple[Callable[[ScoreBreakdown], bool], LeadershipType]

TYPE_RULES: dict[LeadershipFamily, tuple[list[Rule], LeadershipType]] = {
    LeadershipFamily.REGULATORS: (
        [
            (lambda s: s[SR] >= s[SA] and s[M] > s[E], LeadershipType.GROUNDED_COMMANDER),
            (lambda s: s[SA] >= s[SR] and s[SR] > s[E], LeadershipType.ANCHOR),
            (lambda s: s[SR] > s[SA] and s[SS] > s[E], LeadershipType.GUARDIAN),
            (lambda s: s[SR] > s[E] and s[D] > s[B], LeadershipType.RESPONDER),
        ],
        LeadershipType.STABILIZER,
    ),
    LeadershipFamily.CONNECTORS: (
        [
            (lambda s: s[E] >= s[SS] and s[SA] > s[SR], LeadershipType.EMPATHIC_STRATEGIST),
            (lambda s: s[E] > s[SA] and s[SS] > s[SR], LeadershipType.BRIDGE_BUILDER),
            (lambda s: s[E] > s[SS] and s[D] > s[EX], LeadershipType.MENTOR),
            (
                lambda s: s[E] > s[SA] and s[E] > s[SS] and s[E] > s[SR],
                LeadershipType.HARMONIZER,
            ),
        ],
        LeadershipType.CULTURAL_ARCHITECT,
    ),
    LeadershipFamily.DRIVERS: (
        [
            (lambda s: s[M] >= s[D] and s[M] > s[E], LeadershipType.CATALYST),
            (lambda s: s[M] > s[E] and s[D] < s[M], LeadershipType.ENFORCER),
            (lambda s: s[D] > s[M] and s[SR] > s[E], LeadershipType.OPTIMIZER),
            (lambda s: s[M] > s[SR] and s[D] > s[B], LeadershipType.ACCELERATOR),
        ],
        LeadershipType.STANDARD_BEARER,
    ),
    LeadershipFamily.STRATEGISTS: (
        [
            (lambda s: s[SA] >= s[M] and s[M] > s[E], LeadershipType.VISIONARY),
            (lambda s: s[SA] > s[SS] and s[B] > s[D], LeadershipType.ARCHITECT),
            (lambda s: s[SA] > s[E] and s[D] > s[M], LeadershipType.ANALYST),
            (lambda s: s[SA] > s[SR] and s[TS] < s[CQ], LeadershipType.NAVIGATOR),
        ],
        LeadershipType.INTEGRATOR,
    ),
}


def classify_type(scores: ScoreBreakdown, family: LeadershipFamily) -> LeadershipType:
    """Walk the family's decision list; the first matching rule wins."""
    rules, fallback = TYPE_RULES[family]
    for predicate, leadership_type in rules:
        if predicate(scores):
            return leadership_type
    return fallback


class ScoringService:
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_logger(__name__)

    def score(
        self, responses: Iterable[Response]
    ) -> tuple[ScoreBreakdown, LeadershipFamily, LeadershipType]:
        """
        Aggregate a response log and classify it.
        - Family uses composites over raw totals with fixed tie-break order.
        - Type is chosen from the family's ordered decision list.
        """
        responses = list(responses)
        try:
            breakdown = aggregate_responses(responses)
        except ScoreVectorError:
            self.logger.exception("Malformed score vector in a %d-response log", len(responses))
            raise

        family = classify_family(breakdown)
        leadership_type = classify_type(breakdown, family)
        self.logger.debug(
            "Scored %d responses: overall=%s%% family=%s type=%s",
            len(responses),
            breakdown.overall.percentage,
            family.value,
            leadership_type.value,
        )
        return breakdown, family, leadership_type

    def build_result(self, session: AssessmentSession, user: UserProfile) -> AssessmentResult:
        breakdown, family, leadership_type = self.score(session.responses)
        result = AssessmentResult(
            id=str(uuid.uuid4()),
            session_id=session.id,
            user_id=user.id,
            scores=breakdown,
            leadership_family=family,
            leadership_type=leadership_type,
            completed_at=session.completed_at or utcnow(),
        )
        self.logger.info(
            "Built result %s for session %s (%s / %s)",
            result.id,
            session.id,
            family.value,
            leadership_type.value,
        )
        return result
