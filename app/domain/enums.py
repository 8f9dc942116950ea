"""
Enumerations and fixed dimensions of the E.Q.U.I.P. 360 scoring model.

Every score vector in the system is indexed by :class:`Metric`; the integer
value of each member is its position in the canonical 13-slot vector.
"""

from __future__ import annotations

from enum import Enum, IntEnum

MAX_SCORE_PER_METRIC = 4
TOTAL_SCENARIOS = 20
METRIC_COUNT = 13
# Highest total a single metric can reach across the full catalog (4 x 20).
METRIC_MAX = MAX_SCORE_PER_METRIC * TOTAL_SCENARIOS


class Metric(IntEnum):
    SA = 0  # Self-Awareness
    SR = 1  # Self-Regulation
    M = 2  # Motivation
    E = 3  # Empathy
    SS = 4  # Social Skill
    B = 5  # Beliefs
    EX = 6  # Excuses
    D = 7  # Decisions
    T = 8  # Trust
    PS = 9  # Psychological Safety
    CQ = 10  # Communication Quality
    TS = 11  # Team Stability
    ER = 12  # Emotional Ripple


METRIC_ORDER: tuple[Metric, ...] = tuple(Metric)


class Category(str, Enum):
    """Score categories and the contiguous metric slice each one owns."""

    EQ = "eq"
    BED = "bed"
    CULTURE = "culture"

    @property
    def metrics(self) -> tuple[Metric, ...]:
        return _CATEGORY_METRICS[self]

    @property
    def max_score(self) -> int:
        return METRIC_MAX * len(self.metrics)


_CATEGORY_METRICS: dict[Category, tuple[Metric, ...]] = {
    Category.EQ: METRIC_ORDER[0:5],
    Category.BED: METRIC_ORDER[5:8],
    Category.CULTURE: METRIC_ORDER[8:13],
}

OVERALL_MAX = METRIC_MAX * METRIC_COUNT


class LeadershipFamily(str, Enum):
    # Declaration order is the classifier's tie-break order.
    REGULATORS = "REGULATORS"
    CONNECTORS = "CONNECTORS"
    DRIVERS = "DRIVERS"
    STRATEGISTS = "STRATEGISTS"


class LeadershipType(str, Enum):
    # Regulators
    GROUNDED_COMMANDER = "GROUNDED_COMMANDER"
    ANCHOR = "ANCHOR"
    GUARDIAN = "GUARDIAN"
    RESPONDER = "RESPONDER"
    STABILIZER = "STABILIZER"
    # Connectors
    EMPATHIC_STRATEGIST = "EMPATHIC_STRATEGIST"
    BRIDGE_BUILDER = "BRIDGE_BUILDER"
    MENTOR = "MENTOR"
    HARMONIZER = "HARMONIZER"
    CULTURAL_ARCHITECT = "CULTURAL_ARCHITECT"
    # Drivers
    CATALYST = "CATALYST"
    ENFORCER = "ENFORCER"
    OPTIMIZER = "OPTIMIZER"
    ACCELERATOR = "ACCELERATOR"
    STANDARD_BEARER = "STANDARD_BEARER"
    # Strategists
    VISIONARY = "VISIONARY"
    ARCHITECT = "ARCHITECT"
    ANALYST = "ANALYST"
    NAVIGATOR = "NAVIGATOR"
    INTEGRATOR = "INTEGRATOR"


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ChoiceLetter(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
