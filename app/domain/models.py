from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .enums import (
    Category,
    ChoiceLetter,
    LeadershipFamily,
    LeadershipType,
    Metric,
    SessionStatus,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class Choice:
    letter: ChoiceLetter
    text: str
    scores: tuple[int, ...]  # 13 ints in Metric order


@dataclass(slots=True, frozen=True)
class Scenario:
    id: str  # "scenario-N"
    number: int  # 1..20
    title: str
    context: str
    question: str
    choices: tuple[Choice, ...]  # A..D

    def choice(self, letter: ChoiceLetter | str) -> Choice | None:
        for c in self.choices:
            if c.letter == letter:
                return c
        return None


@dataclass(slots=True, frozen=True)
class Response:
    scenario_id: str
    selected_choice: ChoiceLetter
    scores: tuple[int, ...]
    timestamp: datetime


@dataclass(slots=True)
class UserProfile:
    id: str
    email: str
    first_name: str
    last_name: str
    company: str | None = None
    role: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True)
class AssessmentSession:
    id: str
    user_id: str
    status: SessionStatus
    started_at: datetime | None = None
    current_scenario_index: int = 0
    responses: list[Response] = field(default_factory=list)
    completed_at: datetime | None = None
    last_saved_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class CategoryScore:
    category: Category
    scores: dict[Metric, int]
    total: int
    percentage: int
    max_score: int


@dataclass(slots=True, frozen=True)
class OverallScore:
    total: int
    percentage: int
    max_possible: int


@dataclass(slots=True, frozen=True)
class ScoreBreakdown:
    """Aggregated scores for one response log. Always derived, never edited."""

    totals: tuple[int, ...]
    eq: CategoryScore
    bed: CategoryScore
    culture: CategoryScore
    overall: OverallScore

    def __getitem__(self, metric: Metric) -> int:
        return self.totals[metric]

    def category(self, category: Category) -> CategoryScore:
        return {Category.EQ: self.eq, Category.BED: self.bed, Category.CULTURE: self.culture}[
            category
        ]

    def to_list(self) -> list[int]:
        return list(self.totals)

    def by_code(self) -> dict[str, int]:
        return {m.name: self.totals[m] for m in Metric}


@dataclass(slots=True, frozen=True)
class AssessmentResult:
    id: str
    session_id: str
    user_id: str
    scores: ScoreBreakdown
    leadership_family: LeadershipFamily
    leadership_type: LeadershipType
    completed_at: datetime
