from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.insights import ResultInsights
from app.domain.models import AssessmentResult, CategoryScore, ScoreBreakdown, Scenario


class ChoiceOut(BaseModel):
    letter: str
    text: str


class ScenarioOut(BaseModel):
    id: str
    number: int
    title: str
    context: str
    question: str
    choices: list[ChoiceOut]

    @classmethod
    def from_domain(cls, scenario: Scenario) -> ScenarioOut:
        # Score vectors stay server-side so the quiz cannot be gamed.
        return cls(
            id=scenario.id,
            number=scenario.number,
            title=scenario.title,
            context=scenario.context,
            question=scenario.question,
            choices=[ChoiceOut(letter=c.letter.value, text=c.text) for c in scenario.choices],
        )


class AnswerIn(BaseModel):
    scenario_id: str
    choice: str


class ScoringRequest(BaseModel):
    answers: list[AnswerIn] = Field(default_factory=list)


class CategoryScoreOut(BaseModel):
    scores: dict[str, int]
    total: int
    percentage: int
    max_score: int

    @classmethod
    def from_domain(cls, category: CategoryScore) -> CategoryScoreOut:
        return cls(
            scores={m.name: v for m, v in category.scores.items()},
            total=category.total,
            percentage=category.percentage,
            max_score=category.max_score,
        )


class OverallScoreOut(BaseModel):
    total: int
    percentage: int
    max_possible: int


class ScoreBreakdownOut(BaseModel):
    metrics: dict[str, int]
    eq: CategoryScoreOut
    bed: CategoryScoreOut
    culture: CategoryScoreOut
    overall: OverallScoreOut

    @classmethod
    def from_domain(cls, scores: ScoreBreakdown) -> ScoreBreakdownOut:
        return cls(
            metrics=scores.by_code(),
            eq=CategoryScoreOut.from_domain(scores.eq),
            bed=CategoryScoreOut.from_domain(scores.bed),
            culture=CategoryScoreOut.from_domain(scores.culture),
            overall=OverallScoreOut(
                total=scores.overall.total,
                percentage=scores.overall.percentage,
                max_possible=scores.overall.max_possible,
            ),
        )


class ScoringResponse(BaseModel):
    answered: int
    scores: ScoreBreakdownOut
    leadership_family: str
    leadership_type: str


class AssessmentCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=64)
    session_id: Optional[str] = None
    organization_id: Optional[str] = None
    answers: list[AnswerIn] = Field(default_factory=list)


class AssessmentOut(BaseModel):
    id: str
    user_id: str
    session_id: str
    scores: ScoreBreakdownOut
    leadership_family: str
    leadership_type: str
    completed_at: datetime

    @classmethod
    def from_domain(cls, result: AssessmentResult) -> AssessmentOut:
        return cls(
            id=result.id,
            user_id=result.user_id,
            session_id=result.session_id,
            scores=ScoreBreakdownOut.from_domain(result.scores),
            leadership_family=result.leadership_family.value,
            leadership_type=result.leadership_type.value,
            completed_at=result.completed_at,
        )


class AssessmentSaveResponse(BaseModel):
    saved: bool
    assessment_id: Optional[str] = None
    error: Optional[str] = None
    result: AssessmentOut


class MetricInfo(BaseModel):
    code: str
    name: str
    full_name: str
    description: str
    category: str


class FamilyInfo(BaseModel):
    code: str
    name: str
    tagline: str
    description: str
    color: str


class TypeInfo(BaseModel):
    code: str
    name: str
    family: str
    tagline: str
    description: str
    strengths: list[str]
    blind_spots: list[str]
    stress_behaviors: list[str]
    best_utilization: str


class TypologyResponse(BaseModel):
    metrics: list[MetricInfo]
    families: list[FamilyInfo]
    types: list[TypeInfo]


class TeamSummaryOut(BaseModel):
    organization_id: str
    completed_count: int
    family_distribution: dict[str, int]
    type_distribution: dict[str, int]
    metric_averages: dict[str, int]
    metric_percentages: dict[str, int]
    overall_percentage: int
    strengths: list[str]
    growth_areas: list[str]


class BedProfileOut(BaseModel):
    beliefs: str
    excuses: str
    decisions: str


class InsightsOut(BaseModel):
    assessment_id: str
    culture_ripple: str
    bed_profile: BedProfileOut
    pressure_pattern: str
    growth_recommendations: list[str]
    move_the_stool: str
    because_statement: str
    eq_pillars: dict[str, str]
    culture_dimensions: dict[str, str]

    @classmethod
    def from_domain(cls, assessment_id: str, insights: ResultInsights) -> InsightsOut:
        return cls(
            assessment_id=assessment_id,
            culture_ripple=insights.culture_ripple,
            bed_profile=BedProfileOut(
                beliefs=insights.bed_profile.beliefs,
                excuses=insights.bed_profile.excuses,
                decisions=insights.bed_profile.decisions,
            ),
            pressure_pattern=insights.pressure_pattern,
            growth_recommendations=list(insights.growth_recommendations),
            move_the_stool=insights.move_the_stool,
            because_statement=insights.because_statement,
            eq_pillars=dict(insights.eq_pillars),
            culture_dimensions=dict(insights.culture_dimensions),
        )
