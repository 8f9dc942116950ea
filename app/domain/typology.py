"""
Descriptive content for metrics, leadership families and leadership types.

This is the vocabulary the report renderer and dashboards present next to a
score profile: display names, taglines, strengths and blind spots for each
type, plus the coach messages shown while an assessment is in progress.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import METRIC_MAX, Category, LeadershipFamily, LeadershipType, Metric
from .services import percentage, round_half_up


@dataclass(slots=True, frozen=True)
class MetricDescriptor:
    code: Metric
    name: str
    full_name: str
    description: str
    category: Category


@dataclass(slots=True, frozen=True)
class FamilyDescriptor:
    code: LeadershipFamily
    name: str
    tagline: str
    description: str
    color: str


@dataclass(slots=True, frozen=True)
class TypeDescriptor:
    code: LeadershipType
    name: str
    family: LeadershipFamily
    tagline: str
    description: str
    strengths: tuple[str, ...]
    blind_spots: tuple[str, ...]
    stress_behaviors: tuple[str, ...]
    best_utilization: str


@dataclass(slots=True, frozen=True)
class CoachMessage:
    trigger: str
    message: str


def _metric(code: Metric, name: str, description: str, full_name: str | None = None):
    category = next(c for c in Category if code in c.metrics)
    return MetricDescriptor(code, name, full_name or name, description, category)


METRICS: dict[Metric, MetricDescriptor] = {
    d.code: d
    for d in (
        _metric(Metric.SA, "Self-Awareness", "Recognition of own emotions, triggers, and patterns"),
        _metric(Metric.SR, "Self-Regulation", "Control of emotional responses and impulses"),
        _metric(Metric.M, "Motivation", "Internal drive and persistence toward goals"),
        _metric(Metric.E, "Empathy", "Understanding and responding to others' emotions"),
        _metric(Metric.SS, "Social Skill", "Managing relationships and building influence"),
        _metric(Metric.B, "Beliefs", "Stories you tell yourself that shape your lens on pressure"),
        _metric(Metric.EX, "Excuses", "Protection patterns or rationalizations under tension"),
        _metric(
            Metric.D, "Decisions", "How boldly, clearly, and consistently you choose direction"
        ),
        _metric(
            Metric.T,
            "Trust",
            "Ability to establish and maintain credibility",
            full_name="Trust-Building",
        ),
        _metric(
            Metric.PS,
            "Psych Safety",
            "Creating space for risk-taking without fear",
            full_name="Psychological Safety",
        ),
        _metric(
            Metric.CQ,
            "Communication",
            "Clarity and effectiveness of messaging",
            full_name="Communication Quality",
        ),
        _metric(Metric.TS, "Team Stability", "Consistency and reliability in team dynamics"),
        _metric(Metric.ER, "Emotional Ripple", "Impact of your emotional state on others"),
    )
}

FAMILIES: dict[LeadershipFamily, FamilyDescriptor] = {
    LeadershipFamily.REGULATORS: FamilyDescriptor(
        LeadershipFamily.REGULATORS,
        "Regulators",
        "Composure, Steadiness, Emotional Grounding",
        "They stabilize teams.",
        "#0791f1",
    ),
    LeadershipFamily.CONNECTORS: FamilyDescriptor(
        LeadershipFamily.CONNECTORS,
        "Connectors",
        "Empathy, Trust, Human Intelligence",
        "They humanize leadership.",
        "#0791f1",
    ),
    LeadershipFamily.DRIVERS: FamilyDescriptor(
        LeadershipFamily.DRIVERS,
        "Drivers",
        "Action, Standards, Momentum",
        "They create results and standards.",
        "#DC143C",
    ),
    LeadershipFamily.STRATEGISTS: FamilyDescriptor(
        LeadershipFamily.STRATEGISTS,
        "Strategists",
        "Awareness, Vision, Intentionality",
        "They shape direction and intelligence.",
        "#C9A227",
    ),
}


def _type(
    code: LeadershipType,
    name: str,
    family: LeadershipFamily,
    tagline: str,
    description: str,
    strengths: list[str],
    blind_spots: list[str],
    stress_behaviors: list[str],
    best_utilization: str,
) -> TypeDescriptor:
    return TypeDescriptor(
        code,
        name,
        family,
        tagline,
        description,
        tuple(strengths),
        tuple(blind_spots),
        tuple(stress_behaviors),
        best_utilization,
    )


_R = LeadershipFamily.REGULATORS
_C = LeadershipFamily.CONNECTORS
_D = LeadershipFamily.DRIVERS
_S = LeadershipFamily.STRATEGISTS

TYPES: dict[LeadershipType, TypeDescriptor] = {
    t.code: t
    for t in (
        _type(
            LeadershipType.GROUNDED_COMMANDER,
            "The Grounded Commander",
            _R,
            "High Self-Regulation + High Motivation",
            "Calm under fire, confident decision-maker.",
            ["Crisis management", "Decisive action", "Emotional steadiness"],
            ["May appear detached", "Can miss emotional nuances"],
            ["Becomes more directive", "Narrows focus"],
            "Leading through high-stakes situations and organizational change.",
        ),
        _type(
            LeadershipType.ANCHOR,
            "The Anchor",
            _R,
            "High Awareness + High Regulation",
            "Emotionally consistent, prevents escalation.",
            ["Stability under pressure", "De-escalation", "Predictable presence"],
            ["May resist necessary change", "Can seem inflexible"],
            ["Doubles down on routines", "Avoids confrontation"],
            "Maintaining team morale during uncertainty and transition.",
        ),
        _type(
            LeadershipType.STABILIZER,
            "The Stabilizer",
            _R,
            "Balanced across regulation skills",
            "Keeps teams focused, protects psychological safety.",
            ["Team cohesion", "Conflict prevention", "Consistent leadership"],
            ["May avoid necessary conflict", "Can plateau on innovation"],
            ["Over-focuses on harmony", "Delays difficult decisions"],
            "Building and maintaining high-performing team environments.",
        ),
        _type(
            LeadershipType.RESPONDER,
            "The Responder",
            _R,
            "High Regulation + Mid Empathy",
            "Composed, reliable, systematic.",
            ["Process adherence", "Reliable execution", "Calm presence"],
            ["May miss emotional cues", "Can seem mechanical"],
            ["Retreats to process", "Becomes overly procedural"],
            "Operational leadership requiring consistent, methodical approach.",
        ),
        _type(
            LeadershipType.GUARDIAN,
            "The Guardian",
            _R,
            "High Regulation + High Social Skill",
            "Strong protector of team stability.",
            ["Team protection", "Boundary setting", "Loyal leadership"],
            ["May be overprotective", "Can resist outside input"],
            ["Circles the wagons", "Becomes defensive"],
            "Protecting teams from external pressures while maintaining performance.",
        ),
        _type(
            LeadershipType.EMPATHIC_STRATEGIST,
            "The Empathic Strategist",
            _C,
            "High Empathy + High Awareness",
            "Sees emotional patterns, drives trust quickly.",
            ["Reading rooms", "Building rapport", "Strategic empathy"],
            ["May over-empathize", "Can delay tough decisions"],
            ["Absorbs others' stress", "Becomes indecisive"],
            "Navigating complex stakeholder relationships and change management.",
        ),
        _type(
            LeadershipType.BRIDGE_BUILDER,
            "The Bridge Builder",
            _C,
            "Empathy + Social Skill",
            "Connects disconnected people, creates psychological safety.",
            ["Conflict resolution", "Cross-functional collaboration", "Trust building"],
            ["May avoid taking sides", "Can spread too thin"],
            ["Over-mediates", "Loses own voice"],
            "Unifying divided teams and departments.",
        ),
        _type(
            LeadershipType.MENTOR,
            "The Mentor",
            _C,
            "High Empathy + High Decisions",
            "Grows people, spots talent early.",
            ["Talent development", "Coaching", "Patient guidance"],
            ["May over-invest in individuals", "Can enable dependency"],
            ["Takes on others' problems", "Neglects own needs"],
            "Developing next-generation leaders and high-potential talent.",
        ),
        _type(
            LeadershipType.HARMONIZER,
            "The Harmonizer",
            _C,
            "Very High Empathy",
            "Excellent one-on-one relationships.",
            ["Deep connections", "Emotional intelligence", "Supportive presence"],
            ["May struggle with group dynamics", "Can be conflict-averse"],
            ["Withdraws from conflict", "Becomes passive"],
            "Building deep trust in key relationships and sensitive negotiations.",
        ),
        _type(
            LeadershipType.CULTURAL_ARCHITECT,
            "The Cultural Architect",
            _C,
            "High Empathy + Awareness + Social Skill",
            "Shapes culture intentionally.",
            ["Culture design", "Values alignment", "Organizational influence"],
            ["May focus on culture over results", "Can be idealistic"],
            ["Becomes preachy", "Over-focuses on values"],
            "Transforming organizational culture and building values-driven teams.",
        ),
        _type(
            LeadershipType.CATALYST,
            "The Catalyst",
            _D,
            "High Motivation + High Decisions",
            "Moves fast, inspires action.",
            ["Speed of execution", "Energy creation", "Momentum building"],
            ["May move too fast", "Can burn out teams"],
            ["Pushes harder", "Becomes impatient"],
            "Launching initiatives and driving rapid organizational change.",
        ),
        _type(
            LeadershipType.ENFORCER,
            "The Enforcer",
            _D,
            "High Motivation + Low Empathy",
            "Gets results regardless, sets clear expectations.",
            ["Accountability", "Clear standards", "Results focus"],
            ["May damage relationships", "Can create fear"],
            ["Becomes demanding", "Ignores emotional impact"],
            "Turnaround situations requiring tough accountability.",
        ),
        _type(
            LeadershipType.OPTIMIZER,
            "The Optimizer",
            _D,
            "High Standards + Process Focus",
            "Drives efficiency and excellence.",
            ["Process improvement", "Quality standards", "Systematic thinking"],
            ["May over-engineer", "Can slow innovation"],
            ["Micro-manages", "Obsesses over details"],
            "Improving operational efficiency and quality systems.",
        ),
        _type(
            LeadershipType.ACCELERATOR,
            "The Accelerator",
            _D,
            "High Energy + High Pace",
            "Creates urgency and forward motion.",
            ["Speed", "Energy", "Deadline orientation"],
            ["May sacrifice quality", "Can exhaust teams"],
            ["Races faster", "Skips steps"],
            "Time-sensitive projects and competitive situations.",
        ),
        _type(
            LeadershipType.STANDARD_BEARER,
            "The Standard Bearer",
            _D,
            "High Accountability + High Consistency",
            "Maintains excellence across teams.",
            ["Consistent excellence", "Role modeling", "Standards enforcement"],
            ["May be inflexible", "Can resist adaptation"],
            ["Becomes rigid", "Judges others harshly"],
            "Establishing and maintaining organizational standards.",
        ),
        _type(
            LeadershipType.VISIONARY,
            "The Visionary",
            _S,
            "High Awareness + High Motivation",
            "Sees future possibilities, inspires direction.",
            ["Future thinking", "Inspiration", "Strategic clarity"],
            ["May disconnect from present", "Can seem unrealistic"],
            ["Retreats to big picture", "Avoids tactical details"],
            "Setting long-term direction and inspiring organizational vision.",
        ),
        _type(
            LeadershipType.ARCHITECT,
            "The Architect",
            _S,
            "High Awareness + Systems Thinking",
            "Designs organizational structures.",
            ["System design", "Structural thinking", "Long-term planning"],
            ["May over-complicate", "Can ignore human factors"],
            ["Retreats to planning", "Analysis paralysis"],
            "Designing organizational structures and systems.",
        ),
        _type(
            LeadershipType.ANALYST,
            "The Analyst",
            _S,
            "High Awareness + Data-Driven",
            "Makes decisions based on evidence and patterns.",
            ["Data analysis", "Pattern recognition", "Objective decision-making"],
            ["May ignore intuition", "Can seem cold"],
            ["Demands more data", "Delays decisions"],
            "Complex problem-solving requiring analytical rigor.",
        ),
        _type(
            LeadershipType.NAVIGATOR,
            "The Navigator",
            _S,
            "High Awareness + Adaptability",
            "Guides through complexity and change.",
            ["Adaptability", "Course correction", "Change navigation"],
            ["May lack commitment", "Can seem inconsistent"],
            ["Over-pivots", "Loses direction"],
            "Leading through ambiguity and rapid change.",
        ),
        _type(
            LeadershipType.INTEGRATOR,
            "The Integrator",
            _S,
            "Balanced Awareness across all dimensions",
            "Synthesizes competing priorities.",
            ["Holistic thinking", "Priority balancing", "Integration"],
            ["May lack specialization", "Can seem uncommitted"],
            ["Over-balances", "Avoids strong positions"],
            "Leading cross-functional initiatives requiring balanced perspective.",
        ),
    )
}

COACH_MESSAGES: dict[str, CoachMessage] = {
    m.trigger: m
    for m in (
        CoachMessage(
            "start", "Let's discover the leader you already are, and the one you're becoming."
        ),
        CoachMessage("25%", "You're making great progress. Trust your instincts."),
        CoachMessage("50%", "Halfway there. Your patterns are revealing themselves."),
        CoachMessage("75%", "Almost done. The insights waiting for you are worth it."),
        CoachMessage("complete", "You showed up. Now let's show you what you've been building."),
    )
}


def types_for_family(family: LeadershipFamily) -> list[TypeDescriptor]:
    return [t for t in TYPES.values() if t.family == family]


def get_coach_message(progress: int) -> CoachMessage | None:
    """Coach message for a progress percentage; None between milestones below 25%."""
    if progress == 0:
        return COACH_MESSAGES["start"]
    if progress >= 100:
        return COACH_MESSAGES["complete"]
    if progress >= 75:
        return COACH_MESSAGES["75%"]
    if progress >= 50:
        return COACH_MESSAGES["50%"]
    if progress >= 25:
        return COACH_MESSAGES["25%"]
    return None


def calculate_progress(current_index: int, total_scenarios: int) -> int:
    return round_half_up(current_index * 100, total_scenarios)


def metric_percentage(score: int) -> int:
    """Percentage of the per-metric maximum (4 x 20) reached by ``score``."""
    return percentage(score, METRIC_MAX)


def score_level(percent: int) -> str:
    if percent >= 90:
        return "Exceptional"
    if percent >= 75:
        return "Strong"
    if percent >= 60:
        return "Developing"
    if percent >= 40:
        return "Emerging"
    return "Foundational"
