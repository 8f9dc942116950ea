"""
Narrative insights generated from a score profile.

Every function here is a pure lookup over the ScoreBreakdown, the leadership
family and the leadership type; the report renderer only has to lay the text
out. Per-metric levels use the metric's share of its 80-point maximum.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Category, LeadershipFamily, LeadershipType, Metric
from .models import ScoreBreakdown
from .typology import FAMILIES, TYPES, metric_percentage

HIGH = "high"
MODERATE = "moderate"
DEVELOPING = "developing"


def score_band(percent: int) -> str:
    if percent >= 75:
        return HIGH
    if percent >= 50:
        return MODERATE
    return DEVELOPING


def _metric_band(scores: ScoreBreakdown, metric: Metric) -> str:
    return score_band(metric_percentage(scores[metric]))


def _lowest(scores: ScoreBreakdown, metrics) -> Metric:
    # min() keeps the first of equal values
    return min(metrics, key=lambda m: scores[m])


# ---------- Culture ripple ----------


def culture_ripple_insight(scores: ScoreBreakdown, family: LeadershipFamily) -> str:
    info = FAMILIES[family]
    tagline = info.tagline.lower()
    pct = scores.culture.percentage
    texts = {
        HIGH: (
            f"Your emotional presence creates a strong positive ripple across your team. "
            f"As a {info.name} leader, your {tagline} naturally fosters an environment where "
            f"people feel valued and heard. Your high Cultural Influence score ({pct}%) "
            f"indicates that your emotional state significantly elevates team morale and "
            f"productivity."
        ),
        MODERATE: (
            f"Your emotional influence on team culture is developing well. As a {info.name} "
            f"leader, you bring {tagline} to your interactions. With a Cultural Influence score "
            f"of {pct}%, you have solid foundations but opportunity to amplify your positive "
            f"impact on psychological safety and trust-building."
        ),
        DEVELOPING: (
            f"Your cultural ripple is an area for focused growth. As a {info.name} leader, you "
            f"have the potential to leverage {tagline} more consistently. Your Cultural "
            f"Influence score of {pct}% suggests that being more intentional about your "
            f"emotional presence could significantly improve team dynamics."
        ),
    }

    extra = ""
    if _metric_band(scores, Metric.T) == HIGH:
        extra = " Your strength in trust-building creates lasting bonds with team members."
    elif _metric_band(scores, Metric.PS) == DEVELOPING:
        extra = (
            " Focus on creating more psychological safety to help your team take healthy risks."
        )
    return texts[score_band(pct)] + extra


# ---------- B.E.D. profile ----------


@dataclass(slots=True, frozen=True)
class BedProfileInsight:
    beliefs: str
    excuses: str
    decisions: str


def bed_profile_insight(
    scores: ScoreBreakdown, leadership_type: LeadershipType
) -> BedProfileInsight:
    name = TYPES[leadership_type].name
    beliefs = {
        HIGH: (
            f"Your belief patterns are empowering. You operate from a mindset of possibility "
            f"and growth, which aligns with your identity as {name}. You tend to see challenges "
            f"as opportunities and maintain constructive narratives even under pressure."
        ),
        MODERATE: (
            f"Your belief patterns show a balance of optimism and caution. As {name}, you "
            f"generally maintain constructive thinking but may occasionally slip into limiting "
            f"narratives when stressed. Building awareness of these moments can strengthen "
            f"your leadership presence."
        ),
        DEVELOPING: (
            f"Your belief patterns may be holding you back. Consider examining the stories you "
            f"tell yourself about your capabilities and circumstances. As {name}, shifting "
            f"toward more empowering beliefs could unlock significant leadership potential."
        ),
    }
    excuses = {
        HIGH: (
            "You demonstrate strong accountability and rarely fall into excuse-making "
            "patterns. This ownership mentality is a key strength that builds trust with your "
            "team and drives results."
        ),
        MODERATE: (
            "You generally take ownership but may occasionally defer responsibility under "
            "pressure. Recognizing these moments and choosing accountability can strengthen "
            "your leadership credibility."
        ),
        DEVELOPING: (
            "Under pressure, you may tend toward protective excuse patterns. This is common "
            "but worth addressing. Building habits of radical ownership, even in difficult "
            "situations, will significantly elevate your leadership impact."
        ),
    }
    decisions = {
        HIGH: (
            "You make bold, timely decisions even with incomplete information. This "
            "decisiveness inspires confidence in your team and keeps momentum strong during "
            "uncertainty."
        ),
        MODERATE: (
            "Your decision-making is generally sound but may slow under pressure. Trust your "
            "judgment more and remember that a good decision now often beats a perfect "
            "decision later."
        ),
        DEVELOPING: (
            f"Decision hesitancy may be limiting your leadership effectiveness. As {name}, "
            f"leaning into your natural strengths and trusting your instincts more can help "
            f"you make faster, more confident choices."
        ),
    }
    return BedProfileInsight(
        beliefs=beliefs[_metric_band(scores, Metric.B)],
        excuses=excuses[_metric_band(scores, Metric.EX)],
        decisions=decisions[_metric_band(scores, Metric.D)],
    )


# ---------- Pressure pattern ----------


def pressure_pattern_insight(scores: ScoreBreakdown, leadership_type: LeadershipType) -> str:
    info = TYPES[leadership_type]
    regulation = metric_percentage(scores[Metric.SR])
    awareness = metric_percentage(scores[Metric.SA])

    if regulation >= 75:
        response = (
            "When pressure rises, you maintain remarkable composure. Your ability to regulate "
            "your emotional state keeps you grounded when others might react impulsively."
        )
    elif regulation >= 50:
        response = (
            "Under pressure, you generally maintain composure but may experience moments of "
            "emotional reactivity. Building stronger regulation habits will help you stay "
            "centered in high-stakes moments."
        )
    else:
        response = (
            "Pressure tends to trigger emotional responses that may not serve you well. "
            "Developing stronger self-regulation practices will help you respond rather than "
            "react in challenging situations."
        )

    if awareness >= 70:
        closing = (
            "Your strong self-awareness helps you recognize these patterns early, giving you "
            "the chance to course-correct."
        )
    else:
        closing = (
            "Building greater self-awareness will help you catch these patterns earlier and "
            "choose more effective responses."
        )

    behaviors = ", ".join(info.stress_behaviors).lower()
    return (
        f"{response} As {info.name}, your typical stress behaviors include: {behaviors}. "
        f"{closing}"
    )


# ---------- Growth recommendations ----------

EQ_RECOMMENDATIONS: dict[Metric, str] = {
    Metric.SA: (
        "Practice daily reflection. Spend 5 minutes each evening reviewing your emotional "
        "responses and their impact on others."
    ),
    Metric.SR: (
        "Develop a pause practice. When triggered, take three deep breaths before responding "
        "to create space between stimulus and response."
    ),
    Metric.M: (
        "Reconnect with your core purpose. Write down why your work matters and review it "
        "weekly to maintain intrinsic drive."
    ),
    Metric.E: (
        "Practice active listening. In your next three conversations, focus entirely on "
        "understanding before responding."
    ),
    Metric.SS: (
        "Invest in relationship building. Schedule one informal connection conversation with "
        "a team member each week."
    ),
}

FAMILY_RECOMMENDATIONS: dict[LeadershipFamily, str] = {
    LeadershipFamily.REGULATORS: (
        "Balance your stability with flexibility. Challenge yourself to embrace one change or "
        "new approach this week."
    ),
    LeadershipFamily.CONNECTORS: (
        "Set boundaries around emotional investment. Schedule recovery time after intense "
        "relational work."
    ),
    LeadershipFamily.DRIVERS: (
        "Slow down to speed up. Take time to bring others along rather than pushing ahead alone."
    ),
    LeadershipFamily.STRATEGISTS: (
        "Move from planning to action. Identify one insight you can implement immediately "
        "rather than continuing to analyze."
    ),
}


def growth_recommendations(
    scores: ScoreBreakdown, leadership_type: LeadershipType, family: LeadershipFamily
) -> list[str]:
    """
    Four concrete next steps, in order:

    1. one for the weakest EQ pillar
    2. one for the B.E.D. pattern
    3. one for the type's primary blind spot
    4. one for the family
    """
    recommendations = [EQ_RECOMMENDATIONS[_lowest(scores, Category.EQ.metrics)]]

    b, ex, d = scores[Metric.B], scores[Metric.EX], scores[Metric.D]
    if b < ex and b < d:
        recommendations.append(
            "Challenge limiting beliefs. When you notice negative self-talk, write it down and "
            "actively reframe it with evidence-based alternatives."
        )
    elif ex < d:
        recommendations.append(
            'Practice radical ownership. For the next week, eliminate phrases like "I had to" '
            'or "They made me" from your vocabulary.'
        )
    else:
        recommendations.append(
            "Build decision momentum. Start each day by making one clear decision quickly, "
            "building your confidence in faster decision-making."
        )

    blind_spot = TYPES[leadership_type].blind_spots[0]
    recommendations.append(
        f"Address your primary blind spot: {blind_spot}. Ask a trusted colleague for feedback "
        f"on this specific area."
    )
    recommendations.append(FAMILY_RECOMMENDATIONS[family])
    return recommendations


# ---------- One high-impact shift ----------


def move_the_stool_insight(scores: ScoreBreakdown, leadership_type: LeadershipType) -> str:
    """The single shift for the lowest EQ or B.E.D. metric."""
    name = TYPES[leadership_type].name
    moves = {
        Metric.SA: (
            f'Your one move: Start a daily "emotional check-in" practice. Before your first '
            f'meeting each day, ask yourself: "What emotion am I carrying right now, and how '
            f'might it show up?" This simple pause will transform how you show up as {name}.'
        ),
        Metric.SR: (
            'Your one move: Create a "pause protocol." When you feel emotional intensity '
            "rising, physically step back, take three breaths, and ask: \"What response serves "
            'the outcome I want?" This shift from reaction to response will unlock your '
            "leadership potential."
        ),
        Metric.M: (
            f'Your one move: Reconnect with your "why" weekly. Set a 15-minute calendar block '
            f"each Monday to write down one thing that matters about your work this week. As "
            f"{name}, this practice will reignite your natural drive."
        ),
        Metric.E: (
            'Your one move: Practice "listen-first" leadership. In your next five important '
            "conversations, commit to understanding before being understood. Ask one follow-up "
            "question before offering your perspective."
        ),
        Metric.SS: (
            f"Your one move: Initiate one meaningful conversation each week with someone "
            f"outside your immediate circle. As {name}, expanding your relational influence "
            f"will multiply your leadership impact."
        ),
        Metric.B: (
            "Your one move: Challenge one limiting belief this week. When you notice negative "
            'self-talk, write it down and ask: "What evidence contradicts this story?" '
            "Rewriting your internal narrative will shift your external results."
        ),
        Metric.EX: (
            "Your one move: Adopt radical ownership for 30 days. When something goes wrong, "
            'ask "What could I have done differently?" before looking at external factors. '
            "This mindset shift will transform how others trust your leadership."
        ),
        Metric.D: (
            "Your one move: Make one decisive choice each morning before 9 AM. Build the "
            "muscle of swift decision-making in low-stakes situations so it becomes natural "
            "when the stakes rise."
        ),
    }
    return moves[_lowest(scores, Category.EQ.metrics + Category.BED.metrics)]


# ---------- Because statement ----------

FAMILY_BECAUSE: dict[LeadershipFamily, str] = {
    LeadershipFamily.REGULATORS: (
        "you believe stability creates the foundation for others to thrive"
    ),
    LeadershipFamily.CONNECTORS: (
        "you know that people perform best when they feel genuinely seen and valued"
    ),
    LeadershipFamily.DRIVERS: "you understand that momentum and decisive action move teams forward",
    LeadershipFamily.STRATEGISTS: (
        "you see patterns others miss and know that insight drives transformation"
    ),
}


def because_statement(
    scores: ScoreBreakdown, leadership_type: LeadershipType, family: LeadershipFamily
) -> str:
    info = TYPES[leadership_type]
    because = FAMILY_BECAUSE[family]
    motivation = _metric_band(scores, Metric.M)
    beliefs = _metric_band(scores, Metric.B)

    if HIGH in (motivation, beliefs):
        return (
            f"I lead BECAUSE {because}. As {info.name}, I show up every day because my "
            f"{info.tagline.lower()} creates impact that matters. I refuse to quit because I've "
            f"seen what's possible when leadership is done with emotional intelligence."
        )
    if motivation == DEVELOPING and beliefs == DEVELOPING:
        return (
            f"I lead BECAUSE {because}. I may still be discovering my full potential as "
            f"{info.name}, but I refuse to quit because I know that every step forward in "
            f"emotional intelligence creates ripples of positive change."
        )
    return (
        f"I lead BECAUSE {because}. Even when it's hard, I show up as {info.name} because I "
        f"believe in the power of emotionally intelligent leadership. I'm building toward a "
        f"version of myself that leads with both strength and heart."
    )


# ---------- Per-metric insights ----------

PILLAR_INSIGHTS: dict[Metric, dict[str, str]] = {
    Metric.SA: {
        HIGH: (
            "Your self-awareness is a significant strength. You recognize your emotions and "
            "their impact, giving you the ability to lead with intention."
        ),
        MODERATE: (
            "Your self-awareness is developing. Continue building the habit of checking in "
            "with your emotional state throughout the day."
        ),
        DEVELOPING: (
            "Growing your self-awareness will unlock other areas of emotional intelligence. "
            "Start by naming your emotions as you experience them."
        ),
    },
    Metric.SR: {
        HIGH: (
            "You demonstrate excellent emotional control. This allows you to remain composed "
            "when others look to you for stability."
        ),
        MODERATE: (
            "Your self-regulation is solid but has room to grow. Notice the moments when "
            "emotions drive your responses rather than inform them."
        ),
        DEVELOPING: (
            "Building self-regulation skills will transform your leadership presence. Practice "
            "pausing before responding in emotional moments."
        ),
    },
    Metric.M: {
        HIGH: (
            "Your inner drive is powerful. This intrinsic motivation keeps you moving forward "
            "even when external recognition is absent."
        ),
        MODERATE: (
            "Your motivation is present but could be more consistent. Reconnecting with your "
            "core purpose will help sustain your drive."
        ),
        DEVELOPING: (
            "Strengthening your motivation will fuel all other aspects of your leadership. "
            "Identify what truly matters to you about your work."
        ),
    },
    Metric.E: {
        HIGH: (
            "Your empathy is a gift. You naturally understand others' perspectives, creating "
            "deeper connections and trust."
        ),
        MODERATE: (
            "Your empathy is present but could go deeper. Practice being curious about others' "
            "experiences before offering solutions."
        ),
        DEVELOPING: (
            "Developing empathy will enhance your relationships and influence. Start by asking "
            "more questions and listening without planning your response."
        ),
    },
    Metric.SS: {
        HIGH: (
            "Your social skills create influence. You navigate relationships and group "
            "dynamics with natural ease."
        ),
        MODERATE: (
            "Your social skills serve you well but can expand further. Focus on adapting your "
            "communication style to different audiences."
        ),
        DEVELOPING: (
            "Building social skills will multiply your leadership reach. Start by being more "
            "intentional about how you engage in group settings."
        ),
    },
}

DIMENSION_INSIGHTS: dict[Metric, dict[str, str]] = {
    Metric.T: {
        HIGH: (
            "Trust flows naturally from your leadership. People believe in your intentions and "
            "follow your direction with confidence."
        ),
        MODERATE: (
            "You've built solid trust foundations. Consistency in your words and actions will "
            "deepen this further."
        ),
        DEVELOPING: (
            "Building trust is your growth edge. Focus on following through on commitments, no "
            "matter how small."
        ),
    },
    Metric.PS: {
        HIGH: (
            "You create psychological safety. Team members feel comfortable taking risks and "
            "speaking up around you."
        ),
        MODERATE: (
            "Your team feels reasonably safe, but there's room to create more openness. Invite "
            "dissenting opinions more often."
        ),
        DEVELOPING: (
            "Psychological safety needs attention. Your team may hesitate to share concerns. "
            "Practice responding with curiosity, not judgment."
        ),
    },
    Metric.CQ: {
        HIGH: (
            "Your communication creates clarity. People understand your message and feel "
            "informed about what matters."
        ),
        MODERATE: (
            "Your communication is effective but could be more consistent. Ensure your message "
            "reaches all levels equally."
        ),
        DEVELOPING: (
            "Communication is a growth area. Focus on being more explicit about expectations "
            "and more frequent with updates."
        ),
    },
    Metric.TS: {
        HIGH: (
            "You bring stability to your team. People feel secure and can focus on their work "
            "without unnecessary anxiety."
        ),
        MODERATE: (
            "Your team experiences reasonable stability. Work on being more predictable in "
            "your responses to change."
        ),
        DEVELOPING: (
            "Team stability needs focus. Your emotional variability may create uncertainty. "
            "Aim for more consistency in your presence."
        ),
    },
    Metric.ER: {
        HIGH: (
            "Your emotional presence lifts others. People feel better after interacting with "
            "you and carry that energy forward."
        ),
        MODERATE: (
            "Your emotional ripple is positive but not yet maximized. Be more intentional about "
            "the energy you bring to interactions."
        ),
        DEVELOPING: (
            "Your emotional ripple needs attention. Notice how your mood affects others and "
            "work on bringing consistent positive energy."
        ),
    },
}


def eq_pillar_insight(metric: Metric, percent: int) -> str:
    texts = PILLAR_INSIGHTS.get(metric)
    if texts is None:
        return f"Your {metric.name} score reflects your current capacity in this area."
    return texts[score_band(percent)]


def culture_dimension_insight(metric: Metric, percent: int) -> str:
    texts = DIMENSION_INSIGHTS.get(metric)
    if texts is None:
        return f"Your {metric.name} score reflects your current impact in this area."
    return texts[score_band(percent)]


# ---------- Bundle ----------


@dataclass(slots=True, frozen=True)
class ResultInsights:
    culture_ripple: str
    bed_profile: BedProfileInsight
    pressure_pattern: str
    growth_recommendations: list[str]
    move_the_stool: str
    because_statement: str
    eq_pillars: dict[str, str] = field(default_factory=dict)
    culture_dimensions: dict[str, str] = field(default_factory=dict)


def build_insights(
    scores: ScoreBreakdown, family: LeadershipFamily, leadership_type: LeadershipType
) -> ResultInsights:
    return ResultInsights(
        culture_ripple=culture_ripple_insight(scores, family),
        bed_profile=bed_profile_insight(scores, leadership_type),
        pressure_pattern=pressure_pattern_insight(scores, leadership_type),
        growth_recommendations=growth_recommendations(scores, leadership_type, family),
        move_the_stool=move_the_stool_insight(scores, leadership_type),
        because_statement=because_statement(scores, leadership_type, family),
        eq_pillars={
            m.name: eq_pillar_insight(m, metric_percentage(scores[m])) for m in Category.EQ.metrics
        },
        culture_dimensions={
            m.name: culture_dimension_insight(m, metric_percentage(scores[m]))
            for m in Category.CULTURE.metrics
        },
    )
