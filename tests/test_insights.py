import pytest

from app.application.api import score_answers
from app.domain.enums import LeadershipFamily, LeadershipType, Metric
from app.domain.insights import (
    DEVELOPING,
    HIGH,
    MODERATE,
    because_statement,
    bed_profile_insight,
    build_insights,
    culture_dimension_insight,
    culture_ripple_insight,
    eq_pillar_insight,
    growth_recommendations,
    move_the_stool_insight,
    pressure_pattern_insight,
    score_band,
)
from app.domain.services import breakdown_from_totals


def totals(**values):
    vector = [0] * 13
    for code, value in values.items():
        vector[Metric[code]] = value
    return breakdown_from_totals(vector)


@pytest.fixture
def best(best_answers):
    return score_answers(best_answers)


def test_score_bands():
    assert score_band(100) == HIGH
    assert score_band(75) == HIGH
    assert score_band(74) == MODERATE
    assert score_band(50) == MODERATE
    assert score_band(49) == DEVELOPING
    assert score_band(0) == DEVELOPING


class TestBestChoiceInsights:
    def test_culture_ripple(self, best):
        text = culture_ripple_insight(best.scores, best.leadership_family)
        assert text.startswith("Your emotional presence creates a strong positive ripple")
        assert "As a Connectors leader" in text
        assert "(95%)" in text
        assert text.endswith("creates lasting bonds with team members.")

    def test_bed_profile(self, best):
        bed = bed_profile_insight(best.scores, best.leadership_type)
        assert bed.beliefs.startswith("Your belief patterns are empowering.")
        assert "The Cultural Architect" in bed.beliefs
        assert bed.excuses.startswith("Under pressure, you may tend toward protective excuse")
        assert bed.decisions.startswith("You make bold, timely decisions")

    def test_pressure_pattern(self, best):
        text = pressure_pattern_insight(best.scores, best.leadership_type)
        assert "remarkable composure" in text
        assert "As The Cultural Architect, your typical stress behaviors include:" in text
        assert "Your strong self-awareness" in text

    def test_growth_recommendations(self, best):
        recs = growth_recommendations(best.scores, best.leadership_type, best.leadership_family)
        assert len(recs) == 4
        # motivation is the weakest EQ pillar, excuses the weakest B.E.D. metric
        assert recs[0].startswith("Reconnect with your core purpose.")
        assert recs[1].startswith("Practice radical ownership.")
        assert "May focus on culture over results" in recs[2]
        assert recs[3].startswith("Set boundaries around emotional investment.")

    def test_move_the_stool_targets_lowest_metric(self, best):
        text = move_the_stool_insight(best.scores, best.leadership_type)
        assert text.startswith("Your one move: Adopt radical ownership for 30 days.")

    def test_because_statement(self, best):
        text = because_statement(best.scores, best.leadership_type, best.leadership_family)
        assert text.startswith("I lead BECAUSE you know that people perform best")
        assert "my high empathy + awareness + social skill creates impact" in text

    def test_bundle(self, best):
        insights = build_insights(best.scores, best.leadership_family, best.leadership_type)
        assert list(insights.eq_pillars) == ["SA", "SR", "M", "E", "SS"]
        assert list(insights.culture_dimensions) == ["T", "PS", "CQ", "TS", "ER"]
        assert insights.eq_pillars["SA"].startswith("Your self-awareness is a significant")
        assert insights.eq_pillars["M"].startswith("Your motivation is present")
        assert insights.culture_dimensions["T"].startswith("Trust flows naturally")
        assert len(insights.growth_recommendations) == 4


class TestEmptyProfileInsights:
    family = LeadershipFamily.REGULATORS
    leadership_type = LeadershipType.STABILIZER

    def test_culture_ripple_adds_safety_prompt(self):
        text = culture_ripple_insight(totals(), self.family)
        assert text.startswith("Your cultural ripple is an area for focused growth.")
        assert text.endswith("help your team take healthy risks.")

    def test_bed_profile_is_developing(self):
        bed = bed_profile_insight(totals(), self.leadership_type)
        assert bed.beliefs.startswith("Your belief patterns may be holding you back.")
        assert bed.excuses.startswith("Under pressure")
        assert bed.decisions.startswith("Decision hesitancy")

    def test_pressure_pattern(self):
        text = pressure_pattern_insight(totals(), self.leadership_type)
        assert text.startswith("Pressure tends to trigger emotional responses")
        assert text.endswith("choose more effective responses.")

    def test_ties_pick_first_metric(self):
        recs = growth_recommendations(totals(), self.leadership_type, self.family)
        assert recs[0].startswith("Practice daily reflection.")
        assert recs[1].startswith("Build decision momentum.")
        move = move_the_stool_insight(totals(), self.leadership_type)
        assert 'daily "emotional check-in"' in move

    def test_because_statement(self):
        text = because_statement(totals(), self.leadership_type, self.family)
        assert "I may still be discovering my full potential" in text


def test_moderate_because_statement():
    # motivation 45/80 is 56%, beliefs stay developing
    text = because_statement(totals(M=45), LeadershipType.CATALYST, LeadershipFamily.DRIVERS)
    assert text.startswith("I lead BECAUSE you understand that momentum")
    assert "Even when it's hard, I show up as" in text


def test_beliefs_lowest_recommendation():
    recs = growth_recommendations(
        totals(B=10, EX=20, D=30), LeadershipType.ARCHITECT, LeadershipFamily.STRATEGISTS
    )
    assert recs[1].startswith("Challenge limiting beliefs.")


def test_metric_insight_fallbacks():
    assert eq_pillar_insight(Metric.B, 90) == (
        "Your B score reflects your current capacity in this area."
    )
    assert culture_dimension_insight(Metric.SA, 10) == (
        "Your SA score reflects your current impact in this area."
    )
    assert culture_dimension_insight(Metric.PS, 40).startswith("Psychological safety needs")
