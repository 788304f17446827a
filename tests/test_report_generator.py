"""Tests for the report generator's accuracy model and scoring tables."""

import pytest

from app.scouting_engine.entities.enums import (
    DraftRecommendation,
    ScoutSpecialization,
    ScoutingTargetType,
    TradeRecommendation,
)
from app.scouting_engine.entities.player import RATED_ATTRIBUTES, PlayerProfile
from app.scouting_engine.random_manager import RandomManager
from app.scouting_engine.scouting.report_generator import (
    ReportGenerator,
    draft_recommendation,
    letter_grade,
    perceive,
    projected_role,
    report_accuracy,
    trade_recommendation,
)


@pytest.fixture
def average_scout(make_scout):
    # 0.50 base, no specialty bonus, 0.10 skill term for every target type
    return make_scout(
        specialization=ScoutSpecialization.REGIONAL,
        evaluation_accuracy=50,
        prospect_evaluation=50,
        pro_evaluation=50,
        college_connections=50,
        international_connections=50,
        attention_to_detail=50,
    )


# ---------------------------------------------------------------------------
# Accuracy
# ---------------------------------------------------------------------------

class TestAccuracy:
    def test_first_look_no_games(self, average_scout):
        acc = report_accuracy(average_scout, ScoutingTargetType.NBA_PLAYER, 0, 0)
        assert acc == pytest.approx(0.5 + 0.1 + 0.08)

    def test_repeat_bonus_caps(self, average_scout):
        acc = report_accuracy(average_scout, ScoutingTargetType.NBA_PLAYER, 10, 0)
        assert acc == pytest.approx(0.5 + 0.1 + 0.25)

    def test_games_bonus_caps(self, average_scout):
        acc = report_accuracy(average_scout, ScoutingTargetType.NBA_PLAYER, 0, 40)
        assert acc == pytest.approx(0.5 + 0.1 + 0.08 + 0.15)

    def test_specialty_bonus(self, make_scout):
        pro = make_scout(specialization=ScoutSpecialization.PRO, secondary_specialization=ScoutSpecialization.COLLEGE)
        assert pro.specialty_bonus(ScoutingTargetType.NBA_PLAYER) == 0.15
        assert pro.specialty_bonus(ScoutingTargetType.COLLEGE_PROSPECT) == 0.08
        assert pro.specialty_bonus(ScoutingTargetType.OPPONENT_TEAM) == 0.0

    def test_accuracy_is_clamped(self, make_scout):
        elite = make_scout(evaluation_accuracy=99, pro_evaluation=99)
        assert report_accuracy(elite, ScoutingTargetType.NBA_PLAYER, 5, 10) == 1.0

    def test_perfect_accuracy_sees_the_truth(self):
        rng = RandomManager(5)
        assert all(perceive(rng, 63, 1.0) == 63 for _ in range(20))

    def test_perception_error_is_bounded(self):
        rng = RandomManager(5)
        for _ in range(200):
            assert 53 <= perceive(rng, 63, 0.5) <= 73


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

class TestTables:
    @pytest.mark.parametrize(
        "overall,grade",
        [(95, "A+"), (88, "A+"), (85, "A"), (71, "B"), (58, "C"), (50, "D"), (47, "F")],
    )
    def test_letter_grade(self, overall, grade):
        assert letter_grade(overall) == grade

    def test_projected_role(self):
        assert projected_role(92) == "Franchise Player"
        assert projected_role(40) == "Two-Way / G-League"

    def test_draft_recommendation(self):
        assert draft_recommendation(80, 80) == DraftRecommendation.LOTTERY
        assert draft_recommendation(60, 90) == DraftRecommendation.FIRST_ROUND
        assert draft_recommendation(40, 40) == DraftRecommendation.PASS

    def test_trade_recommendation(self):
        assert trade_recommendation(75) == TradeRecommendation.ACQUIRE
        assert trade_recommendation(60) == TradeRecommendation.MONITOR
        assert trade_recommendation(30) == TradeRecommendation.AVOID


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class TestReportGenerator:
    def _player(self, rating, years_pro=0, **attrs):
        attributes = {a: rating for a in RATED_ATTRIBUTES}
        attributes.update(attrs)
        return PlayerProfile("P1", "Test Player", position="C", years_pro=years_pro, attributes=attributes)

    def test_strengths_and_weaknesses(self, make_scout):
        scout = make_scout(evaluation_accuracy=99, pro_evaluation=99)
        player = self._player(60, years_pro=3, shooting=90, rebounding=30)

        content = ReportGenerator(RandomManager(1)).generate(player, scout, 5, 10)

        assert content.accuracy == 1.0
        assert content.perceived_ratings["shooting"] == 90
        assert content.strengths == ["Reliable perimeter shooter"]
        assert content.weaknesses == ["Below-average rebounder"]
        assert content.position == "C"
        assert content.trade_recommendation is not None
        assert "Test Player" in content.summary

    def test_prospect_gets_draft_recommendation(self, make_scout):
        content = ReportGenerator(RandomManager(1)).generate(self._player(70), make_scout(), 0, 3)
        assert content.draft_recommendation is not None
        assert content.trade_recommendation is None

    def test_seeded_generator_is_deterministic(self, make_scout):
        scout = make_scout(evaluation_accuracy=40)
        a = ReportGenerator(RandomManager(9)).generate(self._player(60), scout, 0, 1)
        b = ReportGenerator(RandomManager(9)).generate(self._player(60), scout, 0, 1)
        assert a == b

    def test_explicit_target_type_overrides_the_player(self, make_scout):
        veteran = self._player(70, years_pro=6)
        gen = ReportGenerator(RandomManager(1))

        as_prospect = gen.generate(veteran, make_scout(), 0, 3, target_type=ScoutingTargetType.INTERNATIONAL_PROSPECT)
        as_pro = gen.generate(veteran, make_scout(), 0, 3)

        assert as_prospect.draft_recommendation is not None
        assert as_prospect.trade_recommendation is None
        assert as_pro.trade_recommendation is not None
