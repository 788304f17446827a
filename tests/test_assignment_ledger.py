"""Tests for assignment validation, back-references and cancellation."""

import pytest

from app.scouting_engine.entities.assignment import (
    Assignment,
    PlayerTarget,
    TeamTarget,
    target_from_dict,
    target_problem,
)
from app.scouting_engine.entities.enums import ScoutingError, ScoutingTargetType
from app.scouting_engine.scouting.assignment_ledger import AssignmentLedger


# ---------------------------------------------------------------------------
# Assign
# ---------------------------------------------------------------------------

class TestAssign:
    def test_assign_links_scout_and_ledger(self, staffed, nba_target):
        service, scouts = staffed
        result = service.assign(scouts[0].id, nba_target, 5)

        assert result.ok
        assignment = result.payload
        assert service.get_assignment(scouts[0].id) is assignment
        assert scouts[0].current_assignment_id == assignment.id
        assert scouts[0].is_available is False
        assert assignment.start_day == 0
        assert assignment.duration_days == 5
        assert assignment.observations == 0

    def test_unknown_scout(self, service, nba_target):
        result = service.assign("ghost", nba_target, 5)
        assert result.error == ScoutingError.NOT_FOUND

    def test_free_agent_cannot_be_assigned(self, service, make_scout, nba_target):
        scout = make_scout()
        service.pool.add_free_agents([scout])
        result = service.assign(scout.id, nba_target, 5)
        assert result.error == ScoutingError.NOT_FOUND

    def test_second_assignment_is_rejected(self, staffed, nba_target):
        service, scouts = staffed
        first = service.assign(scouts[0].id, nba_target, 5).payload

        result = service.assign(scouts[0].id, TeamTarget("OPP"), 3)

        assert result.error == ScoutingError.ALREADY_ASSIGNED
        assert service.get_assignment(scouts[0].id) is first

    @pytest.mark.parametrize("duration", [0, -3, 2.5, True, "7"])
    def test_invalid_duration(self, staffed, nba_target, duration):
        service, scouts = staffed
        result = service.assign(scouts[0].id, nba_target, duration)

        assert result.error == ScoutingError.INVALID_DURATION
        assert service.get_assignment(scouts[0].id) is None
        assert scouts[0].is_available

    def test_invalid_target(self, staffed):
        service, scouts = staffed
        bad = PlayerTarget(player_id="P1", target_type=ScoutingTargetType.OPPONENT_TEAM)

        result = service.assign(scouts[0].id, bad, 5)

        assert result.error == ScoutingError.INVALID_TARGET

    def test_default_duration_follows_target_type(self, staffed):
        service, scouts = staffed
        prospect = PlayerTarget("P2", ScoutingTargetType.COLLEGE_PROSPECT)

        a1 = service.assign(scouts[0].id, prospect).payload
        a2 = service.assign(scouts[1].id, TeamTarget("OPP")).payload

        assert a1.duration_days == 14
        assert a2.duration_days == 5

    def test_assignment_starts_on_current_day(self, staffed, nba_target):
        service, scouts = staffed
        service.advance_to(12)
        assignment = service.assign(scouts[0].id, nba_target, 3).payload
        assert assignment.start_day == 12


# ---------------------------------------------------------------------------
# Cancel
# ---------------------------------------------------------------------------

class TestCancel:
    def test_cancel_frees_the_scout(self, staffed, nba_target):
        service, scouts = staffed
        assignment = service.assign(scouts[0].id, nba_target, 5).payload

        result = service.cancel(scouts[0].id)

        assert result.ok
        assert result.payload is assignment
        assert service.get_assignment(scouts[0].id) is None
        assert scouts[0].is_available
        assert scouts[0].current_assignment_id is None
        assert scouts[0] in service.list_available("T")

    def test_cancel_idle_scout_is_a_noop(self, staffed):
        service, scouts = staffed
        result = service.cancel(scouts[0].id)
        assert result.ok
        assert result.payload is None

    def test_cancel_unknown_scout(self, service):
        assert service.cancel("ghost").error == ScoutingError.NOT_FOUND

    def test_ledger_cancel_returns_none_when_idle(self):
        assert AssignmentLedger().cancel("S1") is None


# ---------------------------------------------------------------------------
# Targets / progress
# ---------------------------------------------------------------------------

class TestTargets:
    def test_target_ids(self):
        assert PlayerTarget("P9").target_id == "P9"
        assert TeamTarget("BOS").target_id == "BOS"
        assert TeamTarget("BOS").target_type == ScoutingTargetType.OPPONENT_TEAM

    def test_target_problem(self):
        assert target_problem(PlayerTarget("P1")) is None
        assert target_problem(PlayerTarget("")) is not None
        assert target_problem(TeamTarget("")) is not None
        assert target_problem("P1") is not None

    def test_unknown_target_kind(self):
        with pytest.raises(ValueError):
            target_from_dict({"kind": "coach", "coach_id": "C1"})

    def test_progress_is_clamped(self):
        a = Assignment(id="A", scout_id="S", team_id="T", target=PlayerTarget("P1"), start_day=10, duration_days=4)
        assert a.progress(10) == 0.0
        assert a.progress(12) == 0.5
        assert a.progress(30) == 1.0
        assert not a.is_complete(13)
        assert a.is_complete(14)


# ---------------------------------------------------------------------------
# Per-team index
# ---------------------------------------------------------------------------

class TestTeamIndex:
    def test_for_team_tracks_assign_and_cancel(self, make_scout):
        ledger = AssignmentLedger()
        a1, a2, b1 = make_scout(team_id="A"), make_scout(team_id="A"), make_scout(team_id="B")
        for scout in (a1, a2, b1):
            assert ledger.assign(scout, PlayerTarget("P1"), 3, 0).ok

        assert [a.scout_id for a in ledger.for_team("A")] == [a1.id, a2.id]
        assert [a.scout_id for a in ledger.for_team("B")] == [b1.id]

        ledger.cancel(a1.id)
        ledger.cancel(b1.id)

        assert [a.scout_id for a in ledger.for_team("A")] == [a2.id]
        assert ledger.for_team("B") == []
        assert len(ledger) == 1

    def test_load_and_clear_keep_index_in_step(self, make_scout):
        ledger = AssignmentLedger()
        scout = make_scout(team_id="A")
        assignment = Assignment(id="A1", scout_id=scout.id, team_id="A", target=TeamTarget("OPP"), start_day=2, duration_days=5)

        ledger.load(assignment, scout)
        assert ledger.for_team("A") == [assignment]
        assert scout.current_assignment_id == "A1"

        ledger.clear()
        assert ledger.for_team("A") == []
        assert ledger.all() == []
