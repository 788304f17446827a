"""Tests for hiring, firing and availability in the scout pool."""

from app.scouting_engine.entities.enums import ScoutingError


# ---------------------------------------------------------------------------
# Hire
# ---------------------------------------------------------------------------

class TestHire:
    def test_hire_sets_team_and_roster(self, service, make_scout):
        scout = make_scout()
        result = service.hire("T", scout)

        assert result.ok
        assert result.payload is scout
        assert scout.team_id == "T"
        assert service.get_scouts("T") == [scout]
        assert service.get_scout(scout.id) is scout

    def test_sixth_scout_is_rejected(self, service, make_scout):
        for _ in range(5):
            assert service.hire("T", make_scout()).ok

        result = service.hire("T", make_scout())

        assert not result
        assert result.error == ScoutingError.CAPACITY_EXCEEDED
        assert len(service.get_scouts("T")) == 5

    def test_scout_cannot_work_for_two_teams(self, service, make_scout):
        scout = make_scout()
        assert service.hire("T", scout).ok

        result = service.hire("U", scout)

        assert result.error == ScoutingError.ALREADY_EMPLOYED
        assert scout.team_id == "T"
        assert service.get_scouts("U") == []

    def test_capacity_is_per_team(self, service, make_scout):
        for _ in range(5):
            service.hire("T", make_scout())
        assert service.hire("U", make_scout()).ok


# ---------------------------------------------------------------------------
# Fire
# ---------------------------------------------------------------------------

class TestFire:
    def test_fire_unknown_scout(self, staffed):
        service, _ = staffed
        result = service.fire("T", "nobody")
        assert result.error == ScoutingError.NOT_FOUND

    def test_fire_scout_from_wrong_team(self, staffed):
        service, scouts = staffed
        result = service.fire("U", scouts[0].id)
        assert result.error == ScoutingError.NOT_FOUND
        assert scouts[0].team_id == "T"

    def test_last_scout_cannot_be_fired(self, service, make_scout):
        scout = make_scout()
        service.hire("T", scout)

        result = service.fire("T", scout.id)

        assert result.error == ScoutingError.BELOW_MINIMUM
        assert service.get_scouts("T") == [scout]

    def test_fired_scout_returns_to_free_agency(self, staffed):
        service, scouts = staffed
        result = service.fire("T", scouts[0].id)

        assert result.ok
        assert scouts[0].team_id is None
        assert scouts[0] in service.free_agents()
        assert service.get_scouts("T") == [scouts[1]]

    def test_firing_assigned_scout_clears_the_assignment(self, staffed, nba_target):
        service, scouts = staffed
        assert service.assign(scouts[0].id, nba_target, 5).ok
        assert len(service.list_assignments("T")) == 1

        assert service.fire("T", scouts[0].id).ok

        assert service.get_assignment(scouts[0].id) is None
        assert service.list_assignments("T") == []
        assert scouts[0].current_assignment_id is None
        assert len(service.get_scouts("T")) == 1

    def test_fired_scout_can_be_rehired(self, staffed):
        service, scouts = staffed
        service.fire("T", scouts[0].id)
        assert service.hire("U", scouts[0]).ok
        assert scouts[0] not in service.free_agents()


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------

class TestListAvailable:
    def test_assigned_scouts_are_not_available(self, staffed, nba_target):
        service, scouts = staffed
        service.assign(scouts[0].id, nba_target, 3)

        assert service.list_available("T") == [scouts[1]]

    def test_unknown_team_has_no_scouts(self, service):
        assert service.get_scouts("nobody") == []
        assert service.list_available("nobody") == []
