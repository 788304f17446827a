"""Shared pytest fixtures for the scouting department tests.

Every fixture builds its own ScoutingService, so no state leaks between
tests. Scouts are built by hand where a test depends on exact ratings.
"""

import itertools

import pytest

from app.scouting_engine.config import ScoutingConfig
from app.scouting_engine.engine import ScoutingService
from app.scouting_engine.entities.assignment import PlayerTarget
from app.scouting_engine.entities.enums import ScoutSpecialization, ScoutingTargetType
from app.scouting_engine.entities.player import RATED_ATTRIBUTES, PlayerDirectory, PlayerProfile
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.random_manager import RandomManager


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_scout():
    """Return a factory for scouts with unique ids and fixed ratings."""
    counter = itertools.count(1)

    def _make(team_id=None, specialization=ScoutSpecialization.PRO, **overrides):
        n = next(counter)
        fields = {
            "id": f"S{n}",
            "name": f"Scout {n}",
            "team_id": team_id,
            "specialization": specialization,
        }
        fields.update(overrides)
        return Scout(**fields)

    return _make


def _player(player_id, name, years_pro=0, is_international=False, rating=60, position="SF"):
    attributes = {a: rating for a in RATED_ATTRIBUTES}
    return PlayerProfile(
        player_id=player_id,
        name=name,
        position=position,
        years_pro=years_pro,
        is_international=is_international,
        attributes=attributes,
    )


# =============================================================================
# Service fixtures
# =============================================================================


@pytest.fixture
def directory():
    return PlayerDirectory([
        _player("P1", "Marcus Hill", years_pro=4, rating=75, position="SG"),
        _player("P2", "Devin Cole", years_pro=0, rating=55, position="PF"),
        _player("P3", "Luka Petrov", years_pro=0, is_international=True, rating=65, position="PG"),
    ])


@pytest.fixture
def config():
    return ScoutingConfig()


@pytest.fixture
def service(config, directory):
    return ScoutingService(config=config, directory=directory, rng=RandomManager(1234))


@pytest.fixture
def staffed(service, make_scout):
    """Team T with two hired PRO scouts; returns (service, [scouts])."""
    scouts = [make_scout(), make_scout()]
    for s in scouts:
        assert service.hire("T", s).ok
    return service, scouts


@pytest.fixture
def nba_target():
    return PlayerTarget(player_id="P1", target_type=ScoutingTargetType.NBA_PLAYER, name="Marcus Hill")
