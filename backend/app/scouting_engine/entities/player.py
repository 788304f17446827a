from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from app.scouting_engine.entities.enums import ScoutingTargetType


# Rated attributes a report can speak to (0..100, hidden truth)
RATED_ATTRIBUTES: List[str] = [
    "shooting",
    "finishing",
    "ball_handling",
    "passing",
    "perimeter_defense",
    "interior_defense",
    "rebounding",
    "athleticism",
    "basketball_iq",
    "work_ethic",
    "coachability",
    "potential",
]


@dataclass
class PlayerProfile:
    """
    What the scouting core knows how to read about a player. Identity and
    ratings are produced elsewhere; the directory just hands them over.
    """
    player_id: str
    name: str
    position: str = "SF"
    age: int = 22
    years_pro: int = 0
    team_or_school: str = ""
    is_international: bool = False
    attributes: Dict[str, int] = field(default_factory=dict)

    @property
    def target_type(self) -> ScoutingTargetType:
        if self.years_pro > 0:
            return ScoutingTargetType.NBA_PLAYER
        if self.is_international:
            return ScoutingTargetType.INTERNATIONAL_PROSPECT
        return ScoutingTargetType.COLLEGE_PROSPECT

    def rating(self, attr: str, default: int = 50) -> int:
        return int(self.attributes.get(attr, default))

    def overall(self) -> int:
        vals = [self.rating(a) for a in RATED_ATTRIBUTES if a != "potential"]
        return int(round(sum(vals) / len(vals)))


class PlayerDirectory:
    """
    In-memory player lookup. lookup() returns None on a miss; the scheduler
    treats that as a recorded anomaly, never as an error.
    """

    def __init__(self, players: Optional[Iterable[PlayerProfile]] = None):
        self._players: Dict[str, PlayerProfile] = {}
        for p in players or []:
            self.add(p)

    def add(self, player: PlayerProfile) -> None:
        self._players[player.player_id] = player

    def remove(self, player_id: str) -> None:
        self._players.pop(player_id, None)

    def lookup(self, player_id: str) -> Optional[PlayerProfile]:
        return self._players.get(player_id)

    def all(self) -> List[PlayerProfile]:
        return list(self._players.values())

    def __len__(self) -> int:
        return len(self._players)
