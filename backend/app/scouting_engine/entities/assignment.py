from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

from app.scouting_engine.entities.enums import PLAYER_TARGET_TYPES, ScoutingTargetType


# ==================================================
# TARGETS (tagged union)
# ==================================================

@dataclass(frozen=True, slots=True)
class PlayerTarget:
    """A player under evaluation: NBA player or a college/international prospect."""
    player_id: str
    target_type: ScoutingTargetType = ScoutingTargetType.NBA_PLAYER
    name: str = ""

    @property
    def target_id(self) -> str:
        return self.player_id


@dataclass(frozen=True, slots=True)
class TeamTarget:
    """An opponent team under advance scouting."""
    team_id: str
    name: str = ""

    @property
    def target_id(self) -> str:
        return self.team_id

    @property
    def target_type(self) -> ScoutingTargetType:
        return ScoutingTargetType.OPPONENT_TEAM


ScoutingTarget = Union[PlayerTarget, TeamTarget]


def target_problem(target: Any) -> str | None:
    """
    Return a reason string when target is not a usable scouting target,
    None when it is fine.
    """
    if isinstance(target, PlayerTarget):
        if not target.player_id:
            return "Player target has no player id."
        if target.target_type not in PLAYER_TARGET_TYPES:
            return f"Player target cannot have type {target.target_type}."
        return None
    if isinstance(target, TeamTarget):
        if not target.team_id:
            return "Team target has no team id."
        return None
    return f"Unsupported scouting target: {type(target).__name__}."


def target_to_dict(target: ScoutingTarget) -> Dict[str, Any]:
    if isinstance(target, PlayerTarget):
        return {
            "kind": "player",
            "player_id": target.player_id,
            "target_type": target.target_type.value,
            "name": target.name,
        }
    return {"kind": "team", "team_id": target.team_id, "name": target.name}


def target_from_dict(d: Dict[str, Any]) -> ScoutingTarget:
    kind = d.get("kind")
    if kind == "player":
        return PlayerTarget(
            player_id=str(d["player_id"]),
            target_type=ScoutingTargetType(d.get("target_type", ScoutingTargetType.NBA_PLAYER.value)),
            name=str(d.get("name", "")),
        )
    if kind == "team":
        return TeamTarget(team_id=str(d["team_id"]), name=str(d.get("name", "")))
    raise ValueError(f"Unknown scouting target kind: {kind!r}")


# ==================================================
# ASSIGNMENT
# ==================================================

@dataclass
class Assignment:
    """
    A scout's live evaluation task.

    Completion is decided by elapsed simulated days, never by the
    observation counter: the counter only records how many daily ticks
    the scout actually worked, which drifts from elapsed days whenever
    the caller skips days.
    """
    id: str
    scout_id: str
    team_id: str
    target: ScoutingTarget
    start_day: int
    duration_days: int
    observations: int = 0

    @property
    def target_id(self) -> str:
        return self.target.target_id

    @property
    def targets_player(self) -> bool:
        return isinstance(self.target, PlayerTarget)

    def elapsed_days(self, day: int) -> int:
        return day - self.start_day

    def is_complete(self, day: int) -> bool:
        return self.elapsed_days(day) >= self.duration_days

    def progress(self, day: int) -> float:
        if self.duration_days <= 0:
            return 1.0
        frac = self.elapsed_days(day) / self.duration_days
        return 0.0 if frac < 0.0 else 1.0 if frac > 1.0 else frac

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "scout_id": self.scout_id,
            "team_id": self.team_id,
            "target": target_to_dict(self.target),
            "start_day": self.start_day,
            "duration_days": self.duration_days,
            "observations": self.observations,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Assignment":
        return cls(
            id=str(d["id"]),
            scout_id=str(d["scout_id"]),
            team_id=str(d["team_id"]),
            target=target_from_dict(d["target"]),
            start_day=int(d["start_day"]),
            duration_days=int(d["duration_days"]),
            observations=int(d.get("observations", 0)),
        )
