from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping

from app.scouting_engine.entities.enums import ScoutingTargetType


def _default_durations() -> Dict[ScoutingTargetType, int]:
    return {
        ScoutingTargetType.COLLEGE_PROSPECT: 14,
        ScoutingTargetType.INTERNATIONAL_PROSPECT: 14,
        ScoutingTargetType.NBA_PLAYER: 7,
        ScoutingTargetType.OPPONENT_TEAM: 5,
    }


@dataclass(slots=True)
class ScoutingConfig:
    max_scouts_per_team: int = 5
    min_scouts_per_team: int = 1

    default_durations: Dict[ScoutingTargetType, int] = field(default_factory=_default_durations)

    # Report freshness windows (days)
    recent_days: int = 14
    current_days: int = 30
    outdated_threshold_days: int = 60
    stale_half_life_days: float = 30.0

    free_agent_pool_size: int = 15
    starting_scouts: int = 3

    def __post_init__(self) -> None:
        if self.min_scouts_per_team < 0:
            raise ValueError("min_scouts_per_team must be >= 0")
        if self.max_scouts_per_team < max(1, self.min_scouts_per_team):
            raise ValueError("max_scouts_per_team must be >= min_scouts_per_team and >= 1")
        if not (0 <= self.recent_days <= self.current_days <= self.outdated_threshold_days):
            raise ValueError("freshness windows must satisfy recent <= current <= outdated")
        for ttype, days in self.default_durations.items():
            if days <= 0:
                raise ValueError(f"default duration for {ttype} must be positive")

    def duration_for(self, target_type: ScoutingTargetType) -> int:
        return self.default_durations.get(target_type, 7)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScoutingConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown scouting config keys: {', '.join(sorted(unknown))}")

        kwargs = dict(data)
        if "default_durations" in kwargs:
            durations = _default_durations()
            for k, v in dict(kwargs["default_durations"]).items():
                durations[ScoutingTargetType(k)] = int(v)
            kwargs["default_durations"] = durations
        return cls(**kwargs)


__all__ = ["ScoutingConfig"]
