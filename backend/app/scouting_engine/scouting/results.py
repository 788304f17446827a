from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from app.scouting_engine.entities.enums import ScoutingError


@dataclass(frozen=True, slots=True)
class ScoutingResult:
    """
    Outcome of a hire / fire / assign / cancel request. Callers branch on
    ok (or the result's truthiness) and show reason to the user.
    """
    ok: bool
    reason: str
    error: Optional[ScoutingError] = None
    payload: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, reason: str, payload: Any = None) -> "ScoutingResult":
        return cls(ok=True, reason=reason, payload=payload)

    @classmethod
    def failure(cls, error: ScoutingError, reason: str) -> "ScoutingResult":
        return cls(ok=False, reason=reason, error=error)


@dataclass(frozen=True, slots=True)
class ScoutingAnomaly:
    """Non-fatal problem noticed while processing a day (directory miss, orphan)."""
    day: int
    team_id: str
    scout_id: str
    target_id: str
    error: ScoutingError
    detail: str = ""
