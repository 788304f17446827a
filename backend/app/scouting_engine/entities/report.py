from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Set
import math

from app.scouting_engine.entities.enums import (
    DraftRecommendation,
    ReportConfidence,
    ReportFreshness,
    ScoutingTargetType,
    TradeRecommendation,
)


# ==================================================
# SCOUTING REPORT
# ==================================================

@dataclass
class ScoutingReport:
    """
    Knowledge artifact written when a player assignment completes.

    A team keeps only its latest report per target; freshness is never
    stored on the report, it is derived from generated_day and an
    explicit "now" (see report_freshness / is_outdated).
    """
    report_id: str
    team_id: str
    target_id: str
    target_name: str
    target_type: ScoutingTargetType

    scout_id: str
    scout_name: str
    generated_day: int

    games_observed: int = 0
    times_scouted_total: int = 1
    accuracy: float = 0.0   # 0..1, how reliable this report is

    grade: str = "C"
    position: str = ""
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    perceived_ratings: Dict[str, int] = field(default_factory=dict)
    projected_role: str = ""
    summary: str = ""
    draft_recommendation: Optional[DraftRecommendation] = None
    trade_recommendation: Optional[TradeRecommendation] = None

    @property
    def confidence(self) -> ReportConfidence:
        n, acc = self.times_scouted_total, self.accuracy
        if n >= 5 and acc >= 0.80:
            return ReportConfidence.VERY_HIGH
        if n >= 3 and acc >= 0.65:
            return ReportConfidence.HIGH
        if n >= 2 and acc >= 0.50:
            return ReportConfidence.MODERATE
        if n >= 1:
            return ReportConfidence.LOW
        return ReportConfidence.VERY_LOW

    def age_days(self, now: int) -> int:
        return max(0, now - self.generated_day)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoutingReport":
        data = dict(d)
        data["target_type"] = ScoutingTargetType(data["target_type"])
        if data.get("draft_recommendation") is not None:
            data["draft_recommendation"] = DraftRecommendation(data["draft_recommendation"])
        if data.get("trade_recommendation") is not None:
            data["trade_recommendation"] = TradeRecommendation(data["trade_recommendation"])
        return cls(**data)


# ==================================================
# STALENESS / DECAY
# ==================================================

def is_outdated(report: ScoutingReport, now: int, threshold_days: int) -> bool:
    return report.age_days(now) > threshold_days


def report_freshness(
    report: ScoutingReport,
    now: int,
    recent_days: int = 14,
    current_days: int = 30,
    outdated_days: int = 60,
) -> ReportFreshness:
    age = report.age_days(now)
    if age <= recent_days:
        return ReportFreshness.RECENT
    if age <= current_days:
        return ReportFreshness.CURRENT
    if age <= outdated_days:
        return ReportFreshness.AGING
    return ReportFreshness.OUTDATED


def stale_factor(now: int, generated_day: int, half_life_days: float = 30.0) -> float:
    """
    Exponential decay: after half_life_days, weight becomes ~0.5.
    """
    dt = max(0, now - generated_day)
    if half_life_days <= 0:
        return 1.0
    return max(0.05, min(1.0, math.exp(-math.log(2.0) * (dt / half_life_days))))


# ==================================================
# SCOUTING HISTORY
# ==================================================

@dataclass
class ScoutingHistory:
    """
    Organisation-wide audit trail for one target. Survives report
    supersession and never shrinks.
    """
    target_id: str
    times_observed: int = 0
    last_observed_day: Optional[int] = None
    observer_ids: Set[str] = field(default_factory=set)

    def record(self, scout_id: str, day: int) -> None:
        self.times_observed += 1
        self.last_observed_day = day
        self.observer_ids.add(scout_id)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "target_id": self.target_id,
            "times_observed": self.times_observed,
            "last_observed_day": self.last_observed_day,
            "observer_ids": sorted(self.observer_ids),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoutingHistory":
        last = d.get("last_observed_day")
        return cls(
            target_id=str(d["target_id"]),
            times_observed=int(d.get("times_observed", 0)),
            last_observed_day=None if last is None else int(last),
            observer_ids=set(d.get("observer_ids", [])),
        )
