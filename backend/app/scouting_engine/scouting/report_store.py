from __future__ import annotations

from typing import Callable, Dict, List, Optional
import threading

from app.scouting_engine.entities.report import ScoutingHistory, ScoutingReport


StalenessPolicy = Callable[[ScoutingReport, int], bool]


class ReportStore:
    """
    Latest-only report collection: one report per (team, target).
    upsert() silently supersedes whatever the team had on that target.
    """

    def __init__(self, is_stale: StalenessPolicy):
        self.is_stale = is_stale
        self._reports: Dict[str, Dict[str, ScoutingReport]] = {}

    def upsert(self, team_id: str, report: ScoutingReport) -> Optional[ScoutingReport]:
        team_reports = self._reports.setdefault(team_id, {})
        previous = team_reports.get(report.target_id)
        team_reports[report.target_id] = report
        return previous

    def get(self, team_id: str, target_id: str) -> Optional[ScoutingReport]:
        return self._reports.get(team_id, {}).get(target_id)

    def list_reports(self, team_id: str) -> List[ScoutingReport]:
        return list(self._reports.get(team_id, {}).values())

    def list_outdated(self, team_id: str, now: int) -> List[ScoutingReport]:
        return [r for r in self.list_reports(team_id) if self.is_stale(r, now)]

    def teams(self) -> List[str]:
        return list(self._reports.keys())

    def clear(self) -> None:
        self._reports.clear()


class HistoryLedger:
    """
    Organisation-wide, append-only scouting history per target id.
    Shared by every team, so record() is serialised.
    """

    def __init__(self):
        self._history: Dict[str, ScoutingHistory] = {}
        self._lock = threading.Lock()

    def record(self, target_id: str, scout_id: str, day: int) -> ScoutingHistory:
        with self._lock:
            hist = self._history.get(target_id)
            if hist is None:
                hist = ScoutingHistory(target_id=target_id)
                self._history[target_id] = hist
            hist.record(scout_id, day)
        return hist

    def history_of(self, target_id: str) -> Optional[ScoutingHistory]:
        return self._history.get(target_id)

    def times_observed(self, target_id: str) -> int:
        hist = self._history.get(target_id)
        return 0 if hist is None else hist.times_observed

    def all(self) -> List[ScoutingHistory]:
        return list(self._history.values())

    def load(self, hist: ScoutingHistory) -> None:
        self._history[hist.target_id] = hist

    def clear(self) -> None:
        self._history.clear()
