from __future__ import annotations

"""
SCOUTING DEPARTMENT: SERVICE (CORE ORCHESTRATOR)
================================================

What belongs here:
- The ScoutingService class: the one object that owns the scout pool, the
  assignment ledger, the report store and the scouting history
- Per-team locking around those tables
- The simulated calendar (last processed day)
- Snapshot / restore of the four entity tables as plain dicts

What MUST NOT belong here:
- run_sim.py runner / __main__ entrypoint
- random scout factory (generation/scout_generator.py)
- report scoring (scouting/report_generator.py)
- file output of any kind

Construct one service per simulation. Nothing in this package is a global
singleton, so independent simulations and tests never share state.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional
import logging
import threading

from app.scouting_engine.config import ScoutingConfig
from app.scouting_engine.entities.assignment import Assignment, ScoutingTarget
from app.scouting_engine.entities.enums import ReportFreshness, ScoutingError
from app.scouting_engine.entities.player import PlayerDirectory
from app.scouting_engine.entities.report import (
    ScoutingHistory,
    ScoutingReport,
    is_outdated,
    report_freshness,
    stale_factor,
)
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.generation.scout_generator import (
    generate_free_agent_pool,
    generate_starting_scouts,
)
from app.scouting_engine.random_manager import RandomManager
from app.scouting_engine.scouting.assignment_ledger import AssignmentLedger
from app.scouting_engine.scouting.report_generator import ReportGenerator
from app.scouting_engine.scouting.report_store import HistoryLedger, ReportStore
from app.scouting_engine.scouting.results import ScoutingAnomaly, ScoutingResult
from app.scouting_engine.scouting.scheduler import DailyScheduler
from app.scouting_engine.scouting.scout_pool import ScoutPool

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class ScoutingService:
    def __init__(
        self,
        config: Optional[ScoutingConfig] = None,
        directory: Any = None,
        generator: Any = None,
        rng: Optional[RandomManager] = None,
        start_day: int = 0,
    ):
        self.config = config or ScoutingConfig()
        self.rng = rng or RandomManager()
        self.directory = directory if directory is not None else PlayerDirectory()
        self.generator = generator or ReportGenerator(self.rng.child("reports"))

        self.ledger = AssignmentLedger()
        self.pool = ScoutPool(
            self.ledger,
            max_per_team=self.config.max_scouts_per_team,
            min_per_team=self.config.min_scouts_per_team,
        )
        self.reports = ReportStore(self._is_outdated)
        self.history = HistoryLedger()
        self.scheduler = DailyScheduler(
            self.pool, self.ledger, self.reports, self.history, self.directory, self.generator,
        )

        self._current_day = start_day
        self._day_floor = start_day
        self._team_days: Dict[str, int] = {}
        self._calendar_lock = threading.Lock()

        self._fa_generations = 0
        self._staff_generations: Dict[str, int] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # =====================================================================
    # CALENDAR / LOCKING
    # =====================================================================

    @property
    def current_day(self) -> int:
        return self._current_day

    @contextmanager
    def _team_lock(self, team_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(team_id, threading.RLock())
        with lock:
            yield

    # =====================================================================
    # SCOUT POOL
    # =====================================================================

    def hire(self, team_id: str, scout: Scout) -> ScoutingResult:
        with self._team_lock(team_id):
            return self.pool.hire(team_id, scout)

    def fire(self, team_id: str, scout_id: str) -> ScoutingResult:
        with self._team_lock(team_id):
            return self.pool.fire(team_id, scout_id)

    def get_scouts(self, team_id: str) -> List[Scout]:
        return self.pool.get_scouts(team_id)

    def get_scout(self, scout_id: str) -> Optional[Scout]:
        return self.pool.get_scout(scout_id)

    def list_available(self, team_id: str) -> List[Scout]:
        return self.pool.list_available(team_id)

    # --------------------------------------------------
    # Free agents / generation
    # --------------------------------------------------

    def generate_free_agent_pool(self, count: Optional[int] = None) -> List[Scout]:
        n = self.config.free_agent_pool_size if count is None else count
        self._fa_generations += 1
        scouts = generate_free_agent_pool(n, self.rng.child(f"fa_pool:{self._fa_generations}"))
        self.pool.clear_free_agents()
        self.pool.add_free_agents(scouts)
        logger.info("Generated free-agent scout pool: %d scouts", len(scouts))
        return self.pool.free_agents()

    def free_agents(self) -> List[Scout]:
        return self.pool.free_agents()

    def sign_free_agent(self, team_id: str, scout_id: str) -> ScoutingResult:
        with self._team_lock(team_id):
            return self.pool.sign_free_agent(team_id, scout_id)

    def generate_starting_scouts(self, team_id: str, count: Optional[int] = None) -> List[ScoutingResult]:
        n = self.config.starting_scouts if count is None else count
        with self._locks_guard:
            batch = self._staff_generations.get(team_id, 0) + 1
            self._staff_generations[team_id] = batch
        scouts = generate_starting_scouts(team_id, n, self.rng.child(f"staff:{team_id}:{batch}"))
        return [self.hire(team_id, s) for s in scouts]

    # =====================================================================
    # ASSIGNMENTS
    # =====================================================================

    def assign(
        self,
        scout_id: str,
        target: ScoutingTarget,
        duration_days: Optional[int] = None,
    ) -> ScoutingResult:
        scout = self.pool.get_scout(scout_id)
        team_id = self.pool.team_of(scout_id)
        if scout is None or team_id is None:
            logger.warning("Assignment rejected: scout %s not on any team", scout_id)
            return ScoutingResult.failure(ScoutingError.NOT_FOUND, f"Scout {scout_id} not found.")

        if duration_days is None:
            ttype = getattr(target, "target_type", None)
            duration_days = self.config.duration_for(ttype) if ttype is not None else 0

        with self._team_lock(team_id):
            result = self.ledger.assign(scout, target, duration_days, self._current_day)
        if not result.ok:
            logger.warning("Assignment rejected for scout %s: %s", scout_id, result.reason)
        return result

    def cancel(self, scout_id: str) -> ScoutingResult:
        team_id = self.pool.team_of(scout_id)
        if team_id is None:
            return ScoutingResult.failure(ScoutingError.NOT_FOUND, f"Scout {scout_id} not found.")
        with self._team_lock(team_id):
            cancelled = self.ledger.cancel(scout_id)
        if cancelled is None:
            return ScoutingResult.success("Scout had no assignment.")
        logger.info("Assignment %s cancelled for scout %s", cancelled.id, scout_id)
        return ScoutingResult.success("Assignment cancelled.", payload=cancelled)

    def get_assignment(self, scout_id: str) -> Optional[Assignment]:
        return self.ledger.get(scout_id)

    def list_assignments(self, team_id: str) -> List[Assignment]:
        return self.ledger.for_team(team_id)

    # =====================================================================
    # TIME ADVANCEMENT
    # =====================================================================

    def process_day(self, team_id: str, day: int) -> List[ScoutingReport]:
        """
        Advance every live assignment of team_id to simulated day `day`.
        Returns the reports produced this call, in roster order.

        Each team's days must not go backwards. The service calendar is the
        latest day any team has reached, so teams may be processed in any
        order (or in parallel) for the same day.
        """
        with self._team_lock(team_id):
            with self._calendar_lock:
                last = max(self._team_days.get(team_id, self._day_floor), self._day_floor)
                if day < last:
                    raise ValueError(f"Simulated day went backwards for {team_id}: {day} < {last}")
                self._team_days[team_id] = day
                self._current_day = max(self._current_day, day)

            reports = self.scheduler.process_day(team_id, day)

        if reports:
            logger.info("%s: %d scouting report(s) on day %d", team_id, len(reports), day)
        return reports

    def advance_to(self, day: int) -> None:
        """Move the calendar without processing any team (e.g. before the first assignments)."""
        with self._calendar_lock:
            if day < self._current_day:
                raise ValueError(f"Simulated day went backwards: {day} < {self._current_day}")
            self._current_day = day
            self._day_floor = day

    @property
    def anomalies(self) -> List[ScoutingAnomaly]:
        return list(self.scheduler.anomalies)

    # =====================================================================
    # REPORTS / HISTORY
    # =====================================================================

    def _is_outdated(self, report: ScoutingReport, now: int) -> bool:
        return is_outdated(report, now, self.config.outdated_threshold_days)

    def get_report(self, team_id: str, target_id: str) -> Optional[ScoutingReport]:
        return self.reports.get(team_id, target_id)

    def list_reports(self, team_id: str) -> List[ScoutingReport]:
        return self.reports.list_reports(team_id)

    def list_outdated(self, team_id: str, now: int) -> List[ScoutingReport]:
        return self.reports.list_outdated(team_id, now)

    def freshness(self, report: ScoutingReport, now: int) -> ReportFreshness:
        c = self.config
        return report_freshness(report, now, c.recent_days, c.current_days, c.outdated_threshold_days)

    def report_weight(self, report: ScoutingReport, now: int) -> float:
        """Accuracy discounted by age; what a consumer should trust this report at."""
        return report.accuracy * stale_factor(now, report.generated_day, self.config.stale_half_life_days)

    def history_of(self, target_id: str) -> Optional[ScoutingHistory]:
        return self.history.history_of(target_id)

    # =====================================================================
    # SNAPSHOT / RESTORE
    # =====================================================================

    def snapshot(self) -> Dict[str, Any]:
        """The four entity tables as JSON-ready dicts."""
        return {
            "version": SNAPSHOT_VERSION,
            "current_day": self._current_day,
            "scouts": [s.as_dict() for s in self.pool.all_scouts()],
            "assignments": [a.as_dict() for a in self.ledger.all()],
            "reports": [r.as_dict() for team in self.reports.teams() for r in self.reports.list_reports(team)],
            "history": [h.as_dict() for h in self.history.all()],
        }

    def restore(self, data: Dict[str, Any]) -> None:
        if data.get("version") != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported scouting snapshot version: {data.get('version')!r}")

        self.ledger.clear()
        self.pool.clear()
        self.reports.clear()
        self.history.clear()
        with self._calendar_lock:
            self._current_day = int(data.get("current_day", 0))
            self._day_floor = self._current_day
            self._team_days.clear()

        free: List[Scout] = []
        for raw in data.get("scouts", []):
            scout = Scout.from_dict(raw)
            if scout.team_id is None:
                free.append(scout)
                continue
            result = self.pool.hire(scout.team_id, scout)
            if not result.ok:
                raise ValueError(f"Snapshot scout {scout.id} cannot be restored: {result.reason}")
        self.pool.add_free_agents(free)

        for raw in data.get("assignments", []):
            assignment = Assignment.from_dict(raw)
            scout = self.pool.get_scout(assignment.scout_id)
            if scout is None or scout.team_id != assignment.team_id:
                raise ValueError(f"Snapshot assignment {assignment.id} references unknown scout {assignment.scout_id}")
            self.ledger.load(assignment, scout)

        for raw in data.get("reports", []):
            report = ScoutingReport.from_dict(raw)
            self.reports.upsert(report.team_id, report)

        for raw in data.get("history", []):
            self.history.load(ScoutingHistory.from_dict(raw))

        logger.info(
            "Restored scouting snapshot: %d scouts, %d assignments, day %d",
            len(self.pool.all_scouts()), len(self.ledger), self._current_day,
        )
