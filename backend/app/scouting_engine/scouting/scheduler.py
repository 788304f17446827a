from __future__ import annotations

from typing import Any, List, Optional
import logging
import uuid

from app.scouting_engine.entities.assignment import Assignment, PlayerTarget
from app.scouting_engine.entities.enums import ScoutingError
from app.scouting_engine.entities.report import ScoutingReport
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.scouting.assignment_ledger import AssignmentLedger
from app.scouting_engine.scouting.report_store import HistoryLedger, ReportStore
from app.scouting_engine.scouting.results import ScoutingAnomaly
from app.scouting_engine.scouting.scout_pool import ScoutPool

logger = logging.getLogger(__name__)


def new_report_id() -> str:
    return f"rpt_{uuid.uuid4().hex[:10]}"


class DailyScheduler:
    """
    Advances one team's live assignments by a simulated day.

    Per scout (roster order): tick the assignment; if elapsed days reach the
    declared duration, resolve the target, write the report, record history
    and free the scout. Scouts are independent of each other, so roster
    order only matters for the order of the returned reports.
    """

    def __init__(
        self,
        pool: ScoutPool,
        ledger: AssignmentLedger,
        store: ReportStore,
        history: HistoryLedger,
        directory: Any,
        generator: Any,
    ):
        self.pool = pool
        self.ledger = ledger
        self.store = store
        self.history = history
        self.directory = directory
        self.generator = generator
        self.anomalies: List[ScoutingAnomaly] = []

    def process_day(self, team_id: str, day: int) -> List[ScoutingReport]:
        reports: List[ScoutingReport] = []

        self._sweep_orphans(team_id, day)

        for scout in self.pool.get_scouts(team_id):
            assignment = self.ledger.advance_one_day(scout.id)
            if assignment is None:
                continue

            if not assignment.is_complete(day):
                logger.debug(
                    "Scout %s on %s: day %d/%d (%d observations)",
                    scout.id, assignment.target_id, assignment.elapsed_days(day),
                    assignment.duration_days, assignment.observations,
                )
                continue

            report = self._complete(team_id, scout, assignment, day)
            if report is not None:
                reports.append(report)

        return reports

    # --------------------------------------------------
    # Completion
    # --------------------------------------------------

    def _complete(self, team_id: str, scout: Scout, assignment: Assignment, day: int) -> Optional[ScoutingReport]:
        target = assignment.target
        report: Optional[ScoutingReport] = None

        if isinstance(target, PlayerTarget):
            player = self.directory.lookup(target.player_id)
            if player is None:
                self._anomaly(
                    day, team_id, scout.id, target.player_id, ScoutingError.DIRECTORY_MISS,
                    "player not in directory; assignment closed without a report",
                )
                self.ledger.cancel(scout.id)
                return None

            prior = self.history.times_observed(target.player_id)
            content = self.generator.generate(player, scout, prior, assignment.observations, target.target_type)
            report = ScoutingReport(
                report_id=new_report_id(),
                team_id=team_id,
                target_id=target.player_id,
                target_name=target.name or str(getattr(player, "name", "") or target.player_id),
                target_type=target.target_type,
                scout_id=scout.id,
                scout_name=scout.name,
                generated_day=day,
                games_observed=assignment.observations,
                times_scouted_total=prior + 1,
                accuracy=content.accuracy,
                grade=content.grade,
                position=content.position,
                strengths=list(content.strengths),
                weaknesses=list(content.weaknesses),
                perceived_ratings=dict(content.perceived_ratings),
                projected_role=content.projected_role,
                summary=content.summary,
                draft_recommendation=content.draft_recommendation,
                trade_recommendation=content.trade_recommendation,
            )
        else:
            # Opponent-team reports are not produced yet; the observation
            # still counts toward history.
            logger.debug("Advance scouting of %s completed by %s; no team report produced", target.target_id, scout.id)

        self.history.record(assignment.target_id, scout.id, day)
        if report is not None:
            self.store.upsert(team_id, report)
        self.ledger.cancel(scout.id)

        logger.info(
            "Scout %s finished %s on day %d%s",
            scout.id, assignment.target_id, day,
            f" (report {report.report_id}, grade {report.grade})" if report else "",
        )
        return report

    # --------------------------------------------------
    # Anomalies
    # --------------------------------------------------

    def _sweep_orphans(self, team_id: str, day: int) -> None:
        """Drop ledger entries whose scout is no longer on this team's roster."""
        for assignment in self.ledger.for_team(team_id):
            if self.pool.team_of(assignment.scout_id) == team_id:
                continue
            self.ledger.cancel(assignment.scout_id)
            self._anomaly(
                day, team_id, assignment.scout_id, assignment.target_id, ScoutingError.NOT_FOUND,
                "assignment referenced a scout no longer on the roster; cancelled",
            )

    def _anomaly(self, day: int, team_id: str, scout_id: str, target_id: str, error: ScoutingError, detail: str) -> None:
        self.anomalies.append(ScoutingAnomaly(
            day=day,
            team_id=team_id,
            scout_id=scout_id,
            target_id=target_id,
            error=error,
            detail=detail,
        ))
        logger.warning("[%s] day %d team %s scout %s target %s: %s", error.value, day, team_id, scout_id, target_id, detail)
