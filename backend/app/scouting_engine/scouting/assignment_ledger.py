from __future__ import annotations

from typing import Dict, List, Optional
import logging
import threading
import uuid

from app.scouting_engine.entities.assignment import Assignment, ScoutingTarget, target_problem
from app.scouting_engine.entities.enums import ScoutingError
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.scouting.results import ScoutingResult

logger = logging.getLogger(__name__)


def new_assignment_id() -> str:
    return f"asg_{uuid.uuid4().hex[:10]}"


class AssignmentLedger:
    """
    Live assignments keyed by scout id.

    Per-scout state machine: Idle (no entry) <-> Assigned (one entry).
    The ledger also keeps the scout's back-reference (current_assignment_id)
    and availability flag in step with its own table, so "scout has a live
    assignment" and "ledger lists one for that scout" can never disagree.
    A team_id -> {scout_id: Assignment} index backs per-team queries.
    """

    def __init__(self):
        self._assignments: Dict[str, Assignment] = {}
        self._by_team: Dict[str, Dict[str, Assignment]] = {}
        self._scouts: Dict[str, Scout] = {}
        self._lock = threading.RLock()

    # --------------------------------------------------
    # Transitions
    # --------------------------------------------------

    def assign(
        self,
        scout: Optional[Scout],
        target: ScoutingTarget,
        duration_days: int,
        day: int,
    ) -> ScoutingResult:
        if scout is None or scout.team_id is None:
            return ScoutingResult.failure(ScoutingError.NOT_FOUND, "Scout not found on any team.")

        if scout.id in self._assignments:
            return ScoutingResult.failure(
                ScoutingError.ALREADY_ASSIGNED,
                f"Scout {scout.name} is already on assignment.",
            )

        problem = target_problem(target)
        if problem is not None:
            return ScoutingResult.failure(ScoutingError.INVALID_TARGET, problem)

        if isinstance(duration_days, bool) or not isinstance(duration_days, int) or duration_days <= 0:
            return ScoutingResult.failure(
                ScoutingError.INVALID_DURATION,
                f"Duration must be a positive number of days (got {duration_days!r}).",
            )

        assignment = Assignment(
            id=new_assignment_id(),
            scout_id=scout.id,
            team_id=scout.team_id,
            target=target,
            start_day=day,
            duration_days=duration_days,
        )
        with self._lock:
            if scout.id in self._assignments:
                return ScoutingResult.failure(
                    ScoutingError.ALREADY_ASSIGNED,
                    f"Scout {scout.name} is already on assignment.",
                )
            self._store(assignment, scout)

        logger.info(
            "Scout %s assigned to %s %s for %d days (day %d)",
            scout.id, target.target_type.value, target.target_id, duration_days, day,
        )
        return ScoutingResult.success("Assigned.", payload=assignment)

    def cancel(self, scout_id: str) -> Optional[Assignment]:
        """Drop the scout's assignment if there is one. Idle scouts are a no-op."""
        with self._lock:
            assignment = self._assignments.pop(scout_id, None)
            scout = self._scouts.pop(scout_id, None)
            if assignment is not None:
                team = self._by_team.get(assignment.team_id)
                if team is not None:
                    team.pop(scout_id, None)
                    if not team:
                        del self._by_team[assignment.team_id]
            if scout is not None:
                scout.is_available = True
                scout.current_assignment_id = None

        if assignment is not None:
            logger.debug("Assignment %s for scout %s removed", assignment.id, scout_id)
        return assignment

    def advance_one_day(self, scout_id: str) -> Optional[Assignment]:
        assignment = self._assignments.get(scout_id)
        if assignment is not None:
            assignment.observations += 1
        return assignment

    def _store(self, assignment: Assignment, scout: Scout) -> None:
        self._assignments[scout.id] = assignment
        self._by_team.setdefault(assignment.team_id, {})[scout.id] = assignment
        self._scouts[scout.id] = scout
        scout.is_available = False
        scout.current_assignment_id = assignment.id

    # --------------------------------------------------
    # Queries
    # --------------------------------------------------

    def get(self, scout_id: str) -> Optional[Assignment]:
        return self._assignments.get(scout_id)

    def is_assigned(self, scout_id: str) -> bool:
        return scout_id in self._assignments

    def for_team(self, team_id: str) -> List[Assignment]:
        with self._lock:
            return list(self._by_team.get(team_id, {}).values())

    def all(self) -> List[Assignment]:
        with self._lock:
            return list(self._assignments.values())

    def __len__(self) -> int:
        return len(self._assignments)

    # --------------------------------------------------
    # Restore
    # --------------------------------------------------

    def load(self, assignment: Assignment, scout: Scout) -> None:
        """Re-attach a persisted assignment to its scout (snapshot restore)."""
        with self._lock:
            self._store(assignment, scout)

    def clear(self) -> None:
        with self._lock:
            self._assignments.clear()
            self._by_team.clear()
            self._scouts.clear()
