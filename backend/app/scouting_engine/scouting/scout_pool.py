from __future__ import annotations

from typing import Dict, Iterable, List, Optional
import logging
import threading

from app.scouting_engine.entities.enums import ScoutingError
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.scouting.assignment_ledger import AssignmentLedger
from app.scouting_engine.scouting.results import ScoutingResult

logger = logging.getLogger(__name__)


class ScoutPool:
    """
    Per-team scouting staff plus the unaffiliated free-agent pool.

    Lookups by scout id go through a scout_id -> team_id index rather than
    scanning every roster. Firing goes through the ledger first so no
    assignment can outlive its scout.

    The index and the free-agent pool are shared by every team, so hire,
    fire and free-agent changes run under one pool-wide lock.
    """

    def __init__(self, ledger: AssignmentLedger, max_per_team: int = 5, min_per_team: int = 1):
        self.ledger = ledger
        self.max_per_team = max_per_team
        self.min_per_team = min_per_team

        self._rosters: Dict[str, List[Scout]] = {}
        self._team_of: Dict[str, str] = {}
        self._free_agents: Dict[str, Scout] = {}
        self._lock = threading.RLock()

    # --------------------------------------------------
    # Hire / fire
    # --------------------------------------------------

    def hire(self, team_id: str, scout: Scout) -> ScoutingResult:
        with self._lock:
            if scout.id in self._team_of:
                return ScoutingResult.failure(
                    ScoutingError.ALREADY_EMPLOYED,
                    f"Scout {scout.name} is already employed by {self._team_of[scout.id]}.",
                )

            roster = self._rosters.setdefault(team_id, [])
            if len(roster) >= self.max_per_team:
                logger.warning("%s already has %d scouts; hire of %s rejected", team_id, self.max_per_team, scout.id)
                return ScoutingResult.failure(
                    ScoutingError.CAPACITY_EXCEEDED,
                    f"Maximum scouts reached ({self.max_per_team}).",
                )

            self._free_agents.pop(scout.id, None)
            self._team_of[scout.id] = team_id
            scout.team_id = team_id
            scout.is_available = True
            scout.current_assignment_id = None
            roster.append(scout)

        logger.info("Scout %s (%s) hired by %s", scout.id, scout.name, team_id)
        return ScoutingResult.success("Successfully hired.", payload=scout)

    def sign_free_agent(self, team_id: str, scout_id: str) -> ScoutingResult:
        """Claim a scout out of the free-agent pool; only one team can win a given scout."""
        with self._lock:
            scout = self._free_agents.get(scout_id)
            if scout is None:
                return ScoutingResult.failure(ScoutingError.NOT_FOUND, f"No free-agent scout {scout_id}.")
            return self.hire(team_id, scout)

    def fire(self, team_id: str, scout_id: str) -> ScoutingResult:
        with self._lock:
            roster = self._rosters.get(team_id, [])
            scout = next((s for s in roster if s.id == scout_id), None)
            if scout is None:
                return ScoutingResult.failure(
                    ScoutingError.NOT_FOUND,
                    f"Scout {scout_id} is not on {team_id}.",
                )

            if len(roster) - 1 < self.min_per_team:
                logger.warning("Firing %s would leave %s below %d scouts", scout_id, team_id, self.min_per_team)
                return ScoutingResult.failure(
                    ScoutingError.BELOW_MINIMUM,
                    f"A team must keep at least {self.min_per_team} scout(s).",
                )

            cancelled = self.ledger.cancel(scout_id)
            if cancelled is not None:
                logger.info("Assignment %s cancelled because scout %s was fired", cancelled.id, scout_id)

            roster.remove(scout)
            del self._team_of[scout_id]
            scout.team_id = None
            scout.is_available = True
            self._free_agents[scout.id] = scout

        logger.info("Scout %s fired from %s", scout_id, team_id)
        return ScoutingResult.success("Successfully fired.", payload=scout)

    # --------------------------------------------------
    # Queries
    # --------------------------------------------------

    def get_scouts(self, team_id: str) -> List[Scout]:
        return list(self._rosters.get(team_id, []))

    def get_scout(self, scout_id: str) -> Optional[Scout]:
        with self._lock:
            team_id = self._team_of.get(scout_id)
            if team_id is None:
                return self._free_agents.get(scout_id)
            return next((s for s in self._rosters[team_id] if s.id == scout_id), None)

    def team_of(self, scout_id: str) -> Optional[str]:
        return self._team_of.get(scout_id)

    def count(self, team_id: str) -> int:
        return len(self._rosters.get(team_id, []))

    def list_available(self, team_id: str) -> List[Scout]:
        return [
            s for s in self._rosters.get(team_id, [])
            if s.is_available and not self.ledger.is_assigned(s.id)
        ]

    def teams(self) -> List[str]:
        return list(self._rosters.keys())

    # --------------------------------------------------
    # Free agents
    # --------------------------------------------------

    def add_free_agents(self, scouts: Iterable[Scout]) -> None:
        with self._lock:
            for s in scouts:
                if s.id in self._team_of:
                    continue
                s.team_id = None
                self._free_agents[s.id] = s

    def free_agents(self) -> List[Scout]:
        with self._lock:
            agents = list(self._free_agents.values())
        return sorted(agents, key=lambda s: -s.overall_rating)

    def get_free_agent(self, scout_id: str) -> Optional[Scout]:
        return self._free_agents.get(scout_id)

    def clear_free_agents(self) -> None:
        with self._lock:
            self._free_agents.clear()

    def all_scouts(self) -> List[Scout]:
        with self._lock:
            out: List[Scout] = []
            for roster in self._rosters.values():
                out.extend(roster)
            out.extend(self._free_agents.values())
        return out

    def clear(self) -> None:
        with self._lock:
            self._rosters.clear()
            self._team_of.clear()
            self._free_agents.clear()
