# backend/run_sim.py
"""
Basketball Scouting Department: Season Runner
=============================================

This runner is a top-level orchestration / testing harness.

It:
- Builds a synthetic league directory (NBA players, college and international prospects)
- Staffs every team from a generated free-agent scout pool
- Advances the simulated calendar one day at a time, re-tasking idle scouts
- Produces a human-readable narrative timeline + an optional JSON snapshot
- Supports deterministic reproduction via one master seed with seed-splitting
- Owns all I/O; the scouting engine must not write files

Standard library only in this runner.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
from pathlib import Path
import sys
import time
from typing import Any, Dict, List, Optional, Set

from app.scouting_engine.config import ScoutingConfig
from app.scouting_engine.engine import ScoutingService
from app.scouting_engine.entities.assignment import PlayerTarget, ScoutingTarget, TeamTarget
from app.scouting_engine.entities.enums import ScoutSpecialization, ScoutingTargetType
from app.scouting_engine.entities.player import RATED_ATTRIBUTES, PlayerDirectory, PlayerProfile
from app.scouting_engine.entities.report import ScoutingReport, is_outdated
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.generation.name_generator import generate_name
from app.scouting_engine.random_manager import RandomManager

logger = logging.getLogger("run_sim")

# =============================================================================
# Constants
# =============================================================================

LOG_LEVELS = ("minimal", "normal", "debug")

_LOGGING_FOR = {
    "minimal": logging.WARNING,
    "normal": logging.INFO,
    "debug": logging.DEBUG,
}

TEAM_CODES = (
    "ATL", "BOS", "BKN", "CHA", "CHI", "CLE", "DAL", "DEN", "DET", "GSW",
    "HOU", "IND", "LAC", "LAL", "MEM", "MIA", "MIL", "MIN", "NOP", "NYK",
    "OKC", "ORL", "PHI", "PHX", "POR", "SAC", "SAS", "TOR", "UTA", "WAS",
)

POSITIONS = ("PG", "SG", "SF", "PF", "C")

SCHOOLS = (
    "Duke", "Kentucky", "Kansas", "Gonzaga", "UCLA", "North Carolina",
    "Villanova", "Arizona", "Baylor", "Houston",
)

CLUBS = (
    "Real Madrid", "FC Barcelona", "Fenerbahce", "Olympiacos", "Partizan",
    "ASVEL", "Zalgiris", "Bayern Munich", "Anadolu Efes", "Maccabi Tel Aviv",
)

# Which player pool each specialization prefers to work
PREFERRED_TYPES: Dict[ScoutSpecialization, List[ScoutingTargetType]] = {
    ScoutSpecialization.COLLEGE: [ScoutingTargetType.COLLEGE_PROSPECT],
    ScoutSpecialization.INTERNATIONAL: [ScoutingTargetType.INTERNATIONAL_PROSPECT],
    ScoutSpecialization.PRO: [ScoutingTargetType.NBA_PLAYER],
    ScoutSpecialization.REGIONAL: [
        ScoutingTargetType.COLLEGE_PROSPECT,
        ScoutingTargetType.INTERNATIONAL_PROSPECT,
    ],
}

# =============================================================================
# Utility helpers
# =============================================================================

def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x

def stable_json_dumps(obj: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(obj, sort_keys=True, indent=2, ensure_ascii=False)
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

def split_seed(master_seed: int, label: str) -> int:
    """
    Deterministically derives a sub-seed from (master_seed, label).
    """
    h = hashlib.sha256(f"{master_seed}::{label}".encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big", signed=False)

def configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=_LOGGING_FOR.get(log_level, logging.INFO),
        format="%(levelname)-7s %(name)s: %(message)s",
    )

def load_config_file(path: Optional[str]) -> ScoutingConfig:
    if not path:
        return ScoutingConfig()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config file must hold a JSON object")
    return ScoutingConfig.from_mapping(data)

# =============================================================================
# Synthetic league
# =============================================================================

def _create_random_player(rng: RandomManager, player_id: str, target_type: ScoutingTargetType) -> PlayerProfile:
    if target_type == ScoutingTargetType.NBA_PLAYER:
        age = rng.randint(20, 35)
        years_pro = max(1, age - rng.randint(19, 22))
        base = rng.randint(45, 80)
        where = rng.choice(TEAM_CODES)
    else:
        age = rng.randint(18, 22)
        years_pro = 0
        base = rng.randint(35, 65)
        where = rng.choice(CLUBS if target_type == ScoutingTargetType.INTERNATIONAL_PROSPECT else SCHOOLS)

    attributes = {a: int(clamp(rng.gauss(base, 10), 20, 99)) for a in RATED_ATTRIBUTES}
    # prospects carry their value in upside
    if years_pro == 0:
        attributes["potential"] = int(clamp(base + rng.randint(5, 30), 20, 99))

    return PlayerProfile(
        player_id=player_id,
        name=generate_name(rng, international=target_type == ScoutingTargetType.INTERNATIONAL_PROSPECT),
        position=rng.choice(POSITIONS),
        age=age,
        years_pro=years_pro,
        team_or_school=where,
        is_international=target_type == ScoutingTargetType.INTERNATIONAL_PROSPECT,
        attributes=attributes,
    )

def build_player_directory(rng: RandomManager, per_team: int, teams: int) -> PlayerDirectory:
    """
    Roughly half NBA players, the rest split between college and
    international prospects (college-heavy).
    """
    directory = PlayerDirectory()
    total = max(1, per_team * teams)
    for i in range(total):
        roll = rng.rand()
        if roll < 0.5:
            ttype = ScoutingTargetType.NBA_PLAYER
        elif roll < 0.85:
            ttype = ScoutingTargetType.COLLEGE_PROSPECT
        else:
            ttype = ScoutingTargetType.INTERNATIONAL_PROSPECT
        directory.add(_create_random_player(rng, f"P{i:05d}", ttype))
    return directory

# =============================================================================
# Target selection
# =============================================================================

def _needs_look(service: ScoutingService, team_id: str, player_id: str, now: int) -> bool:
    report = service.get_report(team_id, player_id)
    return report is None or is_outdated(report, now, service.config.outdated_threshold_days)

def pick_target(
    service: ScoutingService,
    scout: Scout,
    team_id: str,
    opponents: List[str],
    now: int,
    taken: Set[str],
    rng: RandomManager,
) -> Optional[ScoutingTarget]:
    """
    Advance scouts take the next opponent; everyone else prefers unscouted
    or outdated players in their specialty, then anything unscouted.
    """
    if scout.specialization == ScoutSpecialization.ADVANCE:
        open_teams = [t for t in opponents if t not in taken]
        if not open_teams:
            return None
        team = rng.choice(open_teams)
        return TeamTarget(team_id=team, name=team)

    wanted = PREFERRED_TYPES.get(scout.specialization, [])
    candidates = [
        p for p in service.directory.all()
        if p.player_id not in taken and _needs_look(service, team_id, p.player_id, now)
    ]
    preferred = [p for p in candidates if p.target_type in wanted]
    pool = preferred or candidates
    if not pool:
        return None

    player = rng.choice(pool)
    return PlayerTarget(player_id=player.player_id, target_type=player.target_type, name=player.name)

def task_idle_scouts(
    service: ScoutingService,
    team_id: str,
    opponents: List[str],
    duration: Optional[int],
    rng: RandomManager,
    emit,
) -> int:
    taken = {a.target_id for a in service.list_assignments(team_id)}
    tasked = 0
    for scout in service.list_available(team_id):
        target = pick_target(service, scout, team_id, opponents, service.current_day, taken, rng)
        if target is None:
            continue
        result = service.assign(scout.id, target, duration)
        if not result:
            emit(f"[WARN] {team_id}: could not assign {scout.name}: {result.reason}", "normal")
            continue
        taken.add(target.target_id)
        tasked += 1
        emit(
            f"  {team_id}: {scout.name} ({scout.specialization.value}) -> "
            f"{target.name or target.target_id} [{target.target_type.value}] "
            f"{result.payload.duration_days}d",
            "debug",
        )
    return tasked

# =============================================================================
# Narrative
# =============================================================================

def format_report(report: ScoutingReport) -> str:
    rec = report.trade_recommendation or report.draft_recommendation
    return (
        f"  {report.team_id}: {report.scout_name} filed on {report.target_name} "
        f"({report.position}, {report.target_type.value}) grade {report.grade}, "
        f"{report.projected_role}, acc {report.accuracy:.2f}, "
        f"{report.confidence.value}, rec {rec.value if rec else '-'}"
    )

class Narrative:
    def __init__(self, log_level: str):
        self.log_level = log_level if log_level in LOG_LEVELS else "normal"
        self.lines: List[str] = []

    def _level_rank(self, lvl: str) -> int:
        return {"minimal": 0, "normal": 1, "debug": 2}.get(lvl, 1)

    def emit(self, line: str, level: str = "normal") -> None:
        if self._level_rank(level) <= self._level_rank(self.log_level):
            self.lines.append(line)
            print(line)

# =============================================================================
# CLI
# =============================================================================

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Basketball Scouting Department: Season Runner")
    p.add_argument("--seed", type=int, default=None, help="Master seed (default: time_ns).")
    p.add_argument("--teams", type=int, default=4, help="Number of teams with a scouting staff (max 30).")
    p.add_argument("--days", type=int, default=30, help="Simulated days to run.")
    p.add_argument("--duration", type=int, default=None, help="Force every assignment to this many days.")
    p.add_argument("--players-per-team", type=int, default=12, help="Synthetic directory size per team.")
    p.add_argument("--config", type=str, default=None, help="Path to a scouting config JSON.")
    p.add_argument("--out", type=str, default=None, help="Write the final snapshot JSON here.")
    p.add_argument("--log-level", type=str, default="normal", choices=LOG_LEVELS, help="Logging verbosity.")
    p.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    return p

def run(
    seed: int,
    teams: int,
    days: int,
    config: ScoutingConfig,
    duration: Optional[int] = None,
    players_per_team: int = 12,
    narrative: Optional[Narrative] = None,
) -> ScoutingService:
    """
    Build the league, staff it and run the daily loop. Returns the service
    so callers can inspect or snapshot the final state.
    """
    narrative = narrative or Narrative("minimal")
    emit = narrative.emit

    team_ids = list(TEAM_CODES[: int(clamp(teams, 1, len(TEAM_CODES)))])
    league_rng = RandomManager(split_seed(seed, "league"))
    assign_rng = RandomManager(split_seed(seed, "assignments"))

    directory = build_player_directory(league_rng, players_per_team, len(team_ids))
    service = ScoutingService(
        config=config,
        directory=directory,
        rng=RandomManager(split_seed(seed, "scouting")),
    )
    emit(f"[LEAGUE] seed={seed} teams={len(team_ids)} players={len(directory)} days={days}", "minimal")

    # Staffing: each team signs the best free agents left, re-rolling the pool if it runs dry
    service.generate_free_agent_pool(max(config.free_agent_pool_size, config.starting_scouts * len(team_ids)))
    for team_id in team_ids:
        for _ in range(config.starting_scouts):
            fa = service.free_agents()
            if not fa:
                fa = service.generate_free_agent_pool()
            result = service.sign_free_agent(team_id, fa[0].id)
            if result:
                emit(f"  {team_id}: signed {fa[0].name} ({fa[0].specialization.value}, OVR {fa[0].overall_rating})", "debug")
            else:
                emit(f"[WARN] {team_id}: signing failed: {result.reason}", "normal")
        emit(f"[STAFF] {team_id}: {len(service.get_scouts(team_id))} scouts", "normal")

    for team_id in team_ids:
        opponents = [t for t in team_ids if t != team_id]
        task_idle_scouts(service, team_id, opponents, duration, assign_rng, emit)

    for day in range(1, days + 1):
        day_reports: List[ScoutingReport] = []
        for team_id in team_ids:
            day_reports.extend(service.process_day(team_id, day))

        if day_reports:
            emit(f"[DAY {day}] {len(day_reports)} report(s)", "normal")
            for report in day_reports:
                emit(format_report(report), "normal")

        for team_id in team_ids:
            opponents = [t for t in team_ids if t != team_id]
            task_idle_scouts(service, team_id, opponents, duration, assign_rng, emit)

    for team_id in team_ids:
        reports = service.list_reports(team_id)
        outdated = service.list_outdated(team_id, service.current_day)
        emit(f"[SUMMARY] {team_id}: {len(reports)} report(s) on file, {len(outdated)} outdated", "minimal")
    for anomaly in service.anomalies:
        emit(f"[ANOMALY] day {anomaly.day} {anomaly.team_id}: {anomaly.error.value} {anomaly.target_id}", "minimal")

    logger.info("Run finished on day %d with %d anomalies", service.current_day, len(service.anomalies))
    return service

def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    seed = args.seed if args.seed is not None else time.time_ns()

    try:
        config = load_config_file(args.config)
    except (OSError, ValueError) as e:
        print(f"[FATAL] Failed to load config file: {type(e).__name__}: {e}")
        return 2

    if args.duration is not None and args.duration <= 0:
        print("[FATAL] --duration must be positive")
        return 2

    narrative = Narrative(args.log_level)
    service = run(
        seed=seed,
        teams=args.teams,
        days=max(0, args.days),
        config=config,
        duration=args.duration,
        players_per_team=max(1, args.players_per_team),
        narrative=narrative,
    )

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(stable_json_dumps(service.snapshot(), pretty=args.pretty), encoding="utf-8")
        narrative.emit(f"[OUT] snapshot written to {out}", "minimal")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
