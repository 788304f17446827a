# backend/app/scouting_engine/scouting/report_generator.py
"""
Scouting Report Generator (Perception Engine)

Core ideas:
- Scouting != truth. A report is the scout's *perception* of hidden ratings.
- Perception error shrinks with scout skill, specialization match, repeat
  viewings of the same player (organisation-wide history) and games watched
  on this assignment.
- The generator is a pure scoring function from the scheduler's point of
  view: no I/O, no stored state beyond its seeded RNG.

Deterministic under a seeded RandomManager.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.scouting_engine.entities.enums import (
    DraftRecommendation,
    ScoutingTargetType,
    TradeRecommendation,
)
from app.scouting_engine.entities.player import RATED_ATTRIBUTES
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.random_manager import RandomManager


# =============================================================================
# Helpers
# =============================================================================

def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return lo if x < lo else hi if x > hi else x


def safe_get(obj: Any, key: str, default: Any = None) -> Any:
    """Best-effort attribute/dict accessor so callers can pass dicts or PlayerProfile."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


# =============================================================================
# Tables
# =============================================================================

STRENGTH_THRESHOLD = 70
WEAKNESS_THRESHOLD = 45

# Max perception error (rating points) at zero accuracy
MAX_VARIANCE = 20.0

ATTRIBUTE_LABELS: Dict[str, Tuple[str, str]] = {
    # attr: (strength phrase, weakness phrase)
    "shooting": ("Reliable perimeter shooter", "Limited range - defenses will sag off"),
    "finishing": ("Finishes through contact", "Struggles to finish at the rim"),
    "ball_handling": ("Tight handle, creates off the dribble", "Loose handle under pressure"),
    "passing": ("Advanced court vision", "Limited playmaking"),
    "perimeter_defense": ("Strong on-ball defender", "Struggles to stay in front"),
    "interior_defense": ("Rim protection presence", "Gets pushed around in the post"),
    "rebounding": ("Attacks the glass", "Below-average rebounder"),
    "athleticism": ("Elite athleticism", "Lacks burst and lift"),
    "basketball_iq": ("High basketball IQ", "Decision-making lags the speed of play"),
    "work_ethic": ("Gym rat work ethic", "Questions about motor"),
    "coachability": ("Very coachable", "Resists structure"),
    "potential": ("Significant untapped upside", "Limited remaining upside"),
}

GRADE_SCALE: List[Tuple[int, str]] = [
    (88, "A+"), (83, "A"), (78, "A-"),
    (74, "B+"), (70, "B"), (66, "B-"),
    (62, "C+"), (58, "C"), (54, "C-"),
    (48, "D"),
]

ROLE_SCALE: List[Tuple[int, str]] = [
    (90, "Franchise Player"),
    (85, "All-Star Starter"),
    (80, "Quality Starter"),
    (75, "Starter"),
    (70, "Sixth Man / Key Rotation"),
    (65, "Rotation Player"),
    (60, "End of Rotation"),
    (55, "End of Bench"),
]


def _scale_lookup(value: int, scale: List[Tuple[int, str]], floor_label: str) -> str:
    for cutoff, label in scale:
        if value >= cutoff:
            return label
    return floor_label


def letter_grade(perceived_overall: int) -> str:
    return _scale_lookup(perceived_overall, GRADE_SCALE, "F")


def projected_role(perceived_overall: int) -> str:
    return _scale_lookup(perceived_overall, ROLE_SCALE, "Two-Way / G-League")


def draft_recommendation(perceived_overall: int, perceived_potential: int) -> DraftRecommendation:
    blended = 0.6 * perceived_overall + 0.4 * perceived_potential
    if blended >= 80:
        return DraftRecommendation.LOTTERY
    if blended >= 70:
        return DraftRecommendation.FIRST_ROUND
    if blended >= 62:
        return DraftRecommendation.SECOND_ROUND
    if blended >= 55:
        return DraftRecommendation.LATE_FLYER
    return DraftRecommendation.PASS


def trade_recommendation(perceived_overall: int) -> TradeRecommendation:
    if perceived_overall >= 70:
        return TradeRecommendation.ACQUIRE
    if perceived_overall >= 55:
        return TradeRecommendation.MONITOR
    return TradeRecommendation.AVOID


# =============================================================================
# Accuracy model
# =============================================================================

def report_accuracy(
    scout: Scout,
    target_type: ScoutingTargetType,
    prior_observations: int,
    games_observed: int,
) -> float:
    """
    Scout effectiveness for the target type, plus diminishing bonuses for
    repeat viewings (capped at 0.25) and games watched (capped at 0.15).
    """
    total_times = prior_observations + 1
    scouting_bonus = min(total_times * 0.08, 0.25)
    games_bonus = min(games_observed * 0.02, 0.15)
    return clamp(scout.effectiveness_for(target_type) + scouting_bonus + games_bonus)


def perceive(rng: RandomManager, true_value: int, accuracy: float) -> int:
    max_var = (1.0 - accuracy) * MAX_VARIANCE
    variance = int(rng.uniform(-1.0, 1.0) * max_var)
    return int(clamp(true_value + variance, 0, 100))


# =============================================================================
# Report content
# =============================================================================

@dataclass
class ReportContent:
    """What the generator hands back; the scheduler wraps it into a ScoutingReport."""
    accuracy: float
    grade: str
    position: str
    perceived_ratings: Dict[str, int] = field(default_factory=dict)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    projected_role: str = ""
    summary: str = ""
    draft_recommendation: Optional[DraftRecommendation] = None
    trade_recommendation: Optional[TradeRecommendation] = None


def _player_target_type(player: Any) -> ScoutingTargetType:
    ttype = safe_get(player, "target_type", None)
    if isinstance(ttype, ScoutingTargetType):
        return ttype
    if int(safe_get(player, "years_pro", 0) or 0) > 0:
        return ScoutingTargetType.NBA_PLAYER
    return ScoutingTargetType.COLLEGE_PROSPECT


def _true_ratings(player: Any) -> Dict[str, int]:
    attrs = safe_get(player, "attributes", None) or {}
    out: Dict[str, int] = {}
    for a in RATED_ATTRIBUTES:
        raw = attrs.get(a, 50) if isinstance(attrs, dict) else safe_get(attrs, a, 50)
        out[a] = int(clamp(float(raw if raw is not None else 50), 0, 100))
    return out


def _summary(name: str, position: str, grade: str, role: str, strengths: List[str], weaknesses: List[str]) -> str:
    parts = [f"{name} ({position}) grades out at {grade}, projecting as {role.lower()}."]
    if strengths:
        parts.append(f"Best asset: {strengths[0].lower()}.")
    if weaknesses:
        parts.append(f"Biggest concern: {weaknesses[0].lower()}.")
    else:
        parts.append("No major concerns surfaced.")
    return " ".join(parts)


class ReportGenerator:
    """
    Default report generator. Any object exposing the same generate()
    signature can be handed to the scouting service instead.
    """

    def __init__(self, rng: Optional[RandomManager] = None):
        self.rng = rng or RandomManager()

    def generate(
        self,
        player: Any,
        scout: Scout,
        prior_observations: int,
        games_observed: int,
        target_type: Optional[ScoutingTargetType] = None,
    ) -> ReportContent:
        """
        target_type is how the assignment classified the player; it decides
        the accuracy model and whether draft or trade advice is given. When
        omitted it is inferred from the player.
        """
        ttype = target_type or _player_target_type(player)
        accuracy = report_accuracy(scout, ttype, prior_observations, games_observed)

        truth = _true_ratings(player)
        perceived = {a: perceive(self.rng, v, accuracy) for a, v in truth.items()}

        core = [v for a, v in perceived.items() if a != "potential"]
        perceived_overall = int(round(sum(core) / len(core)))

        ranked = sorted(perceived.items(), key=lambda kv: -kv[1])
        strengths = [ATTRIBUTE_LABELS[a][0] for a, v in ranked if v >= STRENGTH_THRESHOLD][:4]
        weaknesses = [ATTRIBUTE_LABELS[a][1] for a, v in reversed(ranked) if v <= WEAKNESS_THRESHOLD][:3]

        grade = letter_grade(perceived_overall)
        role = projected_role(perceived_overall)
        position = str(safe_get(player, "position", "") or "")
        name = str(safe_get(player, "name", None) or safe_get(player, "player_id", "Player"))

        content = ReportContent(
            accuracy=accuracy,
            grade=grade,
            position=position,
            perceived_ratings=perceived,
            strengths=strengths,
            weaknesses=weaknesses,
            projected_role=role,
            summary=_summary(name, position or "?", grade, role, strengths, weaknesses),
        )
        if ttype == ScoutingTargetType.NBA_PLAYER:
            content.trade_recommendation = trade_recommendation(perceived_overall)
        else:
            content.draft_recommendation = draft_recommendation(perceived_overall, perceived["potential"])
        return content
