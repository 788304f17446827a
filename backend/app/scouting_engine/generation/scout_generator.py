from __future__ import annotations

from typing import List, Optional

from app.scouting_engine.entities.enums import ScoutSpecialization
from app.scouting_engine.entities.scout import Scout
from app.scouting_engine.generation.name_generator import generate_name
from app.scouting_engine.random_manager import RandomManager


SPECIALIZATIONS: List[ScoutSpecialization] = list(ScoutSpecialization)

ARCHETYPES = ("elite", "prospect_hound", "pro_evaluator", "advance_man")


def _clamp_rating(x: int) -> int:
    return 1 if x < 1 else 99 if x > 99 else x


def scout_id(rng: RandomManager) -> str:
    # drawn from the rng so seeded universes reproduce the same ids
    return f"scout_{rng.randint(0, 16 ** 10 - 1):010x}"


def create_scout(
    team_id: Optional[str],
    rng: Optional[RandomManager] = None,
    specialization: Optional[ScoutSpecialization] = None,
    archetype: Optional[str] = None,
    name: Optional[str] = None,
) -> Scout:
    """
    Random scout with experience-scaled rating ranges: veterans have a
    higher floor and a higher ceiling on their evaluation skills.
    """
    rng = rng or RandomManager()

    primary = specialization or rng.choice(SPECIALIZATIONS)
    secondary = rng.choice([s for s in SPECIALIZATIONS if s != primary])

    experience = rng.randint(1, 24)
    age = 28 + experience + rng.randint(-3, 7)

    lo = 35 + min(experience, 15)
    hi = 65 + min(experience * 2, 30)

    def r(a: int = lo, b: int = hi) -> int:
        return _clamp_rating(rng.randint(a, b))

    scout = Scout(
        id=scout_id(rng),
        name=name or generate_name(rng, international=primary == ScoutSpecialization.INTERNATIONAL),
        team_id=team_id,
        specialization=primary,
        secondary_specialization=secondary,
        evaluation_accuracy=r(),
        prospect_evaluation=r(),
        pro_evaluation=r(),
        potential_assessment=r(lo - 10, hi),
        college_connections=r(30, 89),
        international_connections=r(20, 79),
        work_rate=r(40, 89),
        attention_to_detail=r(),
        character_judgment=r(35, 84),
        experience_years=experience,
        age=age,
    )

    # Archetype shaping
    if archetype:
        a = archetype.lower().strip()
        if a == "elite":
            scout.evaluation_accuracy = _clamp_rating(85 + rng.randint(0, 14))
            scout.prospect_evaluation = _clamp_rating(80 + rng.randint(0, 19))
            scout.pro_evaluation = _clamp_rating(80 + rng.randint(0, 19))
            scout.potential_assessment = _clamp_rating(80 + rng.randint(0, 19))
            scout.attention_to_detail = _clamp_rating(80 + rng.randint(0, 19))
            scout.experience_years = 15 + rng.randint(0, 9)
        elif a in ("prospect_hound", "college"):
            scout.prospect_evaluation = _clamp_rating(scout.prospect_evaluation + 12)
            scout.college_connections = _clamp_rating(scout.college_connections + 15)
            scout.potential_assessment = _clamp_rating(scout.potential_assessment + 8)
        elif a in ("pro_evaluator", "pro"):
            scout.pro_evaluation = _clamp_rating(scout.pro_evaluation + 15)
            scout.attention_to_detail = _clamp_rating(scout.attention_to_detail + 5)
        elif a in ("advance_man", "advance"):
            scout.attention_to_detail = _clamp_rating(scout.attention_to_detail + 15)
            scout.pro_evaluation = _clamp_rating(scout.pro_evaluation + 5)
            scout.work_rate = _clamp_rating(scout.work_rate + 10)
        else:
            raise ValueError(f"Unknown scout archetype: {archetype!r}")

    # Salary is the market value with +/-20% noise
    scout.annual_salary = int(scout.market_value * rng.uniform(0.8, 1.2))
    return scout


def generate_free_agent_pool(count: int, rng: Optional[RandomManager] = None) -> List[Scout]:
    """Unaffiliated scouts, best overall rating first."""
    rng = rng or RandomManager()
    pool = [create_scout(None, rng) for _ in range(max(0, count))]
    pool.sort(key=lambda s: -s.overall_rating)
    return pool


def generate_starting_scouts(team_id: str, count: int = 3, rng: Optional[RandomManager] = None) -> List[Scout]:
    rng = rng or RandomManager()
    return [create_scout(team_id, rng) for _ in range(max(0, count))]
