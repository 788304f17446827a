from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from app.scouting_engine.entities.enums import ScoutSpecialization, ScoutingTargetType


def clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else x


# Which specialization earns the bonus for each target type
SPECIALTY_FOR_TARGET: Dict[ScoutingTargetType, ScoutSpecialization] = {
    ScoutingTargetType.COLLEGE_PROSPECT: ScoutSpecialization.COLLEGE,
    ScoutingTargetType.INTERNATIONAL_PROSPECT: ScoutSpecialization.INTERNATIONAL,
    ScoutingTargetType.NBA_PLAYER: ScoutSpecialization.PRO,
    ScoutingTargetType.OPPONENT_TEAM: ScoutSpecialization.ADVANCE,
}

PRIMARY_SPECIALTY_BONUS = 0.15
SECONDARY_SPECIALTY_BONUS = 0.08


# ==================================================
# SCOUT
# ==================================================

@dataclass
class Scout:
    """
    A member of a team's scouting staff.

    Ratings are 0..100. team_id is None while the scout sits in the
    free-agent pool. is_available / current_assignment_id are owned by the
    assignment ledger; nothing else should write them.
    """
    id: str
    name: str
    team_id: Optional[str] = None

    specialization: ScoutSpecialization = ScoutSpecialization.PRO
    secondary_specialization: Optional[ScoutSpecialization] = None

    # Evaluation skills
    evaluation_accuracy: int = 60
    prospect_evaluation: int = 60
    pro_evaluation: int = 60
    potential_assessment: int = 55

    # Connections / access
    college_connections: int = 50
    international_connections: int = 40

    # Work attributes
    work_rate: int = 60
    attention_to_detail: int = 55
    character_judgment: int = 55

    # Career
    experience_years: int = 5
    age: int = 40
    annual_salary: int = 100_000

    # State
    is_available: bool = True
    current_assignment_id: Optional[str] = None

    @property
    def overall_rating(self) -> int:
        score = (
            self.evaluation_accuracy * 0.25
            + self.prospect_evaluation * 0.15
            + self.pro_evaluation * 0.15
            + self.potential_assessment * 0.15
            + self.work_rate * 0.10
            + self.attention_to_detail * 0.10
            + self.character_judgment * 0.10
        )
        return int(round(score))

    @property
    def weekly_capacity(self) -> int:
        # 2 targets a week, up to 6 for the hardest workers
        return 2 + self.work_rate // 25

    @property
    def market_value(self) -> int:
        return 50_000 + self.overall_rating * 1_500 + self.experience_years * 5_000

    def specialty_bonus(self, target_type: ScoutingTargetType) -> float:
        wanted = SPECIALTY_FOR_TARGET.get(target_type)
        if wanted is None:
            return 0.0
        if self.specialization == wanted:
            return PRIMARY_SPECIALTY_BONUS
        if self.secondary_specialization == wanted:
            return SECONDARY_SPECIALTY_BONUS
        return 0.0

    def effectiveness_for(self, target_type: ScoutingTargetType) -> float:
        """
        Base report accuracy (0..1) this scout brings to a target type:
        overall accuracy + specialization bonus + the matching skill pair.
        """
        base = self.evaluation_accuracy / 100.0

        if target_type == ScoutingTargetType.COLLEGE_PROSPECT:
            skill = (self.prospect_evaluation + self.college_connections) / 200.0
        elif target_type == ScoutingTargetType.INTERNATIONAL_PROSPECT:
            skill = (self.prospect_evaluation + self.international_connections) / 200.0
        elif target_type == ScoutingTargetType.NBA_PLAYER:
            skill = self.pro_evaluation / 100.0
        else:
            skill = (self.pro_evaluation + self.attention_to_detail) / 200.0

        return clamp01(base + self.specialty_bonus(target_type) + skill * 0.2)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Scout":
        data = dict(d)
        data["specialization"] = ScoutSpecialization(data["specialization"])
        if data.get("secondary_specialization") is not None:
            data["secondary_specialization"] = ScoutSpecialization(data["secondary_specialization"])
        return cls(**data)
