# backend/app/scouting_engine/entities/enums.py
"""
Scouting Department: Enums Ontology

Canonical discrete classifications used across the scouting engine.
These enums are designed to be:
- stable (values must not change once introduced)
- serializable (stored as strings in snapshots/JSON)
- round-trippable (Enum(value) works)

Usage guideline:
- In-memory: store enum instances (e.g., ScoutSpecialization.PRO)
- Persisted: store enum.value (string)
- Load: ScoutSpecialization(saved_value)

NOTE: Do not put numeric logic in enums. Enums define meaning, not math.
"""

from __future__ import annotations

from enum import Enum


# ============================================================
# SCOUT ENUMS
# ============================================================

class ScoutSpecialization(str, Enum):
    COLLEGE = "COLLEGE"              # US college prospects
    INTERNATIONAL = "INTERNATIONAL"  # overseas players and prospects
    PRO = "PRO"                      # current NBA players
    ADVANCE = "ADVANCE"              # opponent scouting and game prep
    REGIONAL = "REGIONAL"            # geographic expertise, no target bonus


# ============================================================
# TARGET ENUMS
# ============================================================

class ScoutingTargetType(str, Enum):
    NBA_PLAYER = "NBA_PLAYER"
    COLLEGE_PROSPECT = "COLLEGE_PROSPECT"
    INTERNATIONAL_PROSPECT = "INTERNATIONAL_PROSPECT"
    OPPONENT_TEAM = "OPPONENT_TEAM"


PLAYER_TARGET_TYPES = frozenset({
    ScoutingTargetType.NBA_PLAYER,
    ScoutingTargetType.COLLEGE_PROSPECT,
    ScoutingTargetType.INTERNATIONAL_PROSPECT,
})


# ============================================================
# REPORT ENUMS
# ============================================================

class ReportConfidence(str, Enum):
    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class ReportFreshness(str, Enum):
    RECENT = "RECENT"
    CURRENT = "CURRENT"
    AGING = "AGING"
    OUTDATED = "OUTDATED"


class DraftRecommendation(str, Enum):
    LOTTERY = "LOTTERY"
    FIRST_ROUND = "FIRST_ROUND"
    SECOND_ROUND = "SECOND_ROUND"
    LATE_FLYER = "LATE_FLYER"
    PASS = "PASS"


class TradeRecommendation(str, Enum):
    ACQUIRE = "ACQUIRE"
    MONITOR = "MONITOR"
    AVOID = "AVOID"


# ============================================================
# RESULT CODES
# ============================================================

class ScoutingError(str, Enum):
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    BELOW_MINIMUM = "BELOW_MINIMUM"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    ALREADY_EMPLOYED = "ALREADY_EMPLOYED"
    INVALID_DURATION = "INVALID_DURATION"
    INVALID_TARGET = "INVALID_TARGET"
    DIRECTORY_MISS = "DIRECTORY_MISS"
