"""Risk scoring — likelihood × impact on a 5×5 grid."""

from __future__ import annotations

from grc.schemas.enums import Level

# Ordinal rank of each level, in fixed order
LEVEL_RANK: dict[Level, int] = {
    Level.VERY_LOW: 1,
    Level.LOW: 2,
    Level.MEDIUM: 3,
    Level.HIGH: 4,
    Level.VERY_HIGH: 5,
}

LEVELS: list[str] = [level.value for level in Level]

HIGH_THRESHOLD = 15
MEDIUM_THRESHOLD = 9


def calculate_risk_score(likelihood: Level | str, impact: Level | str) -> int:
    """Return the risk score for a likelihood/impact pair.

    The score is the product of the two ranks, so it ranges from 1
    (very_low × very_low) to 25 (very_high × very_high). It is stored on the
    risk record and must be recomputed whenever either input changes.

    Raises:
        ValueError: If either argument is not a recognised level.
    """
    return LEVEL_RANK[Level(likelihood)] * LEVEL_RANK[Level(impact)]


def risk_level(score: int) -> str:
    """Bucket a score into "high" (≥15), "medium" (9–14) or "low" (<9)."""
    if score >= HIGH_THRESHOLD:
        return "high"
    if score >= MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def matrix_cell_level(likelihood: Level | str, impact: Level | str) -> str:
    """Bucket of a risk-matrix cell, derived from its coordinates."""
    return risk_level(calculate_risk_score(likelihood, impact))
