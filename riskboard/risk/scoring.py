"""Risk scoring engine — likelihood × impact matrix with qualitative levels.

Score = likelihood × impact on a fixed 1–5 × 1–5 matrix, so scores span 1–25.
Levels are fixed, non-overlapping buckets of the score:

    1–5   Low
    6–12  Medium
    13–18 High
    19–25 Critical

Anything outside 1–25 classifies as ``Unknown``. Every layer that needs a
score, level or mitigation hint goes through this module.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

MIN_RATING = 1
MAX_RATING = 5


class RiskLevel(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"


# (inclusive lower bound, inclusive upper bound, level)
LEVEL_BUCKETS: tuple[tuple[int, int, RiskLevel], ...] = (
    (1, 5, RiskLevel.LOW),
    (6, 12, RiskLevel.MEDIUM),
    (13, 18, RiskLevel.HIGH),
    (19, 25, RiskLevel.CRITICAL),
)

MITIGATION_HINTS: dict[str, str] = {
    RiskLevel.LOW.value: "Accept / monitor",
    RiskLevel.MEDIUM.value: "Plan mitigation within 6 months",
    RiskLevel.HIGH.value: "Prioritize action + compensating controls (NIST PR.AC)",
    RiskLevel.CRITICAL.value: "Immediate mitigation required + executive reporting",
}

HIGH_SEVERITY_LEVELS = frozenset({RiskLevel.HIGH.value, RiskLevel.CRITICAL.value})


@dataclass(frozen=True)
class RiskAssessment:
    """Derived values for one (likelihood, impact) pair."""

    likelihood: int
    impact: int
    score: int
    level: str
    mitigation_hint: str


def compute_score(likelihood: int, impact: int) -> int:
    """Return ``likelihood * impact``. Callers validate the 1–5 range."""
    return likelihood * impact


def classify_level(score: int) -> str:
    for low, high, level in LEVEL_BUCKETS:
        if low <= score <= high:
            return level.value
    return RiskLevel.UNKNOWN.value


def mitigation_hint(level: str | None) -> str:
    if isinstance(level, RiskLevel):
        level = level.value
    return MITIGATION_HINTS.get(level or "", "")


def assess(likelihood: int, impact: int) -> RiskAssessment:
    score = compute_score(likelihood, impact)
    level = classify_level(score)
    return RiskAssessment(
        likelihood=likelihood,
        impact=impact,
        score=score,
        level=level,
        mitigation_hint=mitigation_hint(level),
    )
