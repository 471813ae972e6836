"""Input gate run before anything reaches the scoring engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from riskboard.errors import ValidationError
from riskboard.risk.scoring import MAX_RATING, MIN_RATING

REQUIRED_FIELDS_MESSAGE = "Asset and threat are required"
NOT_INTEGER_MESSAGE = "Invalid range: Likelihood and Impact must be integers between 1-5."
OUT_OF_RANGE_MESSAGE = "Invalid range: Likelihood and Impact must be 1–5."


@dataclass(frozen=True)
class RiskInput:
    asset: str
    threat: str
    likelihood: int
    impact: int


def _clean_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _as_rating(value: Any) -> int | None:
    """Coerce a JSON number to ``int`` or return None when it is not integral.

    JSON has a single number type, so ``3.0`` is accepted as ``3``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def validate_risk_input(asset: Any, threat: Any, likelihood: Any, impact: Any) -> RiskInput:
    """Validate raw client input, raising ``ValidationError`` on the first failed check.

    Checks run in order: required text fields, integer ratings, rating range.
    """
    clean_asset = _clean_text(asset)
    clean_threat = _clean_text(threat)
    if not clean_asset or not clean_threat:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    rating_l = _as_rating(likelihood)
    rating_i = _as_rating(impact)
    if rating_l is None or rating_i is None:
        raise ValidationError(NOT_INTEGER_MESSAGE)

    if not (MIN_RATING <= rating_l <= MAX_RATING and MIN_RATING <= rating_i <= MAX_RATING):
        raise ValidationError(OUT_OF_RANGE_MESSAGE)

    return RiskInput(
        asset=clean_asset,
        threat=clean_threat,
        likelihood=rating_l,
        impact=rating_i,
    )
