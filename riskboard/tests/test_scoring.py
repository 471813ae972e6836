"""Tests for the risk scoring engine."""

import pytest

from riskboard.risk.scoring import (
    RiskLevel,
    assess,
    classify_level,
    compute_score,
    mitigation_hint,
)


class TestComputeScore:
    def test_full_matrix_is_product(self):
        for likelihood in range(1, 6):
            for impact in range(1, 6):
                assert compute_score(likelihood, impact) == likelihood * impact

    def test_extremes(self):
        assert compute_score(1, 1) == 1
        assert compute_score(5, 5) == 25


class TestClassifyLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (1, "Low"),
            (5, "Low"),
            (6, "Medium"),
            (12, "Medium"),
            (13, "High"),
            (18, "High"),
            (19, "Critical"),
            (25, "Critical"),
        ],
    )
    def test_bucket_boundaries(self, score, level):
        assert classify_level(score) == level

    @pytest.mark.parametrize("score", [0, -1, 26, 100])
    def test_out_of_range_is_unknown(self, score):
        assert classify_level(score) == "Unknown"

    def test_every_matrix_cell_has_a_known_level(self):
        for likelihood in range(1, 6):
            for impact in range(1, 6):
                assert classify_level(likelihood * impact) != RiskLevel.UNKNOWN.value


class TestMitigationHint:
    def test_known_levels(self):
        assert mitigation_hint("Low") == "Accept / monitor"
        assert mitigation_hint("Medium") == "Plan mitigation within 6 months"
        assert mitigation_hint("High") == "Prioritize action + compensating controls (NIST PR.AC)"
        assert mitigation_hint("Critical") == "Immediate mitigation required + executive reporting"

    def test_unknown_and_missing_levels_are_empty(self):
        assert mitigation_hint("Unknown") == ""
        assert mitigation_hint("critical") == ""
        assert mitigation_hint(None) == ""

    def test_accepts_enum_members(self):
        assert mitigation_hint(RiskLevel.LOW) == "Accept / monitor"


def test_assess_bundles_derived_values():
    result = assess(4, 5)
    assert result.score == 20
    assert result.level == "Critical"
    assert result.mitigation_hint == "Immediate mitigation required + executive reporting"
