"""
Unit tests for dosing helper functions in utils/helpers.py.

Tests:
- round_half_up
- reference_dose
- alkalinity_change
- split_dose
- secondary_quantity
- build_plan_steps
- normalize_choice
"""

import math
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.helpers import (
    alkalinity_change,
    alkalinity_ratio,
    build_plan_steps,
    normalize_choice,
    reference_dose,
    round_half_up,
    secondary_quantity,
    split_dose,
    volume_factor,
)


# =============================================================================
# ROUNDING
# =============================================================================

class TestRoundHalfUp:
    """Halves round towards +inf, unlike Python's round()."""

    def test_positive_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round(2.5) == 2

    def test_negative_half_rounds_towards_zero(self):
        assert round_half_up(-2.5) == -2

    def test_one_decimal(self):
        assert round_half_up(35.96, 1) == 36.0
        assert round_half_up(57.64, 1) == 57.6

    def test_two_decimals(self):
        assert round_half_up(3.75, 2) == 3.75
        assert round_half_up(1.6875, 2) == 1.69

    def test_nearest_integer(self):
        assert round_half_up(-11.99) == -12
        assert round_half_up(9.6) == 10


# =============================================================================
# NORMALISATION AND DOSE FORMULA
# =============================================================================

class TestNormalisation:
    def test_volume_factor(self):
        assert volume_factor(10000) == 1.0
        assert volume_factor(25000) == 2.5

    def test_alkalinity_ratio(self):
        assert alkalinity_ratio(100) == 1.0
        assert alkalinity_ratio(80) == pytest.approx(0.8)


class TestReferenceDose:
    """One reference dose per 0.2 pH step, scaled linearly."""

    def test_one_step_at_reference(self):
        assert reference_dose(0.2, 12.0, 1.0, 1.0) == pytest.approx(12.0)

    def test_scales_with_steps(self):
        assert reference_dose(0.6, 6.0, 1.0, 1.0) == pytest.approx(18.0)

    def test_scales_with_alkalinity_and_volume(self):
        assert reference_dose(0.4, 12.0, 1.5, 2.0) == pytest.approx(72.0)

    def test_potency_factor(self):
        base = reference_dose(0.4, 12.0, 1.0, 1.5)
        assert reference_dose(0.4, 12.0, 1.0, 1.5, potency_factor=1.6) == pytest.approx(base * 1.6)

    def test_zero_delta(self):
        assert reference_dose(0.0, 12.0, 1.0, 1.0) == 0.0


class TestAlkalinityChange:
    def test_per_reference_pool(self):
        assert alkalinity_change(36.0, -0.5, 1.5) == pytest.approx(-12.0)

    def test_positive_side_effect(self):
        assert alkalinity_change(18.0, 0.8, 1.5) == pytest.approx(9.6)

    def test_zero_volume_factor_is_zero(self):
        assert alkalinity_change(10.0, -0.5, 0.0) == 0.0


# =============================================================================
# SPLITTING AND UNITS
# =============================================================================

class TestSplitDose:
    """Equal additions no larger than the ceiling."""

    def test_under_ceiling(self):
        assert split_dose(36.0, 48.0) == (False, 1, 36.0)

    def test_equal_to_ceiling_is_not_split(self):
        assert split_dose(48.0, 48.0) == (False, 1, 48.0)

    def test_over_ceiling(self):
        is_split, steps, per_step = split_dose(100.0, 32.0)

        assert is_split is True
        assert steps == math.ceil(100.0 / 32.0) == 4
        assert per_step == pytest.approx(25.0)
        assert steps * per_step == pytest.approx(100.0)

    def test_zero_ceiling_never_splits(self):
        assert split_dose(0.0, 0.0) == (False, 1, 0.0)


class TestSecondaryQuantity:
    def test_fl_oz_to_gallons(self):
        amount, unit = secondary_quantity(256.0, "fl oz")
        assert unit == "gallons"
        assert amount == 2.0

    def test_oz_to_pounds(self):
        amount, unit = secondary_quantity(24.0, "oz weight")
        assert unit == "lbs"
        assert amount == 1.5

    def test_thresholds_are_exclusive(self):
        assert secondary_quantity(128.0, "fl oz") is None
        assert secondary_quantity(16.0, "oz weight") is None

    def test_unknown_unit(self):
        assert secondary_quantity(500.0, "hours") is None


class TestBuildPlanSteps:
    def test_unsplit(self):
        assert build_plan_steps(False, 36.0, "fl oz") == ["Add full dose, circulate 30-60 mins, re-test."]

    def test_split_rounds_amount(self):
        steps = build_plan_steps(True, 47.52, "fl oz")

        assert steps[0] == "Add 47.5 fl oz now."
        assert "2 hrs" in steps[1]
        assert "ONLY if needed" in steps[2]


class TestNormalizeChoice:
    def test_alias(self):
        assert normalize_choice("Sodium Bisulfate", {"sodium_bisulfate": "dry_acid"}) == "dry_acid"

    def test_hyphen_and_case(self):
        assert normalize_choice(" Muriatic-31 ", {}) == "muriatic_31"

    def test_unknown_passthrough(self):
        assert normalize_choice("Vinegar", {}) == "vinegar"
