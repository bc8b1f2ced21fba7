"""
Helper functions for pool pH dosing calculations.

All helpers work on unrounded values; rounding is applied once, when the
result model is assembled.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from .constants import (
    REFERENCE_ALKALINITY_PPM,
    REFERENCE_PH_STEP,
    REFERENCE_VOLUME_GALLONS,
    SECONDARY_UNITS,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals with halves going towards +inf.

    Python's round() uses banker's rounding; dose tables published for pool
    owners round halves upward.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def volume_factor(volume_gallons: float) -> float:
    """Pool volume relative to the 10,000 gallon reference pool."""
    return volume_gallons / REFERENCE_VOLUME_GALLONS


def alkalinity_ratio(total_alkalinity_ppm: float) -> float:
    """Buffering capacity relative to the 100 ppm reference."""
    return total_alkalinity_ppm / REFERENCE_ALKALINITY_PPM


def reference_dose(
    abs_delta_ph: float,
    reference_oz: float,
    ta_ratio: float,
    vol_factor: float,
    potency_factor: float = 1.0,
) -> float:
    """Dose needed to move pH by ``abs_delta_ph``.

    ``reference_oz`` is the amount that shifts a reference pool by one
    REFERENCE_PH_STEP. The result scales linearly with the number of steps,
    the alkalinity ratio and the volume factor, then by the chemical's
    potency factor relative to its reference formula.
    """
    steps = abs_delta_ph / REFERENCE_PH_STEP
    return steps * reference_oz * ta_ratio * vol_factor * potency_factor


def alkalinity_change(dose: float, ppm_per_unit: float, vol_factor: float) -> float:
    """Estimated TA change (ppm) caused by ``dose`` in a pool of ``vol_factor``."""
    if vol_factor <= 0:
        return 0.0
    return dose * ppm_per_unit / vol_factor


def split_dose(dose: float, ceiling: float) -> Tuple[bool, int, float]:
    """Split ``dose`` into equal additions no larger than ``ceiling``.

    Returns:
        (is_split, step_count, amount_per_step)
    """
    if ceiling <= 0 or dose <= ceiling:
        return False, 1, dose

    step_count = math.ceil(dose / ceiling)
    logger.debug(f"Dose {dose:.3f} exceeds ceiling {ceiling:.3f}; splitting into {step_count} additions")
    return True, step_count, dose / step_count


def secondary_quantity(dose: float, unit: str) -> Optional[Tuple[float, str]]:
    """Re-express a dose in gallons or pounds once it crosses the readability threshold."""
    conversion = SECONDARY_UNITS.get(unit)
    if conversion is None:
        return None

    threshold, factor, secondary_unit = conversion
    if dose > threshold:
        return dose / factor, secondary_unit
    return None


def build_plan_steps(is_split: bool, amount_per_step: float, unit: str) -> List[str]:
    """Human-readable dosing plan."""
    if not is_split:
        return ["Add full dose, circulate 30-60 mins, re-test."]

    return [
        f"Add {round_half_up(amount_per_step, 1)} {unit} now.",
        "Circulate at least 2 hrs, re-test.",
        "Add remainder ONLY if needed.",
    ]


def normalize_choice(value: str, aliases: Dict[str, str]) -> str:
    """Map a free-form chemical/surface name onto its catalogue key.

    Unknown names are returned lower-cased and stripped so the schema's
    Literal check produces the error message.
    """
    key = value.lower().strip()
    key = key.replace("-", "_").replace(" ", "_")
    return aliases.get(key, key)
