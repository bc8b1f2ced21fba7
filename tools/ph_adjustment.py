"""
Tool for calculating pool pH adjustment doses.

The dosing engine (compute_dose) is a pure function: it never raises for a
well-formed input and reports out-of-range chemistry as warnings. The async
tool wrappers validate raw MCP input and FAIL LOUDLY with typed exceptions.

Dose model: every chemical has a reference dose that moves a 10,000 gallon,
100 ppm alkalinity pool by 0.2 pH. The dose scales linearly with the pH
change, the alkalinity ratio and the volume factor, then by the chemical's
potency factor. Large doses are split into several additions.
"""

import logging
from typing import Any, Dict, List, Optional

from utils.constants import (
    ACID_LOCATION_INSTRUCTION,
    AERATION_INSTRUCTIONS,
    AERATION_WARNING,
    BALANCED_INSTRUCTION,
    BALANCED_PH_TOLERANCE,
    DRY_ACID_PLASTER_WARNING,
    HIGH_ALKALINITY_PPM,
    LINER_ADVISORY,
    LOW_ALKALINITY_PPM,
    PH_CHEMICALS,
    PLASTER_ADVISORY,
    PUMP_RUNNING_INSTRUCTION,
    SAFE_PH_MAX,
    SAFE_PH_MIN,
)
from utils.exceptions import InputValidationError
from utils.helpers import (
    alkalinity_change,
    alkalinity_ratio,
    build_plan_steps,
    reference_dose,
    round_half_up,
    secondary_quantity,
    split_dose,
    volume_factor,
)

from .schemas import (
    CalculatePhAdjustmentInput,
    ChemicalPreference,
    ChemistryTarget,
    DoseQuantity,
    DoseResult,
    DosingPlan,
    ListPhChemicalsInput,
    ListPhChemicalsOutput,
    PhChemicalInfo,
    PoolProfile,
)

logger = logging.getLogger(__name__)


def _standing_warnings(profile: PoolProfile, target: ChemistryTarget) -> List[str]:
    warnings = []

    if profile.volume_gallons <= 0:
        warnings.append("Pool volume must be greater than zero. No dose can be calculated.")
    if profile.total_alkalinity_ppm < 0:
        warnings.append("Total alkalinity cannot be negative. Treated as 0 ppm.")

    if target.target_ph < SAFE_PH_MIN or target.target_ph > SAFE_PH_MAX:
        warnings.append(f"Target pH is outside the ideal range ({SAFE_PH_MIN} - {SAFE_PH_MAX}).")
    if profile.total_alkalinity_ppm < LOW_ALKALINITY_PPM:
        warnings.append("Low Alkalinity (<80 ppm) causes rapid pH swings. Adjust Alkalinity first?")
    if profile.total_alkalinity_ppm > HIGH_ALKALINITY_PPM:
        warnings.append("High Alkalinity resists pH change. You may need larger/multiple doses.")

    return warnings


def _surface_advisory(profile: PoolProfile, lowering: bool) -> Optional[str]:
    if not lowering:
        return None
    if profile.surface_material == "plaster":
        return PLASTER_ADVISORY
    return LINER_ADVISORY


def _balanced_result(delta_ph: float) -> DoseResult:
    return DoseResult(
        direction="balanced",
        chemical=None,
        chemical_name="None",
        ph_delta=round_half_up(delta_ph, 2),
        primary_dose=DoseQuantity(amount=0.0, unit=""),
        alkalinity_delta_ppm=0,
        dosing_plan=DosingPlan(is_split=False, step_count=1, amount_per_step=0.0, steps=[]),
        warnings=[],
        instructions=[BALANCED_INSTRUCTION],
    )


def _aeration_result(delta_ph: float, warnings: List[str]) -> DoseResult:
    chem = PH_CHEMICALS["aeration"]
    return DoseResult(
        direction="raise",
        chemical="aeration",
        chemical_name=chem["name"],
        ph_delta=round_half_up(delta_ph, 2),
        primary_dose=DoseQuantity(amount=0.0, unit=chem["unit"]),
        alkalinity_delta_ppm=0,
        dosing_plan=DosingPlan(
            is_split=False,
            step_count=1,
            amount_per_step=0.0,
            steps=["Aerate continuously and re-test every few hours."],
        ),
        warnings=warnings + [AERATION_WARNING],
        instructions=[PUMP_RUNNING_INSTRUCTION] + AERATION_INSTRUCTIONS + [chem["instruction"]],
        surface_advisory=None,
    )


def compute_dose(
    profile: PoolProfile,
    target: ChemistryTarget,
    preference: ChemicalPreference,
) -> DoseResult:
    """
    Calculate the chemical dose that moves pool pH from current to target.

    Args:
        profile: Pool volume, alkalinity, temperature and surface
        target: Current and desired pH
        preference: Acid used when lowering, base used when raising

    Returns:
        DoseResult with the dose, alkalinity side effect, dosing plan,
        warnings, instructions and surface advisory. Amounts are rounded
        here and nowhere else.
    """
    delta_ph = target.target_ph - target.current_ph
    abs_delta = abs(delta_ph)

    if abs_delta < BALANCED_PH_TOLERANCE:
        logger.debug(f"pH delta {delta_ph:.3f} within tolerance; water is balanced")
        return _balanced_result(delta_ph)

    lowering = delta_ph < 0
    warnings = _standing_warnings(profile, target)

    if not lowering and preference.base_choice == "aeration":
        return _aeration_result(delta_ph, warnings)

    chemical = preference.acid_choice if lowering else preference.base_choice
    chem = PH_CHEMICALS[chemical]

    # Degenerate inputs collapse to a zero dose rather than a negative one
    vol_factor = max(volume_factor(profile.volume_gallons), 0.0)
    ta_ratio = max(alkalinity_ratio(profile.total_alkalinity_ppm), 0.0)

    dose = reference_dose(abs_delta, chem["reference_oz"], ta_ratio, vol_factor, chem["potency_factor"])
    ta_change = alkalinity_change(dose, chem["alkalinity_ppm_per_unit"], vol_factor)
    ceiling = chem["max_dose_per_reference"] * vol_factor
    is_split, step_count, amount_per_step = split_dose(dose, ceiling)
    unit = chem["unit"]

    logger.debug(
        f"{chemical}: delta={delta_ph:.3f}, ta_ratio={ta_ratio:.3f}, volume_factor={vol_factor:.3f}, "
        f"dose={dose:.4f} {unit}, ceiling={ceiling:.4f}, ta_change={ta_change:.4f}"
    )

    instructions = [PUMP_RUNNING_INSTRUCTION]
    if lowering:
        instructions.append(ACID_LOCATION_INSTRUCTION)
    instructions.append(chem["instruction"])

    if chemical == "dry_acid" and profile.surface_material == "plaster":
        warnings.append(DRY_ACID_PLASTER_WARNING)

    secondary = secondary_quantity(dose, unit)
    secondary_dose = None
    if secondary is not None:
        secondary_amount, secondary_unit = secondary
        secondary_dose = DoseQuantity(amount=round_half_up(secondary_amount, 2), unit=secondary_unit)

    return DoseResult(
        direction="lower" if lowering else "raise",
        chemical=chemical,
        chemical_name=chem["name"],
        ph_delta=round_half_up(delta_ph, 2),
        primary_dose=DoseQuantity(amount=round_half_up(dose, 1), unit=unit),
        secondary_dose=secondary_dose,
        alkalinity_delta_ppm=int(round_half_up(ta_change)),
        dosing_plan=DosingPlan(
            is_split=is_split,
            step_count=step_count,
            amount_per_step=round_half_up(amount_per_step, 1),
            max_single_dose=round_half_up(ceiling, 1),
            steps=build_plan_steps(is_split, amount_per_step, unit),
        ),
        warnings=warnings,
        instructions=instructions,
        surface_advisory=_surface_advisory(profile, lowering),
    )


async def calculate_ph_adjustment(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Calculate how much acid or base is needed to bring pool water to a target pH.

    Args:
        input_data: Dictionary containing:
            - pool: volume_gallons, total_alkalinity_ppm, water_temperature_f, surface_material
            - chemistry: current_ph, target_ph
            - preference: acid_choice (muriatic_31, muriatic_15, dry_acid),
              base_choice (soda_ash, borax, aeration)
            - strict_validation: Reject non-positive volume / negative alkalinity (default False)

    Returns:
        Dictionary with direction, chemical, primary/secondary dose, alkalinity
        change, dosing plan, warnings, instructions and surface advisory

    Raises:
        InputValidationError: If input validation fails
    """
    logger.info("Running calculate_ph_adjustment tool...")

    try:
        input_model = CalculatePhAdjustmentInput(**(input_data or {}))
    except Exception as e:
        raise InputValidationError(f"Input validation error: {e}")

    pool = input_model.pool
    if input_model.strict_validation:
        if pool.volume_gallons <= 0:
            raise InputValidationError(
                f"Pool volume must be greater than zero (got {pool.volume_gallons})",
                field="pool.volume_gallons",
                value=pool.volume_gallons,
            )
        if pool.total_alkalinity_ppm < 0:
            raise InputValidationError(
                f"Total alkalinity cannot be negative (got {pool.total_alkalinity_ppm})",
                field="pool.total_alkalinity_ppm",
                value=pool.total_alkalinity_ppm,
            )

    result = compute_dose(pool, input_model.chemistry, input_model.preference)

    logger.info(
        f"{result.direction}: {result.primary_dose.amount} {result.primary_dose.unit} of "
        f"{result.chemical_name} ({result.dosing_plan.step_count} addition(s), "
        f"TA {result.alkalinity_delta_ppm:+d} ppm, {len(result.warnings)} warning(s))"
    )

    return result.model_dump()


async def list_ph_chemicals(input_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    List the chemicals the pH tool can dose.

    Args:
        input_data: Optional dictionary containing:
            - direction: 'raise' or 'lower' to filter the list

    Returns:
        Dictionary with a 'chemicals' list (key, name, label, unit, ceiling, TA impact)

    Raises:
        InputValidationError: If the direction filter is not recognised
    """
    try:
        input_model = ListPhChemicalsInput(**(input_data or {}))
    except Exception as e:
        raise InputValidationError(f"Input validation error: {e}")

    chemicals = []
    for key, chem in PH_CHEMICALS.items():
        if input_model.direction and chem["direction"] != input_model.direction:
            continue
        chemicals.append(
            PhChemicalInfo(
                key=key,
                name=chem["name"],
                label=chem["label"],
                sub_label=chem["sub_label"],
                direction=chem["direction"],
                unit=chem["unit"],
                max_dose_per_10k_gallons=chem["max_dose_per_reference"],
                alkalinity_ppm_per_unit=chem["alkalinity_ppm_per_unit"],
            )
        )

    return ListPhChemicalsOutput(chemicals=chemicals).model_dump()
