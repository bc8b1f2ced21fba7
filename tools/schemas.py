"""
Common schemas for pool pH dosing calculations.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, validator

from utils.helpers import normalize_choice

SurfaceMaterial = Literal["plaster", "vinyl", "fiberglass"]
AcidChoice = Literal["muriatic_31", "muriatic_15", "dry_acid"]
BaseChoice = Literal["soda_ash", "borax", "aeration"]
Direction = Literal["raise", "lower", "balanced"]

# Common name variations mapped onto catalogue keys
SURFACE_ALIASES = {
    "plaster": "plaster",
    "gunite": "plaster",
    "shotcrete": "plaster",
    "concrete": "plaster",
    "pebble": "plaster",
    "vinyl": "vinyl",
    "vinyl_liner": "vinyl",
    "liner": "vinyl",
    "fiberglass": "fiberglass",
    "fibreglass": "fiberglass",
}

ACID_ALIASES = {
    "muriatic": "muriatic_31",
    "muriatic_acid": "muriatic_31",
    "hydrochloric_acid": "muriatic_31",
    "hcl": "muriatic_31",
    "31.45%": "muriatic_31",
    "muriatic_31.45": "muriatic_31",
    "muriatic_low": "muriatic_15",
    "low_fume_muriatic": "muriatic_15",
    "muriatic_15%": "muriatic_15",
    "15%": "muriatic_15",
    "dry": "dry_acid",
    "sodium_bisulfate": "dry_acid",
    "nahso4": "dry_acid",
    "ph_decreaser": "dry_acid",
}

BASE_ALIASES = {
    "soda": "soda_ash",
    "sodium_carbonate": "soda_ash",
    "na2co3": "soda_ash",
    "ph_increaser": "soda_ash",
    "20_mule_team": "borax",
    "sodium_tetraborate": "borax",
    "air": "aeration",
    "aerate": "aeration",
}


# --- Calculation inputs ---


class PoolProfile(BaseModel):
    """Physical description of the pool being dosed."""

    volume_gallons: float = Field(
        15000.0,
        allow_inf_nan=False,
        description="Total water volume in US gallons. Non-positive volumes produce a zero dose and a warning.",
    )
    total_alkalinity_ppm: float = Field(
        100.0,
        allow_inf_nan=False,
        description="Total alkalinity (carbonate buffering capacity) in ppm as CaCO3. Higher values resist pH change.",
    )
    water_temperature_f: float = Field(
        80.0,
        allow_inf_nan=False,
        description="Water temperature in Fahrenheit. Informational only; does not change the dose.",
    )
    surface_material: SurfaceMaterial = Field(
        "plaster", description="Pool surface: plaster, vinyl or fiberglass. Affects advisory text only."
    )

    @validator("surface_material", pre=True)
    def standardize_surface(cls, v):
        if isinstance(v, str):
            return normalize_choice(v, SURFACE_ALIASES)
        return v


class ChemistryTarget(BaseModel):
    """Measured and desired pH."""

    current_ph: float = Field(7.8, allow_inf_nan=False, description="Measured pH, typically 6.0-8.5.")
    target_ph: float = Field(7.4, allow_inf_nan=False, description="Desired pH. The ideal pool window is 7.2-7.8.")


class ChemicalPreference(BaseModel):
    """Which chemical to use in each direction."""

    acid_choice: AcidChoice = Field(
        "muriatic_31",
        description="Chemical used when lowering pH: muriatic_31 (31.45% HCl), muriatic_15 (~15% HCl) or dry_acid (sodium bisulfate).",
    )
    base_choice: BaseChoice = Field(
        "borax",
        description="Chemical used when raising pH: soda_ash (sodium carbonate), borax or aeration (no chemical).",
    )

    @validator("acid_choice", pre=True)
    def standardize_acid(cls, v):
        if isinstance(v, str):
            return normalize_choice(v, ACID_ALIASES)
        return v

    @validator("base_choice", pre=True)
    def standardize_base(cls, v):
        if isinstance(v, str):
            return normalize_choice(v, BASE_ALIASES)
        return v


# --- Calculation outputs ---


class DoseQuantity(BaseModel):
    amount: float = Field(..., description="Quantity to add.")
    unit: str = Field(..., description="Unit of the quantity (fl oz, oz weight, gallons, lbs, hours).")


class DosingPlan(BaseModel):
    """How the dose should be added."""

    is_split: bool = Field(False, description="Whether the dose must be added in several portions.")
    step_count: int = Field(1, ge=1, description="Number of portions.")
    amount_per_step: float = Field(0.0, description="Size of each portion, in the primary unit.")
    max_single_dose: Optional[float] = Field(
        None, description="Largest safe single addition for this pool, in the primary unit."
    )
    steps: List[str] = Field(default_factory=list, description="Ordered plan the pool owner should follow.")


class DoseResult(BaseModel):
    """Complete output of a pH adjustment calculation."""

    direction: Direction = Field(..., description="raise, lower or balanced.")
    chemical: Optional[str] = Field(None, description="Catalogue key of the chemical used.")
    chemical_name: str = Field(..., description="Display name of the chemical used.")
    ph_delta: float = Field(0.0, description="target_ph - current_ph, rounded to 2 decimals.")
    primary_dose: DoseQuantity = Field(..., description="Dose in fl oz (liquids) or oz weight (solids).")
    secondary_dose: Optional[DoseQuantity] = Field(
        None, description="Same dose in gallons or lbs once it exceeds 128 fl oz or 16 oz."
    )
    alkalinity_delta_ppm: int = Field(0, description="Estimated change in total alkalinity (ppm).")
    dosing_plan: DosingPlan = Field(default_factory=DosingPlan, description="Safety dose-splitting plan.")
    warnings: List[str] = Field(default_factory=list, description="Advisory warnings, in display order.")
    instructions: List[str] = Field(default_factory=list, description="Handling instructions, in display order.")
    surface_advisory: Optional[str] = Field(None, description="Surface-specific advice when lowering pH.")


# --- Tool: calculate_ph_adjustment ---


class CalculatePhAdjustmentInput(BaseModel):
    pool: PoolProfile = Field(default_factory=PoolProfile, description="Pool profile.")
    chemistry: ChemistryTarget = Field(default_factory=ChemistryTarget, description="Current and target pH.")
    preference: ChemicalPreference = Field(
        default_factory=ChemicalPreference, description="Preferred acid and base."
    )
    strict_validation: Optional[bool] = Field(
        False,
        description="Reject non-positive volume or negative alkalinity instead of returning a degenerate dose with a warning.",
    )


# --- Tool: list_ph_chemicals ---


class ListPhChemicalsInput(BaseModel):
    direction: Optional[Literal["raise", "lower"]] = Field(
        None, description="Only list chemicals that move pH in this direction."
    )


class PhChemicalInfo(BaseModel):
    key: str
    name: str
    label: str
    sub_label: str
    direction: Literal["raise", "lower"]
    unit: str
    max_dose_per_10k_gallons: Optional[float] = Field(
        None, description="Largest single addition per 10,000 gallons before the dose is split."
    )
    alkalinity_ppm_per_unit: float = Field(
        ..., description="TA change per unit of dose in a 10,000 gallon pool (signed)."
    )


class ListPhChemicalsOutput(BaseModel):
    chemicals: List[PhChemicalInfo]


# --- Tool: batch_process_scenarios ---


class PoolScenario(BaseModel):
    name: Optional[str] = Field(None, description="Label used in results and error reports.")
    type: Literal["single", "parameter_sweep", "chemical_comparison"] = Field(
        "single", description="Scenario type."
    )
    overrides: Optional[Dict[str, Any]] = Field(
        None,
        description="Flat field overrides applied to the base scenario (e.g. {'current_ph': 8.0, 'acid_choice': 'dry_acid'}).",
    )
    parameter: Optional[str] = Field(None, description="Field swept by a parameter_sweep scenario.")
    values: Optional[List[float]] = Field(None, description="Explicit sweep values.")
    start: Optional[float] = Field(None, description="Sweep start (used with stop/step).")
    stop: Optional[float] = Field(None, description="Sweep stop, inclusive.")
    step: Optional[float] = Field(None, gt=0, description="Sweep increment.")
    direction: Optional[Literal["raise", "lower"]] = Field(
        None, description="chemical_comparison: compare acids (lower) or bases (raise). Inferred from pH when omitted."
    )


class BatchProcessInput(BaseModel):
    base_scenario: CalculatePhAdjustmentInput = Field(
        default_factory=CalculatePhAdjustmentInput, description="Scenario every batch entry starts from."
    )
    scenarios: List[PoolScenario] = Field(..., description="Scenarios to evaluate.")
    parallel_limit: int = Field(10, ge=1, description="Maximum concurrent scenarios.")
    output_format: Literal["summary", "full"] = Field("summary", description="'summary' adds aggregate statistics.")
    allow_partial: bool = Field(
        True, description="Return partial results when scenarios fail instead of raising BatchSimulationError."
    )
