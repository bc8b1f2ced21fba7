"""
Constants for pool pH dosing calculations.

The dose multipliers below are field heuristics calibrated against a
10,000 gallon reference pool at 100 ppm total alkalinity. They are not
derived from equilibrium chemistry; adjust them here, never inline.
"""

# Reference conditions every dose constant is calibrated to
REFERENCE_VOLUME_GALLONS = 10000.0
REFERENCE_ALKALINITY_PPM = 100.0
REFERENCE_PH_STEP = 0.2         # pH shift produced by one reference dose

# |target - current| below this is considered already balanced
BALANCED_PH_TOLERANCE = 0.05

# Ideal pool pH window
SAFE_PH_MIN = 7.2
SAFE_PH_MAX = 7.8

# Total alkalinity advisory thresholds (ppm as CaCO3)
LOW_ALKALINITY_PPM = 80.0       # below: rapid pH swings
HIGH_ALKALINITY_PPM = 150.0     # above: pH resists change

# Reference doses per REFERENCE_PH_STEP at reference conditions
ACID_REFERENCE_FL_OZ = 12.0     # fl oz of 31.45% muriatic acid
SODA_ASH_REFERENCE_OZ = 6.0     # oz weight of sodium carbonate
BORAX_REFERENCE_OZ = 20.0       # oz weight of sodium tetraborate

# Largest single addition per reference pool before the dose is split
MAX_ACID_FL_OZ_PER_REFERENCE = 32.0   # about 1 quart per 10,000 gal
MAX_SOLID_OZ_PER_REFERENCE = 48.0

# Unit conversions
FL_OZ_PER_GALLON = 128.0
OZ_PER_POUND = 16.0

# Display units
UNIT_FL_OZ = "fl oz"
UNIT_OZ_WEIGHT = "oz weight"
UNIT_GALLONS = "gallons"
UNIT_POUNDS = "lbs"
UNIT_HOURS = "hours"

# Secondary unit used once a primary dose crosses its readability threshold:
# primary unit -> (threshold, conversion factor, secondary unit)
SECONDARY_UNITS = {
    UNIT_FL_OZ: (FL_OZ_PER_GALLON, FL_OZ_PER_GALLON, UNIT_GALLONS),
    UNIT_OZ_WEIGHT: (OZ_PER_POUND, OZ_PER_POUND, UNIT_POUNDS),
}

# Chemical catalogue.
#   reference_oz:            dose per REFERENCE_PH_STEP of the chemical's reference formula
#   potency_factor:          multiplier applied to the reference dose
#   alkalinity_ppm_per_unit: TA change per unit of dose in a reference pool (signed)
#   max_dose_per_reference:  single-addition ceiling per 10,000 gal
PH_CHEMICALS = {
    "muriatic_31": {
        "name": "Muriatic Acid (Hydrochloric Acid, 31.45%)",
        "label": "Muriatic Acid",
        "sub_label": "31.45%",
        "direction": "lower",
        "unit": UNIT_FL_OZ,
        "reference_oz": ACID_REFERENCE_FL_OZ,
        "potency_factor": 1.0,
        "alkalinity_ppm_per_unit": -0.5,
        "max_dose_per_reference": MAX_ACID_FL_OZ_PER_REFERENCE,
        "instruction": "Fumes are corrosive and harmful if inhaled. Stand upwind.",
    },
    "muriatic_15": {
        "name": "Muriatic Acid (15%)",
        "label": "Muriatic (Low)",
        "sub_label": "~15%",
        "direction": "lower",
        "unit": UNIT_FL_OZ,
        "reference_oz": ACID_REFERENCE_FL_OZ,
        "potency_factor": 2.0,
        # Half strength: TA drop tracks the 31.45% equivalent (dose / 2)
        "alkalinity_ppm_per_unit": -0.25,
        "max_dose_per_reference": MAX_ACID_FL_OZ_PER_REFERENCE,
        "instruction": "Safer than full strength, but still handle with care.",
    },
    "dry_acid": {
        "name": "Dry Acid (Sodium Bisulfate)",
        "label": "Dry Acid",
        "sub_label": "Sodium Bisulfate",
        "direction": "lower",
        "unit": UNIT_OZ_WEIGHT,
        "reference_oz": ACID_REFERENCE_FL_OZ,
        "potency_factor": 1.6,
        "alkalinity_ppm_per_unit": -0.4,
        "max_dose_per_reference": MAX_SOLID_OZ_PER_REFERENCE,
        "instruction": "Pre-dissolve in a bucket of water before adding.",
    },
    "soda_ash": {
        "name": "Soda Ash (Sodium Carbonate)",
        "label": "Soda Ash",
        "sub_label": "High TA Impact",
        "direction": "raise",
        "unit": UNIT_OZ_WEIGHT,
        "reference_oz": SODA_ASH_REFERENCE_OZ,
        "potency_factor": 1.0,
        "alkalinity_ppm_per_unit": 0.8,
        "max_dose_per_reference": MAX_SOLID_OZ_PER_REFERENCE,
        "instruction": "Pre-dissolve in bucket to avoid clouding.",
    },
    "borax": {
        "name": "Borax (20 Mule Team)",
        "label": "Borax",
        "sub_label": "Low TA Impact",
        "direction": "raise",
        "unit": UNIT_OZ_WEIGHT,
        "reference_oz": BORAX_REFERENCE_OZ,
        "potency_factor": 1.0,
        "alkalinity_ppm_per_unit": 0.1,
        "max_dose_per_reference": MAX_SOLID_OZ_PER_REFERENCE,
        "instruction": "Add through skimmer or pre-dissolve.",
    },
    "aeration": {
        "name": "Aeration (Air)",
        "label": "Aeration",
        "sub_label": "Air Only",
        "direction": "raise",
        "unit": UNIT_HOURS,
        "reference_oz": None,
        "potency_factor": None,
        "alkalinity_ppm_per_unit": 0.0,
        "max_dose_per_reference": None,
        "instruction": "Raises pH without increasing TA.",
    },
}

ACID_CHOICES = [key for key, chem in PH_CHEMICALS.items() if chem["direction"] == "lower"]
BASE_CHOICES = [key for key, chem in PH_CHEMICALS.items() if chem["direction"] == "raise"]

# Advisory text
BALANCED_INSTRUCTION = "Water is balanced. Maintain circulation."
PUMP_RUNNING_INSTRUCTION = "Pump must be running."
ACID_LOCATION_INSTRUCTION = "Add to deep end or in front of return jet."
AERATION_INSTRUCTIONS = [
    "Point return jets up to break surface.",
    "Turn on waterfalls/spillways.",
]
AERATION_WARNING = "Slow process. Takes hours or days."
DRY_ACID_PLASTER_WARNING = "Dry acid can etch plaster if allowed to settle. Dissolve completely!"
PLASTER_ADVISORY = "Avoid dropping pH below 7.2 to protect plaster finish."
LINER_ADVISORY = "Acid demand may be lower on vinyl/fiberglass. Retest before second dose."
