"""
Shared pytest fixtures for the pool pH dosing test suite.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.schemas import ChemicalPreference, ChemistryTarget, PoolProfile


# =============================================================================
# POOL FIXTURES
# =============================================================================

@pytest.fixture
def reference_pool():
    """10,000 gal plaster pool at the 100 ppm reference alkalinity."""
    return PoolProfile(
        volume_gallons=10000,
        total_alkalinity_ppm=100,
        water_temperature_f=80,
        surface_material="plaster",
    )


@pytest.fixture
def typical_pool():
    """15,000 gal plaster pool at 100 ppm (the calculator's default pool)."""
    return PoolProfile(
        volume_gallons=15000,
        total_alkalinity_ppm=100,
        water_temperature_f=80,
        surface_material="plaster",
    )


@pytest.fixture
def vinyl_pool():
    """20,000 gal vinyl liner pool."""
    return PoolProfile(
        volume_gallons=20000,
        total_alkalinity_ppm=100,
        water_temperature_f=78,
        surface_material="vinyl",
    )


# =============================================================================
# CHEMISTRY FIXTURES
# =============================================================================

@pytest.fixture
def high_ph():
    """pH 7.8 needing a drop to 7.4."""
    return ChemistryTarget(current_ph=7.8, target_ph=7.4)


@pytest.fixture
def low_ph():
    """pH 7.2 needing a rise to 7.6."""
    return ChemistryTarget(current_ph=7.2, target_ph=7.6)


@pytest.fixture
def default_preference():
    return ChemicalPreference(acid_choice="muriatic_31", base_choice="soda_ash")


# =============================================================================
# TOOL INPUT FIXTURES
# =============================================================================

@pytest.fixture
def lowering_input():
    """calculate_ph_adjustment input for the default lowering scenario."""
    return {
        "pool": {
            "volume_gallons": 15000,
            "total_alkalinity_ppm": 100,
            "water_temperature_f": 80,
            "surface_material": "plaster",
        },
        "chemistry": {"current_ph": 7.8, "target_ph": 7.4},
        "preference": {"acid_choice": "muriatic_31", "base_choice": "borax"},
    }
