"""
Batch processing tool for pool pH dosing scenarios.

Supports:
- Single what-if scenarios (field overrides on a base scenario)
- Parameter sweeps (e.g. current pH from 7.6 to 8.4, volume, alkalinity)
- Chemical comparisons (every acid or every base for the same pool)
"""

import asyncio
import logging
from typing import Any, Dict, List

import numpy as np

from utils.constants import ACID_CHOICES, BASE_CHOICES
from utils.exceptions import BatchSimulationError, InputValidationError, ParameterNotFoundError

from .ph_adjustment import calculate_ph_adjustment
from .schemas import BatchProcessInput, PoolScenario

logger = logging.getLogger(__name__)

# Flat field name -> (section, field) inside a calculate_ph_adjustment input
SCENARIO_FIELDS = {
    "volume_gallons": ("pool", "volume_gallons"),
    "total_alkalinity_ppm": ("pool", "total_alkalinity_ppm"),
    "water_temperature_f": ("pool", "water_temperature_f"),
    "surface_material": ("pool", "surface_material"),
    "current_ph": ("chemistry", "current_ph"),
    "target_ph": ("chemistry", "target_ph"),
    "acid_choice": ("preference", "acid_choice"),
    "base_choice": ("preference", "base_choice"),
}

SWEEPABLE_PARAMETERS = [
    "volume_gallons",
    "total_alkalinity_ppm",
    "water_temperature_f",
    "current_ph",
    "target_ph",
]

# Common aliases for sweep parameters
PARAMETER_ALIASES = {
    "volume": "volume_gallons",
    "gallons": "volume_gallons",
    "alkalinity": "total_alkalinity_ppm",
    "ta": "total_alkalinity_ppm",
    "temperature": "water_temperature_f",
    "temp": "water_temperature_f",
    "ph": "current_ph",
}


async def batch_process_scenarios(input_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Evaluate many pool pH scenarios in one call.

    Args:
        input_data: {
            'base_scenario': calculate_ph_adjustment input every scenario starts from
            'scenarios': List of scenario configurations
            'parallel_limit': Max concurrent scenarios (default 10)
            'output_format': 'full' or 'summary'
            'allow_partial': Return partial results on failure (default True)
        }

    Raises:
        InputValidationError: If the batch input is malformed
        BatchSimulationError: If allow_partial is False and any scenario fails
    """
    logger.info("Running batch_process_scenarios tool...")

    try:
        input_model = BatchProcessInput(**input_data)
    except Exception as e:
        raise InputValidationError(f"Input validation error: {e}")

    base = input_model.base_scenario.model_dump()
    scenarios = input_model.scenarios
    parallel_limit = input_model.parallel_limit

    results = []
    failed, errors, completed = [], {}, []

    for i in range(0, len(scenarios), parallel_limit):
        batch = scenarios[i:i + parallel_limit]

        tasks = [process_single_scenario(base, scenario) for scenario in batch]
        batch_results = await asyncio.gather(*tasks, return_exceptions=True)

        for offset, (scenario, result) in enumerate(zip(batch, batch_results)):
            name = scenario.name or f"scenario_{i + offset + 1}"
            if isinstance(result, Exception):
                logger.error(f"Scenario failed: {name} - {result}")
                failed.append(name)
                errors[name] = str(result)
                results.append({'scenario': name, 'type': scenario.type, 'error': str(result)})
            else:
                completed.append(name)
                results.append({'scenario': name, 'type': scenario.type, 'result': result})

    if failed and not input_model.allow_partial:
        raise BatchSimulationError(
            f"{len(failed)} of {len(scenarios)} scenarios failed",
            failed_scenarios=failed,
            errors=errors,
            completed_scenarios=completed,
        )

    if input_model.output_format == 'summary':
        return {
            'summary': summarize_batch_results(results),
            'details': results
        }
    return {'results': results}


async def process_single_scenario(base: Dict[str, Any], scenario: PoolScenario) -> Dict[str, Any]:
    """Process a single scenario configuration."""

    scenario_input = apply_overrides(base, scenario.overrides or {})

    if scenario.type == 'single':
        return await calculate_ph_adjustment(scenario_input)

    elif scenario.type == 'parameter_sweep':
        if not scenario.parameter:
            raise InputValidationError("parameter_sweep requires 'parameter'", field="parameter")
        parameter = resolve_parameter(scenario.parameter)
        values = sweep_values(scenario)

        sweep_results = []
        for value in values:
            point_input = apply_overrides(scenario_input, {parameter: value})
            result = await calculate_ph_adjustment(point_input)
            sweep_results.append({parameter: value, 'result': result})

        return {'parameter': parameter, 'sweep_results': sweep_results}

    elif scenario.type == 'chemical_comparison':
        direction = scenario.direction
        if direction is None:
            chemistry = scenario_input['chemistry']
            direction = 'lower' if chemistry['target_ph'] < chemistry['current_ph'] else 'raise'

        field = 'acid_choice' if direction == 'lower' else 'base_choice'
        choices = ACID_CHOICES if direction == 'lower' else BASE_CHOICES

        comparison = {}
        for chemical in choices:
            comparison[chemical] = await calculate_ph_adjustment(apply_overrides(scenario_input, {field: chemical}))

        return {'direction': direction, 'comparison': comparison}

    raise InputValidationError(f"Unknown scenario type: {scenario.type}", field="type", value=scenario.type)


def resolve_parameter(parameter: str) -> str:
    """Map a sweep parameter name (or alias) onto a sweepable field."""
    name = PARAMETER_ALIASES.get(parameter, PARAMETER_ALIASES.get(parameter.lower(), parameter))
    if name not in SWEEPABLE_PARAMETERS:
        raise ParameterNotFoundError(
            f"Cannot sweep '{parameter}'. Available parameters: {', '.join(SWEEPABLE_PARAMETERS)}",
            parameter=parameter,
            available_parameters=list(SWEEPABLE_PARAMETERS),
        )
    return name


def sweep_values(scenario: PoolScenario) -> List[float]:
    """Explicit values, or an inclusive start/stop/step range."""
    if scenario.values is not None:
        return [float(v) for v in scenario.values]

    if scenario.start is None or scenario.stop is None or scenario.step is None:
        raise InputValidationError("parameter_sweep requires 'values' or 'start'/'stop'/'step'")

    # Rounded so 7.2 + 0.1 steps do not drift into 7.300000000000001
    values = np.arange(scenario.start, scenario.stop + scenario.step / 2, scenario.step)
    return [round(float(v), 6) for v in values]


def apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a calculate_ph_adjustment input with flat field overrides applied."""
    updated = {
        section: dict(value) if isinstance(value, dict) else value
        for section, value in base.items()
    }

    for key, value in overrides.items():
        if key == 'strict_validation':
            updated[key] = value
            continue
        if key not in SCENARIO_FIELDS:
            raise ParameterNotFoundError(
                f"Unknown scenario field '{key}'",
                parameter=key,
                available_parameters=list(SCENARIO_FIELDS),
            )
        section, field = SCENARIO_FIELDS[key]
        updated.setdefault(section, {})[field] = value

    return updated


def summarize_batch_results(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Aggregate statistics over every dose computed in the batch."""
    doses = []
    for entry in results:
        doses.extend(_collect_doses(entry.get('result')))

    amounts = np.array([d['primary_dose']['amount'] for d in doses], dtype=float)

    summary = {
        'total_scenarios': len(results),
        'successful': sum(1 for r in results if 'result' in r),
        'failed': sum(1 for r in results if 'error' in r),
        'doses_computed': len(doses),
        'split_doses': sum(1 for d in doses if d['dosing_plan']['is_split']),
        'directions': {
            direction: sum(1 for d in doses if d['direction'] == direction)
            for direction in ('lower', 'raise', 'balanced')
        },
        'warnings_issued': sum(len(d['warnings']) for d in doses),
    }

    if amounts.size:
        summary['dose_statistics'] = {
            'min': float(np.min(amounts)),
            'max': float(np.max(amounts)),
            'mean': round(float(np.mean(amounts)), 2),
        }

    return summary


def _collect_doses(result: Any) -> List[Dict[str, Any]]:
    if not result:
        return []
    if 'sweep_results' in result:
        return [point['result'] for point in result['sweep_results']]
    if 'comparison' in result:
        return list(result['comparison'].values())
    return [result]
