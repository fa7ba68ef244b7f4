"""Scenario definitions and multi-scenario execution."""

import dataclasses

from retirement_sim.params import SimulationParams
from retirement_sim.runner import Projection, run_batch

SCENARIOS = {
    "Low growth": {
        "annual_growth_rate": 3.0,
        "annual_inflation_rate": 2.0,  # real +1%
    },
    "Standard": {
        "annual_growth_rate": 5.0,
        "annual_inflation_rate": 2.0,
    },
    "High growth": {
        "annual_growth_rate": 7.0,
        "annual_inflation_rate": 2.5,
    },
    "Stagflation": {
        "annual_growth_rate": 3.5,
        "annual_inflation_rate": 4.0,  # real -0.5%: straight-line withdrawals
    },
}

SCENARIO_ORDER = list(SCENARIOS)


def scenario_params(base_params: SimulationParams) -> dict[str, SimulationParams]:
    return {
        name: dataclasses.replace(base_params, **overrides)
        for name, overrides in SCENARIOS.items()
    }


def run_scenarios(
    base_params: SimulationParams | None = None, max_workers: int | None = None,
) -> dict[str, Projection]:
    """Project base_params under every scenario. Keys follow SCENARIO_ORDER."""
    if base_params is None:
        base_params = SimulationParams()
    variants = scenario_params(base_params)
    projections = run_batch(list(variants.values()), max_workers=max_workers)
    return dict(zip(variants, projections))
