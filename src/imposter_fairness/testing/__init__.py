"""Offline policy validation for imposter fairness.

Key classes:
- FairnessSimulator: Runs the real picker through many synthetic rounds
- SimulationResult: Aggregate fairness metrics of one run
- SweepResult: Pass/fail of one parameter combination in a grid search

Usage:
    from imposter_fairness.testing import FairnessSimulator, run_sweep

    result = FairnessSimulator.run_simulation(names, 1, 200, policy, seed=42)
    print(result.format_summary(policy))

    ranked = run_sweep(names, 1, 200, seed=42)
"""

from .simulator import (
    FairnessSimulator,
    SimulationResult,
    run_simulation,
    synthetic_player_id,
)
from .sweep import (
    DEFAULT_CRITERIA,
    SweepResult,
    run_sweep,
)

__all__ = [
    # Simulation
    "FairnessSimulator",
    "SimulationResult",
    "run_simulation",
    "synthetic_player_id",
    # Sweep
    "DEFAULT_CRITERIA",
    "SweepResult",
    "run_sweep",
]
