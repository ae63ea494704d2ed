"""Fairness-aware imposter selection for the Imposter party game.

Usage:
    from imposter_fairness import (
        FairnessPolicy, FairnessState, ImposterPicker, Xorshift64StarSource,
    )

    roster = ["ana", "ben", "cem", "dia"]
    policy = FairnessPolicy()
    state = FairnessState()
    rng = Xorshift64StarSource(seed=42)

    picked = ImposterPicker.pick(roster, 1, policy, state, rng)
    state.commit_round(picked, roster, policy)
"""

from imposter_fairness.engine import (
    ImposterPicker,
    RandomSource,
    RelaxationLevel,
    SystemRandomSource,
    Xorshift64StarSource,
    pick_imposters,
    suggest_weight_multipliers,
)
from imposter_fairness.models import (
    FairnessPolicy,
    FairnessState,
    PairKey,
    PlayerFairnessStats,
)
from imposter_fairness.testing import FairnessSimulator, SimulationResult

__version__ = "0.1.0"

__all__ = [
    "FairnessPolicy",
    "FairnessState",
    "PairKey",
    "PlayerFairnessStats",
    "ImposterPicker",
    "RelaxationLevel",
    "RandomSource",
    "SystemRandomSource",
    "Xorshift64StarSource",
    "pick_imposters",
    "suggest_weight_multipliers",
    "FairnessSimulator",
    "SimulationResult",
]
