"""Selection engine for imposter fairness.

This module contains the selection logic:
- rng: Injectable 64-bit random sources (system entropy, xorshift64*)
- picker: Weighted sampling with hard exclusions and soft-penalty relaxation
- advisor: Deterministic per-player weight multipliers

Usage:
    from imposter_fairness.engine import ImposterPicker, Xorshift64StarSource
    from imposter_fairness.models import FairnessPolicy, FairnessState

    policy = FairnessPolicy()
    state = FairnessState()
    rng = Xorshift64StarSource(seed=42)

    picked = ImposterPicker.pick(roster, 1, policy, state, rng)
    state.commit_round(picked, roster, policy)
"""

from imposter_fairness.engine.advisor import suggest_weight_multipliers
from imposter_fairness.engine.picker import (
    CandidateDebug,
    ImposterPicker,
    PickStep,
    PickTrace,
    RelaxationLevel,
    base_weight,
    hard_exclusion_reasons,
    pick_imposters,
    team_penalty,
)
from imposter_fairness.engine.rng import (
    RandomSource,
    SystemRandomSource,
    Xorshift64StarSource,
    next_unit,
    random_seed,
)

__all__ = [
    # Picker
    "ImposterPicker",
    "CandidateDebug",
    "PickStep",
    "PickTrace",
    "RelaxationLevel",
    "base_weight",
    "hard_exclusion_reasons",
    "pick_imposters",
    "team_penalty",
    # Advisor
    "suggest_weight_multipliers",
    # Random sources
    "RandomSource",
    "SystemRandomSource",
    "Xorshift64StarSource",
    "next_unit",
    "random_seed",
]
