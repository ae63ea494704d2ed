"""Imposter fairness models.

This module exports the core data structures for fairness-aware selection.
"""

from .policy import FairnessPolicy
from .state import (
    FairnessState,
    FairnessStateSnapshot,
    PairKey,
    PairRecord,
    PlayerFairnessStats,
    PlayerId,
)

__all__ = [
    # Policy
    "FairnessPolicy",
    # State Models
    "FairnessState",
    "FairnessStateSnapshot",
    "PlayerFairnessStats",
    "PairKey",
    "PairRecord",
    "PlayerId",
]
