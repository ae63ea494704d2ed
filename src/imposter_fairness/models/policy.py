"""Fairness policy model.

A FairnessPolicy is an immutable bundle of hard-constraint thresholds and
soft-weighting coefficients. It is supplied per pick call and may differ
between rounds (a tuning screen can edit it live) without invalidating any
FairnessState.

Defaults come from imposter_fairness.parameters. Construction checks types
only: negative hard-constraint values are tolerated and the picker treats
them as zero (or, for max_consecutive, as "no cap").
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from imposter_fairness import parameters


class FairnessPolicy(BaseModel):
    """Central configuration for fairness-aware imposter selection.

    Hard constraints:
        max_consecutive: Max rounds in a row a player may be imposter
        min_cooldown_rounds: Rounds added to the pick round to form the cooldown deadline
        new_player_hard_cooldown_rounds: Rounds after joining with no eligibility

    Soft weighting:
        recent_window: Rounds during which a recent pick halves weight
        pair_recent_window: Rounds during which a repeat pair is penalized
        alpha_frequency_penalty: Penalty per historical pick
        beta_distance_bonus: Bonus per round since last pick
        gamma_pair_penalty: Base pair penalty per recent teammate
        pair_penalty_decay: Exponential decay of pair penalty per round
        new_player_soft_penalty_rounds: Rounds of reduced weight after hard cooldown
        new_player_penalty_factor: Weight factor in the soft window (0-1)
        jitter_percent: Random +/- range on effective weights (0-1)
    """

    model_config = ConfigDict(frozen=True)

    # Hard constraints
    max_consecutive: int = Field(default=parameters.MAX_CONSECUTIVE)
    min_cooldown_rounds: int = Field(default=parameters.MIN_COOLDOWN_ROUNDS)
    new_player_hard_cooldown_rounds: int = Field(default=parameters.NEW_PLAYER_HARD_COOLDOWN_ROUNDS)

    # Recency windows
    recent_window: int = Field(default=parameters.RECENT_WINDOW)
    pair_recent_window: int = Field(default=parameters.PAIR_RECENT_WINDOW)

    # Soft weighting
    alpha_frequency_penalty: float = Field(default=parameters.ALPHA_FREQUENCY_PENALTY)
    beta_distance_bonus: float = Field(default=parameters.BETA_DISTANCE_BONUS)
    gamma_pair_penalty: float = Field(default=parameters.GAMMA_PAIR_PENALTY)
    pair_penalty_decay: float = Field(default=parameters.PAIR_PENALTY_DECAY)

    # New player integration
    new_player_soft_penalty_rounds: int = Field(default=parameters.NEW_PLAYER_SOFT_PENALTY_ROUNDS)
    new_player_penalty_factor: float = Field(default=parameters.NEW_PLAYER_PENALTY_FACTOR)

    # Anti-pattern jitter
    jitter_percent: float = Field(default=parameters.JITTER_PERCENT)

    @classmethod
    def default(cls) -> FairnessPolicy:
        """Balanced default policy."""
        return cls()

    @classmethod
    def party_preset(cls) -> FairnessPolicy:
        """Policy shipped with the party app (see parameters.PARTY_PRESET)."""
        return cls(**parameters.PARTY_PRESET)

    def with_overrides(self, **fields) -> FairnessPolicy:
        """Return a copy with some fields replaced.

        Used between rounds when an operator tunes the policy. Unknown field
        names raise ValueError rather than being silently dropped.
        """
        unknown = set(fields) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown policy fields: {', '.join(sorted(unknown))}")
        return self.model_copy(update=fields)

    def describe(self) -> list[str]:
        """Human-readable policy snapshot, one line per field."""
        lines = []
        for name, value in self.model_dump().items():
            if isinstance(value, float):
                lines.append(f"  {name}: {value:.3f}")
            else:
                lines.append(f"  {name}: {value}")
        return lines
