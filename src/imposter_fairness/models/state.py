"""Fairness state models for imposter selection.

This module defines the per-player statistics and the session-lifetime
FairnessState that the picker reads and the caller mutates after each round.
All numeric stats fields are clamped to valid ranges on assignment.

Round bookkeeping (performed by the caller once per completed round):
- record_selection(picked): bump pick counts and streaks, remember pairs
- cooldowns: cooldown_until_round = current_round + min_cooldown_rounds for picked
- streak reset: current_streak = 0 for every non-picked player
- advance_round()

commit_round() performs all four steps at once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from imposter_fairness.models.policy import FairnessPolicy

logger = logging.getLogger(__name__)

PlayerId = str
"""Opaque, stable player identifier (typically str(uuid4()))."""


class PlayerFairnessStats(BaseModel):
    """Per-player fairness statistics persisted across rounds.

    Attributes:
        times_imposter: Total historical selections
        current_streak: Consecutive rounds picked, ending at last_picked_round
        last_picked_round: Round of the most recent pick, -1 if never
        cooldown_until_round: Exclusive round before which the player is hard-excluded
        join_round: Round at which the player entered the pool
    """

    model_config = ConfigDict(validate_assignment=True)

    times_imposter: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    last_picked_round: int = Field(default=-1, ge=-1)
    cooldown_until_round: int = Field(default=0, ge=0)
    join_round: int = Field(default=0, ge=0)

    @field_validator(
        "times_imposter", "current_streak", "cooldown_until_round", "join_round", mode="before"
    )
    @classmethod
    def clamp_non_negative(cls, v: int) -> int:
        """Clamp counters and round indices to >= 0."""
        return max(0, int(v))

    @field_validator("last_picked_round", mode="before")
    @classmethod
    def clamp_last_picked(cls, v: int) -> int:
        """Clamp last_picked_round to >= -1 (the never-picked sentinel)."""
        return max(-1, int(v))

    @property
    def ever_picked(self) -> bool:
        return self.last_picked_round >= 0


@dataclass(frozen=True)
class PairKey:
    """Unordered pair of two distinct players: PairKey(a, b) == PairKey(b, a)."""

    a: PlayerId
    b: PlayerId

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise ValueError(f"PairKey needs two distinct players, got {self.a!r} twice")
        if self.b < self.a:
            first, second = self.b, self.a
            object.__setattr__(self, "a", first)
            object.__setattr__(self, "b", second)


class PairRecord(BaseModel):
    """Serialized form of one pair-history entry."""

    a: PlayerId
    b: PlayerId
    round: int

    @model_validator(mode="after")
    def distinct_players(self) -> PairRecord:
        """A pair needs two different players."""
        if self.a == self.b:
            raise ValueError(f"Pair record needs two distinct players, got {self.a!r} twice")
        return self


class FairnessStateSnapshot(BaseModel):
    """Serializable copy of a FairnessState.

    Round-trips current_round, the per-player map, and the pair map exactly.
    """

    current_round: int = Field(default=0, ge=0)
    per_player: dict[PlayerId, PlayerFairnessStats] = Field(default_factory=dict)
    pairs: list[PairRecord] = Field(default_factory=list)


class FairnessState:
    """Session-lifetime fairness memory.

    Owned by a single game session and mutated only through its methods.
    Performs no locking: hosts sharing one instance across threads must
    serialize access themselves. No method raises; missing entries are
    materialized with default stats.
    """

    def __init__(self) -> None:
        self.current_round: int = 0
        self._per_player: dict[PlayerId, PlayerFairnessStats] = {}
        self._pair_last_round: dict[PairKey, int] = {}

    @property
    def per_player(self) -> dict[PlayerId, PlayerFairnessStats]:
        """Copy of the per-player map."""
        return {pid: s.model_copy() for pid, s in self._per_player.items()}

    @property
    def pair_history(self) -> dict[PairKey, int]:
        """Copy of the pair map (PairKey -> last joint round)."""
        return dict(self._pair_last_round)

    def stats(self, player_id: PlayerId) -> PlayerFairnessStats:
        """Return a copy of the player's stats, or fresh defaults if unknown.

        Read-only: never creates an entry.
        """
        existing = self._per_player.get(player_id)
        if existing is None:
            return PlayerFairnessStats()
        return existing.model_copy()

    def update_stats(
        self, player_id: PlayerId, mutate: Callable[[PlayerFairnessStats], None]
    ) -> None:
        """Fetch-or-create the player's stats, apply mutate in place, write back."""
        s = self.stats(player_id)
        mutate(s)
        self._per_player[player_id] = s

    def pair_last_round(self, a: PlayerId, b: PlayerId) -> int | None:
        """Last round in which a and b were imposters together, or None."""
        if a == b:
            return None
        return self._pair_last_round.get(PairKey(a, b))

    def register_player(self, player_id: PlayerId, policy: FairnessPolicy | None = None) -> None:
        """Mark a player as joining the pool at the current round.

        With a policy, also blocks them until the new-player hard cooldown ends.
        """
        join = self.current_round

        def _join(s: PlayerFairnessStats) -> None:
            s.join_round = join
            if policy is not None:
                s.cooldown_until_round = join + max(0, policy.new_player_hard_cooldown_rounds)

        self.update_stats(player_id, _join)

    def record_selection(self, player_ids: Iterable[PlayerId]) -> None:
        """Record that these players were imposters this round.

        Increments pick counts and streaks, stamps last_picked_round, and stamps
        every unordered pair. Streaks of non-selected players are NOT reset here.
        """
        ids = list(dict.fromkeys(player_ids))
        round_index = self.current_round

        def _picked(s: PlayerFairnessStats) -> None:
            s.times_imposter += 1
            s.current_streak += 1
            s.last_picked_round = round_index

        for pid in ids:
            self.update_stats(pid, _picked)

        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                self._pair_last_round[PairKey(ids[i], ids[j])] = round_index

    def advance_round(self) -> None:
        """Advance to the next round. Call exactly once per completed round."""
        self.current_round += 1

    def commit_round(
        self,
        picked: Iterable[PlayerId],
        all_players: Iterable[PlayerId],
        policy: FairnessPolicy,
        advance: bool = True,
    ) -> None:
        """Apply all post-pick bookkeeping for one round.

        Records the selection, sets cooldowns for picked players, resets the
        streak of every non-picked roster member, and advances the round.
        """
        picked_ids = list(dict.fromkeys(picked))
        picked_set = set(picked_ids)
        round_index = self.current_round
        cooldown_until = round_index + max(0, policy.min_cooldown_rounds)

        self.record_selection(picked_ids)

        def _cooldown(s: PlayerFairnessStats) -> None:
            s.cooldown_until_round = cooldown_until

        def _reset_streak(s: PlayerFairnessStats) -> None:
            if s.current_streak > 0:
                s.current_streak = 0

        for pid in picked_ids:
            self.update_stats(pid, _cooldown)
        for pid in all_players:
            if pid not in picked_set:
                self.update_stats(pid, _reset_streak)

        logger.debug(f"Committed round {round_index}: picked={picked_ids}")

        if advance:
            self.advance_round()

    # Serialization methods
    def snapshot(self) -> FairnessStateSnapshot:
        """Copy the full state into a serializable snapshot."""
        return FairnessStateSnapshot(
            current_round=self.current_round,
            per_player=self.per_player,
            pairs=[
                PairRecord(a=key.a, b=key.b, round=r)
                for key, r in self._pair_last_round.items()
            ],
        )

    @classmethod
    def from_snapshot(cls, snapshot: FairnessStateSnapshot) -> FairnessState:
        """Rebuild a state from a snapshot."""
        state = cls()
        state.current_round = snapshot.current_round
        state._per_player = {pid: s.model_copy() for pid, s in snapshot.per_player.items()}
        state._pair_last_round = {
            PairKey(record.a, record.b): record.round for record in snapshot.pairs
        }
        return state

    def to_json(self) -> str:
        """Serialize state to JSON string."""
        return self.snapshot().model_dump_json(indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> FairnessState:
        """Deserialize state from JSON string."""
        return cls.from_snapshot(FairnessStateSnapshot.model_validate_json(json_str))

    def to_dict(self) -> dict:
        """Serialize state to dictionary."""
        return self.snapshot().model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> FairnessState:
        """Deserialize state from dictionary."""
        return cls.from_snapshot(FairnessStateSnapshot.model_validate(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FairnessState):
            return NotImplemented
        return (
            self.current_round == other.current_round
            and self._per_player == other._per_player
            and self._pair_last_round == other._pair_last_round
        )

    def __repr__(self) -> str:
        return (
            f"FairnessState(current_round={self.current_round}, "
            f"players={len(self._per_player)}, pairs={len(self._pair_last_round)})"
        )
