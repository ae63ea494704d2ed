"""Fairness-aware imposter selection.

Weighted sampling without replacement over the roster, with hard exclusions
and progressive relaxation of soft penalties.

Algorithm (per pick call):
1. Hard exclusion: streak cap, active cooldown, new-player hard cooldown.
2. Base weight: 1.0 / (1 + alpha * times_imposter)
                x (1 + beta * rounds_since_pick)  or  x 1.15 if never picked
                x 0.5 if picked within recent_window        (soft)
                x new_player_penalty_factor in the new-player soft window
                x external multiplier if given
3. Pair penalty vs. teammates chosen earlier in this call:
       effective = base / (1 + sum(gamma * exp(-decay * d)))  (soft)
4. Jitter: effective x uniform[1 - j, 1 + j]
5. Cumulative-threshold draw; repeat until enough players are chosen.

When the candidate pool runs dry, the picker walks RelaxationLevel one step
at a time and rebuilds the pool from (roster - hard excluded - chosen).
Relaxation only drops SOFT penalties; hard exclusions always hold, so a short
result is a legitimate outcome.

The picker reads FairnessState and never writes it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from imposter_fairness import parameters
from imposter_fairness.engine.rng import RandomSource, next_unit
from imposter_fairness.models.policy import FairnessPolicy
from imposter_fairness.models.state import FairnessState, PlayerFairnessStats, PlayerId

logger = logging.getLogger(__name__)


class RelaxationLevel(IntEnum):
    """Soft-constraint relaxation stages, applied in order."""

    NONE = 0
    IGNORE_PAIR_PENALTY = 1
    IGNORE_RECENT_WINDOW = 2
    LAST_RESORT = 3

    @property
    def ignores_pair_penalty(self) -> bool:
        return self >= RelaxationLevel.IGNORE_PAIR_PENALTY

    @property
    def ignores_recent_window(self) -> bool:
        return self >= RelaxationLevel.IGNORE_RECENT_WINDOW

    def next_level(self) -> RelaxationLevel:
        return RelaxationLevel(min(self + 1, RelaxationLevel.LAST_RESORT))


@dataclass(frozen=True)
class CandidateDebug:
    """Weights computed for one candidate in one draw."""

    player_id: PlayerId
    base_weight: float
    team_penalty: float
    effective_weight: float


@dataclass
class PickStep:
    """One weighted draw: the candidates considered and who won."""

    level: RelaxationLevel
    candidates: list[CandidateDebug]
    picked: Optional[PlayerId]


@dataclass
class PickTrace:
    """Full record of a pick call, for tuning screens and tests."""

    picked: list[PlayerId] = field(default_factory=list)
    hard_excluded: list[PlayerId] = field(default_factory=list)
    steps: list[PickStep] = field(default_factory=list)
    final_level: RelaxationLevel = RelaxationLevel.NONE


def hard_exclusion_reasons(
    stats: PlayerFairnessStats, current_round: int, policy: FairnessPolicy
) -> list[str]:
    """Names of the hard rules that veto this player this round (empty if eligible).

    max_consecutive <= 0 disables the streak cap; negative cooldowns count as 0.
    """
    reasons = []
    if policy.max_consecutive > 0 and stats.current_streak >= policy.max_consecutive:
        reasons.append("streak")
    if stats.cooldown_until_round > current_round:
        reasons.append("cooldown")
    if current_round < stats.join_round + max(0, policy.new_player_hard_cooldown_rounds):
        reasons.append("new_player")
    return reasons


def in_new_player_soft_window(
    stats: PlayerFairnessStats, current_round: int, policy: FairnessPolicy
) -> bool:
    hard_end = stats.join_round + max(0, policy.new_player_hard_cooldown_rounds)
    soft_end = hard_end + max(0, policy.new_player_soft_penalty_rounds)
    return hard_end <= current_round < soft_end


def base_weight(
    stats: PlayerFairnessStats,
    current_round: int,
    policy: FairnessPolicy,
    ignore_recent_window: bool = False,
    multiplier: Optional[float] = None,
) -> float:
    """Selection weight before pair penalty and jitter."""
    w = 1.0
    w /= parameters.frequency_divisor(stats.times_imposter, policy.alpha_frequency_penalty)

    if stats.ever_picked:
        distance = max(0, current_round - stats.last_picked_round)
        w *= parameters.distance_multiplier(distance, policy.beta_distance_bonus)
        if not ignore_recent_window and distance <= max(0, policy.recent_window):
            w *= parameters.RECENT_WINDOW_FACTOR
    else:
        w *= parameters.NEVER_PICKED_BONUS

    if in_new_player_soft_window(stats, current_round, policy):
        w *= max(0.0, min(1.0, policy.new_player_penalty_factor))

    if multiplier is not None and multiplier > 0 and math.isfinite(multiplier):
        w *= multiplier

    return max(w, parameters.MIN_WEIGHT)


def team_penalty(
    candidate: PlayerId,
    team: Sequence[PlayerId],
    state: FairnessState,
    policy: FairnessPolicy,
) -> float:
    """Accumulated pair penalty of candidate against already-chosen teammates."""
    penalty = 0.0
    for mate in team:
        last = state.pair_last_round(candidate, mate)
        if last is None:
            continue
        d = max(0, state.current_round - last)
        if d <= policy.pair_recent_window:
            penalty += policy.gamma_pair_penalty * math.exp(-policy.pair_penalty_decay * d)
    return penalty


def _jitter_scale(rng: RandomSource, jitter: float) -> float:
    r = (rng.next() % parameters.JITTER_RESOLUTION) / parameters.JITTER_RESOLUTION
    return (1.0 - jitter) + (2.0 * jitter) * r


def _weighted_draw(candidates: Sequence[CandidateDebug], rng: RandomSource) -> Optional[PlayerId]:
    if not candidates:
        return None
    total = sum(c.effective_weight for c in candidates)
    threshold = next_unit(rng) * total
    for c in candidates:
        if threshold <= c.effective_weight:
            return c.player_id
        threshold -= c.effective_weight
    return candidates[-1].player_id


class ImposterPicker:
    """Fairness-aware imposter selection.

    Usage:
        state = FairnessState()
        rng = Xorshift64StarSource(seed=7)
        picked = ImposterPicker.pick(roster, 2, FairnessPolicy(), state, rng)
        state.commit_round(picked, roster, policy)
    """

    @staticmethod
    def pick(
        players: Sequence[PlayerId],
        count: int,
        policy: FairnessPolicy,
        state: FairnessState,
        rng: RandomSource,
        weight_multipliers: Optional[Mapping[PlayerId, float]] = None,
    ) -> list[PlayerId]:
        """Pick up to count imposters from players.

        Args:
            players: Ordered, duplicate-free roster for this round
            count: Number of imposters requested
            policy: Fairness policy for this round
            state: Fairness state (read only)
            rng: Random source (injectable for reproducibility)
            weight_multipliers: Optional positive per-player scaling hints

        Returns:
            Selected ids in draw order. Never the whole roster; may be shorter
            than count when hard constraints leave too few eligible players.
        """
        return ImposterPicker.pick_with_trace(
            players, count, policy, state, rng, weight_multipliers
        ).picked

    @staticmethod
    def pick_with_trace(
        players: Sequence[PlayerId],
        count: int,
        policy: FairnessPolicy,
        state: FairnessState,
        rng: RandomSource,
        weight_multipliers: Optional[Mapping[PlayerId, float]] = None,
    ) -> PickTrace:
        """Same as pick, but also returns the weights of every draw.

        Consumes the random source exactly like pick, so a trace replays the
        same selection.
        """
        trace = PickTrace()
        roster = list(dict.fromkeys(players))
        logger.debug(f"pick: players={len(roster)}, requested={count}")

        if count <= 0 or not roster:
            return trace

        # At least one non-imposter must remain
        desired = min(count, max(0, len(roster) - 1))
        if desired == 0:
            return trace

        current_round = state.current_round
        multipliers = weight_multipliers or {}
        stats = {pid: state.stats(pid) for pid in roster}

        hard_excluded = set()
        for pid in roster:
            reasons = hard_exclusion_reasons(stats[pid], current_round, policy)
            if reasons:
                hard_excluded.add(pid)
                logger.debug(f"Player {pid} hard excluded: {', '.join(reasons)}")
        trace.hard_excluded = [pid for pid in roster if pid in hard_excluded]

        chosen: list[PlayerId] = []
        level = RelaxationLevel.NONE
        pool = [pid for pid in roster if pid not in hard_excluded]

        while len(chosen) < desired:
            if not pool:
                if level == RelaxationLevel.LAST_RESORT:
                    break
                level = level.next_level()
                logger.info(f"Candidate pool exhausted, relaxing to {level.name}")
                pool = [pid for pid in roster if pid not in hard_excluded and pid not in chosen]
                if not pool:
                    continue

            candidates = []
            for pid in pool:
                w = base_weight(
                    stats[pid],
                    current_round,
                    policy,
                    ignore_recent_window=level.ignores_recent_window,
                    multiplier=multipliers.get(pid),
                )
                tp = 0.0 if level.ignores_pair_penalty else team_penalty(pid, chosen, state, policy)
                eff = w / (1.0 + tp)
                if policy.jitter_percent > 0:
                    eff *= _jitter_scale(rng, policy.jitter_percent)
                candidates.append(
                    CandidateDebug(
                        player_id=pid,
                        base_weight=w,
                        team_penalty=tp,
                        effective_weight=max(eff, parameters.MIN_WEIGHT),
                    )
                )
                logger.debug(
                    f"Player {pid}: freq={stats[pid].times_imposter}, "
                    f"streak={stats[pid].current_streak}, base={w:.3f}, "
                    f"team_penalty={tp:.3f}, effective={candidates[-1].effective_weight:.3f}"
                )

            picked = _weighted_draw(candidates, rng)
            trace.steps.append(PickStep(level=level, candidates=candidates, picked=picked))
            if picked is None:
                break
            chosen.append(picked)
            pool = [pid for pid in pool if pid != picked]

        trace.picked = chosen
        trace.final_level = level
        logger.debug(f"pick: selected {len(chosen)}/{desired}: {chosen}")
        return trace


def pick_imposters(
    players: Sequence[PlayerId],
    count: int,
    policy: FairnessPolicy,
    state: FairnessState,
    rng: RandomSource,
    weight_multipliers: Optional[Mapping[PlayerId, float]] = None,
) -> list[PlayerId]:
    """Module-level shortcut for ImposterPicker.pick."""
    return ImposterPicker.pick(players, count, policy, state, rng, weight_multipliers)
