"""Advisory weight multipliers for the imposter picker.

Produces one positive multiplier per player from the fairness state alone
(deterministic rules, no randomness). 1.0 leaves a player's weight unchanged,
values above 1.0 raise their chance, values below lower it. Pass the result
to ImposterPicker.pick(weight_multipliers=...).
"""

from __future__ import annotations

from collections.abc import Sequence

from imposter_fairness.models.policy import FairnessPolicy
from imposter_fairness.models.state import FairnessState, PlayerId

FREQUENCY_FLOOR = 0.9
FREQUENCY_RANGE = 0.3
DISTANCE_BONUS = 0.15
RECENT_DAMPING = 0.9
MIN_MULTIPLIER = 0.2
MAX_MULTIPLIER = 2.0


def _distance(state: FairnessState, player_id: PlayerId) -> int:
    s = state.stats(player_id)
    if s.last_picked_round >= 0:
        return max(0, state.current_round - s.last_picked_round)
    # Never picked counts as further away than anyone who was
    return state.current_round + 1


def suggest_weight_multipliers(
    players: Sequence[PlayerId],
    policy: FairnessPolicy,
    state: FairnessState,
) -> dict[PlayerId, float]:
    """Suggest a multiplier per player.

    Rules:
        - Frequency balancing: least-picked players get up to x1.2, most-picked x0.9
        - Distance: up to +15% for the player waiting longest
        - Picked within recent_window: x0.9
        - Result clamped to [0.2, 2.0]

    Args:
        players: Roster to score
        policy: Policy supplying recent_window
        state: Fairness state (read only)

    Returns:
        Dict mapping every player in the roster to a multiplier
    """
    if not players:
        return {}

    times = {pid: state.stats(pid).times_imposter for pid in players}
    distances = {pid: _distance(state, pid) for pid in players}
    min_times = min(times.values())
    max_times = max(times.values())
    max_distance = max(distances.values())

    result = {}
    for pid in players:
        s = state.stats(pid)
        mult = 1.0

        if max_times > min_times:
            norm = 1.0 - (times[pid] - min_times) / (max_times - min_times)
            mult *= FREQUENCY_FLOOR + FREQUENCY_RANGE * max(0.0, min(1.0, norm))

        if max_distance > 0:
            mult *= 1.0 + DISTANCE_BONUS * (distances[pid] / max_distance)

        if s.last_picked_round >= 0 and (state.current_round - s.last_picked_round) <= policy.recent_window:
            mult *= RECENT_DAMPING

        result[pid] = max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, mult))

    return result
