"""Fairness policy parameters for imposter selection.

This module is the SINGLE SOURCE OF TRUTH for all tunable fairness constants.
FairnessPolicy reads its defaults from here.

Parameter Categories:
- Hard Constraints: Categorical vetoes on selection
- Recency Windows: How far back "recent" reaches
- Soft Weighting: Multiplicative adjustments to selection probability
- New Player Integration: Protection for players who join mid-session
- Jitter: Anti-pattern noise

Usage:
    from imposter_fairness.parameters import MAX_CONSECUTIVE, ALPHA_FREQUENCY_PENALTY

Note: These parameters are NOT fixed constants. They should be tuned with
the fairness simulator (scripts/fairness_simulation.py) before shipping a
policy. Each parameter includes analysis notes and tuning guidance.
"""

# =============================================================================
# HARD CONSTRAINTS
# =============================================================================

MAX_CONSECUTIVE = 2
"""Maximum rounds in a row a player may be imposter.

Current: 2

Analysis:
    A player whose current streak reaches this value is hard-excluded
    next round. With 1 nobody is ever imposter twice in a row, which is
    predictable in small groups ("it can't be me again").

Tuning:
    - If players complain about repeat imposters: decrease to 1
    - If small groups (4-5) feel too predictable: keep at 2
    - Values <= 0 disable the cap entirely

Related: MIN_COOLDOWN_ROUNDS
"""

MIN_COOLDOWN_ROUNDS = 1
"""Rounds added to the current round to form a picked player's cooldown deadline.

Current: 1

Analysis:
    After a pick in round r, cooldown_until_round = r + MIN_COOLDOWN_ROUNDS.
    The deadline is exclusive and the round advances once per pick, so 1 is
    a no-op and 2 enforces one full round of rest.

Tuning:
    - For a strict "never back-to-back" rule: 2
    - Combined with MAX_CONSECUTIVE, the stricter of the two wins

Related: MAX_CONSECUTIVE
"""

# =============================================================================
# RECENCY WINDOWS
# =============================================================================

RECENT_WINDOW = 5
"""Rounds after a pick during which a player's weight is halved.

Current: 5

Tuning:
    - Larger windows spread picks more evenly in big groups
    - In groups smaller than RECENT_WINDOW + 1 almost everyone is "recent";
      the penalty then cancels out and only frequency matters

Related: RECENT_WINDOW_FACTOR
"""

RECENT_WINDOW_FACTOR = 0.5
"""Multiplier applied to players picked within RECENT_WINDOW rounds."""

PAIR_RECENT_WINDOW = 5
"""Rounds after a joint pick during which the same pair is discouraged.

Current: 5

Analysis:
    Only relevant with two or more imposters per round. Pair penalties
    decay exponentially inside the window (see PAIR_PENALTY_DECAY) and
    vanish entirely outside it.

Related: GAMMA_PAIR_PENALTY, PAIR_PENALTY_DECAY
"""

# =============================================================================
# SOFT WEIGHTING
# =============================================================================

ALPHA_FREQUENCY_PENALTY = 0.4
"""Frequency penalty: weight is divided by (1 + alpha * times_imposter).

Current: 0.4

Analysis:
    After 5 picks a player's weight is 1 / 3.0 of a never-picked player.
    Over long sessions this is the main force equalizing pick counts.

Tuning:
    - If pick counts drift apart over 100+ rounds: increase toward 0.6
    - If the least-picked player becomes too obvious: decrease

Related: BETA_DISTANCE_BONUS
"""

BETA_DISTANCE_BONUS = 0.1
"""Distance bonus per round since the last pick.

Current: 0.1

Analysis:
    Weight is multiplied by (1 + beta * rounds_since_last_pick).
    10 rounds without a pick doubles the weight.

Related: NEVER_PICKED_BONUS
"""

NEVER_PICKED_BONUS = 1.15
"""Fixed multiplier for players who have never been imposter.

Small on purpose: new and unpicked players integrate gradually without
dominating the draw.
"""

GAMMA_PAIR_PENALTY = 1.0
"""Base pair penalty added per recent teammate.

Current: 1.0

Analysis:
    Effective weight = base / (1 + sum(gamma * exp(-decay * d))).
    A pair that was together last round (d=1, decay=0.7) keeps about
    1 / (1 + 0.50) = 0.67 of the base weight.

Related: PAIR_PENALTY_DECAY, PAIR_RECENT_WINDOW
"""

PAIR_PENALTY_DECAY = 0.7
"""Exponential decay of pair penalties per round since the pair's last joint pick."""

MIN_WEIGHT = 0.0001
"""Floor for every computed weight so no candidate is ever locked out at zero."""

# =============================================================================
# NEW PLAYER INTEGRATION
# =============================================================================

NEW_PLAYER_HARD_COOLDOWN_ROUNDS = 1
"""Rounds after joining during which a player cannot be imposter.

Current: 1

Tuning:
    - 0 lets late joiners be picked immediately (the party preset does this)
"""

NEW_PLAYER_SOFT_PENALTY_ROUNDS = 3
"""Rounds after the hard cooldown during which a new player's weight is reduced."""

NEW_PLAYER_PENALTY_FACTOR = 0.3
"""Weight factor during the new-player soft window (clamped to [0, 1])."""

# =============================================================================
# JITTER
# =============================================================================

JITTER_PERCENT = 0.05
"""Random +/- range applied to effective weights (0.05 = +/-5%).

Analysis:
    Breaks ties between otherwise identical states so selection order does
    not repeat across sessions. Keep small: large jitter undoes the
    fairness weighting.
"""

JITTER_RESOLUTION = 10_000
"""Number of discrete jitter steps drawn from one RNG output."""

# =============================================================================
# PRESETS
# =============================================================================

PARTY_PRESET = {
    "max_consecutive": 2,
    "min_cooldown_rounds": 1,
    "recent_window": 3,
    "alpha_frequency_penalty": 0.6,
    "beta_distance_bonus": 0.2,
    "new_player_hard_cooldown_rounds": 0,
    "new_player_soft_penalty_rounds": 2,
    "new_player_penalty_factor": 0.4,
}
"""Tuning shipped with the party app: stronger frequency balancing, shorter
recent window, no hard cooldown for late joiners. Fields not listed keep
their module defaults.
"""


def frequency_divisor(times_imposter: int, alpha: float = ALPHA_FREQUENCY_PENALTY) -> float:
    """Divisor applied to a player's weight for their pick count.

    Example:
        >>> frequency_divisor(0)
        1.0
        >>> frequency_divisor(5)
        3.0
    """
    return 1.0 + alpha * max(0, times_imposter)


def distance_multiplier(rounds_since_pick: int, beta: float = BETA_DISTANCE_BONUS) -> float:
    """Multiplier applied to a player's weight for rounds since their last pick.

    Example:
        >>> distance_multiplier(10)
        2.0
    """
    return 1.0 + beta * max(0, rounds_since_pick)
