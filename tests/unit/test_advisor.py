"""Tests for imposter_fairness.engine.advisor."""

import pytest

from imposter_fairness.engine.advisor import (
    MAX_MULTIPLIER,
    MIN_MULTIPLIER,
    suggest_weight_multipliers,
)
from imposter_fairness.engine.picker import ImposterPicker
from imposter_fairness.engine.rng import Xorshift64StarSource
from imposter_fairness.models.policy import FairnessPolicy


class TestSuggestWeightMultipliers:
    def test_empty_roster(self, fairness_state):
        assert suggest_weight_multipliers([], FairnessPolicy(), fairness_state) == {}

    def test_fresh_state_is_uniform(self, roster, fairness_state):
        """Nobody picked yet: everyone gets the same full distance bonus."""
        result = suggest_weight_multipliers(roster, FairnessPolicy(), fairness_state)
        assert set(result) == set(roster)
        for value in result.values():
            assert value == pytest.approx(1.15)

    def test_recent_imposter_damped(self, roster, fairness_state):
        fairness_state.commit_round(["ana"], roster, FairnessPolicy())
        result = suggest_weight_multipliers(roster, FairnessPolicy(), fairness_state)

        # ana: least favoured frequency, half distance, recent damping
        assert result["ana"] == pytest.approx(0.9 * 1.075 * 0.9)
        # ben: most favoured frequency, full distance
        assert result["ben"] == pytest.approx(1.2 * 1.15)
        assert result["ben"] == result["cem"] == result["dia"]

    def test_recent_window_respected(self, roster, fairness_state):
        fairness_state.commit_round(["ana"], roster, FairnessPolicy())
        for _ in range(5):
            fairness_state.advance_round()
        tight = suggest_weight_multipliers(roster, FairnessPolicy(recent_window=1), fairness_state)
        wide = suggest_weight_multipliers(roster, FairnessPolicy(recent_window=10), fairness_state)
        assert tight["ana"] == pytest.approx(wide["ana"] / 0.9)

    def test_results_within_bounds(self, roster, fairness_state):
        policy = FairnessPolicy(new_player_hard_cooldown_rounds=0)
        rng = Xorshift64StarSource(3)
        for _ in range(25):
            multipliers = suggest_weight_multipliers(roster, policy, fairness_state)
            for value in multipliers.values():
                assert MIN_MULTIPLIER <= value <= MAX_MULTIPLIER
            picked = ImposterPicker.pick(
                roster, 1, policy, fairness_state, rng, weight_multipliers=multipliers
            )
            fairness_state.commit_round(picked, roster, policy)

    def test_does_not_mutate_state(self, roster, fairness_state):
        fairness_state.commit_round(["ben"], roster, FairnessPolicy())
        before = fairness_state.to_json()
        suggest_weight_multipliers(roster + ["newcomer"], FairnessPolicy(), fairness_state)
        assert fairness_state.to_json() == before
