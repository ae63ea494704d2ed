"""Tests for imposter_fairness.models.policy."""

import pytest
from pydantic import ValidationError

from imposter_fairness import parameters
from imposter_fairness.models.policy import FairnessPolicy


class TestFairnessPolicyDefaults:
    """Defaults come from the parameters module."""

    def test_defaults_match_parameters(self):
        policy = FairnessPolicy()
        assert policy.max_consecutive == parameters.MAX_CONSECUTIVE == 2
        assert policy.min_cooldown_rounds == 1
        assert policy.recent_window == 5
        assert policy.pair_recent_window == 5
        assert policy.alpha_frequency_penalty == pytest.approx(0.4)
        assert policy.beta_distance_bonus == pytest.approx(0.1)
        assert policy.gamma_pair_penalty == pytest.approx(1.0)
        assert policy.pair_penalty_decay == pytest.approx(0.7)
        assert policy.new_player_hard_cooldown_rounds == 1
        assert policy.new_player_soft_penalty_rounds == 3
        assert policy.new_player_penalty_factor == pytest.approx(0.3)
        assert policy.jitter_percent == pytest.approx(0.05)

    def test_default_classmethod(self):
        assert FairnessPolicy.default() == FairnessPolicy()

    def test_party_preset(self):
        """Party preset overrides only the listed fields."""
        policy = FairnessPolicy.party_preset()
        assert policy.recent_window == 3
        assert policy.alpha_frequency_penalty == pytest.approx(0.6)
        assert policy.beta_distance_bonus == pytest.approx(0.2)
        assert policy.new_player_hard_cooldown_rounds == 0
        assert policy.new_player_soft_penalty_rounds == 2
        assert policy.new_player_penalty_factor == pytest.approx(0.4)
        # Untouched fields keep module defaults
        assert policy.pair_recent_window == parameters.PAIR_RECENT_WINDOW
        assert policy.jitter_percent == pytest.approx(parameters.JITTER_PERCENT)


class TestFairnessPolicyImmutability:
    """Policies are frozen values."""

    def test_assignment_rejected(self):
        policy = FairnessPolicy()
        with pytest.raises(ValidationError):
            policy.max_consecutive = 3

    def test_hashable_and_equal_by_value(self):
        assert FairnessPolicy(recent_window=2) == FairnessPolicy(recent_window=2)
        assert hash(FairnessPolicy(recent_window=2)) == hash(FairnessPolicy(recent_window=2))

    def test_negative_values_accepted(self):
        """Construction does not range-check; the picker tolerates bad values."""
        policy = FairnessPolicy(max_consecutive=-1, min_cooldown_rounds=-3)
        assert policy.max_consecutive == -1
        assert policy.min_cooldown_rounds == -3


class TestWithOverrides:
    """Between-round tuning via with_overrides."""

    def test_override_returns_new_policy(self):
        base = FairnessPolicy()
        tuned = base.with_overrides(max_consecutive=1, jitter_percent=0.0)
        assert tuned.max_consecutive == 1
        assert tuned.jitter_percent == 0.0
        assert base.max_consecutive == 2

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown policy fields: bogus"):
            FairnessPolicy().with_overrides(bogus=1)


class TestDescribe:
    def test_one_line_per_field(self):
        lines = FairnessPolicy().describe()
        assert len(lines) == len(FairnessPolicy.model_fields)
        assert "  max_consecutive: 2" in lines
        assert "  jitter_percent: 0.050" in lines
