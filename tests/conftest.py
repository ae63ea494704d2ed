"""Shared pytest fixtures and markers for all tests."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def roster():
    """Four-player roster in a fixed order."""
    return ["ana", "ben", "cem", "dia"]


@pytest.fixture
def fairness_state():
    """Provide a fresh fairness state for testing."""
    from imposter_fairness.models.state import FairnessState
    return FairnessState()


@pytest.fixture
def open_policy():
    """Policy without new-player hard cooldown or jitter.

    Fresh states put every player at join_round 0, which the default policy
    blocks for one round.
    """
    from imposter_fairness.models.policy import FairnessPolicy
    return FairnessPolicy(new_player_hard_cooldown_rounds=0, jitter_percent=0.0)


@pytest.fixture
def seeded_rng():
    """Deterministic random source."""
    from imposter_fairness.engine.rng import Xorshift64StarSource
    return Xorshift64StarSource(seed=1234)
