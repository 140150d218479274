"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import datetime as dt

import pytest

from load_engine.domain.models import LoadConfiguration, LoadThresholds


@pytest.fixture
def standard_configuration() -> LoadConfiguration:
    """Medium capacity, standard sensitivity, 24h recovery."""
    return LoadConfiguration(
        thresholds=LoadThresholds(safe=25, caution=50, high=75, critical=100),
        symptom_multiplier=1.0,
        decay_rate=0.7,
    )


@pytest.fixture
def today() -> dt.date:
    return dt.date(2025, 1, 10)
