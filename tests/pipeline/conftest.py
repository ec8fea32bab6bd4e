"""
Shared fixtures for pipeline tests.
"""

import numpy as np
import pytest


@pytest.fixture
def flat_boundaries():
    """Three six-year eras, 2000-2017."""
    return [(2000, 'A'), (2006, 'B'), (2012, 'C')]


@pytest.fixture
def flat_event_years():
    """
    Event years whose per-era mean yearly count is exactly equal (100).

    Every era repeats the yearly pattern 90, 100, 110 twice, so SSB = 0.
    """
    pattern = [90, 100, 110, 90, 100, 110]
    years = np.arange(2000, 2018)
    counts = pattern * 3
    return np.repeat(years, counts)
