"""
Shared fixtures for ANOVA tests.

Groups are {label: values} mappings, the shape the pipeline hands over
(one entry per era, values = yearly counts).
"""

import numpy as np
import pytest


@pytest.fixture
def groups_separated():
    """3 eras with clearly different mean yearly counts (unbalanced)."""
    rng = np.random.default_rng(42)
    return {
        'N': rng.normal(50.0, 12.0, 23),
        'F': rng.normal(200.0, 30.0, 34),
        'EF': rng.normal(220.0, 30.0, 16),
    }


@pytest.fixture
def groups_identical_means():
    """Exactly equal group means with nonzero variance: F = 0, p = 1."""
    return {
        'A': np.array([1.0, 2.0, 3.0]),
        'B': np.array([3.0, 2.0, 1.0]),
        'C': np.array([2.0, 1.0, 3.0, 2.0]),
    }


@pytest.fixture
def groups_tight():
    """Widely separated means with near-zero within-group variance."""
    return {
        'A': np.array([10.0, 10.1, 9.9]),
        'B': np.array([50.0, 50.1, 49.9]),
        'C': np.array([90.0, 90.1, 89.9]),
    }


@pytest.fixture
def groups_two():
    """2-group design (should match independent t-test)."""
    rng = np.random.default_rng(77)
    return {
        'control': rng.normal(10.0, 3.0, 20),
        'treatment': rng.normal(14.0, 3.0, 20),
    }
