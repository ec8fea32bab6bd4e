"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np
from scipy import stats as sp_stats


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def era_yearly_counts():
    """
    Synthetic yearly tornado counts under the default N / F / EF scheme.

    Era means ~50 (1950-1972), ~200 (1973-2006), ~220 (2007-2022).
    Returns {year: count}.
    """
    rng = np.random.default_rng(2024)
    counts: dict[int, int] = {}
    for year in range(1950, 2023):
        if year < 1973:
            mean, sd = 50.0, 12.0
        elif year < 2007:
            mean, sd = 200.0, 30.0
        else:
            mean, sd = 220.0, 30.0
        counts[year] = int(round(rng.normal(mean, sd)))
    return counts


@pytest.fixture
def era_event_years(era_yearly_counts):
    """One entry per event (the raw, pre-aggregation form), in shuffled order."""
    years = np.repeat(
        np.array(list(era_yearly_counts.keys()), dtype=np.int64),
        list(era_yearly_counts.values()),
    )
    return np.random.default_rng(7).permutation(years)


def _spread(total: int, size: int) -> np.ndarray:
    """Split `total` extra events over `size` years as whole counts."""
    per_year = np.full(size, total // size, dtype=np.float64)
    per_year[: total % size] += 1
    return per_year


def _tukey_se(groups, a, b):
    """Tukey-Kramer standard error of groups[a] vs groups[b] with pooled MSE."""
    ssw = sum(float(np.sum((g - g.mean()) ** 2)) for g in groups)
    df = sum(g.size for g in groups) - len(groups)
    return np.sqrt(ssw / df / 2 * (1 / groups[a].size + 1 / groups[b].size))


def _tukey_q(groups, a, b):
    return abs(groups[b].mean() - groups[a].mean()) / _tukey_se(groups, a, b)


@pytest.fixture
def borderline_yearly_counts():
    """
    Yearly counts whose F vs EF Tukey p-value is just below 0.05 (~0.0497).

    N (1950-1972) is far below the other eras. EF (2007-2022) is raised
    above F (1973-2006) by whole events until the F-EF studentized range
    statistic sits at its 0.0497 upper quantile. Returns {year: count}.
    """
    rng = np.random.default_rng(1989)
    n_counts = np.round(rng.normal(1500.0, 200.0, 23))
    f_counts = np.round(rng.normal(4000.0, 200.0, 34))
    ef_base = np.round(rng.normal(4000.0, 200.0, 16))

    df = 23 + 34 + 16 - 3
    q_target = sp_stats.studentized_range.ppf(1 - 0.0497, 3, df)

    def q_for(total):
        return _tukey_q((n_counts, f_counts, ef_base + _spread(total, 16)), 1, 2)

    # The shift barely moves the pooled SE, so start from the difference
    # the unshifted SE needs and search whole events around it
    se = _tukey_se((n_counts, f_counts, ef_base), 1, 2)
    start = int(round((q_target * se - (ef_base.mean() - f_counts.mean())) * 16))
    best = min(range(start - 40, start + 41), key=lambda t: abs(q_for(t) - q_target))
    ef_counts = ef_base + _spread(best, 16)

    years = range(1950, 2023)
    values = np.concatenate([n_counts, f_counts, ef_counts])
    return {year: int(v) for year, v in zip(years, values)}


@pytest.fixture
def borderline_event_years(borderline_yearly_counts):
    """One entry per event for borderline_yearly_counts."""
    return np.repeat(
        np.array(list(borderline_yearly_counts.keys()), dtype=np.int64),
        list(borderline_yearly_counts.values()),
    )
