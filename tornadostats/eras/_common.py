"""
Common data types for era classification and aggregation.

Pure data containers: no methods beyond trivial accessors.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class EraRule:
    """One boundary rule: years >= lower_bound belong to label (until the next rule)."""
    lower_bound: int
    label: str


@dataclass(frozen=True)
class Observation:
    """One reported event. Contributes a count of 1 to its (year, era) cell."""
    year: int
    era: str


@dataclass(frozen=True)
class EraCounts:
    """
    Yearly event counts for one era, sorted by year.

    years and counts are parallel arrays; counts are floats so they feed
    straight into the ANOVA.
    """
    label: str
    years: NDArray[np.int64]
    counts: NDArray[np.floating[Any]]

    @property
    def n_years(self) -> int:
        return int(self.years.shape[0])

    @property
    def total(self) -> int:
        return int(np.sum(self.counts))


# Three-era scheme used for US tornado records: no rating (N), Fujita (F)
# from 1973, Enhanced Fujita (EF) from 2007.
DEFAULT_ERA_BOUNDARIES: tuple[tuple[int, str], ...] = (
    (1950, 'N'),
    (1973, 'F'),
    (2007, 'EF'),
)
