"""
Era scheme design object.

Wraps a validated, ordered list of era boundary rules. Boundaries are
data, not code: the number of eras and their cutoffs come from
configuration and are validated here once, before any classification.
"""

from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np
from numpy.typing import NDArray

from tornadostats.core.exceptions import ConfigurationError
from tornadostats.eras._common import DEFAULT_ERA_BOUNDARIES, EraRule


def _as_int_year(value: Any, what: str) -> int:
    """Convert an integral year value to int or raise ConfigurationError."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{what}: expected an integer year, got {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)) and np.isfinite(value) and float(value).is_integer():
        return int(value)
    raise ConfigurationError(f"{what}: expected an integer year, got {value!r}")


@dataclass(frozen=True)
class EraScheme:
    """
    Validated, ordered set of era boundary rules.

    Each era covers the half-open range [lower_bound, next lower_bound).
    The last era is unbounded above unless end_year is set, in which case
    it stops at end_year (exclusive).

    Created via factory methods, not directly.
    """
    rules: tuple[EraRule, ...]
    end_year: int | None = None

    @staticmethod
    def from_boundaries(
        boundaries: Iterable[Any],
        *,
        end_year: int | None = None,
    ) -> 'EraScheme':
        """
        Create a scheme from (lower_bound, label) pairs.

        Args:
            boundaries: Iterable of (year, label) pairs or EraRule objects,
                sorted ascending by year
            end_year: Optional exclusive upper bound on the last era

        Returns:
            EraScheme

        Raises:
            ConfigurationError: Empty, malformed, unordered or overlapping
                boundaries, duplicate or empty labels, or an end_year that
                does not lie after the last lower bound
        """
        if boundaries is None:
            raise ConfigurationError("era_boundaries: must not be None", option='era_boundaries')

        rules: list[EraRule] = []
        for i, item in enumerate(boundaries):
            if isinstance(item, EraRule):
                year, label = item.lower_bound, item.label
            else:
                try:
                    year, label = item
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f"era_boundaries[{i}]: expected a (year, label) pair, got {item!r}",
                        option='era_boundaries',
                    ) from e
            year = _as_int_year(year, f"era_boundaries[{i}]")
            if not isinstance(label, str) or not label:
                raise ConfigurationError(
                    f"era_boundaries[{i}]: label must be a non-empty string, got {label!r}",
                    option='era_boundaries',
                )
            rules.append(EraRule(lower_bound=year, label=label))

        if not rules:
            raise ConfigurationError(
                "era_boundaries: need at least one boundary rule",
                option='era_boundaries',
            )

        for prev, cur in zip(rules, rules[1:]):
            if cur.lower_bound <= prev.lower_bound:
                raise ConfigurationError(
                    "era_boundaries: lower bounds must be strictly ascending, "
                    f"got {prev.lower_bound} ({prev.label!r}) followed by "
                    f"{cur.lower_bound} ({cur.label!r})",
                    option='era_boundaries',
                )

        labels = [r.label for r in rules]
        duplicates = sorted({lab for lab in labels if labels.count(lab) > 1})
        if duplicates:
            raise ConfigurationError(
                f"era_boundaries: duplicate labels {duplicates}",
                option='era_boundaries',
            )

        if end_year is not None:
            end_year = _as_int_year(end_year, "end_year")
            if end_year <= rules[-1].lower_bound:
                raise ConfigurationError(
                    f"end_year: must be after the last lower bound "
                    f"{rules[-1].lower_bound}, got {end_year}",
                    option='end_year',
                )

        return EraScheme(rules=tuple(rules), end_year=end_year)

    @staticmethod
    def default() -> 'EraScheme':
        """The three-era N / F / EF scheme split at 1973 and 2007."""
        return EraScheme.from_boundaries(DEFAULT_ERA_BOUNDARIES)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(r.label for r in self.rules)

    @property
    def lower_bounds(self) -> NDArray[np.int64]:
        return np.array([r.lower_bound for r in self.rules], dtype=np.int64)

    @property
    def first_year(self) -> int:
        return self.rules[0].lower_bound

    @property
    def n_eras(self) -> int:
        return len(self.rules)

    def span(self, label: str) -> tuple[int, int | None]:
        """
        Year range [start, end) covered by an era.

        end is None for an unbounded last era.
        """
        for i, rule in enumerate(self.rules):
            if rule.label == label:
                if i + 1 < len(self.rules):
                    return rule.lower_bound, self.rules[i + 1].lower_bound
                return rule.lower_bound, self.end_year
        raise KeyError(f"Unknown era {label!r}. Available: {list(self.labels)}")

    def covers(self, min_year: int, max_year: int) -> bool:
        """Whether every year in [min_year, max_year] maps to an era."""
        if min_year < self.first_year:
            return False
        if self.end_year is not None and max_year >= self.end_year:
            return False
        return True

    def to_list(self) -> list[list[Any]]:
        """Plain [[year, label], ...] form for serialization."""
        return [[r.lower_bound, r.label] for r in self.rules]

    def __repr__(self) -> str:
        parts = ", ".join(f"{r.lower_bound}:{r.label}" for r in self.rules)
        end = "" if self.end_year is None else f", end={self.end_year}"
        return f"EraScheme({parts}{end})"
