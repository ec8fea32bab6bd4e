"""
Era classification and yearly aggregation.

Public API:
    classify_year(year, scheme) -> str
    classify_years(years, scheme) -> NDArray[str]
    aggregate_counts(observations) -> dict[(year, era), int]
    merge_counts(*count_maps) -> dict[(year, era), int]
    counts_by_era(counts, scheme) -> dict[str, EraCounts]
"""

from collections import Counter
from typing import Any, Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from tornadostats.core.exceptions import ConfigurationError, InvalidYear, ValidationError
from tornadostats.core.validation import check_1d
from tornadostats.eras._common import EraCounts, Observation
from tornadostats.eras.design import EraScheme


def classify_year(year: Any, scheme: EraScheme) -> str:
    """
    Return the era label for a single year.

    The label is that of the last rule whose lower bound is <= year.

    Args:
        year: Integral year (int, numpy integer, or integral float)
        scheme: Validated EraScheme

    Returns:
        Era label

    Raises:
        InvalidYear: Non-integral year, or year outside the scheme's domain

    Examples:
        >>> scheme = EraScheme.default()
        >>> classify_year(1972, scheme)
        'N'
        >>> classify_year(1973, scheme)
        'F'
    """
    return str(classify_years([year], scheme)[0])


def classify_years(years: Any, scheme: EraScheme) -> NDArray[np.str_]:
    """
    Vectorized era classification.

    Args:
        years: 1D array-like of integral years
        scheme: Validated EraScheme

    Returns:
        Array of era labels, same length as years

    Raises:
        InvalidYear: Any year is non-numeric, non-finite, non-integral,
            before the first lower bound, or at/after end_year
    """
    year_arr = _as_year_array(years, scheme)

    bounds = scheme.lower_bounds
    idx = np.searchsorted(bounds, year_arr, side='right') - 1

    too_early = idx < 0
    if np.any(too_early):
        bad = np.unique(year_arr[too_early])
        raise InvalidYear(
            f"years: {_format_years(bad)} precede the first era boundary "
            f"{scheme.first_year}",
            year=float(bad[0]),
            bounds=(scheme.first_year, scheme.end_year),
        )

    if scheme.end_year is not None:
        too_late = year_arr >= scheme.end_year
        if np.any(too_late):
            bad = np.unique(year_arr[too_late])
            raise InvalidYear(
                f"years: {_format_years(bad)} are at or after end_year "
                f"{scheme.end_year}",
                year=float(bad[0]),
                bounds=(scheme.first_year, scheme.end_year),
            )

    labels = np.array(scheme.labels)
    return labels[idx]


def aggregate_counts(
    observations: Iterable[Observation | tuple[Any, str]],
) -> dict[tuple[int, str], int]:
    """
    Count observations per (year, era).

    Args:
        observations: Observation objects or (year, era) pairs. Each one
            contributes a count of 1.

    Returns:
        Mapping (year, era) -> count. Empty input gives an empty mapping.
        The result does not depend on input order.
    """
    counter: Counter[tuple[int, str]] = Counter()
    for obs in observations:
        if isinstance(obs, Observation):
            year, era = obs.year, obs.era
        else:
            try:
                year, era = obs
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    f"observations: expected Observation or (year, era) pair, got {obs!r}"
                ) from e
        counter[(_as_int(year), str(era))] += 1
    return dict(counter)


def merge_counts(
    *count_maps: Mapping[tuple[int, str], int],
) -> dict[tuple[int, str], int]:
    """
    Merge per-partition count maps into one.

    Addition of counts is associative and commutative with {} as identity,
    so observations can be aggregated in any partitioning and merged.
    """
    merged: dict[tuple[int, str], int] = {}
    for counts in count_maps:
        for key, n in counts.items():
            merged[key] = merged.get(key, 0) + int(n)
    return merged


def counts_by_era(
    counts: Mapping[tuple[int, str], int],
    scheme: EraScheme,
) -> dict[str, EraCounts]:
    """
    Arrange (year, era) counts into per-era yearly count series.

    Args:
        counts: Output of aggregate_counts() / merge_counts()
        scheme: Scheme the era labels were produced with

    Returns:
        {label: EraCounts} in scheme order. Eras with no observed years get
        empty arrays (the ANOVA rejects those explicitly).

    Raises:
        ConfigurationError: A label not in the scheme, or a year carrying
            two different eras (counts built under another scheme)
    """
    known = set(scheme.labels)
    year_to_era: dict[int, str] = {}
    for (year, era) in counts:
        if era not in known:
            raise ConfigurationError(
                f"counts: era {era!r} is not in the scheme {list(scheme.labels)}",
                option='era_boundaries',
            )
        previous = year_to_era.setdefault(year, era)
        if previous != era:
            raise ConfigurationError(
                f"counts: year {year} is labelled both {previous!r} and {era!r}",
                option='era_boundaries',
            )

    result: dict[str, EraCounts] = {}
    for label in scheme.labels:
        years = sorted(y for (y, era) in counts if era == label)
        result[label] = EraCounts(
            label=label,
            years=np.array(years, dtype=np.int64),
            counts=np.array([counts[(y, label)] for y in years], dtype=np.float64),
        )
    return result


# =====================================================================
# Internal helpers
# =====================================================================


def _as_year_array(years: Any, scheme: EraScheme) -> NDArray[np.int64]:
    """Validate years and return them as int64."""
    bounds = (scheme.first_year, scheme.end_year)
    arr = np.asarray(years)
    if arr.ndim == 0:
        arr = arr.reshape(1)

    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.number):
        raise InvalidYear(
            f"years: expected numeric years, got dtype {arr.dtype}",
            bounds=bounds,
        )
    check_1d(arr, "years")

    if np.issubdtype(arr.dtype, np.integer):
        return arr.astype(np.int64)

    non_finite = ~np.isfinite(arr)
    if np.any(non_finite):
        raise InvalidYear(
            f"years: {int(np.sum(non_finite))} non-finite values",
            year=float(arr[non_finite][0]),
            bounds=bounds,
        )
    fractional = arr != np.floor(arr)
    if np.any(fractional):
        bad = arr[fractional]
        raise InvalidYear(
            f"years: non-integral values {bad[:5].tolist()}",
            year=float(bad[0]),
            bounds=bounds,
        )
    return arr.astype(np.int64)


def _as_int(year: Any) -> int:
    if isinstance(year, bool):
        raise ValidationError(f"observations: invalid year {year!r}")
    try:
        as_float = float(year)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"observations: invalid year {year!r}") from e
    if not np.isfinite(as_float) or not as_float.is_integer():
        raise ValidationError(f"observations: invalid year {year!r}")
    return int(as_float)


def _format_years(years: NDArray) -> str:
    shown = ", ".join(str(int(y)) for y in years[:5])
    if len(years) > 5:
        shown += f", ... ({len(years)} distinct)"
    return f"[{shown}]"
