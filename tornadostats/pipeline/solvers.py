"""
Era-significance pipeline.

Public API:
    run_era_pipeline(years, ...) -> EraReport
    summarize_eras(era_counts, scheme) -> tuple[EraSummary, ...]

Stages run strictly in order; any exception aborts the run and propagates
unchanged, so a report is either complete or not produced at all.
"""

import warnings
from typing import Any, Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from tornadostats.anova import anova_oneway, anova_posthoc, levene_test
from tornadostats.anova.design import AnovaDesign
from tornadostats.core.result import Result
from tornadostats.core.timing import Timer
from tornadostats.eras._common import EraCounts
from tornadostats.eras.design import EraScheme
from tornadostats.eras.solvers import aggregate_counts, classify_years, counts_by_era
from tornadostats.pipeline._common import EraSummary, PipelineParams
from tornadostats.pipeline._cutoff import recommend_cutoff
from tornadostats.pipeline.config import PipelineConfig
from tornadostats.pipeline.solution import EraReport


def run_era_pipeline(
    years: Any,
    *,
    config: PipelineConfig | None = None,
    **overrides: Any,
) -> EraReport:
    """
    Classify events into eras and test whether yearly counts differ by era.

    Args:
        years: One entry per event. Either a 1D array-like of integral
            years, or an iterable of records exposing a 'year' key or
            attribute.
        config: PipelineConfig; defaults to the N / F / EF scheme with
            alpha = 0.05 and 95% family-wise confidence
        **overrides: Replace individual config fields, e.g.
            era_boundaries=[(1950, 'N'), (1980, 'F'), (2007, 'EF')]

    Returns:
        EraReport with the omnibus test, the variance check, the pairwise
        comparisons (only when the omnibus null is rejected), per-era
        summaries and the recommended cutoff

    Raises:
        ConfigurationError: invalid options or era boundaries
        InvalidYear: a year outside the scheme's domain
        InsufficientGroups / InsufficientObservations: too few eras or years
        DegenerateVariance: zero within-era variance

    Examples:
        >>> report = run_era_pipeline(events['yr'])
        >>> report.omnibus.p_value
        >>> report.cutoff.cutoff_year
        >>> print(report.summary())
    """
    config = (config or PipelineConfig()).with_overrides(**overrides)
    scheme = config.scheme()
    alpha = config.significance_threshold

    stages: list[str] = []
    warn_list: list[str] = []

    timer = Timer()
    timer.start()

    with timer.section('classify'):
        year_arr = _extract_years(years)
        eras = classify_years(year_arr, scheme)
        year_arr = year_arr.astype(np.int64).reshape(-1)
    stages.append('classified')

    with timer.section('aggregate'):
        yearly_counts = aggregate_counts(zip(year_arr.tolist(), eras.tolist()))
        era_counts = counts_by_era(yearly_counts, scheme)
    stages.append('aggregated')

    with timer.section('anova'):
        design = AnovaDesign.for_groups(
            {label: ec.counts for label, ec in era_counts.items()}
        )
        omnibus = anova_oneway(design, alpha=alpha)
    stages.append('tested_omnibus')

    for label, ec in era_counts.items():
        if ec.n_years == 1:
            msg = (
                f"era {label!r} has a single observed year; "
                f"it contributes no within-era variance"
            )
            warnings.warn(msg, UserWarning, stacklevel=2)
            warn_list.append(msg)

    with timer.section('levene'):
        levene = levene_test(design, center=config.levene_center)
    if levene.p_value < alpha:
        warn_list.append(
            f"Unequal era variances ({'Brown-Forsythe' if levene.center == 'median' else 'Levene'} "
            f"p = {levene.p_value:.4g}); ANOVA assumes homogeneous variances"
        )

    posthoc = None
    if omnibus.reject_null:
        with timer.section('posthoc'):
            posthoc = anova_posthoc(
                omnibus,
                conf_level=config.family_confidence_level,
                alpha=alpha,
            )
        stages.append('tested_pairwise')

    with timer.section('cutoff'):
        summaries = summarize_eras(era_counts, scheme)
        cutoff = recommend_cutoff(scheme, omnibus, posthoc)
    stages.append('reported')

    timer.stop()

    params = PipelineParams(
        config=config,
        scheme=scheme,
        n_observations=int(year_arr.shape[0]),
        yearly_counts=yearly_counts,
        era_counts=era_counts,
        era_summaries=summaries,
        omnibus=omnibus,
        levene=levene,
        posthoc=posthoc,
        cutoff=cutoff,
    )

    result = Result(
        params=params,
        info={'stages': tuple(stages), 'alpha': alpha},
        timing=timer.result(),
        backend_name='cpu',
        warnings=tuple(warn_list),
    )

    return EraReport(_result=result)


def summarize_eras(
    era_counts: Mapping[str, EraCounts],
    scheme: EraScheme,
) -> tuple[EraSummary, ...]:
    """
    Descriptive statistics of yearly counts per era, in scheme order.

    Eras without observed years are skipped.
    """
    summaries: list[EraSummary] = []
    for label in scheme.labels:
        ec = era_counts[label]
        if ec.n_years == 0:
            continue
        start, end = scheme.span(label)
        counts = ec.counts
        summaries.append(EraSummary(
            label=label,
            start_year=start,
            end_year=end,
            first_observed_year=int(ec.years[0]),
            last_observed_year=int(ec.years[-1]),
            n_years=ec.n_years,
            total_events=ec.total,
            mean=float(np.mean(counts)),
            sd=float(np.std(counts, ddof=1)) if ec.n_years > 1 else float('nan'),
            min=float(np.min(counts)),
            median=float(np.median(counts)),
            max=float(np.max(counts)),
        ))
    return tuple(summaries)


# =====================================================================
# Internal helpers
# =====================================================================


def _extract_years(records: Any) -> NDArray[np.int64]:
    """Pull event years out of an array-like or an iterable of records."""
    if isinstance(records, np.ndarray) or hasattr(records, 'dtype'):
        return np.asarray(records)

    items = list(records) if isinstance(records, Iterable) else records
    if isinstance(items, list) and items:
        first = items[0]
        if isinstance(first, Mapping):
            return np.asarray([item.get('year') for item in items])
        if hasattr(first, 'year'):
            return np.asarray([getattr(item, 'year', None) for item in items])
    return np.asarray(items)
