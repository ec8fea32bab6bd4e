"""
ANOVA solver dispatch.

Public API:
    anova_oneway(groups, ...) -> AnovaSolution
    anova_posthoc(result, ...) -> PostHocSolution
    levene_test(groups, ...) -> LeveneSolution
"""

import time
from typing import Any, Mapping

from tornadostats.core.result import Result
from tornadostats.core.exceptions import NullNotRejectedError
from tornadostats.core.validation import check_probability
from tornadostats.anova._levene import levene_test_impl
from tornadostats.anova._oneway import oneway_impl
from tornadostats.anova._posthoc import tukey_hsd
from tornadostats.anova.design import AnovaDesign
from tornadostats.anova.solution import (
    AnovaSolution,
    LeveneSolution,
    PostHocSolution,
)


def anova_oneway(
    groups: Mapping[str, Any] | AnovaDesign,
    *,
    alpha: float = 0.05,
) -> AnovaSolution:
    """
    One-way Analysis of Variance.

    Tests whether the means of two or more groups are equal.

    Args:
        groups: {label: 1D numeric values} or a prebuilt AnovaDesign.
            Group order is kept in the output.
        alpha: Significance threshold. The null (all means equal) is
            rejected iff p_value < alpha. Default 0.05.

    Returns:
        AnovaSolution with ANOVA table, F, p-value and the reject decision

    Raises:
        InsufficientGroups: fewer than 2 groups
        InsufficientObservations: an empty group, or N - k < 1
        DegenerateVariance: zero within-group variance

    Examples:
        >>> result = anova_oneway({'N': n_counts, 'F': f_counts, 'EF': ef_counts})
        >>> result.p_value
        >>> result.reject_null
        >>> print(result.summary())
    """
    t0 = time.perf_counter()

    alpha = check_probability(alpha, "alpha")
    design = groups if isinstance(groups, AnovaDesign) else AnovaDesign.for_groups(groups)

    params = oneway_impl(design, alpha=alpha)

    elapsed = time.perf_counter() - t0

    result = Result(
        params=params,
        info={
            'alpha': alpha,
            'design_type': 'oneway',
        },
        timing={'total_seconds': elapsed},
        backend_name='cpu',
    )

    return AnovaSolution(_result=result)


def anova_posthoc(
    anova_result: AnovaSolution,
    *,
    conf_level: float = 0.95,
    alpha: float | None = None,
) -> PostHocSolution:
    """
    Tukey-Kramer HSD comparisons following a rejecting one-way ANOVA.

    Args:
        anova_result: Result from anova_oneway()
        conf_level: Family-wise confidence level (default 0.95)
        alpha: Threshold for the per-pair significance flag. Defaults to
            the ANOVA's alpha.

    Returns:
        PostHocSolution with every pairwise comparison, significant or not

    Raises:
        NullNotRejectedError: the ANOVA did not reject its null

    Examples:
        >>> anova_result = anova_oneway(groups)
        >>> posthoc = anova_posthoc(anova_result)
        >>> posthoc.comparison('F', 'EF').p_value
    """
    t0 = time.perf_counter()

    params = anova_result._result.params
    conf_level = check_probability(conf_level, "conf_level")
    alpha = params.alpha if alpha is None else check_probability(alpha, "alpha")

    if not params.reject_null:
        raise NullNotRejectedError(
            f"Post-hoc comparisons require a rejected omnibus null; "
            f"ANOVA p = {params.p_value:.6g} is not below alpha = {params.alpha}",
            p_value=params.p_value,
            alpha=params.alpha,
        )

    posthoc_params = tukey_hsd(
        params.group_means,
        params.group_sizes,
        params.ms_within,
        params.df_within,
        conf_level=conf_level,
        alpha=alpha,
    )

    elapsed = time.perf_counter() - t0

    result = Result(
        params=posthoc_params,
        info={'method': posthoc_params.method, 'alpha': alpha},
        timing={'total_seconds': elapsed},
        backend_name='cpu',
    )

    return PostHocSolution(_result=result)


def levene_test(
    groups: Mapping[str, Any] | AnovaDesign,
    *,
    center: str = 'median',
) -> LeveneSolution:
    """
    Levene's test for homogeneity of variances.

    Tests the null hypothesis that all groups have equal variances.
    With center='median' (default), this is the Brown-Forsythe variant
    which is more robust to non-normality.

    Args:
        groups: {label: 1D numeric values} or a prebuilt AnovaDesign
        center: 'median' (Brown-Forsythe, default) or 'mean' (original Levene)

    Returns:
        LeveneSolution with F statistic, p-value, and group variances

    Examples:
        >>> result = levene_test(groups)
        >>> result.p_value > 0.05  # Can't reject equal variances
    """
    t0 = time.perf_counter()

    design = groups if isinstance(groups, AnovaDesign) else AnovaDesign.for_groups(groups)
    levene_params = levene_test_impl(design, center=center)

    elapsed = time.perf_counter() - t0

    result = Result(
        params=levene_params,
        info={'center': center},
        timing={'total_seconds': elapsed},
        backend_name='cpu',
    )

    return LeveneSolution(_result=result)
