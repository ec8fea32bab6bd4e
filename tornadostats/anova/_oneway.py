"""
One-way ANOVA sums of squares and F test.

Algorithm:
    SSB = sum_g n_g (mean_g - grand_mean)^2          df = k - 1
    SSW = sum_g sum_i (x_gi - mean_g)^2              df = N - k
    F   = (SSB / (k - 1)) / (SSW / (N - k))
    p   = P(F(k-1, N-k) > F)

A zero SSW leaves F undefined (infinite or 0/0) and is raised as
DegenerateVariance instead of being reported as significant.
"""

import numpy as np
from scipy import stats as sp_stats

from tornadostats.anova._common import AnovaParams, AnovaTableRow
from tornadostats.anova.design import AnovaDesign
from tornadostats.core.exceptions import DegenerateVariance


def oneway_impl(design: AnovaDesign, *, alpha: float) -> AnovaParams:
    """
    Compute the one-way ANOVA table for a validated design.

    Args:
        design: Validated AnovaDesign
        alpha: Significance threshold for the reject decision

    Returns:
        AnovaParams

    Raises:
        DegenerateVariance: within-group sum of squares is zero
    """
    y = design.y
    n = design.n
    k = design.k
    grand_mean = float(np.mean(y))

    group_means: dict[str, float] = {}
    group_sizes: dict[str, int] = {}
    ss_between = 0.0
    ss_within = 0.0

    for level in design.levels:
        values = design.groups[level]
        n_g = int(values.shape[0])
        mean_g = float(np.mean(values))
        group_means[level] = mean_g
        group_sizes[level] = n_g
        ss_between += n_g * (mean_g - grand_mean) ** 2
        ss_within += float(np.sum((values - mean_g) ** 2))

    df_between = k - 1
    df_within = n - k

    # Tested on the raw values: the mean of identical floats can leave a
    # rounding residue in SSW
    if all(np.ptp(design.groups[level]) == 0 for level in design.levels):
        raise DegenerateVariance(
            f"within-group sum of squares is zero (SSB={ss_between:.6g}); "
            f"every group is constant, so the F statistic is undefined",
            ssb=float(ss_between),
            ssw=0.0,
        )

    ms_between = ss_between / df_between
    ms_within = ss_within / df_within
    f_value = ms_between / ms_within
    p_value = float(sp_stats.f.sf(f_value, df_between, df_within))

    ss_total = ss_between + ss_within
    table = (
        AnovaTableRow(
            term='era',
            df=df_between,
            sum_sq=float(ss_between),
            mean_sq=float(ms_between),
            f_value=float(f_value),
            p_value=p_value,
        ),
        AnovaTableRow(
            term='Residuals',
            df=df_within,
            sum_sq=float(ss_within),
            mean_sq=float(ms_within),
            f_value=None,
            p_value=None,
        ),
    )

    return AnovaParams(
        table=table,
        n_obs=n,
        n_groups=k,
        grand_mean=grand_mean,
        group_means=group_means,
        group_sizes=group_sizes,
        ss_between=float(ss_between),
        df_between=df_between,
        ss_within=float(ss_within),
        df_within=df_within,
        ms_between=float(ms_between),
        ms_within=float(ms_within),
        f_value=float(f_value),
        p_value=p_value,
        eta_squared=float(ss_between / ss_total),
        alpha=alpha,
        reject_null=p_value < alpha,
    )
