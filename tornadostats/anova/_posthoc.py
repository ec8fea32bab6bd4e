"""
Post-hoc pairwise comparison tests.

Tukey HSD (Tukey-Kramer for unequal group sizes):
    Uses the studentized range distribution (scipy.stats.studentized_range)
    to compute simultaneous confidence intervals and adjusted p-values.
"""

import numpy as np
from scipy import stats as sp_stats

from tornadostats.anova._common import (
    BORDERLINE_TOLERANCE,
    PostHocComparison,
    PostHocParams,
)


def tukey_hsd(
    group_means: dict[str, float],
    group_sizes: dict[str, int],
    mse: float,
    df_error: int,
    *,
    conf_level: float = 0.95,
    alpha: float = 0.05,
) -> PostHocParams:
    """
    Tukey's Honestly Significant Difference test.

    Comparisons are made for every pair (i, j) with i before j in the
    order of group_means, with diff = mean_i - mean_j.

    Args:
        group_means: {level: mean}, in comparison order
        group_sizes: {level: n}
        mse: Mean square error (MSW) from the ANOVA
        df_error: Error degrees of freedom (N - k) from the ANOVA
        conf_level: Family-wise confidence level for the intervals
        alpha: Threshold for the significance flag

    Returns:
        PostHocParams with all C(k, 2) pairwise comparisons
    """
    levels = tuple(group_means.keys())
    k = len(levels)

    # Same for every pair
    q_crit = float(sp_stats.studentized_range.ppf(conf_level, k, df_error))

    comparisons: list[PostHocComparison] = []

    for i in range(k):
        for j in range(i + 1, k):
            g1, g2 = levels[i], levels[j]
            diff = group_means[g1] - group_means[g2]
            n1, n2 = group_sizes[g1], group_sizes[g2]

            # Tukey-Kramer: q = |diff| / sqrt(MSE / 2 * (1/n1 + 1/n2))
            se = float(np.sqrt(mse * (1.0 / n1 + 1.0 / n2) / 2.0))
            q_stat = abs(diff) / se

            p_val = float(sp_stats.studentized_range.sf(q_stat, k, df_error))
            p_val = min(max(p_val, 0.0), 1.0)

            margin = q_crit * se

            comparisons.append(PostHocComparison(
                group1=g1,
                group2=g2,
                diff=float(diff),
                ci_lower=float(diff - margin),
                ci_upper=float(diff + margin),
                p_value=p_val,
                se=se,
                q_value=float(q_stat),
                significant=p_val < alpha,
                borderline=abs(p_val - alpha) <= BORDERLINE_TOLERANCE,
            ))

    return PostHocParams(
        method='tukey',
        comparisons=tuple(comparisons),
        conf_level=conf_level,
        alpha=alpha,
        levels=levels,
        mse=float(mse),
        df_error=int(df_error),
    )
