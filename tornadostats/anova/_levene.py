"""
Levene's test for homogeneity of variances.

Algorithm: Transform y to |y_i - center(group_j)|, then run one-way ANOVA
on the transformed values. center='median' gives the Brown-Forsythe variant
(robust, R's default). center='mean' gives the original Levene test.
"""

import numpy as np
from scipy import stats as sp_stats

from tornadostats.anova._common import LeveneParams
from tornadostats.anova.design import AnovaDesign
from tornadostats.core.exceptions import ValidationError


def levene_test_impl(
    design: AnovaDesign,
    *,
    center: str = 'median',
) -> LeveneParams:
    """
    Compute Levene's test (or Brown-Forsythe variant).

    Args:
        design: Validated AnovaDesign
        center: 'median' (Brown-Forsythe, default) or 'mean' (original Levene)

    Returns:
        LeveneParams with F statistic, p-value, and degrees of freedom
    """
    if center not in ('mean', 'median'):
        raise ValidationError(f"center must be 'mean' or 'median', got {center!r}")

    center_fn = np.mean if center == 'mean' else np.median
    z_groups: dict[str, np.ndarray] = {}
    group_vars: dict[str, float] = {}

    for level in design.levels:
        y_group = design.groups[level]
        z_groups[level] = np.abs(y_group - center_fn(y_group))
        group_vars[level] = (
            float(np.var(y_group, ddof=1)) if y_group.shape[0] > 1 else float('nan')
        )

    # One-way ANOVA on the transformed values. Done inline: a constant z is
    # a legitimate outcome here, not a degenerate design.
    z_all = np.concatenate(list(z_groups.values()))
    z_grand_mean = np.mean(z_all)
    ss_between = 0.0
    ss_within = 0.0

    for z_group in z_groups.values():
        z_mean_j = np.mean(z_group)
        ss_between += z_group.shape[0] * (z_mean_j - z_grand_mean) ** 2
        ss_within += np.sum((z_group - z_mean_j) ** 2)

    df_between = design.k - 1
    df_within = design.n - design.k

    if ss_within == 0 and ss_between == 0:
        f_val = 0.0
        p_val = 1.0
    elif ss_within == 0:
        # Spread is constant inside each group but differs between groups
        f_val = float('inf')
        p_val = 0.0
    else:
        ms_between = ss_between / df_between
        ms_within = ss_within / df_within
        f_val = float(ms_between / ms_within)
        p_val = float(sp_stats.f.sf(f_val, df_between, df_within))

    return LeveneParams(
        f_value=f_val,
        p_value=p_val,
        df_between=df_between,
        df_within=df_within,
        center=center,
        group_vars=group_vars,
    )
