"""
Common data types for ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container with no methods.
"""

from dataclasses import dataclass


# |p - alpha| at or below this marks a comparison as borderline. The flag
# is informational; the significance decision is always p < alpha.
BORDERLINE_TOLERANCE = 1e-3


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (one term or residuals)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float
    f_value: float | None    # None for Residuals row
    p_value: float | None    # None for Residuals row


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for one-way ANOVA.

    Group dicts preserve the order the groups were supplied in.
    """
    table: tuple[AnovaTableRow, ...]
    n_obs: int
    n_groups: int
    grand_mean: float
    group_means: dict[str, float]
    group_sizes: dict[str, int]
    ss_between: float
    df_between: int
    ss_within: float
    df_within: int
    ms_between: float
    ms_within: float
    f_value: float
    p_value: float
    eta_squared: float
    alpha: float
    reject_null: bool


@dataclass(frozen=True)
class LeveneParams:
    """Parameter payload for Levene / Brown-Forsythe test."""
    f_value: float
    p_value: float
    df_between: int
    df_within: int
    center: str           # 'mean' or 'median'
    group_vars: dict[str, float]   # group -> variance (nan for n=1)


@dataclass(frozen=True)
class PostHocComparison:
    """One row of a post-hoc comparison table. diff = mean(group1) - mean(group2)."""
    group1: str
    group2: str
    diff: float
    ci_lower: float
    ci_upper: float
    p_value: float
    se: float
    q_value: float
    significant: bool
    borderline: bool


@dataclass(frozen=True)
class PostHocParams:
    """Parameter payload for post-hoc tests."""
    method: str                               # 'tukey'
    comparisons: tuple[PostHocComparison, ...]
    conf_level: float
    alpha: float
    levels: tuple[str, ...]
    mse: float
    df_error: int
