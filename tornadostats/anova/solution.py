"""
User-facing ANOVA solution types.

Each solution wraps a Result[Params] and provides convenient accessors,
formatted summary output (matching R conventions), and a plain-data
to_dict() for downstream renderers.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any

import numpy as np

from tornadostats.core.result import Result
from tornadostats.anova._common import (
    AnovaParams,
    AnovaTableRow,
    LeveneParams,
    PostHocParams,
    PostHocComparison,
)


# =====================================================================
# AnovaSolution
# =====================================================================


@dataclass
class AnovaSolution:
    """
    User-facing result for one-way ANOVA.

    Produced by anova_oneway().
    """
    _result: Result[AnovaParams]

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table (rows: term, df, SS, MS, F, p)."""
        return self._result.params.table

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def n_groups(self) -> int:
        return self._result.params.n_groups

    @property
    def grand_mean(self) -> float:
        return self._result.params.grand_mean

    @property
    def group_means(self) -> dict[str, float]:
        return self._result.params.group_means

    @property
    def group_sizes(self) -> dict[str, int]:
        return self._result.params.group_sizes

    @property
    def ss_between(self) -> float:
        return self._result.params.ss_between

    @property
    def ss_within(self) -> float:
        return self._result.params.ss_within

    @property
    def df_between(self) -> int:
        return self._result.params.df_between

    @property
    def df_within(self) -> int:
        return self._result.params.df_within

    @property
    def residual_ms(self) -> float:
        return self._result.params.ms_within

    @property
    def f_value(self) -> float:
        return self._result.params.f_value

    @property
    def p_value(self) -> float:
        """Exact upper-tail F probability, never rounded."""
        return self._result.params.p_value

    @property
    def eta_squared(self) -> float:
        return self._result.params.eta_squared

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def reject_null(self) -> bool:
        return self._result.params.reject_null

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate R-style ANOVA summary table."""
        lines = [
            "One-way Analysis of Variance",
            "=" * 72,
            f"Observations: {self.n_obs}    Groups: {self.n_groups}",
            "",
            f"{'Source':<20} {'Df':>6} {'Sum Sq':>14} {'Mean Sq':>14} {'F value':>10} {'Pr(>F)':>12}",
            "-" * 72,
        ]

        for row in self.table:
            if row.f_value is not None:
                sig = _significance_stars(row.p_value)
                lines.append(
                    f"{row.term:<20} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f} {row.f_value:>10.4f} "
                    f"{row.p_value:>12.4e} {sig}"
                )
            else:
                lines.append(
                    f"{row.term:<20} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f}"
                )

        lines.append("-" * 72)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        lines.append("")
        lines.append("Group means:")
        for level, mean in self.group_means.items():
            lines.append(f"  {level:<12} {mean:>12.4f}  (n = {self.group_sizes[level]})")
        lines.append("")
        decision = "reject" if self.reject_null else "fail to reject"
        lines.append(
            f"eta^2 = {self.eta_squared:.4f};  {decision} H0 at alpha = {self.alpha}"
        )

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        p = self._result.params
        return {
            'test': 'anova_oneway',
            'n_obs': p.n_obs,
            'n_groups': p.n_groups,
            'grand_mean': p.grand_mean,
            'group_means': dict(p.group_means),
            'group_sizes': dict(p.group_sizes),
            'ss_between': p.ss_between,
            'df_between': p.df_between,
            'ss_within': p.ss_within,
            'df_within': p.df_within,
            'ms_between': p.ms_between,
            'ms_within': p.ms_within,
            'f_value': p.f_value,
            'p_value': p.p_value,
            'eta_squared': p.eta_squared,
            'alpha': p.alpha,
            'reject_null': p.reject_null,
        }

    def __repr__(self) -> str:
        return (
            f"AnovaSolution(k={self.n_groups}, n={self.n_obs}, "
            f"F={self.f_value:.4f}, p={self.p_value:.4e})"
        )


# =====================================================================
# LeveneSolution
# =====================================================================


@dataclass
class LeveneSolution:
    """
    User-facing result for Levene's test.

    Produced by levene_test().
    """
    _result: Result[LeveneParams]

    @property
    def f_value(self) -> float:
        return self._result.params.f_value

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def df_between(self) -> int:
        return self._result.params.df_between

    @property
    def df_within(self) -> int:
        return self._result.params.df_within

    @property
    def center(self) -> str:
        return self._result.params.center

    @property
    def group_vars(self) -> dict[str, float]:
        return self._result.params.group_vars

    def summary(self) -> str:
        variant = "Brown-Forsythe" if self.center == 'median' else "Levene"
        lines = [
            f"{variant} Test for Homogeneity of Variances",
            "=" * 50,
            f"F({self.df_between}, {self.df_within}) = {self.f_value:.4f}, "
            f"p = {self.p_value:.4e}",
            "",
            f"Center: {self.center}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization. NaN variances become None."""
        return {
            'test': 'levene',
            'center': self.center,
            'f_value': self.f_value,
            'p_value': self.p_value,
            'df_between': self.df_between,
            'df_within': self.df_within,
            'group_vars': {
                k: (None if np.isnan(v) else v) for k, v in self.group_vars.items()
            },
        }

    def __repr__(self) -> str:
        return (
            f"LeveneSolution(F={self.f_value:.4f}, "
            f"p={self.p_value:.4e}, center={self.center!r})"
        )


# =====================================================================
# PostHocSolution
# =====================================================================


@dataclass
class PostHocSolution:
    """
    User-facing result for post-hoc comparisons.

    Produced by anova_posthoc().
    """
    _result: Result[PostHocParams]

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def comparisons(self) -> tuple[PostHocComparison, ...]:
        return self._result.params.comparisons

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def levels(self) -> tuple[str, ...]:
        return self._result.params.levels

    @property
    def significant_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple((c.group1, c.group2) for c in self.comparisons if c.significant)

    @property
    def borderline_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple((c.group1, c.group2) for c in self.comparisons if c.borderline)

    def comparison(self, group1: str, group2: str) -> PostHocComparison:
        """
        Look up one comparison in either orientation.

        Asking for (B, A) when (A, B) was computed returns the same p-value
        with the difference and interval negated.
        """
        for c in self.comparisons:
            if (c.group1, c.group2) == (group1, group2):
                return c
            if (c.group1, c.group2) == (group2, group1):
                return replace(
                    c,
                    group1=group1,
                    group2=group2,
                    diff=-c.diff,
                    ci_lower=-c.ci_upper,
                    ci_upper=-c.ci_lower,
                )
        raise KeyError(
            f"No comparison for ({group1!r}, {group2!r}). Levels: {list(self.levels)}"
        )

    def summary(self) -> str:
        lines = [
            "Tukey HSD" if self.method == 'tukey' else self.method,
            "=" * 72,
            f"Confidence level: {self.conf_level:.0%}    alpha: {self.alpha}",
            "",
            f"{'Comparison':<25} {'diff':>10} {'lwr':>12} {'upr':>12} {'p adj':>12}",
            "-" * 72,
        ]

        for c in self.comparisons:
            label = f"{c.group1}-{c.group2}"
            sig = _significance_stars(c.p_value)
            flag = "  (borderline)" if c.borderline else ""
            lines.append(
                f"{label:<25} {c.diff:>10.4f} {c.ci_lower:>12.4f} "
                f"{c.ci_upper:>12.4f} {c.p_value:>12.4e} {sig}{flag}"
            )

        lines.append("-" * 72)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        p = self._result.params
        return {
            'test': p.method,
            'conf_level': p.conf_level,
            'alpha': p.alpha,
            'mse': p.mse,
            'df_error': p.df_error,
            'comparisons': [asdict(c) for c in p.comparisons],
        }

    def __repr__(self) -> str:
        return (
            f"PostHocSolution(method={self.method!r}, "
            f"n_comparisons={len(self.comparisons)})"
        )


# =====================================================================
# Helpers
# =====================================================================


def _significance_stars(p: float | None) -> str:
    """Return significance stars for a p-value."""
    if p is None or np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""
