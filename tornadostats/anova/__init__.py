"""
Analysis of Variance (ANOVA).

Public API:
    anova_oneway(groups, ...) -> AnovaSolution
    anova_posthoc(result, ...) -> PostHocSolution    # Tukey HSD
    levene_test(groups, ...) -> LeveneSolution       # homogeneity of variances
"""

from tornadostats.anova._common import BORDERLINE_TOLERANCE
from tornadostats.anova.design import AnovaDesign
from tornadostats.anova.solvers import (
    anova_oneway,
    anova_posthoc,
    levene_test,
)
from tornadostats.anova.solution import (
    AnovaSolution,
    LeveneSolution,
    PostHocSolution,
)

__all__ = [
    "BORDERLINE_TOLERANCE",
    "AnovaDesign",
    "anova_oneway",
    "anova_posthoc",
    "levene_test",
    "AnovaSolution",
    "LeveneSolution",
    "PostHocSolution",
]
