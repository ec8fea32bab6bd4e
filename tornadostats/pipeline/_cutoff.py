"""
Data-inclusion cutoff from post-hoc era comparisons.

Walk the eras in chronological order and keep dropping the earliest one
until no significant pair remains among the rest. The first surviving
era's lower bound is the cutoff year.
"""

from itertools import combinations

from tornadostats.anova.solution import AnovaSolution, PostHocSolution
from tornadostats.core.exceptions import ValidationError
from tornadostats.eras.design import EraScheme
from tornadostats.pipeline._common import EraCutoff


def recommend_cutoff(
    scheme: EraScheme,
    omnibus: AnovaSolution,
    posthoc: PostHocSolution | None,
) -> EraCutoff:
    """
    Recommend the first year of data to include.

    Args:
        scheme: Era scheme the comparisons were made under
        omnibus: One-way ANOVA over the eras
        posthoc: Tukey comparisons, or None when the omnibus test did not reject

    Returns:
        EraCutoff

    Raises:
        ValidationError: omnibus rejected but no post-hoc result was supplied
    """
    labels = scheme.labels

    if posthoc is None:
        if omnibus.reject_null:
            raise ValidationError(
                "omnibus test rejected the null; a post-hoc result is required "
                "to recommend a cutoff"
            )
        return EraCutoff(
            cutoff_year=scheme.first_year,
            first_era=labels[0],
            excluded_eras=(),
            distinguishable_pairs=(),
            adjacent_breaks=(),
            borderline_pairs=(),
            basis='omnibus',
        )

    significant = {frozenset(pair) for pair in posthoc.significant_pairs}

    start = 0
    for start in range(len(labels)):
        remaining = labels[start:]
        if not any(frozenset(pair) in significant for pair in combinations(remaining, 2)):
            break

    adjacent = tuple(
        (a, b) for a, b in zip(labels, labels[1:])
        if frozenset((a, b)) in significant
    )

    return EraCutoff(
        cutoff_year=scheme.span(labels[start])[0],
        first_era=labels[start],
        excluded_eras=labels[:start],
        distinguishable_pairs=posthoc.significant_pairs,
        adjacent_breaks=adjacent,
        borderline_pairs=posthoc.borderline_pairs,
        basis='posthoc',
    )
