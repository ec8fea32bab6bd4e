"""
Tests for the data-inclusion cutoff.

Groups are built from a shared set of offsets so that equal-mean eras have
a mean difference of exactly zero.
"""

import numpy as np
import pytest

from tornadostats.anova import anova_oneway, anova_posthoc
from tornadostats.core.exceptions import ValidationError
from tornadostats.eras import EraScheme
from tornadostats.pipeline import recommend_cutoff


OFFSETS = np.linspace(-3.0, 3.0, 20)


@pytest.fixture
def scheme():
    return EraScheme.from_boundaries([(2000, 'A'), (2010, 'B'), (2020, 'C')])


def _cutoff(scheme, means):
    groups = {label: mean + OFFSETS for label, mean in zip(scheme.labels, means)}
    omnibus = anova_oneway(groups)
    return recommend_cutoff(scheme, omnibus, anova_posthoc(omnibus))


class TestRecommendCutoff:

    def test_first_era_differs(self, scheme):
        cutoff = _cutoff(scheme, (10.0, 50.0, 50.0))
        assert cutoff.cutoff_year == 2010
        assert cutoff.first_era == 'B'
        assert cutoff.excluded_eras == ('A',)
        assert cutoff.adjacent_breaks == (('A', 'B'),)
        assert set(cutoff.distinguishable_pairs) == {('A', 'B'), ('A', 'C')}
        assert cutoff.basis == 'posthoc'

    def test_last_era_differs(self, scheme):
        cutoff = _cutoff(scheme, (10.0, 10.0, 50.0))
        assert cutoff.cutoff_year == 2020
        assert cutoff.first_era == 'C'
        assert cutoff.excluded_eras == ('A', 'B')
        assert cutoff.adjacent_breaks == (('B', 'C'),)

    def test_non_adjacent_difference_still_excludes(self, scheme):
        # A and C differ but neither differs significantly from B
        groups = {'A': 0.0 + OFFSETS, 'B': 1.0 + OFFSETS, 'C': 2.0 + OFFSETS}
        omnibus = anova_oneway(groups)
        posthoc = anova_posthoc(omnibus)
        assert ('A', 'C') in posthoc.significant_pairs
        assert ('A', 'B') not in posthoc.significant_pairs
        assert ('B', 'C') not in posthoc.significant_pairs

        cutoff = recommend_cutoff(scheme, omnibus, posthoc)
        assert cutoff.first_era == 'B'
        assert cutoff.adjacent_breaks == ()

    def test_omnibus_not_rejected(self, scheme):
        groups = {label: 5.0 + OFFSETS for label in scheme.labels}
        cutoff = recommend_cutoff(scheme, anova_oneway(groups), None)
        assert cutoff.cutoff_year == 2000
        assert cutoff.excluded_eras == ()
        assert cutoff.basis == 'omnibus'

    def test_rejected_omnibus_needs_posthoc(self, scheme):
        groups = {label: m + OFFSETS for label, m in zip(scheme.labels, (10.0, 50.0, 50.0))}
        with pytest.raises(ValidationError, match="post-hoc"):
            recommend_cutoff(scheme, anova_oneway(groups), None)
