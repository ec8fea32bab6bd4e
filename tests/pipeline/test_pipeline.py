"""
End-to-end tests for run_era_pipeline().

Validates:
    - N / F / EF scenario: omnibus rejects, N differs from F and EF,
      F vs EF (p ~ 0.0497) decided strictly on p < alpha
    - Non-rejecting scenario skips the pairwise stage
    - Failures abort the run with the originating error kind
    - Re-splitting boundaries recomputes everything from scratch
    - Report is plain structured data
"""

import json

import numpy as np
import pytest

from tornadostats import run_era_pipeline
from tornadostats.anova import anova_oneway
from tornadostats.core.exceptions import (
    ConfigurationError,
    DegenerateVariance,
    InsufficientGroups,
    InsufficientObservations,
    InvalidYear,
)
from tornadostats.pipeline import STAGES, PipelineConfig


class TestEraScenario:
    """Three eras, mean yearly counts ~50 / ~200 / ~220."""

    def test_omnibus_rejects(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        assert report.omnibus.p_value < 0.05
        assert report.omnibus.reject_null
        assert report.omnibus.n_groups == 3
        assert report.omnibus.n_obs == 2022 - 1950 + 1

    def test_n_era_differs(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        assert report.posthoc is not None
        assert report.posthoc.comparison('N', 'F').significant
        assert report.posthoc.comparison('N', 'EF').significant
        assert report.posthoc.comparison('N', 'F').p_value < 0.001

    def test_all_pairs_reported(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        assert len(report.posthoc.comparisons) == 3

    def test_cutoff_excludes_n_era(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        cutoff = report.cutoff
        assert cutoff.basis == 'posthoc'
        assert 'N' in cutoff.excluded_eras
        assert ('N', 'F') in cutoff.adjacent_breaks
        assert cutoff.cutoff_year >= 1973

    def test_stages(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        assert report.stages == STAGES

    def test_timing_sections(self, era_event_years):
        report = run_era_pipeline(era_event_years)
        for section in ('total_seconds', 'classify', 'aggregate', 'anova', 'posthoc'):
            assert section in report.timing

    def test_yearly_counts(self, era_event_years, era_yearly_counts):
        report = run_era_pipeline(era_event_years)
        assert sum(report.yearly_counts.values()) == len(era_event_years)
        assert report.yearly_counts[(1973, 'F')] == era_yearly_counts[1973]
        assert report.yearly_counts[(1972, 'N')] == era_yearly_counts[1972]

    def test_era_summaries(self, era_event_years, era_yearly_counts):
        report = run_era_pipeline(era_event_years)
        n_summary = report.era_summaries[0]
        n_counts = [era_yearly_counts[y] for y in range(1950, 1973)]
        assert n_summary.label == 'N'
        assert (n_summary.start_year, n_summary.end_year) == (1950, 1973)
        assert n_summary.n_years == 23
        assert n_summary.total_events == sum(n_counts)
        np.testing.assert_allclose(n_summary.mean, np.mean(n_counts))
        np.testing.assert_allclose(n_summary.sd, np.std(n_counts, ddof=1))
        assert report.era_summaries[2].end_year is None

    def test_matches_direct_anova(self, era_event_years, era_yearly_counts):
        report = run_era_pipeline(era_event_years)
        direct = anova_oneway({
            'N': [era_yearly_counts[y] for y in range(1950, 1973)],
            'F': [era_yearly_counts[y] for y in range(1973, 2007)],
            'EF': [era_yearly_counts[y] for y in range(2007, 2023)],
        })
        assert report.omnibus.f_value == pytest.approx(direct.f_value, rel=1e-12)
        assert report.omnibus.p_value == pytest.approx(direct.p_value, rel=1e-12)

    def test_input_order_irrelevant(self, era_event_years):
        a = run_era_pipeline(era_event_years)
        b = run_era_pipeline(np.sort(era_event_years))
        assert a.yearly_counts == b.yearly_counts
        assert a.omnibus.p_value == b.omnibus.p_value

    def test_records_input(self, era_yearly_counts):
        records = [{'year': y} for y, n in era_yearly_counts.items() for _ in range(n)]
        years = [r['year'] for r in records]
        from_records = run_era_pipeline(records)
        from_years = run_era_pipeline(years)
        assert from_records.yearly_counts == from_years.yearly_counts

    def test_stricter_threshold(self, era_event_years):
        report = run_era_pipeline(era_event_years, significance_threshold=0.001)
        assert report.config.significance_threshold == 0.001
        for c in report.posthoc.comparisons:
            assert c.significant == (c.p_value < 0.001)


class TestBorderlineScenario:
    """F vs EF Tukey p-value just below 0.05; decided strictly on p < alpha."""

    def test_p_value_just_below_threshold(self, borderline_event_years):
        report = run_era_pipeline(borderline_event_years)
        c = report.posthoc.comparison('F', 'EF')
        assert 0.049 < c.p_value < 0.05

    def test_significant_and_flagged_borderline(self, borderline_event_years):
        report = run_era_pipeline(borderline_event_years)
        c = report.posthoc.comparison('F', 'EF')
        assert c.significant
        assert c.borderline
        assert ('F', 'EF') in report.cutoff.borderline_pairs
        assert ('F', 'EF') in report.cutoff.distinguishable_pairs
        assert report.posthoc.comparison('N', 'F').significant
        assert not report.posthoc.comparison('N', 'F').borderline

    def test_cutoff_at_default_threshold(self, borderline_event_years):
        cutoff = run_era_pipeline(borderline_event_years).cutoff
        assert cutoff.cutoff_year == 2007
        assert cutoff.first_era == 'EF'
        assert cutoff.excluded_eras == ('N', 'F')
        assert cutoff.adjacent_breaks == (('N', 'F'), ('F', 'EF'))

    def test_lower_threshold_pools_f_and_ef(self, borderline_event_years):
        default = run_era_pipeline(borderline_event_years)
        strict = run_era_pipeline(borderline_event_years, significance_threshold=0.049)
        c = strict.posthoc.comparison('F', 'EF')
        assert c.p_value == default.posthoc.comparison('F', 'EF').p_value
        assert not c.significant
        assert c.borderline
        assert strict.cutoff.cutoff_year == 1973
        assert strict.cutoff.first_era == 'F'
        assert strict.cutoff.excluded_eras == ('N',)


class TestNoEffect:

    def test_pairwise_skipped(self, flat_event_years, flat_boundaries):
        report = run_era_pipeline(flat_event_years, era_boundaries=flat_boundaries)
        assert report.omnibus.p_value == pytest.approx(1.0)
        assert not report.omnibus.reject_null
        assert report.posthoc is None
        assert 'tested_pairwise' not in report.stages
        assert report.stages[-1] == 'reported'
        assert 'posthoc' not in report.timing

    def test_cutoff_keeps_all_data(self, flat_event_years, flat_boundaries):
        report = run_era_pipeline(flat_event_years, era_boundaries=flat_boundaries)
        assert report.cutoff.cutoff_year == 2000
        assert report.cutoff.first_era == 'A'
        assert report.cutoff.basis == 'omnibus'
        assert report.cutoff.excluded_eras == ()


class TestFailures:

    def test_single_era(self, era_event_years):
        with pytest.raises(InsufficientGroups):
            run_era_pipeline(era_event_years, era_boundaries=[(1950, 'ALL')])

    def test_year_before_first_boundary(self, era_event_years):
        years = np.append(era_event_years, 1949)
        with pytest.raises(InvalidYear):
            run_era_pipeline(years)

    def test_year_after_end_year(self, era_event_years):
        with pytest.raises(InvalidYear):
            run_era_pipeline(era_event_years, end_year=2020)

    def test_missing_year_in_records(self):
        with pytest.raises(InvalidYear):
            run_era_pipeline([{'year': 1990}, {'yr': 1991}])

    def test_bad_config(self, era_event_years):
        with pytest.raises(ConfigurationError):
            run_era_pipeline(era_event_years, era_boundaries=[(1973, 'F'), (1950, 'N')])

    def test_empty_input(self):
        with pytest.raises(InsufficientObservations):
            run_era_pipeline(np.array([], dtype=np.int64))

    def test_era_without_events(self):
        years = np.repeat(np.arange(1950, 1980), 3)
        with pytest.raises(InsufficientObservations) as exc_info:
            run_era_pipeline(years)
        assert exc_info.value.group == 'EF'

    def test_constant_counts(self):
        years = np.repeat(np.arange(2000, 2010), [5] * 5 + [9] * 5)
        with pytest.raises(DegenerateVariance):
            run_era_pipeline(years, era_boundaries=[(2000, 'A'), (2005, 'B')])


class TestBoundaryAdjustment:

    def test_resplit_recomputes(self, era_event_years):
        default = run_era_pipeline(era_event_years)
        resplit = run_era_pipeline(
            era_event_years,
            era_boundaries=[(1950, 'N'), (1980, 'F'), (2007, 'EF')],
        )
        assert default.era_summaries[0].n_years == 23
        assert resplit.era_summaries[0].n_years == 30
        assert resplit.yearly_counts.get((1975, 'N')) is not None
        assert default.yearly_counts.get((1975, 'F')) is not None
        assert resplit.omnibus.f_value != default.omnibus.f_value

    def test_rerun_is_deterministic(self, era_event_years):
        first = run_era_pipeline(era_event_years)
        run_era_pipeline(era_event_years, era_boundaries=[(1950, 'N'), (1980, 'F')])
        again = run_era_pipeline(era_event_years)
        assert first.to_dict()['omnibus'] == again.to_dict()['omnibus']
        assert first.to_dict()['posthoc'] == again.to_dict()['posthoc']

    def test_config_object(self, era_event_years):
        config = PipelineConfig.create(era_boundaries=[(1950, 'N'), (1980, 'F'), (2007, 'EF')])
        via_config = run_era_pipeline(era_event_years, config=config)
        via_kwargs = run_era_pipeline(
            era_event_years, era_boundaries=[(1950, 'N'), (1980, 'F'), (2007, 'EF')]
        )
        assert via_config.omnibus.p_value == via_kwargs.omnibus.p_value


class TestWarnings:

    def test_single_year_era(self):
        years = np.repeat(np.arange(2000, 2006), [50, 40, 60, 45, 55, 70])
        with pytest.warns(UserWarning, match="single observed year"):
            report = run_era_pipeline(years, era_boundaries=[(2000, 'A'), (2001, 'B')])
        assert report.warnings
        assert any('single observed year' in w for w in report.warnings)

    def test_unequal_variances_recorded(self):
        rng = np.random.default_rng(11)
        narrow = np.round(rng.normal(300, 2, 30)).astype(int)
        wide = np.round(rng.normal(300, 80, 30)).astype(int)
        years = np.repeat(np.arange(1950, 2010), np.concatenate([narrow, wide]))
        report = run_era_pipeline(years, era_boundaries=[(1950, 'A'), (1980, 'B')])
        assert report.levene.p_value < 0.05
        assert any('Unequal era variances' in w for w in report.warnings)

    def test_unequal_variances_with_two_year_eras(self):
        # |y - median| is constant inside each two-year era but differs between eras
        years = np.repeat(np.arange(2000, 2006), [99, 101, 60, 140, 10, 190])
        report = run_era_pipeline(
            years, era_boundaries=[(2000, 'A'), (2002, 'B'), (2004, 'C')]
        )
        assert report.levene.p_value == 0.0
        assert any('Unequal era variances' in w for w in report.warnings)


class TestReportOutput:

    def test_to_dict_is_plain_json(self, era_event_years):
        d = run_era_pipeline(era_event_years).to_dict()
        assert json.loads(json.dumps(d)) == d
        assert d['cutoff']['basis'] == 'posthoc'
        assert [e['label'] for e in d['eras']] == ['N', 'F', 'EF']
        assert d['yearly_counts'][0]['year'] == 1950
        assert d['posthoc']['comparisons'][0]['group1'] == 'N'

    def test_to_dict_without_posthoc(self, flat_event_years, flat_boundaries):
        d = run_era_pipeline(flat_event_years, era_boundaries=flat_boundaries).to_dict()
        assert d['posthoc'] is None
        json.dumps(d)

    def test_summary(self, era_event_years):
        text = run_era_pipeline(era_event_years).summary()
        assert 'Era Significance Report' in text
        assert 'Tukey HSD' in text
        assert 'Recommended cutoff' in text

    def test_repr(self, era_event_years):
        assert repr(run_era_pipeline(era_event_years)).startswith('EraReport(n=')
