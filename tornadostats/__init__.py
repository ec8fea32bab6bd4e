"""
tornadostats: era-significance testing for historical tornado records.

Assigns events to rating-scale eras, counts them per year, and tests
whether yearly counts differ between eras (one-way ANOVA followed by
Tukey HSD) to decide which years of data to keep.

Submodules:
    eras: Era scheme, classifier, yearly aggregation
    anova: One-way ANOVA, Tukey HSD, Levene / Brown-Forsythe
    pipeline: Configuration, orchestration, EraReport
"""

__version__ = "0.1.0"

from tornadostats import anova
from tornadostats import eras
from tornadostats import pipeline
from tornadostats.pipeline import PipelineConfig, run_era_pipeline

__all__ = [
    "__version__",
    "anova",
    "eras",
    "pipeline",
    "PipelineConfig",
    "run_era_pipeline",
]
