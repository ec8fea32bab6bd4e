"""
Era-significance pipeline.

Public API:
    run_era_pipeline(years, ...) -> EraReport
    recommend_cutoff(scheme, omnibus, posthoc) -> EraCutoff
    summarize_eras(era_counts, scheme) -> tuple[EraSummary, ...]
    PipelineConfig.create(...) -> PipelineConfig
"""

from tornadostats.pipeline._common import (
    STAGES,
    EraCutoff,
    EraSummary,
    PipelineParams,
)
from tornadostats.pipeline._cutoff import recommend_cutoff
from tornadostats.pipeline.config import PipelineConfig
from tornadostats.pipeline.solution import EraReport
from tornadostats.pipeline.solvers import run_era_pipeline, summarize_eras

__all__ = [
    "STAGES",
    "EraCutoff",
    "EraReport",
    "EraSummary",
    "PipelineConfig",
    "PipelineParams",
    "recommend_cutoff",
    "run_era_pipeline",
    "summarize_eras",
]
