"""
Core infrastructure for tornadostats.

Shared abstractions used by the era, ANOVA and pipeline subpackages.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    timing: Stage timer
"""

from tornadostats.core.result import Result
from tornadostats.core.exceptions import (
    TornadoStatsError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    InvalidYear,
    InsufficientGroups,
    InsufficientObservations,
    NumericalError,
    DegenerateVariance,
    NullNotRejectedError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "TornadoStatsError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "InvalidYear",
    "InsufficientGroups",
    "InsufficientObservations",
    "NumericalError",
    "DegenerateVariance",
    "NullNotRejectedError",
]
