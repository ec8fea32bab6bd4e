"""
Exception hierarchy for tornadostats.

All exceptions inherit from TornadoStatsError to allow catching any
library-specific error. Each pipeline stage raises its own kind so the
caller can tell which stage aborted the run.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class TornadoStatsError(Exception):
    """Base exception for all tornadostats errors."""
    pass


class ValidationError(TornadoStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class ConfigurationError(ValidationError):
    """
    Pipeline configuration is invalid.

    Raised for era boundary sets that are empty, unordered, overlapping,
    or carry duplicate labels, and for out-of-range thresholds.

    Attributes:
        option: Name of the offending configuration option, if known
    """

    def __init__(self, message: str, option: str | None = None):
        super().__init__(message)
        self.option = option


class InvalidYear(ValidationError):
    """
    Year falls outside the domain covered by the era boundaries.

    Attributes:
        year: The offending year (first one, for vectorized calls)
        bounds: (first lower bound, exclusive end year or None)
    """

    def __init__(
        self,
        message: str,
        year: float | None = None,
        bounds: tuple[int, int | None] | None = None,
    ):
        super().__init__(message)
        self.year = year
        self.bounds = bounds


class InsufficientGroups(ValidationError):
    """
    Fewer than two groups were supplied to a between-groups test.

    Attributes:
        n_groups: Number of groups actually supplied
    """

    def __init__(self, message: str, n_groups: int | None = None):
        super().__init__(message)
        self.n_groups = n_groups


class InsufficientObservations(ValidationError):
    """
    A group is empty, or no residual degrees of freedom remain.

    Attributes:
        group: Label of the offending group, or None for the N - k check
        n_obs: Observations in that group (or N - k)
    """

    def __init__(
        self,
        message: str,
        group: str | None = None,
        n_obs: int | None = None,
    ):
        super().__init__(message)
        self.group = group
        self.n_obs = n_obs


class NumericalError(TornadoStatsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateVariance(NumericalError):
    """
    Within-group sum of squares is zero, so the F statistic is undefined.

    With SSB > 0 the ratio is infinite; with SSB == 0 it is 0/0. Either
    way no p-value exists and none is reported.

    Attributes:
        ssb: Between-group sum of squares
        ssw: Within-group sum of squares (0.0)
    """

    def __init__(self, message: str, ssb: float, ssw: float):
        super().__init__(message)
        self.ssb = ssb
        self.ssw = ssw


class NullNotRejectedError(TornadoStatsError):
    """
    Post-hoc comparisons were requested after a non-rejecting omnibus test.

    Attributes:
        p_value: Omnibus p-value
        alpha: Significance threshold it was compared against
    """

    def __init__(self, message: str, p_value: float, alpha: float):
        super().__init__(message)
        self.p_value = p_value
        self.alpha = alpha
