"""
ANOVA design object.

Wraps validated grouped data for one-way ANOVA and its companion tests.
The factory accepts a {label: values} mapping; group order is kept.
"""

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np
from numpy.typing import NDArray

from tornadostats.core.exceptions import (
    InsufficientGroups,
    InsufficientObservations,
    ValidationError,
)
from tornadostats.core.validation import (
    check_array,
    check_finite,
    check_1d,
)


@dataclass(frozen=True)
class AnovaDesign:
    """
    Validated data container for one-way ANOVA.

    Created via factory methods, not directly.
    """
    groups: dict[str, NDArray[np.floating[Any]]]
    levels: tuple[str, ...]
    n: int

    @property
    def k(self) -> int:
        return len(self.levels)

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return np.concatenate([self.groups[level] for level in self.levels])

    @staticmethod
    def for_groups(groups: Mapping[str, Any]) -> 'AnovaDesign':
        """
        Create design from a {label: values} mapping.

        Group order follows the mapping's iteration order.

        Args:
            groups: Mapping from group label to 1D numeric observations

        Returns:
            AnovaDesign

        Raises:
            ValidationError: groups is not a mapping, or values are
                non-numeric / non-finite / not 1D
            InsufficientGroups: fewer than 2 groups
            InsufficientObservations: an empty group, or N - k < 1
        """
        if not isinstance(groups, Mapping):
            raise ValidationError(
                f"groups: expected a mapping of label -> values, got {type(groups).__name__}"
            )

        if len(groups) < 2:
            raise InsufficientGroups(
                f"groups: need at least 2 groups, got {len(groups)}",
                n_groups=len(groups),
            )

        validated: dict[str, NDArray[np.floating[Any]]] = {}
        for label, values in groups.items():
            name = f"groups[{label!r}]"
            arr = np.asarray(values)
            if arr.size == 0:
                raise InsufficientObservations(
                    f"{name}: has 0 observations",
                    group=str(label),
                    n_obs=0,
                )
            arr = check_array(arr, name)
            check_1d(arr, name)
            check_finite(arr, name)
            validated[str(label)] = arr.astype(np.float64)

        if len(validated) < 2:
            # labels collided after str()
            raise InsufficientGroups(
                f"groups: need at least 2 distinct labels, got {list(validated)}",
                n_groups=len(validated),
            )

        n = sum(arr.shape[0] for arr in validated.values())
        k = len(validated)
        if n - k < 1:
            raise InsufficientObservations(
                f"groups: no residual degrees of freedom (N={n}, k={k}); "
                f"at least one group needs 2 or more observations",
                group=None,
                n_obs=n - k,
            )

        return AnovaDesign(
            groups=validated,
            levels=tuple(validated.keys()),
            n=n,
        )
