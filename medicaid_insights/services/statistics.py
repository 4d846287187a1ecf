"""
Statistical Primitives - descriptive statistics over ordered numeric sequences.

Pure functions shared by the outlier classifier, the insight rules and the
federal funding analysis. Everything here is deterministic and side-effect free.

Degenerate inputs are reported as None ("excluded") rather than raised or turned
into NaN/Infinity:
- z_score: excluded when the standard deviation is 0
- ratio: excluded when the denominator is missing, zero or negative
- percentage_share: excluded when the whole is 0

Standard deviation is always the POPULATION formula (divide by N, ddof=0), matching
how the upstream outlier thresholds were calibrated.

Dependencies:
- numpy: vectorised mean and standard deviation
"""

import math
from typing import List, Optional, Sequence

import numpy as np


# =============================================================================
# Central Tendency and Dispersion
# =============================================================================


def mean(values: Sequence[float]) -> float:
    """
    Calculate the arithmetic mean of a sequence.

    Args:
        values: Non-empty sequence of numeric values

    Returns:
        Arithmetic mean

    Raises:
        ValueError: If `values` is empty. Callers guard before calling.
    """
    if len(values) == 0:
        raise ValueError("mean() of an empty sequence")
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def population_std_dev(values: Sequence[float], avg: Optional[float] = None) -> float:
    """
    Calculate the population standard deviation sqrt(sum((v - mean)^2) / N).

    Returns exactly 0.0 when every value is identical, so that downstream
    z-scores are reliably excluded instead of amplifying float noise.

    Args:
        values: Non-empty sequence of numeric values
        avg: Precomputed mean of `values` (computed when omitted)

    Returns:
        Standard deviation, always >= 0

    Raises:
        ValueError: If `values` is empty.
    """
    if len(values) == 0:
        raise ValueError("population_std_dev() of an empty sequence")
    values_array = np.asarray(values, dtype=np.float64)
    if np.all(values_array == values_array[0]):
        return 0.0
    if avg is None:
        return float(np.std(values_array))  # ddof=0
    return float(np.sqrt(np.mean((values_array - avg) ** 2)))


def z_score(value: float, avg: float, std: float) -> Optional[float]:
    """
    Number of standard deviations `value` lies from `avg`.

    Returns:
        Z-score, or None if the standard deviation is 0
    """
    if std == 0:
        return None
    return (value - avg) / std


# =============================================================================
# Ratios and Shares
# =============================================================================


def ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """
    Derived ratio numerator / denominator (cost per claim, per capita, ...).

    Returns:
        The ratio, or None when either side is missing or the denominator <= 0
    """
    if numerator is None or denominator is None or denominator <= 0:
        return None
    return numerator / denominator


def percentage_share(part: float, whole: float) -> Optional[float]:
    """part / whole * 100, or None when `whole` is 0."""
    if whole == 0:
        return None
    return part / whole * 100


# =============================================================================
# Rounding and Bucketing
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def growth_percent(previous: Optional[float], current: float) -> int:
    """
    Whole-percent change from `previous` to `current`, rounded half up.

    0 when there is no previous value or it is not positive (first year of a series).
    """
    change = percentage_share(current - previous, previous) if previous and previous > 0 else None
    if change is None:
        return 0
    return round_half_up(change)


def ntile(count: int, buckets: int) -> List[int]:
    """
    Bucket numbers (1-based) for `count` ordered rows split into `buckets` groups.

    Follows SQL NTILE: groups differ in size by at most one and the larger
    groups come first.
    """
    if count <= 0 or buckets <= 0:
        return []
    base, remainder = divmod(count, buckets)
    assignments: List[int] = []
    for bucket in range(1, buckets + 1):
        size = base + (1 if bucket <= remainder else 0)
        assignments.extend([bucket] * size)
    return assignments


def quartile_buckets(values: Sequence[float]) -> List[int]:
    """
    Assign each value to a quartile (1 = lowest) by NTILE(4) over ascending order.

    Ties keep their input order. The result is aligned with the input.
    """
    order = sorted(range(len(values)), key=lambda index: values[index])
    quartiles = [0] * len(values)
    for index, quartile in zip(order, ntile(len(values), 4)):
        quartiles[index] = quartile
    return quartiles
