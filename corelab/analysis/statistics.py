"""
Batch statistics shared by the three test engines.

The variance convention differs per test method and is selected by the
caller: core batches use the population standard deviation (ddof=0), pull-off
and rebound hammer batches use the sample standard deviation (ddof=1).
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

POPULATION = 0
SAMPLE = 1


@dataclass(frozen=True)
class BatchStatistics:
    """
    Summary of a set of per-specimen results.

    Attributes
    ----------
    count : int
        Number of values
    average : float
        Arithmetic mean
    minimum : float
        Smallest value
    maximum : float
        Largest value
    standard_deviation : float
        Population or sample standard deviation, 0 when undefined
    """
    count: int
    average: float
    minimum: float
    maximum: float
    standard_deviation: float

    @property
    def coefficient_of_variation(self) -> float:
        """Standard deviation as a percentage of the mean."""
        if self.average == 0:
            return 0.0
        return self.standard_deviation / self.average * 100

    def to_dict(self) -> dict:
        return {
            'count': self.count,
            'average': self.average,
            'minimum': self.minimum,
            'maximum': self.maximum,
            'standard_deviation': self.standard_deviation,
            'coefficient_of_variation': self.coefficient_of_variation,
        }


def standard_deviation(values: Sequence[float], ddof: int = SAMPLE) -> float:
    """
    Standard deviation with the given delta degrees of freedom.

    Returns 0.0 when fewer than ddof + 1 values are available instead of NaN.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size <= ddof:
        return 0.0
    return float(np.std(arr, ddof=ddof))


def median(values: Sequence[float]) -> float:
    """Median; the mean of the two middle values for even counts."""
    return float(np.median(np.asarray(values, dtype=float)))


def aggregate(values: Sequence[float], ddof: int = SAMPLE) -> BatchStatistics:
    """
    Fold per-specimen results into batch statistics.

    Parameters
    ----------
    values : sequence of float
        Per-specimen scalar results, at least one
    ddof : int
        0 for population, 1 for sample standard deviation

    Returns
    -------
    BatchStatistics
        Mean, extremes and standard deviation
    """
    arr = np.asarray(values, dtype=float)
    return BatchStatistics(
        count=int(arr.size),
        average=float(np.mean(arr)),
        minimum=float(np.min(arr)),
        maximum=float(np.max(arr)),
        standard_deviation=standard_deviation(arr, ddof),
    )
