from dataclasses import dataclass
from typing import Sequence, Tuple
import math

import numpy as np
import pandas as pd
from scipy import stats

from datapublic.common_fields import CommonFields

# The Fisher z-transform used for the confidence interval needs more than 3 observations.
MIN_OBSERVATIONS = 4

DEFAULT_CONFIDENCE_LEVEL = 0.95

PEARSON_METHOD = "Pearson's product-moment correlation"


class CorrelationException(ValueError):
    pass


class InsufficientDataError(CorrelationException):
    pass


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson correlation coefficient and its two-sided significance test."""

    coefficient: float
    confidence_interval: Tuple[float, float]
    confidence_level: float
    p_value: float
    t_statistic: float
    degrees_of_freedom: int
    observation_count: int
    method: str = PEARSON_METHOD
    alternative: str = "two-sided"


def _t_statistic(coefficient: float, degrees_of_freedom: int) -> float:
    if abs(coefficient) >= 1:
        return math.copysign(math.inf, coefficient)
    return coefficient * math.sqrt(degrees_of_freedom / (1 - coefficient ** 2))


def calculate_pearson_correlation(
    x: Sequence[float], y: Sequence[float], confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
) -> CorrelationResult:
    """Computes the Pearson correlation of paired series `x` and `y`.

    Args:
        x: First series.
        y: Second series, same length and order as `x`.
        confidence_level: Confidence level of the interval around the coefficient.

    Raises:
        CorrelationException: if the series differ in length, contain non-finite values or one of
            them is constant.
        InsufficientDataError: if there are fewer than MIN_OBSERVATIONS pairs.
    """
    if not 0 < confidence_level < 1:
        raise ValueError(f"confidence_level must be between 0 and 1, got {confidence_level}")

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or x.shape != y.shape:
        raise CorrelationException(f"Series must be paired, got shapes {x.shape} and {y.shape}")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise CorrelationException("Series contain missing or non-finite values")

    observation_count = len(x)
    if observation_count < MIN_OBSERVATIONS:
        raise InsufficientDataError(
            f"Insufficient data: {observation_count} paired observations, "
            f"at least {MIN_OBSERVATIONS} required"
        )
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        raise CorrelationException("Correlation is undefined for a constant series")

    result = stats.pearsonr(x, y)
    interval = result.confidence_interval(confidence_level=confidence_level)
    coefficient = float(result.statistic)
    degrees_of_freedom = observation_count - 2
    return CorrelationResult(
        coefficient=coefficient,
        confidence_interval=(float(interval.low), float(interval.high)),
        confidence_level=confidence_level,
        p_value=float(result.pvalue),
        t_statistic=_t_statistic(coefficient, degrees_of_freedom),
        degrees_of_freedom=degrees_of_freedom,
        observation_count=observation_count,
    )


def calculate_correlation_from_joined(
    joined: pd.DataFrame, confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
) -> CorrelationResult:
    """Correlates the national hospitalization average with the national wastewater level."""
    return calculate_pearson_correlation(
        joined[CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE].to_numpy(),
        joined[CommonFields.NATIONAL_WASTEWATER_LEVEL].to_numpy(),
        confidence_level=confidence_level,
    )
