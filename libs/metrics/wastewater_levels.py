from typing import List, Optional
import enum
import math

import numpy as np
import pandas as pd

from datapublic.common_fields import CommonFields
from datapublic.common_fields import ValueAsStrMixin


@enum.unique
class WastewaterCategory(ValueAsStrMixin, str, enum.Enum):
    """Severity of the national wastewater viral activity level, from lowest to highest."""

    MINIMAL = "Minimal"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    VERY_HIGH = "Very High"


# Upper limit of each category except VERY_HIGH, which is unbounded.
WASTEWATER_CATEGORY_THRESHOLDS = [1.5, 3.0, 4.5, 8.0]


def calc_wastewater_category(
    value: Optional[float], thresholds: List[float] = WASTEWATER_CATEGORY_THRESHOLDS
) -> Optional[WastewaterCategory]:
    """Check the value against thresholds to determine the wastewater category.

    Each threshold is the exclusive upper limit of a category, so a value equal to a threshold
    falls in the category above it.

    Args:
        value: National wastewater viral activity level.
        thresholds: Upper limits for minimal, low, moderate and high.

    Returns:
        A WastewaterCategory, or None if value is missing or not finite.
    """
    assert len(thresholds) == 4, "Must pass minimal, low, moderate and high thresholds."
    level_minimal, level_low, level_moderate, level_high = thresholds

    if value is None or math.isinf(value) or np.isnan(value):
        return None

    if value < level_minimal:
        return WastewaterCategory.MINIMAL
    elif value < level_low:
        return WastewaterCategory.LOW
    elif value < level_moderate:
        return WastewaterCategory.MODERATE
    elif value < level_high:
        return WastewaterCategory.HIGH

    return WastewaterCategory.VERY_HIGH


def wastewater_category_series(levels: pd.Series) -> pd.Series:
    return levels.map(calc_wastewater_category).rename(CommonFields.WASTEWATER_CATEGORY)


def add_wastewater_category(joined: pd.DataFrame) -> pd.DataFrame:
    """Returns a copy of `joined` with a WASTEWATER_CATEGORY column."""
    joined = joined.copy()
    joined[CommonFields.WASTEWATER_CATEGORY] = wastewater_category_series(
        joined[CommonFields.NATIONAL_WASTEWATER_LEVEL]
    )
    return joined
