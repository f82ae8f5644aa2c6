"""
Data schema shared by the loaders, pipeline stages and report writers.
"""
import enum


class ValueAsStrMixin:
    def __str__(self):
        # Make sure str(CommonFields.RATE) returns a str, not a FieldName. DataFrame.itertuples
        # passes a list of fields to collections.namedtuple which calls map(str, fields) and then
        # checks that the result types are str.
        return str(self.value)


class FieldName(str):
    """Common base-class for enums of fields, CSV column names etc"""

    __reduce_ex__ = str.__reduce_ex__  # Work-around for https://bugs.python.org/issue44342


@enum.unique
class CommonFields(ValueAsStrMixin, FieldName, enum.Enum):
    """Common field names shared across the hospitalization and wastewater data"""

    DATE = "date"

    # State name as reported by COVID-NET, i.e. California. The aggregate row uses "COVID-NET".
    STATE = "state"

    # Weekly hospitalization rate per 100k for one state.
    RATE = "rate"

    # Mean rate of a single state for a single date.
    STATE_HOSPITALIZATION_AVERAGE = "state_hospitalization_average"

    # Unweighted mean across states of STATE_HOSPITALIZATION_AVERAGE.
    NATIONAL_HOSPITALIZATION_AVERAGE = "national_hospitalization_average"

    NATIONAL_WASTEWATER_LEVEL = "national_wastewater_level"
    WASTEWATER_CATEGORY = "wastewater_category"

    # Number of rows averaged into a resampled row.
    OBSERVATION_COUNT = "observation_count"


COMMON_FIELDS_ORDER_MAP = {common: i for i, common in enumerate(CommonFields)}
