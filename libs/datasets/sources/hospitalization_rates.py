import pandas as pd

from datapublic.common_fields import CommonFields
from libs.datasets import data_source


class HospitalizationRatesSource(data_source.DataSource):
    """COVID-NET weekly hospitalization rates by state."""

    SOURCE_NAME = "COVID-NET"

    class Fields(object):
        STATE = "State"
        WEEK_ENDING_DATE = "Week.ending.date"
        RATE = "Rate"

    COMMON_FIELD_MAP = {
        CommonFields.STATE: Fields.STATE,
        CommonFields.DATE: Fields.WEEK_ENDING_DATE,
        CommonFields.RATE: Fields.RATE,
    }

    NUMERIC_FIELDS = [CommonFields.RATE]

    DEFAULT_DATE_FORMAT = "%Y-%m-%d"

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        return data.sort_values([CommonFields.STATE, CommonFields.DATE], kind="stable")
