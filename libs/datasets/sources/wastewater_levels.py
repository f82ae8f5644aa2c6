import pandas as pd
import structlog

from datapublic.common_fields import CommonFields
from libs.datasets import data_source
from libs.datasets import dataset_utils

_log = structlog.get_logger()


class WastewaterLevelsSource(data_source.DataSource):
    """CDC NWSS wastewater viral activity levels, nationally and by census region.

    Only the national level is kept; the period and regional columns are required to be present
    so that a file with an unexpected layout is rejected.
    """

    SOURCE_NAME = "NWSS"

    class Fields(object):
        DATE = "date"
        DATE_PERIOD = "date_period"
        NATIONAL = "National"
        MIDWEST = "Midwest"
        NORTHEAST = "Northeast"
        SOUTH = "South"
        WEST = "West"

    REGION_FIELDS = [Fields.MIDWEST, Fields.NORTHEAST, Fields.SOUTH, Fields.WEST]

    # Columns that must be present even though they are not kept.
    REQUIRED_UNUSED_FIELDS = [Fields.DATE_PERIOD, *REGION_FIELDS]

    COMMON_FIELD_MAP = {
        CommonFields.DATE: Fields.DATE,
        CommonFields.NATIONAL_WASTEWATER_LEVEL: Fields.NATIONAL,
    }

    NUMERIC_FIELDS = [CommonFields.NATIONAL_WASTEWATER_LEVEL]

    DEFAULT_DATE_FORMAT = dataset_utils.ISO8601_FORMAT

    @classmethod
    def _rename_to_common_fields(cls, data: pd.DataFrame) -> pd.DataFrame:
        missing_columns = set(cls.REQUIRED_UNUSED_FIELDS).difference(data.columns)
        if missing_columns:
            raise dataset_utils.MissingColumnsError(cls.SOURCE_NAME, missing_columns)
        return super()._rename_to_common_fields(data)

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        missing_level = data[CommonFields.NATIONAL_WASTEWATER_LEVEL].isna()
        if missing_level.any():
            _log.warning(
                "Dropping rows without a national level",
                source=cls.SOURCE_NAME,
                dropped_dates=data.loc[missing_level, CommonFields.DATE]
                .dt.strftime("%Y-%m-%d")
                .to_list(),
            )
        data = data.loc[~missing_level]
        dataset_utils.check_index_values_are_unique(
            data, cls.SOURCE_NAME, index=[CommonFields.DATE]
        )
        return data.sort_values(CommonFields.DATE)
