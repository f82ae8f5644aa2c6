import pathlib
from typing import List
from typing import Mapping
from typing import Optional
from typing import TextIO
from typing import Union

import numpy as np
import pandas as pd
import structlog

from datapublic import common_df
from datapublic.common_fields import CommonFields
from libs.datasets import dataset_utils

_log = structlog.get_logger()


def format_sample_of_df(df: pd.DataFrame) -> str:
    """Formats a sample of a DataFrame as a string, suitable for dumping to a log."""
    return df.to_string(
        line_width=120, max_rows=10, max_cols=5, max_colwidth=40, show_dimensions=True
    )


class DataSource(object):
    """Represents a single CSV source; loads it and produces a DataFrame of CommonFields columns."""

    # Name used in logs and errors.
    SOURCE_NAME: str

    # Map from CommonFields to the column name in the source CSV.
    COMMON_FIELD_MAP: Mapping[CommonFields, str]

    # Fields parsed with `dataset_utils.parse_numeric`.
    NUMERIC_FIELDS: List[CommonFields] = []

    # Format passed to `dataset_utils.normalize_dates` when the caller doesn't pass one.
    DEFAULT_DATE_FORMAT: str = dataset_utils.ISO8601_FORMAT

    @classmethod
    def _rename_to_common_fields(cls, data: pd.DataFrame) -> pd.DataFrame:
        missing_columns = set(cls.COMMON_FIELD_MAP.values()).difference(data.columns)
        if missing_columns:
            raise dataset_utils.MissingColumnsError(cls.SOURCE_NAME, missing_columns)

        to_common = {column: field for field, column in cls.COMMON_FIELD_MAP.items()}
        extra_columns = data.columns.difference(list(to_common))
        if not extra_columns.empty:
            _log.debug(
                "Dropping columns not used downstream",
                source=cls.SOURCE_NAME,
                extra_columns=extra_columns.to_list(),
            )
        return data.loc[:, list(to_common)].rename(columns=to_common)

    @classmethod
    def _drop_missing_dates(cls, data: pd.DataFrame) -> pd.DataFrame:
        missing_date = data[CommonFields.DATE].isna()
        if missing_date.any():
            _log.warning(
                "Dropping rows without a date",
                source=cls.SOURCE_NAME,
                dropped_df=format_sample_of_df(data.loc[missing_date]),
            )
        return data.loc[~missing_date].copy()

    @classmethod
    def standardize_data(cls, data: pd.DataFrame) -> pd.DataFrame:
        """Applies source specific cleanup to data with CommonFields columns. Override in subclasses."""
        return data

    @classmethod
    def load(
        cls, path_or_buf: Union[pathlib.Path, TextIO], date_format: Optional[str] = None
    ) -> pd.DataFrame:
        """Reads a CSV and returns a new DataFrame with CommonFields columns.

        Args:
            path_or_buf: Path to csv file, or buffer containing csv data.
            date_format: Format of the date column, defaults to `DEFAULT_DATE_FORMAT`.
        """
        raw = common_df.read_csv(path_or_buf)
        data = cls._rename_to_common_fields(raw)
        data = common_df.strip_whitespace(data)
        # A cell containing only whitespace is treated the same as a blank cell.
        data = data.replace("", np.nan)

        data = cls._drop_missing_dates(data)
        data[CommonFields.DATE] = dataset_utils.normalize_dates(
            data[CommonFields.DATE], date_format or cls.DEFAULT_DATE_FORMAT
        )
        for field in cls.NUMERIC_FIELDS:
            data[field] = dataset_utils.parse_numeric(data[field])

        data = cls.standardize_data(data)
        data = data.reset_index(drop=True)
        _log.info(
            "Loaded source", source=cls.SOURCE_NAME, raw_rows=len(raw), rows=len(data),
        )
        return data
