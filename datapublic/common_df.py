"""
Shared code that handles `pandas.DataFrames` objects.
"""

import pathlib
from typing import List, Sequence, TextIO, Union

import pandas as pd
import numpy as np
from structlog import stdlib

from datapublic.common_fields import (
    CommonFields,
    COMMON_FIELDS_ORDER_MAP,
)


def index_and_sort(
    df: pd.DataFrame, index_names: List[str], log: stdlib.BoundLogger
) -> pd.DataFrame:
    """Return a `DataFrame` with index set to `index_names` if not already set, and rows and columns sorted."""
    if df.index.names != index_names:
        if df.index.names != [None]:
            df = df.reset_index(inplace=False)
        df = df.set_index(index_names, inplace=False)
    df = df.sort_index()

    if "index" in df.columns:
        # This is not expected in our normal code path but seems to sneak in occasionally
        # when calling reset_index on a DataFrame that doesn't have a named index.
        log.warning("Dropping column named 'index'")
        df = df.drop(columns="index")

    df = sort_common_field_columns(df)

    return df


def write_csv(
    df: pd.DataFrame,
    path: pathlib.Path,
    log: stdlib.BoundLogger,
    index_names: Sequence[str] = (CommonFields.DATE,),
) -> None:
    """Write `df` to `path` as a CSV with index set by `index_and_sort`."""
    df = index_and_sort(df, list(index_names), log)
    log.info("Writing DataFrame", path=str(path), rows=len(df))
    # Enum values such as WastewaterCategory are written as their plain value.
    df = df.apply(lambda col: col.map(_plain_value) if _is_text(col) else col)
    df = df.replace({pd.NA: np.nan})
    # Format that outputs floats without a fraction as an integer without decimal point.
    df.to_csv(path, date_format="%Y-%m-%d", index=True, float_format="%.12g")


def _plain_value(value):
    return getattr(value, "value", value)


# Cell contents read as missing values. R writes missing values as NA.
MISSING_VALUES = ["", "NA", "N/A", "NaN", "nan", "null"]


def read_csv(path_or_buf: Union[pathlib.Path, TextIO]) -> pd.DataFrame:
    """Read `path_or_buf` with every column as a string.

    Blank cells become missing values. Dates and numbers are left for the caller to parse so
    that malformed values can be reported instead of silently coerced.
    """
    return pd.read_csv(path_or_buf, dtype=str, keep_default_na=False, na_values=MISSING_VALUES)


def strip_whitespace(df: pd.DataFrame) -> pd.DataFrame:
    """Return `df` with `str.strip` applied to columns with `object` dtype."""

    def strip_series(col):
        if _is_text(col):
            return col.str.strip()
        else:
            return col

    return df.apply(strip_series, axis=0)


def sort_common_field_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Sort columns to match the order of CommonFields, followed by remaining columns in alphabetical order."""
    this_columns_order = {
        col: COMMON_FIELDS_ORDER_MAP.get(col, i + len(COMMON_FIELDS_ORDER_MAP))
        for i, col in enumerate(sorted(df.columns))
    }
    return df.loc[:, sorted(df.columns, key=lambda c: this_columns_order[c])]


def _is_text(col: pd.Series) -> bool:
    return col.dtype == object or pd.api.types.is_string_dtype(col.dtype)
