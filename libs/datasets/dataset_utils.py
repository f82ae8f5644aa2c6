from typing import Collection, List, Optional
import pathlib
import numpy as np
import pandas as pd


REPO_ROOT = pathlib.Path(__file__).parent.parent.parent

REPORT_OUTPUT_DIRECTORY = REPO_ROOT / "output"

# Accepts date-only and date-time ISO strings such as 2023-01-07 and 2023-01-07 00:00:00.
ISO8601_FORMAT = "ISO8601"

# Number of offending values included in error messages.
_MAX_REPORTED_VALUES = 5


class DateParseError(ValueError):
    def __init__(
        self, column: str, date_format: str, bad_values: List[str], reason: Optional[str] = None
    ):
        self.column = column
        self.date_format = date_format
        self.bad_values = bad_values
        self.reason = reason
        message = f"Unable to parse {column} with format {date_format!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(f"{message}: {', '.join(map(repr, bad_values))}")


class InvalidValueError(ValueError):
    def __init__(self, column: str, bad_values: List[str]):
        self.column = column
        self.bad_values = bad_values
        super().__init__(
            f"Non-numeric values in {column}: {', '.join(map(repr, bad_values))}"
        )


class MissingColumnsError(KeyError):
    def __init__(self, source: str, missing_columns: Collection[str]):
        self.source = source
        self.missing_columns = sorted(missing_columns)
        super().__init__(f"{source} is missing required columns {self.missing_columns}")


class DuplicateDateError(ValueError):
    def __init__(self, source: str, duplicate_data: pd.DataFrame):
        self.source = source
        self.data = duplicate_data
        super().__init__(f"{source} has {len(duplicate_data)} rows with a repeated date")


def _sample_values(values: pd.Series) -> List[str]:
    return [str(v) for v in values.unique()[:_MAX_REPORTED_VALUES]]


def normalize_dates(values: pd.Series, date_format: str) -> pd.Series:
    """Parses date strings into timestamps at midnight.

    Args:
        values: Series of date strings. Missing values stay missing.
        date_format: strptime format, or "ISO8601" for any ISO date or date-time.

    Returns: Series of datetime64 values with the time of day removed. Values with a UTC offset
    keep their local date; the offset is dropped, not applied.

    Raises:
        DateParseError: if a non-missing value does not match `date_format` or the values carry
            more than one UTC offset.
    """
    try:
        parsed = pd.to_datetime(values, format=date_format, errors="coerce")
    except ValueError as e:
        # Raised by pandas for a mix of UTC offsets, or of values with and without one.
        raise DateParseError(
            values.name, date_format, _sample_values(values.dropna()), reason=str(e)
        ) from e
    unparseable = parsed.isna() & values.notna()
    if unparseable.any():
        raise DateParseError(values.name, date_format, _sample_values(values.loc[unparseable]))

    if not pd.api.types.is_datetime64_any_dtype(parsed):
        # Older pandas returns datetime objects instead of raising for mixed offsets.
        raise DateParseError(
            values.name,
            date_format,
            _sample_values(values.dropna()),
            reason="values have different UTC offsets",
        )
    if parsed.dt.tz is not None:
        parsed = parsed.dt.tz_localize(None)
    return parsed.dt.normalize()


def parse_numeric(values: pd.Series) -> pd.Series:
    """Parses numeric strings into floats, keeping missing values as NaN.

    Raises:
        InvalidValueError: if a non-missing value is not a finite number.
    """
    parsed = pd.to_numeric(values, errors="coerce").astype(float)
    invalid = (parsed.isna() & values.notna()) | np.isinf(parsed)
    if invalid.any():
        raise InvalidValueError(values.name, _sample_values(values.loc[invalid]))
    return parsed


def check_index_values_are_unique(
    data: pd.DataFrame, source: str, index: Optional[List[str]] = None
) -> None:
    """Checks `data` for rows with duplicate index values.

    Args:
        data: DataFrame to check
        source: Name of the data source, used in the error.
        index: optional columns to use. If not specified, uses index from `data`.

    Raises:
        DuplicateDateError: if any index value is repeated.
    """
    if index:
        data = data.set_index(index)

    duplicates = data.index.duplicated(keep=False)
    if duplicates.any():
        raise DuplicateDateError(source, data.loc[duplicates])
