import io
import pathlib
from typing import Mapping
from typing import Optional
from typing import Sequence

import pandas as pd

from datapublic.common_fields import CommonFields
from libs.datasets.sources.hospitalization_rates import HospitalizationRatesSource
from libs.datasets.sources.wastewater_levels import WastewaterLevelsSource


DEFAULT_START_DATE = "2023-01-07"

HospitalizationFields = HospitalizationRatesSource.Fields
WastewaterFields = WastewaterLevelsSource.Fields


def weekly_dates(count: int, start_date: str = DEFAULT_START_DATE) -> pd.DatetimeIndex:
    """Creates `count` week ending dates, one week apart."""
    return pd.date_range(start_date, periods=count, freq="7D")


def build_hospitalization_df(
    rates_by_state: Mapping[str, Sequence[Optional[float]]],
    start_date: str = DEFAULT_START_DATE,
) -> pd.DataFrame:
    """Builds hospitalization records with one row per state and week, like a loaded source."""
    rows = []
    for state, rates in rates_by_state.items():
        for date, rate in zip(weekly_dates(len(rates), start_date), rates):
            rows.append({CommonFields.STATE: state, CommonFields.DATE: date, CommonFields.RATE: rate})
    return pd.DataFrame(rows, columns=[CommonFields.STATE, CommonFields.DATE, CommonFields.RATE])


def build_wastewater_df(
    levels: Sequence[Optional[float]], start_date: str = DEFAULT_START_DATE
) -> pd.DataFrame:
    return pd.DataFrame(
        {
            CommonFields.DATE: weekly_dates(len(levels), start_date),
            CommonFields.NATIONAL_WASTEWATER_LEVEL: pd.Series(levels, dtype=float).to_numpy(),
        }
    )


def build_joined_df(
    hospitalization: Sequence[float],
    wastewater: Sequence[float],
    dates: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    if dates is None:
        dates = weekly_dates(len(hospitalization))
    return pd.DataFrame(
        {
            CommonFields.DATE: pd.to_datetime(list(dates)),
            CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE: pd.Series(
                hospitalization, dtype=float
            ).to_numpy(),
            CommonFields.NATIONAL_WASTEWATER_LEVEL: pd.Series(wastewater, dtype=float).to_numpy(),
        }
    )


def hospitalization_csv(rows: Sequence[Sequence[str]]) -> io.StringIO:
    """Returns a buffer with a hospitalization CSV of (State, Week.ending.date, Rate) rows."""
    lines = [
        ",".join(
            [HospitalizationFields.STATE, HospitalizationFields.WEEK_ENDING_DATE, HospitalizationFields.RATE]
        )
    ]
    lines += [",".join(row) for row in rows]
    return io.StringIO("\n".join(lines) + "\n")


def wastewater_csv(rows: Sequence[Sequence[str]]) -> io.StringIO:
    """Returns a buffer with a wastewater CSV of (date, National) rows. Regional columns are
    filled with a constant."""
    header = [
        WastewaterFields.DATE,
        WastewaterFields.DATE_PERIOD,
        WastewaterFields.NATIONAL,
        *WastewaterLevelsSource.REGION_FIELDS,
    ]
    lines = [",".join(header)]
    for date, national in rows:
        regions = ["2.5"] * len(WastewaterLevelsSource.REGION_FIELDS)
        lines.append(",".join([date, f"week of {date[:10]}", national, *regions]))
    return io.StringIO("\n".join(lines) + "\n")


# Rates for five weeks starting 2023-01-07. The national average is [3, 5, 7, 9, 11].
SAMPLE_HOSPITALIZATION_ROWS = [
    ("California", "2023-01-07", "2"),
    ("California", "2023-01-07", "0.5"),
    ("California", "2023-01-14", "4"),
    ("California", "2023-01-21", "6"),
    ("California", "2023-01-28", "8"),
    ("California", "2023-02-04", "10"),
    ("New York", "2023-01-07", "4"),
    ("New York", "2023-01-14", "6"),
    ("New York", "2023-01-21", "8"),
    ("New York", "2023-01-28", "10"),
    ("New York", "2023-02-04", "12"),
    ("COVID-NET", "2023-01-07", "100"),
    ("COVID-NET", "2023-01-14", "100"),
    ("COVID-NET", "2023-01-21", "100"),
    ("COVID-NET", "2023-01-28", "100"),
    ("COVID-NET", "2023-02-04", "100"),
]

# Wastewater has no row for 2023-02-04 and an extra row for 2023-02-11, so four dates join.
SAMPLE_WASTEWATER_ROWS = [
    ("2023-01-07 00:00:00", "1.0"),
    ("2023-01-14 00:00:00", "2.0"),
    ("2023-01-21 00:00:00", "3.5"),
    ("2023-01-28 00:00:00", "5.0"),
    ("2023-02-11 00:00:00", "9.0"),
]


def write_sample_csvs(directory: pathlib.Path):
    """Writes the sample CSVs to `directory` and returns the hospitalization and wastewater paths."""
    hospitalization_path = directory / "hospitalization.csv"
    wastewater_path = directory / "wastewater.csv"
    hospitalization_path.write_text(hospitalization_csv(SAMPLE_HOSPITALIZATION_ROWS).getvalue())
    wastewater_path.write_text(wastewater_csv(SAMPLE_WASTEWATER_ROWS).getvalue())
    return hospitalization_path, wastewater_path
