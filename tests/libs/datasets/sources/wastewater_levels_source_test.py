import io

import pandas as pd
import pytest
import structlog

from datapublic.common_fields import CommonFields
from libs.datasets import dataset_utils
from libs.datasets.sources.wastewater_levels import WastewaterLevelsSource
from tests import test_helpers


def test_load_keeps_only_national_level():
    buf = test_helpers.wastewater_csv(
        [("2023-01-14 00:00:00", "2.25"), ("2023-01-07 00:00:00", "1.5")]
    )
    data = WastewaterLevelsSource.load(buf)

    assert list(data.columns) == [CommonFields.DATE, CommonFields.NATIONAL_WASTEWATER_LEVEL]
    assert list(data[CommonFields.DATE]) == [pd.Timestamp("2023-01-07"), pd.Timestamp("2023-01-14")]
    assert list(data[CommonFields.NATIONAL_WASTEWATER_LEVEL]) == [1.5, 2.25]


def test_load_drops_missing_national_level():
    buf = test_helpers.wastewater_csv(
        [("2023-01-07 00:00:00", "1.5"), ("2023-01-14 00:00:00", "")]
    )
    with structlog.testing.capture_logs() as logs:
        data = WastewaterLevelsSource.load(buf)

    assert list(data[CommonFields.DATE]) == [pd.Timestamp("2023-01-07")]
    warnings = [log for log in logs if log["log_level"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["dropped_dates"] == ["2023-01-14"]


def test_load_duplicate_dates():
    buf = test_helpers.wastewater_csv(
        [("2023-01-07 00:00:00", "1.5"), ("2023-01-07 12:00:00", "1.7")]
    )
    with pytest.raises(dataset_utils.DuplicateDateError):
        WastewaterLevelsSource.load(buf)


def test_load_missing_region_column():
    buf = io.StringIO(
        "date,date_period,National,Midwest,Northeast,South\n"
        "2023-01-07 00:00:00,week,1.5,1,1,1\n"
    )
    with pytest.raises(dataset_utils.MissingColumnsError) as excinfo:
        WastewaterLevelsSource.load(buf)

    assert excinfo.value.missing_columns == ["West"]


def test_load_missing_date_period_column():
    buf = io.StringIO(
        "date,National,Midwest,Northeast,South,West\n" "2023-01-07 00:00:00,1.5,1,1,1,1\n"
    )
    with pytest.raises(dataset_utils.MissingColumnsError) as excinfo:
        WastewaterLevelsSource.load(buf)

    assert excinfo.value.missing_columns == ["date_period"]


def test_load_keeps_local_date_of_offset():
    buf = test_helpers.wastewater_csv(
        [("2023-01-07T23:00:00-05:00", "1.5"), ("2023-01-14T23:00:00-05:00", "2.5")]
    )
    data = WastewaterLevelsSource.load(buf)

    assert list(data[CommonFields.DATE]) == list(test_helpers.weekly_dates(2))


def test_load_malformed_date():
    buf = test_helpers.wastewater_csv([("Jan 7 2023", "1.5")])
    with pytest.raises(dataset_utils.DateParseError):
        WastewaterLevelsSource.load(buf)
