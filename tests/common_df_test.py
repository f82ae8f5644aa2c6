import io

import pandas as pd
import structlog

from datapublic import common_df
from datapublic.common_fields import CommonFields
from libs.metrics.wastewater_levels import WastewaterCategory


def test_write_csv(tmp_path):
    df = pd.DataFrame(
        {
            CommonFields.WASTEWATER_CATEGORY: [WastewaterCategory.LOW, WastewaterCategory.VERY_HIGH],
            CommonFields.NATIONAL_WASTEWATER_LEVEL: [2.0, 8.25],
            CommonFields.DATE: pd.to_datetime(["2023-01-14", "2023-01-07"]),
        }
    )
    path = tmp_path / "out.csv"
    common_df.write_csv(df, path, structlog.get_logger())

    assert path.read_text() == (
        "date,national_wastewater_level,wastewater_category\n"
        "2023-01-07,8.25,Very High\n"
        "2023-01-14,2,Low\n"
    )



def test_write_csv_multiple_index_columns(tmp_path):
    df = pd.DataFrame(
        {
            CommonFields.RATE: [3.5, 1.0, 2.0],
            CommonFields.DATE: pd.to_datetime(["2023-01-07", "2023-01-14", "2023-01-07"]),
            CommonFields.STATE: ["Utah", "Ohio", "Ohio"],
        }
    )
    path = tmp_path / "out.csv"
    common_df.write_csv(
        df, path, structlog.get_logger(), index_names=[CommonFields.STATE, CommonFields.DATE]
    )

    assert path.read_text() == (
        "state,date,rate\n" "Ohio,2023-01-07,2\n" "Ohio,2023-01-14,1\n" "Utah,2023-01-07,3.5\n"
    )

def test_read_csv_missing_values():
    df = common_df.read_csv(io.StringIO("state,rate\nOhio,NA\n Ohio ,\nUtah,2.5\n"))
    df = common_df.strip_whitespace(df)

    assert list(df["state"]) == ["Ohio", "Ohio", "Utah"]
    assert df["rate"].isna().tolist() == [True, True, False]
    assert df["rate"].iloc[2] == "2.5"
