import enum

import pandas as pd

from datapublic import common_fields
from datapublic.common_fields import CommonFields


def test_check_str_enum_names_match_values():
    cls: enum.Enum = CommonFields
    mismatches = [val for val in cls if val.name.lower() != val.value]
    if mismatches:
        suggestion = "\n".join(f"    {v.name} = {repr(v.name.lower())}" for v in mismatches)
        print(f"fix for enum name and value mismatches in {cls}:\n{suggestion}")
    assert mismatches == []


def test_common_fields_are_plain_str():
    assert str(CommonFields.RATE) == "rate"
    assert CommonFields.RATE == "rate"
    assert CommonFields("rate") is CommonFields.RATE

    df = pd.DataFrame({CommonFields.DATE: ["2023-01-07"], CommonFields.RATE: [1.0]})
    assert [row._fields for row in df.itertuples(index=False)] == [("date", "rate")]


def test_common_fields_order():
    assert common_fields.COMMON_FIELDS_ORDER_MAP[CommonFields.DATE] == 0
    assert (
        common_fields.COMMON_FIELDS_ORDER_MAP[CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE]
        < common_fields.COMMON_FIELDS_ORDER_MAP[CommonFields.NATIONAL_WASTEWATER_LEVEL]
    )
