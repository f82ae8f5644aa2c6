import pandas as pd
import structlog

from datapublic.common_fields import CommonFields

_log = structlog.get_logger()


def _format_dates(dates: pd.Index) -> list:
    return [date.strftime("%Y-%m-%d") for date in dates.sort_values()]


def join_national_series(
    national_hospitalization: pd.DataFrame, wastewater: pd.DataFrame
) -> pd.DataFrame:
    """Inner joins the national hospitalization and wastewater series on date.

    Dates present in only one of the inputs are dropped, which can truncate the range of dates
    available to later stages. Regional wastewater columns are not carried over.

    Returns: DataFrame with columns DATE, NATIONAL_HOSPITALIZATION_AVERAGE and
    NATIONAL_WASTEWATER_LEVEL sorted by date.
    """
    hospitalization_dates = pd.Index(national_hospitalization[CommonFields.DATE])
    wastewater_dates = pd.Index(wastewater[CommonFields.DATE])
    only_hospitalization = hospitalization_dates.difference(wastewater_dates)
    only_wastewater = wastewater_dates.difference(hospitalization_dates)
    if not only_hospitalization.empty or not only_wastewater.empty:
        _log.info(
            "Dropping dates not present in both series",
            hospitalization_only_count=len(only_hospitalization),
            wastewater_only_count=len(only_wastewater),
            hospitalization_only=_format_dates(only_hospitalization),
            wastewater_only=_format_dates(only_wastewater),
        )

    joined = pd.merge(
        national_hospitalization[[CommonFields.DATE, CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE]],
        wastewater[[CommonFields.DATE, CommonFields.NATIONAL_WASTEWATER_LEVEL]],
        on=CommonFields.DATE,
        how="inner",
        validate="one_to_one",
    )
    return joined.sort_values(CommonFields.DATE).reset_index(drop=True)
