import pandas as pd

from datapublic.common_fields import CommonFields

MONTHLY_AVERAGED_FIELDS = [
    CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE,
    CommonFields.NATIONAL_WASTEWATER_LEVEL,
]


def resample_monthly(joined: pd.DataFrame) -> pd.DataFrame:
    """Averages the joined weekly series within each calendar month.

    Weekly points count equally; the mean is not weighted by the number of days of the week
    that fall in the month.

    Args:
        joined: DataFrame with a DATE column and the MONTHLY_AVERAGED_FIELDS columns.

    Returns: DataFrame with one row per month, DATE set to the first day of the month, the
    averaged fields and an OBSERVATION_COUNT of weekly points in the month. Sorted by date.
    """
    months = joined[CommonFields.DATE].dt.to_period("M").dt.to_timestamp()
    grouped = joined.groupby(months.rename(CommonFields.DATE), sort=True)
    monthly = grouped[MONTHLY_AVERAGED_FIELDS].mean()
    monthly[CommonFields.OBSERVATION_COUNT] = grouped.size()
    return monthly.reset_index()
