from typing import Collection

import pandas as pd
import structlog

from datapublic.common_fields import CommonFields
from libs.datasets import rate_filter

_log = structlog.get_logger()

# Value of the state column for rows that already aggregate all COVID-NET sites.
COVID_NET_AGGREGATE_STATE = "COVID-NET"

DEFAULT_EXCLUDED_STATES = (COVID_NET_AGGREGATE_STATE,)


def aggregate_by_state_and_date(data: pd.DataFrame) -> pd.DataFrame:
    """Averages the rates of rows sharing a state and date.

    Missing rates are skipped, not treated as zero. A state and date with only missing rates
    produces no row.

    Returns: DataFrame with columns STATE, DATE and STATE_HOSPITALIZATION_AVERAGE sorted by
    state then date.
    """
    missing_state = data[CommonFields.STATE].isna()
    if missing_state.any():
        _log.warning("Dropping rows without a state", dropped_rows=int(missing_state.sum()))
        data = data.loc[~missing_state]

    averages = (
        data.groupby([CommonFields.STATE, CommonFields.DATE], sort=True)[CommonFields.RATE]
        .mean()
        .dropna()
        .rename(CommonFields.STATE_HOSPITALIZATION_AVERAGE)
    )
    return averages.reset_index()


def aggregate_to_national(
    state_averages: pd.DataFrame, excluded_states: Collection[str] = DEFAULT_EXCLUDED_STATES
) -> pd.DataFrame:
    """Averages per state averages across states for each date.

    Every state counts the same regardless of population; this is an unweighted mean of means.

    Args:
        state_averages: Output of `aggregate_by_state_and_date`.
        excluded_states: Values of the state column that are not states, such as the COVID-NET
            aggregate row.

    Returns: DataFrame with columns DATE and NATIONAL_HOSPITALIZATION_AVERAGE sorted by date.
    """
    is_excluded = state_averages[CommonFields.STATE].isin(list(excluded_states))
    if is_excluded.any():
        _log.info(
            "Excluding non-state rows from national average",
            excluded_states=sorted(state_averages.loc[is_excluded, CommonFields.STATE].unique()),
            excluded_rows=int(is_excluded.sum()),
        )
    national = (
        state_averages.loc[~is_excluded]
        .groupby(CommonFields.DATE, sort=True)[CommonFields.STATE_HOSPITALIZATION_AVERAGE]
        .mean()
        .rename(CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE)
    )
    return national.reset_index()


def build_national_hospitalization(
    data: pd.DataFrame,
    min_rate: float = rate_filter.DEFAULT_MIN_RATE,
    excluded_states: Collection[str] = DEFAULT_EXCLUDED_STATES,
) -> pd.DataFrame:
    """Filters hospitalization records and aggregates them to one national value per date."""
    filtered = rate_filter.filter_rates(data, min_rate=min_rate)
    state_averages = aggregate_by_state_and_date(filtered)
    return aggregate_to_national(state_averages, excluded_states=excluded_states)
