import pandas as pd
import structlog

from datapublic.common_fields import CommonFields

_log = structlog.get_logger()

# Rates below this are treated as reporting noise. They would pull the national average down
# disproportionately.
DEFAULT_MIN_RATE = 1.0


def filter_rates(data: pd.DataFrame, min_rate: float = DEFAULT_MIN_RATE) -> pd.DataFrame:
    """Returns the rows of `data` with a rate of at least `min_rate`.

    Rows with a missing rate are kept so that they can be skipped when averaging.

    Args:
        data: Hospitalization records with a RATE column.
        min_rate: Smallest rate that is kept.
    """
    below_min = data[CommonFields.RATE] < min_rate
    if below_min.any():
        _log.info(
            "Dropping hospitalization rates below minimum",
            min_rate=min_rate,
            dropped_rows=int(below_min.sum()),
            remaining_rows=int((~below_min).sum()),
        )
    return data.loc[~below_min].copy()
