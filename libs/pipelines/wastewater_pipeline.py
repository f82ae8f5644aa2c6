from dataclasses import dataclass
from typing import Optional
from typing import Tuple
import pathlib

import pandas as pd
import structlog

from libs import series_utils
from libs import timing_utils
from libs.datasets import national_aggregation
from libs.datasets import rate_filter
from libs.datasets import wastewater_join
from libs.datasets.sources.hospitalization_rates import HospitalizationRatesSource
from libs.datasets.sources.wastewater_levels import WastewaterLevelsSource
from libs.metrics import correlation
from libs.metrics import wastewater_levels

_log = structlog.get_logger()

CorrelationResult = correlation.CorrelationResult


@dataclass(frozen=True)
class PipelineConfig:
    """Analytical choices applied by the pipeline.

    Attributes:
        min_rate: Hospitalization rates below this are dropped before averaging.
        excluded_states: Values of the state column that are aggregates, not states.
        hospitalization_date_format: Format of the hospitalization week ending date.
        wastewater_date_format: Format of the wastewater date.
        confidence_level: Confidence level of the correlation interval.
    """

    min_rate: float = rate_filter.DEFAULT_MIN_RATE
    excluded_states: Tuple[str, ...] = national_aggregation.DEFAULT_EXCLUDED_STATES
    hospitalization_date_format: str = HospitalizationRatesSource.DEFAULT_DATE_FORMAT
    wastewater_date_format: str = WastewaterLevelsSource.DEFAULT_DATE_FORMAT
    confidence_level: float = correlation.DEFAULT_CONFIDENCE_LEVEL


@dataclass(frozen=True, eq=False)  # DataFrames don't support ==
class PipelineResult:
    # Columns DATE, NATIONAL_HOSPITALIZATION_AVERAGE
    national_hospitalization: pd.DataFrame
    # Columns DATE, NATIONAL_WASTEWATER_LEVEL
    wastewater: pd.DataFrame
    # Columns DATE, NATIONAL_HOSPITALIZATION_AVERAGE, NATIONAL_WASTEWATER_LEVEL, WASTEWATER_CATEGORY
    joined: pd.DataFrame
    # Columns DATE, NATIONAL_HOSPITALIZATION_AVERAGE, NATIONAL_WASTEWATER_LEVEL, OBSERVATION_COUNT
    monthly: pd.DataFrame
    correlation: CorrelationResult
    config: PipelineConfig


class WastewaterHospitalizationPipeline:
    """Loads, aligns and correlates the hospitalization and wastewater series.

    Every stage returns a new DataFrame; inputs are never modified.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()

    def load_hospitalization(self, path: pathlib.Path) -> pd.DataFrame:
        return HospitalizationRatesSource.load(
            path, date_format=self.config.hospitalization_date_format
        )

    def load_wastewater(self, path: pathlib.Path) -> pd.DataFrame:
        return WastewaterLevelsSource.load(path, date_format=self.config.wastewater_date_format)

    def build_national_hospitalization(self, hospitalization: pd.DataFrame) -> pd.DataFrame:
        return national_aggregation.build_national_hospitalization(
            hospitalization,
            min_rate=self.config.min_rate,
            excluded_states=self.config.excluded_states,
        )

    def join(self, national_hospitalization: pd.DataFrame, wastewater: pd.DataFrame) -> pd.DataFrame:
        joined = wastewater_join.join_national_series(national_hospitalization, wastewater)
        return wastewater_levels.add_wastewater_category(joined)

    def run_from_frames(
        self, hospitalization: pd.DataFrame, wastewater: pd.DataFrame
    ) -> PipelineResult:
        """Runs every stage after loading on already loaded source DataFrames."""
        with timing_utils.time("aggregate hospitalizations"):
            national_hospitalization = self.build_national_hospitalization(hospitalization)
        with timing_utils.time("join"):
            joined = self.join(national_hospitalization, wastewater)
        monthly = series_utils.resample_monthly(joined)
        _log.info(
            "Joined national series",
            hospitalization_dates=len(national_hospitalization),
            wastewater_dates=len(wastewater),
            joined_dates=len(joined),
            months=len(monthly),
        )
        result = correlation.calculate_correlation_from_joined(
            joined, confidence_level=self.config.confidence_level
        )
        _log.info(
            "Calculated correlation",
            coefficient=result.coefficient,
            p_value=result.p_value,
            observation_count=result.observation_count,
        )
        return PipelineResult(
            national_hospitalization=national_hospitalization,
            wastewater=wastewater,
            joined=joined,
            monthly=monthly,
            correlation=result,
            config=self.config,
        )

    def run(
        self,
        hospitalization_path: pathlib.Path,
        wastewater_path: pathlib.Path,
    ) -> PipelineResult:
        with timing_utils.time("load sources"):
            hospitalization = self.load_hospitalization(hospitalization_path)
            wastewater = self.load_wastewater(wastewater_path)
        return self.run_from_frames(hospitalization, wastewater)
