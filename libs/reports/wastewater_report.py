from typing import List, Optional
import datetime
import enum
import pathlib

import matplotlib.pyplot as plt
import pandas as pd
import pydantic
import structlog

from datapublic import common_df
from datapublic.common_fields import CommonFields
from libs import base_model
from libs.metrics.correlation import CorrelationResult
from libs.pipelines.wastewater_pipeline import PipelineResult
from libs.reports import plotting

_log = structlog.get_logger()


class ReportFile(enum.Enum):
    NATIONAL_HOSPITALIZATIONS = "national_hospitalizations.csv"
    JOINED = "joined.csv"
    MONTHLY = "monthly.csv"
    CORRELATION_JSON = "correlation.json"
    CORRELATION_TEXT = "correlation.txt"
    WEEKLY_TRENDS_CHART = "weekly_trends.png"
    MONTHLY_TRENDS_CHART = "monthly_trends.png"
    CORRELATION_CHART = "correlation.png"

    def path(self, output_dir: pathlib.Path) -> pathlib.Path:
        return output_dir / self.value


class CorrelationSummary(base_model.APIBaseModel):
    """Pearson correlation between the national hospitalization average and the national
    wastewater level over the dates present in both series."""

    method: str = pydantic.Field(..., description="Name of the test.")
    alternative: str = pydantic.Field(..., description="Alternative hypothesis of the test.")
    coefficient: float = pydantic.Field(..., description="Pearson correlation coefficient.")
    confidenceLevel: float = pydantic.Field(..., description="Confidence level of the interval.")
    confidenceInterval: List[float] = pydantic.Field(
        ..., description="Lower and upper bound of the confidence interval of the coefficient."
    )
    pValue: float = pydantic.Field(..., description="Two-sided p-value.")
    tStatistic: Optional[float] = pydantic.Field(
        ..., description="t statistic. null when the correlation is perfect."
    )
    degreesOfFreedom: int = pydantic.Field(..., description="Degrees of freedom of the t test.")
    observationCount: int = pydantic.Field(..., description="Number of paired weekly values.")
    startDate: Optional[datetime.date] = pydantic.Field(..., description="First joined date.")
    endDate: Optional[datetime.date] = pydantic.Field(..., description="Last joined date.")
    minRate: float = pydantic.Field(..., description="Smallest hospitalization rate kept.")
    excludedStates: List[str] = pydantic.Field(
        ..., description="State values excluded from the national average."
    )

    @staticmethod
    def from_result(result: PipelineResult) -> "CorrelationSummary":
        stats: CorrelationResult = result.correlation
        dates = result.joined[CommonFields.DATE]
        return CorrelationSummary(
            method=stats.method,
            alternative=stats.alternative,
            coefficient=stats.coefficient,
            confidenceLevel=stats.confidence_level,
            confidenceInterval=list(stats.confidence_interval),
            pValue=stats.p_value,
            tStatistic=stats.t_statistic,
            degreesOfFreedom=stats.degrees_of_freedom,
            observationCount=stats.observation_count,
            startDate=dates.min().date() if len(dates) else None,
            endDate=dates.max().date() if len(dates) else None,
            minRate=result.config.min_rate,
            excludedStates=list(result.config.excluded_states),
        )


def format_correlation_table(stats: CorrelationResult) -> str:
    """Formats the correlation test as a two column table of statistic and value."""
    low, high = stats.confidence_interval
    rows = [
        ("Method", stats.method),
        ("Alternative hypothesis", f"true correlation is not equal to 0 ({stats.alternative})"),
        ("Correlation coefficient", f"{stats.coefficient:.4f}"),
        (
            f"{stats.confidence_level:.0%} confidence interval",
            f"[{low:.4f}, {high:.4f}]",
        ),
        ("t", f"{stats.t_statistic:.4f}"),
        ("Degrees of freedom", str(stats.degrees_of_freedom)),
        ("p-value", f"{stats.p_value:.4g}"),
        ("Observations", str(stats.observation_count)),
    ]
    table = pd.DataFrame(rows, columns=["Statistic", "Value"])
    return table.to_string(index=False, justify="left")


def _save_figure(fig: plt.Figure, path: pathlib.Path) -> None:
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)


def write_report(
    result: PipelineResult, output_dir: pathlib.Path, include_plots: bool = True
) -> List[pathlib.Path]:
    """Writes CSVs, the correlation summary and optionally charts to `output_dir`.

    Returns: Paths of the files written.
    """
    log = _log.bind(output_dir=str(output_dir))
    output_dir.mkdir(parents=True, exist_ok=True)

    common_df.write_csv(
        result.national_hospitalization, ReportFile.NATIONAL_HOSPITALIZATIONS.path(output_dir), log
    )
    common_df.write_csv(result.joined, ReportFile.JOINED.path(output_dir), log)
    common_df.write_csv(result.monthly, ReportFile.MONTHLY.path(output_dir), log)

    summary = CorrelationSummary.from_result(result)
    ReportFile.CORRELATION_JSON.path(output_dir).write_text(summary.model_dump_json(indent=2))
    ReportFile.CORRELATION_TEXT.path(output_dir).write_text(
        format_correlation_table(result.correlation) + "\n"
    )
    written = [
        ReportFile.NATIONAL_HOSPITALIZATIONS,
        ReportFile.JOINED,
        ReportFile.MONTHLY,
        ReportFile.CORRELATION_JSON,
        ReportFile.CORRELATION_TEXT,
    ]

    if include_plots:
        _save_figure(
            plotting.plot_weekly_trends(result.joined),
            ReportFile.WEEKLY_TRENDS_CHART.path(output_dir),
        )
        _save_figure(
            plotting.plot_monthly_trends(result.monthly),
            ReportFile.MONTHLY_TRENDS_CHART.path(output_dir),
        )
        _save_figure(
            plotting.plot_correlation(result.joined, result.correlation.coefficient),
            ReportFile.CORRELATION_CHART.path(output_dir),
        )
        written += [
            ReportFile.WEEKLY_TRENDS_CHART,
            ReportFile.MONTHLY_TRENDS_CHART,
            ReportFile.CORRELATION_CHART,
        ]

    log.info("Wrote report", files=[report_file.value for report_file in written])
    return [report_file.path(output_dir) for report_file in written]
