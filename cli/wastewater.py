from typing import Tuple
import functools
import logging
import pathlib

import click

from libs.datasets import dataset_utils
from libs.pipelines.wastewater_pipeline import PipelineConfig
from libs.pipelines.wastewater_pipeline import WastewaterHospitalizationPipeline
from libs.reports import wastewater_report

_logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = PipelineConfig()

_INPUT_PATH = click.Path(exists=True, dir_okay=False, path_type=pathlib.Path)


@click.group("wastewater")
def main():
    pass


def pipeline_options(func):
    """Adds the input paths and the PipelineConfig options to a command."""

    @click.argument("hospitalization_csv", type=_INPUT_PATH)
    @click.argument("wastewater_csv", type=_INPUT_PATH)
    @click.option(
        "--min-rate",
        type=float,
        default=_DEFAULT_CONFIG.min_rate,
        show_default=True,
        help="Hospitalization rates below this are dropped before averaging.",
    )
    @click.option(
        "--excluded-state",
        "excluded_states",
        type=str,
        multiple=True,
        default=_DEFAULT_CONFIG.excluded_states,
        show_default=True,
        help="State value that is an aggregate row, not a state. May be repeated.",
    )
    @click.option(
        "--hospitalization-date-format",
        default=_DEFAULT_CONFIG.hospitalization_date_format,
        show_default=True,
        help="strptime format of the week ending date.",
    )
    @click.option(
        "--wastewater-date-format",
        default=_DEFAULT_CONFIG.wastewater_date_format,
        show_default=True,
        help="strptime format of the wastewater date, or ISO8601.",
    )
    @click.option(
        "--confidence-level",
        type=click.FloatRange(0, 1, min_open=True, max_open=True),
        default=_DEFAULT_CONFIG.confidence_level,
        show_default=True,
        help="Confidence level of the correlation coefficient interval.",
    )
    @functools.wraps(func)
    def wrapper(
        hospitalization_csv: pathlib.Path,
        wastewater_csv: pathlib.Path,
        min_rate: float,
        excluded_states: Tuple[str, ...],
        hospitalization_date_format: str,
        wastewater_date_format: str,
        confidence_level: float,
        **kwargs,
    ):
        config = PipelineConfig(
            min_rate=min_rate,
            excluded_states=tuple(excluded_states),
            hospitalization_date_format=hospitalization_date_format,
            wastewater_date_format=wastewater_date_format,
            confidence_level=confidence_level,
        )
        pipeline = WastewaterHospitalizationPipeline(config)
        return func(pipeline, hospitalization_csv, wastewater_csv, **kwargs)

    return wrapper


@main.command()
@pipeline_options
@click.option(
    "--output-dir",
    "-o",
    type=pathlib.Path,
    default=dataset_utils.REPORT_OUTPUT_DIRECTORY,
    show_default=True,
)
@click.option("--plots/--no-plots", is_flag=True, default=True, help="Write the PNG charts.")
def run(
    pipeline: WastewaterHospitalizationPipeline,
    hospitalization_csv: pathlib.Path,
    wastewater_csv: pathlib.Path,
    output_dir: pathlib.Path,
    plots: bool,
):
    """Builds the joined national series, correlates them and writes the report."""
    result = pipeline.run(hospitalization_csv, wastewater_csv)
    _logger.info("Writing report...")
    wastewater_report.write_report(result, output_dir, include_plots=plots)
    click.echo(wastewater_report.format_correlation_table(result.correlation))


@main.command()
@pipeline_options
def correlate(
    pipeline: WastewaterHospitalizationPipeline,
    hospitalization_csv: pathlib.Path,
    wastewater_csv: pathlib.Path,
):
    """Prints the correlation test between the national series without writing files."""
    result = pipeline.run(hospitalization_csv, wastewater_csv)
    click.echo(wastewater_report.format_correlation_table(result.correlation))
