#!/usr/bin/env python
"""
Entry point for the wastewater and hospitalization report CLI.

"""
import logging
import click
from datapublic import common_init

from cli import wastewater


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages.")
@click.pass_context
# Disable pylint warning as suggested by https://stackoverflow.com/a/49680253
def entry_point(ctx, verbose):  # pylint: disable=no-value-for-parameter
    """Entry point for the wastewater and hospitalization report CLI."""
    common_init.configure_logging(
        command=ctx.invoked_subcommand, level=logging.DEBUG if verbose else logging.INFO
    )


entry_point.add_command(wastewater.main)


# This code is executed when invoked as `python run.py ...`. setup.py installs the same group as
# the `wastewater-report` console script.
if __name__ == "__main__":
    try:
        entry_point()  # pylint: disable=no-value-for-parameter
    except Exception:
        logging.exception("Exception reached __main__")
        raise
