import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from datapublic.common_fields import CommonFields
from libs.metrics.wastewater_levels import WastewaterCategory

HOSPITALIZATION_COLOR = "firebrick"
WASTEWATER_COLOR = "steelblue"

CATEGORY_COLORS = {
    WastewaterCategory.MINIMAL: "#2c7bb6",
    WastewaterCategory.LOW: "#abd9e9",
    WastewaterCategory.MODERATE: "#fdae61",
    WastewaterCategory.HIGH: "#f46d43",
    WastewaterCategory.VERY_HIGH: "#d7191c",
}


def _plot_two_series(df: pd.DataFrame, title: str) -> plt.Figure:
    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(
        df[CommonFields.DATE],
        df[CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE],
        color=HOSPITALIZATION_COLOR,
        label="Hospitalization rate (national average)",
    )
    ax.set_ylabel("Hospitalizations per 100k", color=HOSPITALIZATION_COLOR)

    # Wastewater levels are on a different scale so get their own axis.
    ax_wastewater = ax.twinx()
    ax_wastewater.plot(
        df[CommonFields.DATE],
        df[CommonFields.NATIONAL_WASTEWATER_LEVEL],
        color=WASTEWATER_COLOR,
        label="Wastewater viral activity level",
    )
    ax_wastewater.set_ylabel("Wastewater viral activity level", color=WASTEWATER_COLOR)

    lines = ax.get_lines() + ax_wastewater.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc="upper left")
    ax.grid(True, which="both", alpha=0.4)
    ax.set_title(title, fontsize=16)
    fig.autofmt_xdate(rotation=30)
    return fig


def plot_weekly_trends(joined: pd.DataFrame) -> plt.Figure:
    return _plot_two_series(joined, "COVID-19 hospitalizations and wastewater levels by week")


def plot_monthly_trends(monthly: pd.DataFrame) -> plt.Figure:
    return _plot_two_series(monthly, "Monthly average hospitalizations and wastewater levels")


def plot_correlation(joined: pd.DataFrame, coefficient: float) -> plt.Figure:
    """Scatter of hospitalization rate against wastewater level, coloured by category, with the
    least squares line."""
    fig, ax = plt.subplots(figsize=(10, 6))
    x = joined[CommonFields.NATIONAL_WASTEWATER_LEVEL]
    y = joined[CommonFields.NATIONAL_HOSPITALIZATION_AVERAGE]

    for category in WastewaterCategory:
        in_category = joined[CommonFields.WASTEWATER_CATEGORY] == category
        if not in_category.any():
            continue
        ax.scatter(
            x[in_category],
            y[in_category],
            s=25,
            alpha=0.8,
            color=CATEGORY_COLORS[category],
            label=category.value,
        )

    slope, intercept = np.polyfit(x, y, 1)
    x_line = np.linspace(x.min(), x.max(), 100)
    ax.plot(x_line, slope * x_line + intercept, color="black", linestyle="--", label="Linear fit")

    ax.set_xlabel("Wastewater viral activity level")
    ax.set_ylabel("Hospitalizations per 100k")
    ax.set_title(f"Hospitalizations vs wastewater levels (r = {coefficient:.3f})", fontsize=16)
    ax.grid(True, alpha=0.4)
    ax.legend(title="Wastewater category")
    return fig
