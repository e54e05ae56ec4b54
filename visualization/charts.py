#!/usr/bin/env python3
"""
Chart generation for the dashboard.
Draws the feature-importance bar chart with seaborn on an Agg figure.
"""

import io
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.ticker import FuncFormatter

BG_COLOR = "#1f2937"
TEXT_COLOR = "#9ca3af"


def importance_figure(rows: List[dict], title: Optional[str] = None):
    """
    Horizontal bar chart of feature importances.
    
    Args:
        rows: {"label", "value", "color"} dicts sorted descending by value
        title: Optional chart title
    
    Returns:
        matplotlib Figure
    """
    df = pd.DataFrame(rows, columns=["label", "value", "color"])
    height = max(2.5, 0.45 * len(df) + 1.0)
    fig, ax = plt.subplots(figsize=(7, height))
    fig.patch.set_facecolor(BG_COLOR)
    ax.set_facecolor(BG_COLOR)

    if df.empty:
        ax.text(0.5, 0.5, "Sem dados de importância", ha="center", va="center",
                color=TEXT_COLOR, transform=ax.transAxes)
        ax.set_axis_off()
        return fig

    color = df["color"].iloc[0]
    sns.barplot(data=df, x="value", y="label", color=color, alpha=0.8, orient="h", errorbar=None, ax=ax)

    for y, value in zip(np.arange(len(df)), df["value"]):
        ax.text(value + 1, y, f"{value:.1f}%", va="center", color=TEXT_COLOR, fontsize=9)

    ax.set_xlim(0, 100)
    ax.xaxis.set_major_formatter(FuncFormatter(lambda v, _pos: f"{v:.0f}%"))
    ax.set_xlabel("")
    ax.set_ylabel("")
    ax.tick_params(colors=TEXT_COLOR, labelsize=9)
    for spine in ax.spines.values():
        spine.set_color(TEXT_COLOR)
    if title:
        ax.set_title(title, color="white")

    fig.tight_layout()
    return fig


def figure_to_png(fig, dpi: int = 200) -> bytes:
    """Render a figure to PNG bytes and close it."""
    buf = io.BytesIO()
    fig.savefig(buf, dpi=dpi, bbox_inches="tight", format="png", facecolor=fig.get_facecolor())
    plt.close(fig)
    buf.seek(0)
    return buf.read()
