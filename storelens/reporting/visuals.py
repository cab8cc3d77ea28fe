from pathlib import Path
from typing import Any, Dict, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from storelens.reporting.exporters import heatmap_frame


def order_heatmap(data: Dict[str, Any], out) -> Optional[Path]:
    """
    Store x day order heatmap.
    Returns None when there is nothing to draw.
    """
    frame = heatmap_frame(data)
    if frame.empty or not len(frame.columns):
        return None

    out = Path(out).resolve()

    # short day labels (MM-DD)
    frame.columns = [d[5:] for d in frame.columns]

    height = max(3, 0.3 * len(frame) + 1.5)
    width = max(6, 0.45 * len(frame.columns) + 3)

    fig, ax = plt.subplots(figsize=(width, height))
    sns.heatmap(
        frame,
        annot=len(frame.columns) <= 31,
        fmt="d",
        cmap="YlGn",
        linewidths=0.5,
        cbar_kws={"label": "Orders"},
        ax=ax,
    )
    period = data.get("period") or {}
    ax.set_title(f"Daily Orders {period.get('start_date', '')} to {period.get('end_date', '')}")
    ax.set_xlabel("")
    ax.set_ylabel("")

    fig.tight_layout()
    fig.savefig(str(out), dpi=150)
    plt.close(fig)

    if out.exists() and out.stat().st_size > 0:
        return out

    return None


def funnel_chart(report: Dict[str, Any], out) -> Optional[Path]:
    """Bar chart of the overall funnel stages with conversion annotations."""
    overall = report.get("overall") or {}
    funnel = overall.get("funnel") or {}
    if not funnel.get("registered"):
        return None

    out = Path(out).resolve()

    stages = pd.DataFrame({
        "stage": ["Registered", "Install completed", "Active", "Churned"],
        "stores": [
            funnel.get("registered", 0),
            funnel.get("install_completed", 0),
            funnel.get("active", 0),
            funnel.get("churned", 0),
        ],
    })

    fig, ax = plt.subplots(figsize=(7, 4))
    sns.barplot(data=stages, x="stage", y="stores", color="#1f77b4", ax=ax)

    for i, value in enumerate(stages["stores"]):
        ax.text(i, value, f"{int(value):,}", ha="center", va="bottom", fontsize=9)

    conversion = overall.get("conversion") or {}
    ax.set_title(
        f"Store Funnel (active {conversion.get('active_rate', 0)}%, "
        f"churn {conversion.get('churn_rate', 0)}%)"
    )
    ax.set_xlabel("")
    ax.set_ylabel("Stores")
    ax.grid(axis="y", linestyle="--", alpha=0.4)

    fig.tight_layout()
    fig.savefig(str(out), dpi=150)
    plt.close(fig)

    if out.exists() and out.stat().st_size > 0:
        return out

    return None
