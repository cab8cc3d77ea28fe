import json
from pathlib import Path
from typing import Any, Dict

import pandas as pd


def heatmap_frame(data: Dict[str, Any]) -> pd.DataFrame:
    """
    Store x date matrix from a heatmap payload, rows kept in heatmap order.
    """
    dates = list(data.get("dates") or [])
    rows = data.get("stores") or []

    return pd.DataFrame(
        [[int(row["orders"].get(d, 0)) for d in dates] for row in rows],
        columns=dates,
        index=pd.Index([r.get("store_name") or r["seq"] for r in rows], name="store"),
        dtype="int64",
    )


def write_json(payload: Dict[str, Any], out) -> Path:
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)

    with open(out, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    return out


def write_heatmap_csv(data: Dict[str, Any], out) -> Path:
    """Heatmap matrix plus a trailing ``total`` column."""
    out = Path(out)
    out.parent.mkdir(parents=True, exist_ok=True)

    frame = heatmap_frame(data)
    frame["total"] = [int(row.get("total", 0)) for row in data.get("stores") or []]
    frame.to_csv(out, encoding="utf-8")

    return out
