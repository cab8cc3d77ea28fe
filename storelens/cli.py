"""
storelens CLI
Funnel / heatmap / cohort reports from an exported table snapshot.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from storelens.__version__ import __version__
from storelens.config.loader import load_config
from storelens.core.dates import DateRange
from storelens.reporting.exporters import write_heatmap_csv, write_json
from storelens.reporting.orchestrator import VIEWS, handle_request
from storelens.sources.files import FileSource

logger = logging.getLogger(__name__)


# -------------------------------------------------
# PROGRAMMATIC ENTRY (CLI / scripts)
# -------------------------------------------------
def run_report(
    view: str = "funnel",
    data_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    base_date: Optional[str] = None,
    output_root: Optional[str] = None,
    png: bool = False,
) -> Dict[str, Any]:
    """
    Returns:
        {
            "success": <bool>,
            "json": <path>,
            "csv": <path or None>,
            "png": <path or None>,
            "run_dir": <path>
        }
    """
    config = load_config(config_path)
    source_cfg = config.get("source", {})

    source = FileSource(
        data_dir or source_cfg.get("path", "data"),
        page_size=int(source_cfg.get("page_size", 500)),
    )

    # heatmap without a range: trailing window ending today
    if view == "heatmap" and not (start and end):
        window = DateRange.trailing(config.get("heatmap", {}).get("default_days", 14))
        start, end = window.start, window.end

    response = handle_request(
        {
            "view": view,
            "start_date": start,
            "end_date": end,
            "base_date": base_date,
        },
        source,
        config,
    )

    run_dir = Path(output_root or config["output_dir"]) / datetime.utcnow().strftime("%Y-%m-%d_%H-%M-%S")
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Run directory: %s", run_dir)

    json_path = write_json(response, run_dir / f"{view}.json")
    csv_path = None
    png_path = None

    if response["success"]:
        data = response["data"]

        if view == "heatmap":
            csv_path = write_heatmap_csv(data, run_dir / "heatmap.csv")

        if png:
            # matplotlib is only needed for PNG output
            from storelens.reporting import visuals

            if view == "heatmap":
                png_path = visuals.order_heatmap(data, run_dir / "heatmap.png")
            elif view == "funnel":
                png_path = visuals.funnel_chart(data, run_dir / "funnel.png")

    return {
        "success": response["success"],
        "error": response.get("error"),
        "json": str(json_path),
        "csv": str(csv_path) if csv_path else None,
        "png": str(png_path) if png_path else None,
        "run_dir": str(run_dir),
    }


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=f"storelens v{__version__}"
    )

    parser.add_argument("view", nargs="?", default="funnel", choices=VIEWS)
    parser.add_argument("--data", help="Folder with exported tables (CSV/XLSX)")
    parser.add_argument("--config", required=False, help="Path to config YAML")

    parser.add_argument("--start", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (YYYY-MM-DD)")
    parser.add_argument("--base-date", help="Cohort cut-off date (YYYY-MM-DD)")

    parser.add_argument("--out", help="Output root (defaults to config output_dir)")
    parser.add_argument("--png", action="store_true", help="Also render a PNG chart")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"storelens v{__version__}")
        return 0

    # ---- LOGGING ----
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if bool(args.start) != bool(args.end):
        parser.error("--start and --end must be given together")

    result = run_report(
        view=args.view,
        data_dir=args.data,
        config_path=args.config,
        start=args.start,
        end=args.end,
        base_date=args.base_date,
        output_root=args.out,
        png=args.png,
    )

    if not result["success"]:
        print(f"\nReport failed: {result['error']}")
        print(f"Details: {result['json']}")
        return 1

    print(f"\nReport generated ({args.view})")
    print(f"JSON: {result['json']}")

    if result["csv"]:
        print(f"CSV: {result['csv']}")
    if result["png"]:
        print(f"PNG: {result['png']}")

    print(f"Run folder: {result['run_dir']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
