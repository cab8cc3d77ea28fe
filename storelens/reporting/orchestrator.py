"""
Report orchestration
--------------------
Wires a data source into the engines and shapes JSON-ready payloads.

Rules:
- engines never catch source failures
- handle_request is the ONLY place errors become an error envelope
- no partial results: a request fully succeeds or fully fails
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional

from storelens.config.defaults import DEFAULT_CONFIG
from storelens.config.status_config import StatusGroups
from storelens.core.dates import DateRange
from storelens.core.owners import OwnerDirectory
from storelens.engine.classifier import FunnelClassifier
from storelens.engine.cohort import CohortBuilder, CohortReport, first_install_dates
from storelens.engine.conversion import overall_conversion, owner_rows
from storelens.engine.heatmap import Heatmap, HeatmapBuilder
from storelens.engine.resolver import ActiveStoreResolver
from storelens.sources.base import DataSource
from storelens.utils.logger import get_logger

log = get_logger("orchestrator")

VIEWS = ("funnel", "heatmap", "cohort")


# =====================================================
# CONFIG HELPERS
# =====================================================

def _config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return config if config is not None else DEFAULT_CONFIG


def _status_groups(config: Dict[str, Any]) -> StatusGroups:
    groups = config.get("status_groups")
    if isinstance(groups, StatusGroups):
        return groups
    return StatusGroups.from_config(config.get("statuses", {}))


# =====================================================
# FUNNEL
# =====================================================

def build_funnel_report(
    source: DataSource,
    start: Optional[str] = None,
    end: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Funnel report for all time, or for ``start..end`` when both are given.

    In range mode, per-store and customer figures are lifetime values
    for the stores active inside the range.
    """
    config = _config(config)
    groups = _status_groups(config)
    date_range = DateRange.optional(start, end)

    active = ActiveStoreResolver(source).resolve(date_range)

    stores = source.scan_stores()
    # funnel names come from user records only
    owners = OwnerDirectory(users=source.scan_users())
    install_dates = first_install_dates(
        source.scan_store_history(), groups.fully_installed
    )

    result = FunnelClassifier(groups).classify(
        stores,
        active.active_seqs,
        active.stats_by_seq,
        owners.name_of,
        date_range=date_range,
        install_dates=install_dates,
    )

    totals = result.totals
    return {
        "filter": date_range.as_dict() if date_range else None,
        "overall": {
            "stats": dict(result.overall_stats),
            "total_stores": totals.registered,
            "total_order_count": active.total_order_count,
            "total_customer_count": active.total_customer_count,
            "funnel": {
                "registered": totals.registered,
                "install_completed": totals.install_completed,
                "active": totals.active,
                "churned": totals.churned,
            },
            "conversion": overall_conversion(totals),
            "churned": totals.churned,
            "install_detail": result.install_detail.to_dict(),
        },
        "owners": owner_rows(result),
    }


# =====================================================
# HEATMAP
# =====================================================

def build_heatmap(
    source: DataSource,
    start: Optional[str],
    end: Optional[str],
    config: Optional[Dict[str, Any]] = None,
) -> Heatmap:
    if not start or not end:
        raise ValueError("heatmap view requires both start_date and end_date")

    config = _config(config)
    groups = _status_groups(config)
    date_range = DateRange.between(start, end)

    stores = source.scan_stores_by_status(groups.fully_installed)
    builder = HeatmapBuilder(groups, OwnerDirectory(config.get("owners")))

    return builder.build(
        date_range,
        stores,
        source.iter_store_daily_orders(date_range),
    )


# =====================================================
# COHORT
# =====================================================

def build_cohort(
    source: DataSource,
    base_date: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> CohortReport:
    config = _config(config)
    base_date = base_date or date.today().isoformat()
    recent_months = config.get("cohort", {}).get("recent_months", 6)

    builder = CohortBuilder(_status_groups(config), recent_months=recent_months)
    return builder.build(
        base_date,
        source.scan_stores(),
        source.scan_store_history(),
        source.scan_order_stats(),
    )


# =====================================================
# REQUEST ENTRY
# =====================================================

def handle_request(
    params: Optional[Mapping[str, Any]],
    source: DataSource,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Single entry point for callers (HTTP layer, CLI).

    params: view, start_date, end_date, base_date (all optional).
    Returns {"success": True, "data": ...} or
    {"success": False, "error": <message>}.
    """
    params = params or {}
    view = params.get("view") or "funnel"
    start = params.get("start_date")
    end = params.get("end_date")

    try:
        if view not in VIEWS:
            raise ValueError(f"Unknown view '{view}' (expected one of {', '.join(VIEWS)})")

        if view == "heatmap":
            data = build_heatmap(source, start, end, config).to_dict()
        elif view == "cohort":
            data = build_cohort(source, params.get("base_date"), config).to_dict()
        else:
            data = build_funnel_report(source, start, end, config)

    except Exception as exc:
        log.exception("Report request failed (view=%s)", view)
        return {"success": False, "error": str(exc)}

    return {"success": True, "data": data}
