from typing import Any, Dict, List

from storelens.engine.classifier import FunnelCounts, FunnelResult


def rate(numerator, denominator) -> float:
    """Percentage rounded to one decimal; 0 when the denominator is 0."""
    if not denominator:
        return 0
    return round(numerator / denominator * 100, 1)


def overall_conversion(totals: FunnelCounts) -> Dict[str, float]:
    return {
        "active_rate": rate(totals.active, totals.install_completed),
        "churn_rate": rate(totals.churned, totals.install_completed),
    }


def owner_conversion(funnel: FunnelCounts) -> Dict[str, float]:
    return {
        "register_to_install": rate(funnel.install_completed, funnel.registered),
        "install_to_active": rate(funnel.active, funnel.install_completed),
    }


def owner_rows(result: FunnelResult) -> List[Dict[str, Any]]:
    """Per-owner funnel + conversion, in first-seen owner order."""
    rows = []
    for owner in result.owner_stats.values():
        rows.append({
            "owner_id": owner.owner_id,
            "owner_name": owner.owner_name,
            "stats": dict(owner.stats),
            "funnel": {
                "registered": owner.funnel.registered,
                "install_completed": owner.funnel.install_completed,
                "active": owner.funnel.active,
                "churned": owner.funnel.churned,
            },
            "conversion": owner_conversion(owner.funnel),
        })
    return rows
