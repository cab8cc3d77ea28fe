import json

import pytest

from storelens.config.loader import load_config
from storelens.reporting.orchestrator import (
    build_funnel_report,
    build_heatmap,
    handle_request,
)
from storelens.sources.memory import MemorySource


class BrokenSource(MemorySource):
    def scan_order_stats(self):
        raise ConnectionError("order stats table unavailable")


# -------------------------------------------------
# Funnel payload
# -------------------------------------------------

def test_funnel_payload_all_time(source):
    report = build_funnel_report(source)
    overall = report["overall"]

    assert report["filter"] is None
    assert overall["total_stores"] == 8
    assert overall["total_order_count"] == 60
    assert overall["total_customer_count"] == 19
    assert overall["funnel"] == {
        "registered": 8,
        "install_completed": 6,
        "active": 4,
        "churned": 2,
    }
    assert overall["conversion"] == {"active_rate": 66.7, "churn_rate": 33.3}
    assert overall["churned"] == 2


def test_funnel_payload_owners(source):
    owners = {o["owner_id"]: o for o in build_funnel_report(source)["owners"]}

    assert owners["kim@example.com"]["owner_name"] == "Kim Minji"
    assert owners["kim@example.com"]["conversion"] == {
        "register_to_install": 75.0,
        "install_to_active": 100.0,
    }
    assert owners["lee@example.com"]["conversion"] == {
        "register_to_install": 66.7,
        "install_to_active": 50.0,
    }
    assert owners["unassigned"]["owner_name"] == "unassigned"


def test_funnel_payload_first_install_dates(source):
    detail = build_funnel_report(source)["overall"]["install_detail"]

    assert detail["active"][0]["first_install_completed_at"] == "2023-12-03T10:00:00Z"
    assert detail["repair"][0]["first_install_completed_at"] is None


def test_funnel_filter_is_swapped(source):
    report = build_funnel_report(source, "2024-01-31", "2024-01-01")

    assert report["filter"] == {"start_date": "2024-01-01", "end_date": "2024-01-31"}
    assert report["overall"]["total_order_count"] == 8


def test_funnel_payload_is_json_serializable(source):
    json.dumps(build_funnel_report(source, "2024-01-01", "2024-01-31"))


def test_funnel_owner_names_ignore_configured_table(source):
    """
    The funnel names owners from user records, then the email local part.
    The configured owner table only labels heatmap owners.
    """
    config = load_config(None)
    config["owners"]["lee@example.com"] = "Lee Jun"

    owners = {o["owner_id"]: o for o in build_funnel_report(source, config=config)["owners"]}

    assert owners["lee@example.com"]["owner_name"] == "lee"
    assert owners["unassigned"]["owner_name"] == "unassigned"


# -------------------------------------------------
# Heatmap
# -------------------------------------------------

def test_heatmap_requires_both_dates(source):
    with pytest.raises(ValueError):
        build_heatmap(source, "2024-01-01", None)


def test_heatmap_owner_names_come_from_configured_table(source):
    """
    Heatmap owners use the configured table, then the email local part.
    User records are not consulted.
    """
    config = load_config(None)
    config["owners"]["lee@example.com"] = "Lee Jun"

    heatmap = build_heatmap(source, "2024-01-01", "2024-01-03", config=config)

    assert heatmap.owners == [
        {"id": "lee@example.com", "name": "Lee Jun"},
        {"id": "kim@example.com", "name": "kim"},
    ]


# -------------------------------------------------
# Request envelope
# -------------------------------------------------

def test_default_view_is_funnel(source):
    response = handle_request({}, source)

    assert response["success"] is True
    assert "install_detail" in response["data"]["overall"]


def test_heatmap_view(source):
    response = handle_request(
        {"view": "heatmap", "start_date": "2024-01-01", "end_date": "2024-01-03"},
        source,
    )

    assert response["success"] is True
    assert response["data"]["dates"] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [row["total"] for row in response["data"]["stores"]] == [6, 2, 0]


def test_heatmap_view_without_dates_fails(source):
    response = handle_request({"view": "heatmap"}, source)

    assert response == {
        "success": False,
        "error": "heatmap view requires both start_date and end_date",
    }


def test_cohort_view(source):
    response = handle_request({"view": "cohort", "base_date": "2024-01-31"}, source)

    assert response["success"] is True
    assert response["data"]["summary"]["total_installed"] == 4


def test_unknown_view(source):
    response = handle_request({"view": "sankey"}, source)

    assert response["success"] is False
    assert "sankey" in response["error"]


def test_source_failure_becomes_error_envelope(tables):
    """
    Upstream read failures are not retried or partially reported.
    """
    response = handle_request({}, BrokenSource(tables))

    assert response == {"success": False, "error": "order stats table unavailable"}
