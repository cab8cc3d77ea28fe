"""
Funnel invariants that must hold for any snapshot.
"""

import pytest

from storelens.core.dates import DateRange
from storelens.core.owners import OwnerDirectory
from storelens.core.records import Store
from storelens.engine.classifier import INSTALL_BUCKETS, FunnelClassifier
from storelens.engine.conversion import overall_conversion
from storelens.engine.resolver import ActiveStoreResolver, StoreOrderStats
from storelens.reporting.orchestrator import build_funnel_report

NAMES = OwnerDirectory().name_of


# -------------------------------------------------
# Partition
# -------------------------------------------------

@pytest.mark.parametrize(
    "start, end",
    [(None, None), ("2024-01-01", "2024-01-31"), ("2023-12-01", "2023-12-08")],
)
def test_funnel_stages_nest(source, start, end):
    """
    Stage counts nest, except that ``active`` also counts ordering stores
    outside the install-completed set (the ``active_not_completed`` bucket).
    So ``active <= install_completed`` only holds for the install-completed
    part of ``active``; the full counter is bounded by ``registered``.
    """
    date_range = DateRange.optional(start, end)
    active = ActiveStoreResolver(source).resolve(date_range)
    stores = source.scan_stores()

    result = FunnelClassifier().classify(
        stores, active.active_seqs, active.stats_by_seq, NAMES, date_range=date_range
    )
    totals = result.totals

    assert totals.registered == len(stores)
    assert totals.install_completed <= totals.registered
    assert totals.churned <= totals.install_completed
    assert totals.active <= totals.registered

    detail = result.install_detail
    assert totals.active == len(detail.active) + len(detail.active_not_completed)
    assert len(detail.active) <= totals.install_completed


def test_ordering_store_outside_install_completed_is_active():
    store = Store.from_item({"store_id": "R1", "seq": "5", "status": "REGISTERED"})
    stats = {"5": StoreOrderStats(order_count=2, customer_count=1)}

    totals = FunnelClassifier().classify([store], {"5"}, stats, NAMES).totals

    assert (totals.install_completed, totals.active) == (0, 1)


def test_owner_buckets_sum_to_overall(source):
    owners = build_funnel_report(source)["owners"]

    assert sum(o["funnel"]["registered"] for o in owners) == 8
    assert sum(o["funnel"]["churned"] for o in owners) == 2


def test_store_in_at_most_one_install_bucket(source):
    active = ActiveStoreResolver(source).resolve()
    detail = FunnelClassifier().classify(
        source.scan_stores(), active.active_seqs, active.stats_by_seq, NAMES
    ).install_detail

    seen = [e.store_id for name in INSTALL_BUCKETS for e in detail.buckets[name]]
    assert len(seen) == len(set(seen))


# -------------------------------------------------
# Zero-safe rates
# -------------------------------------------------

def test_no_installs_means_zero_rates():
    stores = [Store.from_item({"store_id": "R", "seq": "1", "status": "REGISTERED"})]
    result = FunnelClassifier().classify(stores, {"1"}, {}, NAMES)

    assert result.totals.install_completed == 0
    assert overall_conversion(result.totals) == {"active_rate": 0, "churn_rate": 0}


# -------------------------------------------------
# Exclusivity of the active bucket
# -------------------------------------------------

def test_installed_and_ordering_is_only_active():
    store = Store.from_item({
        "store_id": "A",
        "seq": "1",
        "status": "QR_MENU_INSTALL",
        "created_at": "2024-01-01T00:00:00Z",
    })
    detail = FunnelClassifier().classify(
        [store], {"1"}, {"1": StoreOrderStats(3, 1)}, NAMES
    ).install_detail

    assert len(detail.active) == 1
    assert detail.inactive == []
    assert detail.active_not_completed == []


def test_terminated_store_without_orders():
    store = Store.from_item({"store_id": "T", "seq": "2", "status": "SERVICE_TERMINATED"})
    result = FunnelClassifier().classify([store], set(), {}, NAMES)

    assert result.totals.churned == 1
    assert len(result.install_detail.churned_service) == 1
    assert result.totals.install_completed == 1
    assert result.totals.active == 0
    assert overall_conversion(result.totals)["active_rate"] == 0


def test_store_without_seq_never_active():
    store = Store.from_item({"store_id": "N", "status": "QR_MENU_INSTALL"})
    result = FunnelClassifier().classify([store], {""}, {}, NAMES)

    assert result.totals.active == 0
    assert len(result.install_detail.inactive) == 1


def test_reversed_dates_match_ordered_dates(source):
    assert build_funnel_report(source, "2024-02-01", "2024-01-01") == build_funnel_report(
        source, "2024-01-01", "2024-02-01"
    )


def test_same_snapshot_same_report(source):
    assert build_funnel_report(source) == build_funnel_report(source)
