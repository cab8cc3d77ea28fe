import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from storelens.core.dates import DateRange
from storelens.sources.base import DataSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreOrderStats:
    order_count: int = 0
    customer_count: int = 0


@dataclass
class ActiveStoreSet:
    active_seqs: Set[str] = field(default_factory=set)
    stats_by_seq: Dict[str, StoreOrderStats] = field(default_factory=dict)
    total_order_count: int = 0
    total_customer_count: int = 0

    def stats_for(self, seq: str) -> StoreOrderStats:
        return self.stats_by_seq.get(seq, StoreOrderStats())


class ActiveStoreResolver:
    """
    Works out which stores count as "active" for a query window.

    Without a range, every store with lifetime order stats is active.
    With a range, activity comes from the daily stats inside the range,
    while per-store and customer figures still come from the lifetime
    order stats of those stores.
    """

    def __init__(self, source: DataSource):
        self.source = source

    def resolve(self, date_range: Optional[DateRange] = None) -> ActiveStoreSet:
        if date_range is None:
            result = self._resolve_all_time()
        else:
            result = self._resolve_range(date_range)

        logger.info(
            "Resolved %d active stores (orders=%d, customers=%d)",
            len(result.active_seqs),
            result.total_order_count,
            result.total_customer_count,
        )
        return result

    # -------------------------------------------------
    # ALL TIME
    # -------------------------------------------------
    def _resolve_all_time(self) -> ActiveStoreSet:
        result = ActiveStoreSet()

        for stat in self.source.scan_order_stats():
            result.total_order_count += stat.order_count
            result.total_customer_count += stat.customer_count

            if not stat.seq:
                continue

            result.active_seqs.add(stat.seq)
            result.stats_by_seq[stat.seq] = StoreOrderStats(
                order_count=stat.order_count,
                customer_count=stat.customer_count,
            )

        return result

    # -------------------------------------------------
    # DATE RANGE
    # -------------------------------------------------
    def _resolve_range(self, date_range: DateRange) -> ActiveStoreSet:
        result = ActiveStoreSet()

        daily = self.source.scan_daily_stats(date_range)
        for day in daily:
            # sources may hand back unfiltered rows
            if not date_range.contains(day.order_date):
                continue
            result.active_seqs.update(day.store_seqs)
            result.total_order_count += day.order_count

        logger.debug(
            "Daily stats %s..%s: %d rows", date_range.start, date_range.end, len(daily)
        )

        # lifetime figures for stores active inside the window
        for stat in self.source.scan_order_stats():
            if stat.seq not in result.active_seqs:
                continue
            result.stats_by_seq[stat.seq] = StoreOrderStats(
                order_count=stat.order_count,
                customer_count=stat.customer_count,
            )
            result.total_customer_count += stat.customer_count

        return result
