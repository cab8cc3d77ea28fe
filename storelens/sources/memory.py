from typing import Any, Dict, Iterable, List, Mapping, Optional

from storelens.core.dates import DateRange
from storelens.core.records import (
    DailyStat,
    OrderStat,
    Owner,
    Store,
    StoreDailyOrder,
    StoreHistory,
)
from storelens.sources.base import DataSource, Page

COLLECTIONS = (
    "stores",
    "order_stats",
    "daily_stats",
    "store_daily_orders",
    "users",
    "store_history",
)


class MemorySource(DataSource):
    """
    Data source over in-memory raw items (dicts, as a document store
    would return them).

    ``page_size`` controls how many raw items one page of the
    store-daily-orders scan examines; the date filter is applied per
    page, so a page may come back with fewer items than ``page_size``.
    """

    name = "memory"

    def __init__(
        self,
        tables: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None,
        page_size: int = 500,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")

        tables = tables or {}
        unknown = set(tables) - set(COLLECTIONS)
        if unknown:
            raise ValueError(f"Unknown collections: {sorted(unknown)}")

        self.tables: Dict[str, List[Mapping[str, Any]]] = {
            name: list(tables.get(name) or []) for name in COLLECTIONS
        }
        self.page_size = page_size

    def scan_stores(self) -> List[Store]:
        return [Store.from_item(i) for i in self.tables["stores"]]

    def scan_order_stats(self) -> List[OrderStat]:
        return [OrderStat.from_item(i) for i in self.tables["order_stats"]]

    def scan_daily_stats(self, date_range: Optional[DateRange] = None) -> List[DailyStat]:
        rows = [DailyStat.from_item(i) for i in self.tables["daily_stats"]]
        if date_range is None:
            return rows
        return [r for r in rows if date_range.contains(r.order_date)]

    def scan_store_daily_orders_page(
        self, date_range: DateRange, token: Optional[Any] = None
    ) -> Page:
        offset = int(token or 0)
        raw = self.tables["store_daily_orders"][offset:offset + self.page_size]

        items = []
        for item in raw:
            row = StoreDailyOrder.from_item(item)
            if date_range.contains(row.order_date):
                items.append(row)

        next_offset = offset + self.page_size
        has_more = next_offset < len(self.tables["store_daily_orders"])
        return Page(items=items, next_token=next_offset if has_more else None)

    def scan_users(self) -> List[Owner]:
        return [Owner.from_item(i) for i in self.tables["users"]]

    def scan_store_history(self) -> List[StoreHistory]:
        return [StoreHistory.from_item(i) for i in self.tables["store_history"]]
