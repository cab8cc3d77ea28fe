from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from storelens.core.dates import DateRange
from storelens.core.records import (
    DailyStat,
    OrderStat,
    Owner,
    Store,
    StoreDailyOrder,
    StoreHistory,
)


@dataclass
class Page:
    """One page of a paginated scan. ``next_token`` is None on the last page."""
    items: List[StoreDailyOrder] = field(default_factory=list)
    next_token: Optional[Any] = None


class DataSource(ABC):
    """
    Read-only access to the backing collections.

    Implementations own retries, timeouts and record coercion;
    every method returns typed records with defaults applied.
    """

    name: str = "base"

    # --------------------------------------------------
    # REQUIRED COLLECTIONS
    # --------------------------------------------------

    @abstractmethod
    def scan_stores(self) -> List[Store]:
        pass

    @abstractmethod
    def scan_order_stats(self) -> List[OrderStat]:
        pass

    @abstractmethod
    def scan_daily_stats(
        self, date_range: Optional[DateRange] = None
    ) -> List[DailyStat]:
        pass

    @abstractmethod
    def scan_store_daily_orders_page(
        self, date_range: DateRange, token: Optional[Any] = None
    ) -> Page:
        pass

    # --------------------------------------------------
    # OPTIONAL COLLECTIONS (DEFAULT EMPTY)
    # --------------------------------------------------

    def scan_users(self) -> List[Owner]:
        return []

    def scan_store_history(self) -> List[StoreHistory]:
        return []

    # --------------------------------------------------
    # DERIVED READS
    # --------------------------------------------------

    def scan_stores_by_status(self, status: str) -> List[Store]:
        return [s for s in self.scan_stores() if s.status == status]

    def iter_store_daily_orders(
        self, date_range: DateRange
    ) -> Iterator[StoreDailyOrder]:
        """
        Lazily walk every page of the store-daily-orders scan.

        Ends when the source stops returning a continuation token.
        """
        token = None
        while True:
            page = self.scan_store_daily_orders_page(date_range, token)
            yield from page.items

            token = page.next_token
            if token is None:
                break
