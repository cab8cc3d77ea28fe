import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from storelens.config.status_config import StatusGroups
from storelens.core.dates import DateRange
from storelens.core.owners import OwnerDirectory
from storelens.core.records import Store, StoreDailyOrder

logger = logging.getLogger(__name__)


@dataclass
class HeatmapRow:
    seq: str
    store_id: str
    store_name: str
    owner_id: str
    orders: Dict[str, int] = field(default_factory=dict)
    total: int = 0

    def to_dict(self):
        return {
            "seq": self.seq,
            "store_id": self.store_id,
            "store_name": self.store_name,
            "owner_id": self.owner_id,
            "orders": dict(self.orders),
            "total": self.total,
        }


@dataclass
class Heatmap:
    period: DateRange
    dates: List[str] = field(default_factory=list)
    rows: List[HeatmapRow] = field(default_factory=list)
    owners: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self):
        return {
            "period": self.period.as_dict(),
            "dates": list(self.dates),
            "stores": [r.to_dict() for r in self.rows],
            "owners": [dict(o) for o in self.owners],
        }


class HeatmapBuilder:
    """
    Dense per-day order counts for every fully installed store.

    Stores without a single order in the range still get a row
    (total 0) so the heatmap always covers the whole installed fleet.
    """

    def __init__(
        self,
        status_groups: Optional[StatusGroups] = None,
        owners: Optional[OwnerDirectory] = None,
    ):
        self.groups = status_groups or StatusGroups()
        self.owners = owners or OwnerDirectory()

    def build(
        self,
        date_range: DateRange,
        stores: Iterable[Store],
        store_daily_orders: Iterable[StoreDailyOrder],
    ) -> Heatmap:

        # -------------------------------------------------
        # 1. Installed stores keyed by seq
        # -------------------------------------------------
        store_map: Dict[str, Store] = {}
        owner_map: Dict[str, str] = {}

        for store in stores:
            if store.status != self.groups.fully_installed or not store.seq:
                continue
            store_map[store.seq] = store
            if store.owner_id not in owner_map:
                owner_map[store.owner_id] = self.owners.name_of(store.owner_id)

        # -------------------------------------------------
        # 2. seq -> date -> count over every page
        # -------------------------------------------------
        orders_by_store: Dict[str, Dict[str, int]] = {}
        scanned = 0

        for item in store_daily_orders:
            scanned += 1
            if not date_range.contains(item.order_date):
                continue
            orders_by_store.setdefault(item.seq, {})[item.order_date] = item.order_count

        # -------------------------------------------------
        # 3. Full calendar, zero days included
        # -------------------------------------------------
        dates = date_range.days()

        # -------------------------------------------------
        # 4. One dense row per installed store
        # -------------------------------------------------
        rows = []
        for seq, store in store_map.items():
            date_orders = orders_by_store.get(seq, {})
            orders = {d: date_orders.get(d, 0) for d in dates}
            rows.append(HeatmapRow(
                seq=seq,
                store_id=store.store_id,
                store_name=store.store_name,
                owner_id=store.owner_id,
                orders=orders,
                total=sum(orders.values()),
            ))

        # stable sort, idle stores sink to the bottom
        rows.sort(key=lambda r: r.total, reverse=True)

        owners = sorted(
            ({"id": oid, "name": name} for oid, name in owner_map.items()),
            key=lambda o: o["name"],
        )

        logger.info(
            "Heatmap %s..%s: %d stores x %d days (%d daily rows scanned)",
            date_range.start,
            date_range.end,
            len(rows),
            len(dates),
            scanned,
        )
        return Heatmap(period=date_range, dates=dates, rows=rows, owners=owners)
