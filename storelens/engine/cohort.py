import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional

from storelens.config.status_config import StatusGroups
from storelens.core.records import OrderStat, Store, StoreHistory

logger = logging.getLogger(__name__)

STATE_LABELS = {
    "active": "Active",
    "inactive": "Inactive",
    "churned": "Churned",
}


def first_install_dates(
    history: Iterable[StoreHistory], fully_installed: str
) -> Dict[str, str]:
    """Earliest transition into the fully installed status, per store_id."""
    first: Dict[str, str] = {}
    for item in history:
        if item.new_status != fully_installed or not item.changed_at:
            continue
        current = first.get(item.store_id)
        if current is None or item.changed_at < current:
            first[item.store_id] = item.changed_at
    return first


@dataclass(frozen=True)
class CohortStore:
    store_id: str
    store_name: str
    seq: str
    status: str
    install_date: str
    is_active: bool
    is_churned: bool


@dataclass
class CohortMonth:
    month: str
    total: int = 0
    active: int = 0
    inactive: int = 0
    churned: int = 0
    stores: List[CohortStore] = field(default_factory=list)


@dataclass
class CohortReport:
    base_date: str
    months: List[CohortMonth] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)
    sankey: Dict[str, list] = field(default_factory=dict)

    def to_dict(self):
        return {
            "base_date": self.base_date,
            "summary": dict(self.summary),
            "monthly": [asdict(m) for m in self.months],
            "sankey": self.sankey,
        }


class CohortBuilder:
    """
    Groups installed stores by the month they were first fully installed
    and splits each month into active / inactive / churned.

    Churn wins over activity: a terminated store that once ordered
    counts as churned.
    """

    def __init__(self, status_groups: Optional[StatusGroups] = None, recent_months: int = 6):
        self.groups = status_groups or StatusGroups()
        self.recent_months = recent_months

    def build(
        self,
        base_date: str,
        stores: Iterable[Store],
        history: Iterable[StoreHistory],
        order_stats: Iterable[OrderStat],
    ) -> CohortReport:
        store_map = {s.store_id: s for s in stores}
        installs = first_install_dates(history, self.groups.fully_installed)
        active_seqs = {s.seq for s in order_stats if s.seq and s.order_count > 0}
        cutoff = f"{base_date}T23:59:59.999Z"

        monthly: Dict[str, CohortMonth] = {}

        for store_id, install_date in installs.items():
            store = store_map.get(store_id)
            if store is None or install_date > cutoff:
                continue

            month_key = install_date[:7]
            month = monthly.setdefault(month_key, CohortMonth(month=month_key))
            month.total += 1

            is_active = bool(store.seq) and store.seq in active_seqs
            is_churned = self.groups.is_churned(store.status)

            if is_churned:
                month.churned += 1
            elif is_active:
                month.active += 1
            else:
                month.inactive += 1

            month.stores.append(CohortStore(
                store_id=store_id,
                store_name=store.store_name,
                seq=store.seq,
                status=store.status,
                install_date=install_date,
                is_active=is_active,
                is_churned=is_churned,
            ))

        recent = sorted(monthly, reverse=True)[:self.recent_months]
        months = [monthly[m] for m in recent]

        summary = {
            "total_installed": sum(m.total for m in monthly.values()),
            "total_active": sum(m.active for m in monthly.values()),
            "total_inactive": sum(m.inactive for m in monthly.values()),
            "total_churned": sum(m.churned for m in monthly.values()),
        }

        logger.info(
            "Cohort as of %s: %d months, %d installed stores",
            base_date,
            len(monthly),
            summary["total_installed"],
        )
        return CohortReport(
            base_date=base_date,
            months=months,
            summary=summary,
            sankey=self._sankey(months),
        )

    def _sankey(self, months: List[CohortMonth]) -> Dict[str, list]:
        nodes = [{"name": f"{m.month[5:]} installs ({m.total})"} for m in months]

        state_index = {}
        for state, label in STATE_LABELS.items():
            state_index[state] = len(nodes)
            nodes.append({"name": label})

        links = []
        for source, m in enumerate(months):
            for state in STATE_LABELS:
                value = getattr(m, state)
                if value > 0:
                    links.append({"source": source, "target": state_index[state], "value": value})

        return {"nodes": nodes, "links": links}
