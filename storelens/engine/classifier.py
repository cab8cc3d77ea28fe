import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from storelens.config.status_config import StatusGroups
from storelens.core.dates import DateRange
from storelens.core.records import Store
from storelens.engine.resolver import StoreOrderStats

logger = logging.getLogger(__name__)

INSTALL_BUCKETS = (
    "active",
    "inactive",
    "churned_service",
    "churned_unused",
    "repair",
    "pending",
)
BUCKETS = INSTALL_BUCKETS + ("active_not_completed",)


# =====================================================
# RESULT TYPES
# =====================================================

@dataclass
class FunnelCounts:
    registered: int = 0
    install_completed: int = 0
    active: int = 0
    churned: int = 0


@dataclass
class OwnerFunnel:
    owner_id: str
    owner_name: str
    stats: Dict[str, int] = field(default_factory=dict)
    funnel: FunnelCounts = field(default_factory=FunnelCounts)


@dataclass(frozen=True)
class StoreEntry:
    store_id: str
    store_name: str
    seq: str
    owner_id: str
    owner_name: str
    status: str
    created_at: Optional[str]
    first_install_completed_at: Optional[str]
    has_order: bool
    order_count: int
    customer_count: int


@dataclass
class InstallDetail:
    buckets: Dict[str, List[StoreEntry]] = field(
        default_factory=lambda: {name: [] for name in BUCKETS}
    )

    def __getattr__(self, name):
        # detail.active, detail.inactive, ...
        if name in BUCKETS:
            return self.buckets[name]
        raise AttributeError(name)

    def add(self, bucket: str, entry: StoreEntry):
        self.buckets[bucket].append(entry)

    def summary(self) -> Dict[str, int]:
        return {name: len(entries) for name, entries in self.buckets.items()}

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            name: [asdict(e) for e in entries]
            for name, entries in self.buckets.items()
        }
        out["summary"] = self.summary()
        return out


@dataclass
class FunnelResult:
    overall_stats: Dict[str, int] = field(default_factory=dict)
    owner_stats: Dict[str, OwnerFunnel] = field(default_factory=dict)
    totals: FunnelCounts = field(default_factory=FunnelCounts)
    install_detail: InstallDetail = field(default_factory=InstallDetail)


# =====================================================
# CLASSIFIER
# =====================================================

class FunnelClassifier:
    """
    Assigns every store to its funnel stages and install-detail bucket.

    Tallies per status, per owner and overall. Every store is
    "registered"; at most one install-detail bucket holds a store.
    """

    def __init__(self, status_groups: Optional[StatusGroups] = None):
        self.groups = status_groups or StatusGroups()

    def classify(
        self,
        stores: Iterable[Store],
        active_seqs: Set[str],
        stats_by_seq: Mapping[str, StoreOrderStats],
        owner_name_of: Callable[[str], str],
        date_range: Optional[DateRange] = None,
        install_dates: Optional[Mapping[str, str]] = None,
    ) -> FunnelResult:
        result = FunnelResult()
        install_dates = install_dates or {}

        for store in stores:
            status = store.status
            owner_id = store.owner_id
            seq = store.seq
            has_order = bool(seq) and seq in active_seqs

            owner = result.owner_stats.get(owner_id)
            if owner is None:
                owner = OwnerFunnel(owner_id=owner_id, owner_name=owner_name_of(owner_id))
                result.owner_stats[owner_id] = owner

            result.overall_stats[status] = result.overall_stats.get(status, 0) + 1
            owner.stats[status] = owner.stats.get(status, 0) + 1

            result.totals.registered += 1
            owner.funnel.registered += 1

            stats = stats_by_seq.get(seq, StoreOrderStats()) if has_order else StoreOrderStats()
            entry = StoreEntry(
                store_id=store.store_id,
                store_name=store.store_name,
                seq=seq,
                owner_id=owner_id,
                owner_name=owner.owner_name,
                status=status,
                created_at=store.created_at,
                first_install_completed_at=install_dates.get(store.store_id),
                has_order=has_order,
                order_count=stats.order_count,
                customer_count=stats.customer_count,
            )

            if self.groups.is_install_completed(status):
                result.totals.install_completed += 1
                owner.funnel.install_completed += 1

                bucket = self._install_bucket(store, has_order, date_range)
                if bucket:
                    result.install_detail.add(bucket, entry)

            elif has_order:
                result.install_detail.add("active_not_completed", entry)

            if has_order:
                result.totals.active += 1
                owner.funnel.active += 1

            if self.groups.is_churned(status):
                result.totals.churned += 1
                owner.funnel.churned += 1

        logger.info(
            "Classified %d stores: %d install-completed, %d active, %d churned",
            result.totals.registered,
            result.totals.install_completed,
            result.totals.active,
            result.totals.churned,
        )
        return result

    def _install_bucket(
        self,
        store: Store,
        has_order: bool,
        date_range: Optional[DateRange],
    ) -> Optional[str]:
        g = self.groups
        status = store.status

        if status == g.fully_installed:
            if has_order:
                return "active"
            # too new to have ordered inside the window
            created = store.created_date
            if date_range is None or not created or created <= date_range.end:
                return "inactive"
            return None

        if status == g.churned_service:
            return "churned_service"
        if status == g.churned_unused:
            return "churned_unused"
        if status == g.repair:
            return "repair"
        if status == g.pending:
            return "pending"
        return None
