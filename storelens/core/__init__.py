from .dates import DateRange, normalize_date
from .owners import OwnerDirectory
from .records import (
    DailyStat,
    OrderStat,
    Owner,
    Store,
    StoreDailyOrder,
    StoreHistory,
)

__all__ = [
    "DateRange",
    "normalize_date",
    "OwnerDirectory",
    "DailyStat",
    "OrderStat",
    "Owner",
    "Store",
    "StoreDailyOrder",
    "StoreHistory",
]
