from .classifier import FunnelClassifier, FunnelResult
from .cohort import CohortBuilder, CohortReport, first_install_dates
from .conversion import owner_conversion, overall_conversion, rate
from .heatmap import Heatmap, HeatmapBuilder, HeatmapRow
from .resolver import ActiveStoreResolver, ActiveStoreSet, StoreOrderStats

__all__ = [
    "FunnelClassifier",
    "FunnelResult",
    "CohortBuilder",
    "CohortReport",
    "first_install_dates",
    "owner_conversion",
    "overall_conversion",
    "rate",
    "Heatmap",
    "HeatmapBuilder",
    "HeatmapRow",
    "ActiveStoreResolver",
    "ActiveStoreSet",
    "StoreOrderStats",
]
