"""
storelens

Store lifecycle funnel, order heatmap and install cohort reporting
over a snapshot of pre-aggregated store and order tables.
"""

from .__version__ import __version__

from .config import StatusGroups, load_config
from .core import DateRange, OwnerDirectory
from .engine import (
    ActiveStoreResolver,
    CohortBuilder,
    FunnelClassifier,
    HeatmapBuilder,
    rate,
)
from .reporting import (
    build_cohort,
    build_funnel_report,
    build_heatmap,
    handle_request,
)
from .sources import DataSource, FileSource, MemorySource

__all__ = [
    "__version__",
    "StatusGroups",
    "load_config",
    "DateRange",
    "OwnerDirectory",
    "ActiveStoreResolver",
    "CohortBuilder",
    "FunnelClassifier",
    "HeatmapBuilder",
    "rate",
    "build_cohort",
    "build_funnel_report",
    "build_heatmap",
    "handle_request",
    "DataSource",
    "FileSource",
    "MemorySource",
]
