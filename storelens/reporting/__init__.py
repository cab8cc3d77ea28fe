from .orchestrator import (
    build_cohort,
    build_funnel_report,
    build_heatmap,
    handle_request,
)

__all__ = [
    "build_cohort",
    "build_funnel_report",
    "build_heatmap",
    "handle_request",
]
