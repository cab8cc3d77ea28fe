from .loader import load_config
from .defaults import DEFAULT_CONFIG
from .status_config import StatusGroups

__all__ = [
    "load_config",
    "DEFAULT_CONFIG",
    "StatusGroups",
]
