import copy
from pathlib import Path
from typing import Optional

import yaml

from .defaults import DEFAULT_CONFIG
from storelens.config.status_config import StatusGroups


# -------------------------------------------------
# MAIN CONFIG LOADER
# -------------------------------------------------
def load_config(path: Optional[str]) -> dict:
    """
    Load and merge user config with framework defaults.

    Rules:
    - Defaults must ALWAYS win if user omits fields
    - every section is OPTIONAL
    - output_dir MUST always exist
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value

    # -------------------------------------------------
    # 3. Enforce required invariants
    # -------------------------------------------------
    config.setdefault("output_dir", "runs")
    config.setdefault("owners", {})
    config["owners"].setdefault("unassigned", "Unassigned")

    # -------------------------------------------------
    # 4. Attach typed status groups
    # -------------------------------------------------
    config["status_groups"] = StatusGroups.from_config(config.get("statuses", {}))

    return config
