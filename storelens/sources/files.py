from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from storelens.sources.memory import COLLECTIONS, MemorySource
from storelens.utils.logger import get_logger

log = get_logger("file-source")

SUPPORTED_EXT = (".csv", ".xlsx")
REQUIRED = ("stores", "order_stats", "daily_stats", "store_daily_orders")


def _read_table(path: Path) -> List[Dict[str, Any]]:
    if path.suffix.lower() == ".xlsx":
        df = pd.read_excel(path, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str)

    # NaN for blank cells is handled by record coercion; xlsx date
    # cells arrive as "YYYY-MM-DD HH:MM:SS" and keep only the day
    return df.to_dict(orient="records")


def _find_table(folder: Path, name: str):
    for ext in SUPPORTED_EXT:
        candidate = folder / f"{name}{ext}"
        if candidate.exists():
            return candidate
    return None


class FileSource(MemorySource):
    """
    Snapshot of the backing collections exported as one CSV/XLSX file
    per collection (``stores.csv``, ``order_stats.csv``, ...).

    ``store_seqs`` cells may hold ``1|2|3`` or a JSON list.
    ``users`` and ``store_history`` are optional.
    """

    name = "files"

    def __init__(self, folder: str, page_size: int = 500):
        folder = Path(folder)
        if not folder.is_dir():
            raise FileNotFoundError(f"Data folder not found: {folder}")

        tables = {}
        for name in COLLECTIONS:
            path = _find_table(folder, name)
            if path is None:
                if name in REQUIRED:
                    raise FileNotFoundError(
                        f"Missing table '{name}' in {folder} "
                        f"(expected one of {', '.join(name + e for e in SUPPORTED_EXT)})"
                    )
                continue

            tables[name] = _read_table(path)
            log.info("Loaded %s: %d rows", path.name, len(tables[name]))

        super().__init__(tables, page_size=page_size)
        self.folder = folder
