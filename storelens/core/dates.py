"""
Date helpers.

All dates inside the engine are ``YYYY-MM-DD`` strings so that range
filters can compare them lexicographically, the same way the backing
tables do.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

import pandas as pd
from dateutil.relativedelta import relativedelta


def normalize_date(value) -> Optional[str]:
    """
    Normalize a loosely formatted date to ``YYYY-MM-DD``.

    Accepts ``2024.3.1``, ``2024-3-1``, ``2024-03-01`` and date objects.
    A time component after ``T`` or a space is dropped, so spreadsheet
    cells such as ``2024-03-01 00:00:00`` keep their calendar day.
    Values that do not split into three parts are returned unchanged.
    """
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")

    text = str(value).strip()
    if not text:
        return None
    text = text.replace("T", " ").split(" ")[0]

    parts = text.replace(".", "-").split("-")
    if len(parts) == 3:
        return f"{parts[0]}-{parts[1].zfill(2)}-{parts[2].zfill(2)}"
    return text.replace(".", "-")


def date_part(timestamp: Optional[str]) -> Optional[str]:
    """Calendar date of a timestamp (``2024-01-01T09:00:00Z`` -> ``2024-01-01``)."""
    if not timestamp:
        return None
    return str(timestamp).replace("T", " ").split(" ")[0]


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str

    @classmethod
    def between(cls, start, end) -> "DateRange":
        """Inclusive range, bounds swapped when given in reverse order."""
        start, end = normalize_date(start), normalize_date(end)
        if start > end:
            start, end = end, start
        return cls(start=start, end=end)

    @classmethod
    def optional(cls, start, end) -> Optional["DateRange"]:
        """A range only when both bounds are present, otherwise ``None``."""
        if not start or not end:
            return None
        return cls.between(start, end)

    @classmethod
    def trailing(cls, days: int, today: Optional[date] = None) -> "DateRange":
        today = today or date.today()
        return cls.between(today - relativedelta(days=days), today)

    def contains(self, day: Optional[str]) -> bool:
        return day is not None and self.start <= day <= self.end

    def days(self) -> List[str]:
        return [d.strftime("%Y-%m-%d") for d in pd.date_range(self.start, self.end, freq="D")]

    def as_dict(self):
        return {"start_date": self.start, "end_date": self.end}
