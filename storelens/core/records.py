"""
Typed records for the backing collections.

Every ``from_item`` applies the lenient defaults once, at the source
boundary, so the engines never branch on "field exists".
"""

import json
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional

import pandas as pd

from storelens.core.dates import date_part, normalize_date

UNASSIGNED = "unassigned"
UNKNOWN_STATUS = "UNKNOWN"


# =====================================================
# FIELD COERCION
# =====================================================

def _missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (set, frozenset, list, tuple, dict)):
        return False
    return bool(pd.isna(value))


def _text(value, default: str = "") -> str:
    if _missing(value):
        return default
    text = str(value).strip()
    return text or default


def _optional_text(value) -> Optional[str]:
    text = _text(value)
    return text or None


def _count(value) -> int:
    if _missing(value) or value == "":
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _seq(value) -> str:
    if _missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _seq_set(value) -> FrozenSet[str]:
    if _missing(value):
        return frozenset()

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return frozenset()
        items = None
        if text.startswith("["):
            try:
                items = json.loads(text)
            except ValueError:
                # malformed list text, read it as a plain delimited cell
                text = text.strip("[]")
        if not isinstance(items, list):
            items = [
                v.strip().strip("\"'")
                for v in text.replace(",", "|").split("|")
            ]
    else:
        items = value

    return frozenset(s for s in (_seq(v) for v in items) if s)


# =====================================================
# RECORDS
# =====================================================

@dataclass(frozen=True)
class Store:
    store_id: str
    store_name: str = ""
    seq: str = ""
    status: str = UNKNOWN_STATUS
    owner_id: str = UNASSIGNED
    created_at: Optional[str] = None

    @property
    def created_date(self) -> Optional[str]:
        return date_part(self.created_at)

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "Store":
        return cls(
            store_id=_text(item.get("store_id")),
            store_name=_text(item.get("store_name")),
            seq=_seq(item.get("seq")),
            status=_text(item.get("status"), UNKNOWN_STATUS),
            owner_id=_text(item.get("owner_id"), UNASSIGNED),
            created_at=_optional_text(item.get("created_at")),
        )


@dataclass(frozen=True)
class Owner:
    owner_id: str
    name: str = ""

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "Owner":
        return cls(
            owner_id=_text(item.get("user_id") or item.get("owner_id")),
            name=_text(item.get("name")),
        )


@dataclass(frozen=True)
class OrderStat:
    seq: str
    order_count: int = 0
    customer_count: int = 0

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "OrderStat":
        return cls(
            seq=_seq(item.get("seq")),
            order_count=_count(item.get("order_count")),
            customer_count=_count(item.get("customer_count")),
        )


@dataclass(frozen=True)
class DailyStat:
    order_date: str
    order_count: int = 0
    store_seqs: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "DailyStat":
        return cls(
            order_date=normalize_date(_text(item.get("order_date"))) or "",
            order_count=_count(item.get("order_count")),
            store_seqs=_seq_set(item.get("store_seqs")),
        )


@dataclass(frozen=True)
class StoreDailyOrder:
    seq: str
    order_date: str
    order_count: int = 0

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "StoreDailyOrder":
        return cls(
            seq=_seq(item.get("seq")),
            order_date=normalize_date(_text(item.get("order_date"))) or "",
            order_count=_count(item.get("order_count")),
        )


@dataclass(frozen=True)
class StoreHistory:
    store_id: str
    new_status: str
    changed_at: Optional[str] = None

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "StoreHistory":
        return cls(
            store_id=_text(item.get("store_id")),
            new_status=_text(item.get("new_status"), UNKNOWN_STATUS),
            changed_at=_optional_text(item.get("changed_at")),
        )
