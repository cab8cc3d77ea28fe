import pytest

from storelens.sources.memory import MemorySource


@pytest.fixture
def tables():
    """
    Small deterministic snapshot covering every lifecycle status.

    seq 1, 2 ordered in January; seq 3 never ordered; seq 9 belongs to a
    registered-only store that still shows orders.
    """
    return {
        "stores": [
            {"store_id": "S1", "store_name": "Alpha", "seq": "1", "status": "QR_MENU_INSTALL",
             "owner_id": "kim@example.com", "created_at": "2023-12-01T09:00:00Z"},
            {"store_id": "S2", "store_name": "Bravo", "seq": "2", "status": "QR_MENU_INSTALL",
             "owner_id": "lee@example.com", "created_at": "2023-12-05T09:00:00Z"},
            {"store_id": "S3", "store_name": "Charlie", "seq": "3", "status": "QR_MENU_INSTALL",
             "owner_id": "kim@example.com", "created_at": "2023-12-10T09:00:00Z"},
            {"store_id": "S4", "store_name": "Delta", "seq": "4", "status": "SERVICE_TERMINATED",
             "owner_id": "kim@example.com", "created_at": "2023-11-01T09:00:00Z"},
            {"store_id": "S5", "store_name": "Echo", "seq": "5", "status": "UNUSED_TERMINATED",
             "created_at": "2023-11-02T09:00:00Z"},
            {"store_id": "S6", "store_name": "Foxtrot", "seq": "6", "status": "DEFECT_REPAIR",
             "owner_id": "lee@example.com", "created_at": "2023-11-03T09:00:00Z"},
            {"store_id": "S7", "store_name": "Golf", "status": "REGISTERED",
             "owner_id": "lee@example.com", "created_at": "2024-01-03T09:00:00Z"},
            {"store_id": "S9", "store_name": "India", "seq": "9", "status": "INSTALL_SCHEDULED",
             "owner_id": "kim@example.com", "created_at": "2023-12-20T09:00:00Z"},
        ],
        "order_stats": [
            {"seq": "1", "order_count": 40, "customer_count": 12},
            {"seq": "2", "order_count": 10, "customer_count": 4},
            {"seq": "4", "order_count": 7, "customer_count": 2},
            {"seq": "9", "order_count": 3, "customer_count": 1},
        ],
        "daily_stats": [
            {"order_date": "2024-01-01", "order_count": 6, "store_seqs": {"1", "2"}},
            {"order_date": "2024-01-02", "order_count": 2, "store_seqs": {"1"}},
            {"order_date": "2024-02-10", "order_count": 5, "store_seqs": {"9"}},
        ],
        "store_daily_orders": [
            {"seq": "1", "order_date": "2024-01-01", "order_count": 4},
            {"seq": "2", "order_date": "2024-01-01", "order_count": 2},
            {"seq": "1", "order_date": "2024-01-02", "order_count": 2},
            {"seq": "9", "order_date": "2024-02-10", "order_count": 5},
        ],
        "users": [
            {"user_id": "kim@example.com", "name": "Kim Minji"},
        ],
        "store_history": [
            {"store_id": "S1", "new_status": "QR_MENU_INSTALL", "changed_at": "2023-12-03T10:00:00Z"},
            {"store_id": "S2", "new_status": "QR_MENU_INSTALL", "changed_at": "2024-01-02T10:00:00Z"},
            {"store_id": "S3", "new_status": "QR_MENU_INSTALL", "changed_at": "2023-12-12T10:00:00Z"},
            {"store_id": "S4", "new_status": "QR_MENU_INSTALL", "changed_at": "2023-11-05T10:00:00Z"},
            {"store_id": "S4", "new_status": "SERVICE_TERMINATED", "changed_at": "2023-12-20T10:00:00Z"},
        ],
    }


@pytest.fixture
def source(tables):
    return MemorySource(tables, page_size=2)
