import sqlite3

import pytest

from contact_desk.adapters.kv.sqlite_store import SQLiteKeyValueStore
from contact_desk.domain.errors import StoreError


@pytest.fixture
def kv(db_path):
    return SQLiteKeyValueStore(db_path)


def test_set_get_delete(kv):
    kv.set("user_entry:u1:e1", {"id": "e1", "name": "Ada"})

    assert kv.get("user_entry:u1:e1") == {"id": "e1", "name": "Ada"}

    kv.set("user_entry:u1:e1", {"id": "e1", "name": "Grace"})
    assert kv.get("user_entry:u1:e1") == {"id": "e1", "name": "Grace"}

    kv.delete("user_entry:u1:e1")
    assert kv.get("user_entry:u1:e1") is None


def test_delete_missing_key_is_noop(kv):
    kv.delete("nope")


def test_prefix_scan_is_exact(kv):
    kv.set("user_entry:u1:a", {"id": "a"})
    kv.set("user_entry:u1:b", {"id": "b"})
    kv.set("user_entry:u10:c", {"id": "c"})
    kv.set("USER_ENTRY:u1:d", {"id": "d"})
    kv.set("entry_owner:a", {"userId": "u1"})

    assert [r["id"] for r in kv.get_by_prefix("user_entry:u1:")] == ["a", "b"]
    assert [r["id"] for r in kv.get_by_prefix("user_entry:")] == ["a", "b", "c"]


def test_prefix_scan_treats_wildcards_literally(kv):
    kv.set("user_entry:u_1:a", {"id": "a"})
    kv.set("user_entry:ux1:b", {"id": "b"})
    kv.set("user_entry:100%:c", {"id": "c"})

    assert [r["id"] for r in kv.get_by_prefix("user_entry:u_1:")] == ["a"]
    assert [r["id"] for r in kv.get_by_prefix("user_entry:100%")] == ["c"]


def test_missing_table_raises_store_error(kv, db_path):
    conn = sqlite3.connect(db_path)
    conn.execute("DROP TABLE kv_store")
    conn.commit()
    conn.close()

    with pytest.raises(StoreError):
        kv.get("k")
    with pytest.raises(StoreError):
        kv.set("k", {})
    with pytest.raises(StoreError):
        kv.get_by_prefix("k")
