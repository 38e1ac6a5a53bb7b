import pytest

from irishub.sdk.store import Context, Event, EventManager, KVStore


def test_set_get_delete():
    store = KVStore()
    store.set(b"\x00a", b"value")
    assert store.get(b"\x00a") == b"value"
    assert store.has(b"\x00a")
    store.delete(b"\x00a")
    assert store.get(b"\x00a") is None
    assert not store.has(b"\x00a")


def test_delete_missing_key_is_quiet():
    store = KVStore()
    store.delete(b"absent")
    assert len(store) == 0


def test_empty_key_rejected():
    with pytest.raises(ValueError):
        KVStore().set(b"", b"value")


def test_none_value_rejected():
    with pytest.raises(ValueError):
        KVStore().set(b"k", None)


def test_iterate_prefix_sorted_and_filtered():
    store = KVStore()
    keys = [b"\x00c", b"\x01a", b"\x00a", b"\x00b"]
    for key in keys:
        store.set(key, key + b"!")
    pairs = list(store.iterate_prefix(b"\x00"))
    assert [key for key, _ in pairs] == sorted(k for k in keys if k.startswith(b"\x00"))
    assert all(value == key + b"!" for key, value in pairs)


def test_iteration_survives_deletion():
    store = KVStore()
    for key in (b"\x00a", b"\x00b"):
        store.set(key, b"v")
    for key, _ in store.iterate_prefix(b"\x00"):
        store.delete(key)
    assert len(store) == 0


def test_event_manager_collects_in_order():
    manager = EventManager()
    first = Event("mint", [("mint_coin", "5")])
    second = Event("message", [("module", "mint")])
    manager.emit(first)
    manager.emit_events([second])
    assert manager.events == (first, second)
    assert dict(manager.events[0].attributes) == {"mint_coin": "5"}


def test_context_stores_shared_across_copies():
    ctx = Context(chain_id="irishub-1")
    ctx.kv_store("guardian").set(b"\x00k", b"v")
    other = ctx.with_chain_id("irishub-2")
    assert other.chain_id == "irishub-2"
    assert ctx.chain_id == "irishub-1"
    assert other.kv_store("guardian").get(b"\x00k") == b"v"


def test_with_event_manager_separates_events():
    ctx = Context()
    fresh = ctx.with_event_manager(EventManager())
    fresh.event_manager.emit(Event("add_super"))
    assert ctx.event_manager.events == ()
    assert [event.type for event in fresh.event_manager.events] == ["add_super"]


def test_kv_store_separate_per_key():
    ctx = Context()
    ctx.kv_store("mint").set(b"\x00", b"m")
    assert ctx.kv_store("guardian").get(b"\x00") is None
    assert ctx.kv_store("mint").get(b"\x00") == b"m"