"""
Tests for the process-wide store accessor.

Includes the end-to-end scenario: open, prepare, set, list, clear.
"""

import asyncio

import pytest

import jsonstash.registry as registry_module
from jsonstash import close_store, get_store, open_store
from jsonstash.exceptions import StoreAlreadyOpen, StoreNotOpen
from jsonstash.schemas import Entry


@pytest.mark.asyncio
async def test_end_to_end(fresh_registry, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    store = await open_store("test.db")
    await store.prepare_collection("items")

    assert await store.set_by_key("items", "a", {"n": 1}, is_update=False) == {"n": 1}
    assert await store.get_all("items") == [Entry(id="a", value={"n": 1})]
    assert await store.delete_all("items") == 1
    assert (tmp_path / "test.db").exists()


@pytest.mark.asyncio
async def test_same_path_returns_same_store(fresh_registry, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    first = await open_store("test.db")
    assert await open_store("test.db") is first
    assert await open_store(tmp_path / "test.db") is first
    assert await open_store() is first
    assert get_store() is first


@pytest.mark.asyncio
async def test_different_path_refused(fresh_registry, tmp_path):
    first = await open_store(tmp_path / "one.db")

    with pytest.raises(StoreAlreadyOpen) as exc_info:
        await open_store(tmp_path / "two.db")

    assert exc_info.value.current == first.path
    assert exc_info.value.requested.endswith("two.db")
    assert get_store() is first
    assert not (tmp_path / "two.db").exists()


@pytest.mark.asyncio
async def test_default_path(fresh_registry, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    store = await open_store()
    await store.prepare_collection("items")

    assert (tmp_path / ".jsonstash" / "stash.db").exists()


@pytest.mark.asyncio
async def test_close_then_reopen_elsewhere(fresh_registry, tmp_path):
    first = await open_store(tmp_path / "one.db")
    await close_store()

    assert not first.is_open
    with pytest.raises(StoreNotOpen):
        get_store()

    second = await open_store(tmp_path / "two.db")
    assert second is not first
    assert second.path.endswith("two.db")


@pytest.mark.asyncio
async def test_close_without_open(fresh_registry):
    await close_store()
    with pytest.raises(StoreNotOpen):
        get_store()


@pytest.mark.asyncio
async def test_concurrent_first_opens_share_one_store(fresh_registry, tmp_path):
    first, second = await asyncio.gather(
        open_store(tmp_path / "one.db"), open_store(tmp_path / "one.db")
    )
    assert first is second


@pytest.mark.asyncio
async def test_close_keeps_open_serialized(fresh_registry, tmp_path):
    await open_store(tmp_path / "one.db")
    lock = registry_module._lock

    await close_store()
    assert registry_module._lock is lock

    # A close racing a reopen must not leave two stores behind
    _, reopened = await asyncio.gather(close_store(), open_store(tmp_path / "one.db"))
    assert get_store() is reopened
    assert reopened.is_open
