"""Tests for flat ordered lists: category order and dashboard layout."""

import pytest

from blogboard.errors import InvalidIndex, NetworkError, StorageError, ValidationError
from blogboard.model.ordered import (
    DEFAULT_WIDGETS,
    LAYOUT_KEY,
    LocalOrderStore,
    move_item,
    order_key,
)


# --- pure helpers ---


def test_move_item_forward():
    assert move_item(["a", "b", "c"], 0, 2) == ["b", "c", "a"]


def test_move_item_backward():
    assert move_item(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]


def test_move_item_same_index():
    assert move_item(["a", "b"], 1, 1) == ["a", "b"]


def test_move_item_does_not_mutate():
    order = ["a", "b", "c"]
    move_item(order, 0, 2)
    assert order == ["a", "b", "c"]


@pytest.mark.parametrize("from_index", range(4))
@pytest.mark.parametrize("to_index", range(4))
def test_move_item_keeps_every_id(from_index, to_index):
    order = [10, 20, 30, 40]
    result = move_item(order, from_index, to_index)
    assert sorted(result) == sorted(order)
    assert result[to_index] == order[from_index]


@pytest.mark.parametrize("from_index,to_index", [(3, 0), (0, 3), (-1, 0)])
def test_move_item_out_of_range(from_index, to_index):
    with pytest.raises(InvalidIndex) as exc:
        move_item(["a", "b", "c"], from_index, to_index)
    assert exc.value.reason == "InvalidIndex"
    assert exc.value.length == 3


def test_order_key_ties_break_on_id():
    items = [(1, 9), (1, 2), (0, 5)]
    assert sorted(items, key=lambda p: order_key(*p)) == [(0, 5), (1, 2), (1, 9)]


def test_order_key_numeric_ids_before_strings():
    assert order_key(0, 99) < order_key(0, "1")


def test_order_key_missing_position_sorts_as_zero():
    assert order_key(None, 2) < order_key(1, 1)


# --- categories (remote order) ---


@pytest.mark.asyncio
async def test_refresh_sorts_by_position(client, backend):
    backend.categories[0]["position"] = 5
    assert await client.categories.refresh()
    assert client.categories.order() == [2, 3, 1]


@pytest.mark.asyncio
async def test_move_sends_full_order(client, backend):
    await client.categories.refresh()
    assert await client.categories.move(0, 2)

    assert backend.called("set_partition_order") == [([2, 3, 1],)]
    assert client.categories.order() == [2, 3, 1]
    assert [c.position for c in client.categories.items] == [0, 1, 2]


@pytest.mark.asyncio
async def test_move_to_same_index_sends_nothing(client, backend):
    await client.categories.refresh()
    assert await client.categories.move(1, 1)
    assert backend.called("set_partition_order") == []


@pytest.mark.asyncio
async def test_move_out_of_range(client, backend):
    await client.categories.refresh()
    with pytest.raises(InvalidIndex):
        await client.categories.move(0, 3)
    assert backend.called("set_partition_order") == []


@pytest.mark.asyncio
async def test_move_failure_rolls_back(client, backend):
    await client.categories.refresh()
    backend.fail["set_partition_order"] = NetworkError("connection refused")

    assert not await client.categories.move(0, 2)

    assert client.categories.order() == [1, 2, 3]
    assert [c.position for c in client.categories.items] == [0, 1, 2]
    notice = client.cache.notice
    assert notice.kind == "network"
    assert notice.message.startswith("Could not save the new category order.")


@pytest.mark.asyncio
async def test_move_unexpected_error_rolls_back(client, backend):
    await client.categories.refresh()
    backend.fail["set_partition_order"] = RuntimeError("boom")

    assert not await client.categories.move(0, 1)

    assert client.categories.order() == [1, 2, 3]
    assert client.cache.notice.kind == "error"


@pytest.mark.asyncio
async def test_commit_same_order_twice_changes_nothing(client, backend):
    await client.categories.refresh()
    assert await client.categories.commit([2, 1, 3])
    first = [c.to_dict() for c in client.categories.items]
    stored = [dict(c) for c in backend.categories]

    assert await client.categories.commit([2, 1, 3])

    assert [c.to_dict() for c in client.categories.items] == first
    assert [dict(c) for c in backend.categories] == stored
    assert client.categories.order() == [2, 1, 3]


@pytest.mark.asyncio
async def test_optimistic_order_visible_before_reply(client, backend):
    await client.categories.refresh()
    seen = []

    def save(order):
        seen.append(client.categories.order())

    backend.set_partition_order = save
    await client.categories.move(2, 0)
    assert seen == [[3, 1, 2]]


@pytest.mark.asyncio
async def test_commit_rejects_unknown_ids(client):
    await client.categories.refresh()
    with pytest.raises(ValidationError):
        await client.categories.commit([1, 2, 99])


@pytest.mark.asyncio
async def test_commit_rejects_missing_ids(client):
    await client.categories.refresh()
    with pytest.raises(ValidationError):
        await client.categories.commit([1, 2])


# --- widgets (local order) ---


def test_layout_defaults(store):
    assert LocalOrderStore(store).stored_order() == list(DEFAULT_WIDGETS)


def test_layout_drops_unknown_and_appends_missing(store):
    store.set(LAYOUT_KEY, ["chart-post", "gone", "stat-post", "chart-post"])
    assert LocalOrderStore(store).stored_order() == ["chart-post", "stat-post", "stat-member", "chart-member"]


def test_layout_ignores_garbage(store):
    store.set(LAYOUT_KEY, "not a list")
    assert LocalOrderStore(store).stored_order() == list(DEFAULT_WIDGETS)


@pytest.mark.asyncio
async def test_widget_move_persists(client, store):
    await client.widgets.refresh()
    assert await client.widgets.move(3, 0)

    expected = ["chart-member", "stat-post", "stat-member", "chart-post"]
    assert store.get(LAYOUT_KEY) == expected
    assert client.widgets.order() == expected


@pytest.mark.asyncio
async def test_widget_reset(client, store):
    await client.widgets.refresh()
    await client.widgets.move(0, 1)
    client.layout.reset()
    await client.widgets.refresh()
    assert client.widgets.order() == list(DEFAULT_WIDGETS)
    assert store.get(LAYOUT_KEY) is None


@pytest.mark.asyncio
async def test_widget_storage_failure_rolls_back(client, store, monkeypatch):
    await client.widgets.refresh()

    def broken(key, value):
        raise StorageError("disk full")

    monkeypatch.setattr(store, "set", broken)
    assert not await client.widgets.move(0, 3)
    assert client.widgets.order() == list(DEFAULT_WIDGETS)
    assert client.cache.notice.message.startswith("Could not save the new dashboard layout.")
