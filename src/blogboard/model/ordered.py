"""Flat reorderable lists: the category order and the dashboard layout."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

from blogboard.errors import UNKNOWN_ITEM, InvalidIndex, ValidationError
from blogboard.model.node import ListNode
from blogboard.storage import LocalStore

if TYPE_CHECKING:
    from blogboard.optimistic import OptimisticUpdateController

LAYOUT_KEY = "dashboard-layout"
DEFAULT_WIDGETS = ("stat-post", "stat-member", "chart-post", "chart-member")


def order_key(position: Any, item_id: Any) -> tuple:
    """Sort key: position ascending, then id ascending with numeric ids first."""
    if isinstance(item_id, int):
        id_key = (0, item_id, "")
    else:
        id_key = (1, 0, str(item_id))
    return (position if position is not None else 0, id_key)


def move_item(order: Sequence[Any], from_index: int, to_index: int) -> list[Any]:
    """Return a copy of order with the id at from_index moved to to_index.

    Raises InvalidIndex if either index is outside ``0 <= i < len(order)``.
    """
    length = len(order)
    for index in (from_index, to_index):
        if not 0 <= index < length:
            raise InvalidIndex(index, length)
    items = list(order)
    item = items.pop(from_index)
    items.insert(to_index, item)
    return items


def apply_order(view: ListNode, order: Sequence[Any]) -> None:
    """Reorder view to match order and renumber positions densely from 0."""
    view.reorder(order)
    for position, item in enumerate(view):
        item.position = position


class RemoteOrderStore:
    """Category order, persisted through the server."""

    def __init__(self, backend) -> None:
        self.backend = backend

    def load(self) -> list[dict]:
        categories = self.backend.list_partitions()
        return sorted(categories, key=lambda c: order_key(c.get("position"), c["id"]))

    def save(self, order: Sequence[Any]) -> None:
        self.backend.set_partition_order(list(order))


class LocalOrderStore:
    """Widget layout, persisted in the local key-value store.

    Stored ids that are no longer known are dropped and known ids missing
    from storage are appended, so the layout always shows every widget
    exactly once.
    """

    def __init__(
        self,
        store: LocalStore,
        key: str = LAYOUT_KEY,
        defaults: Sequence[str] = DEFAULT_WIDGETS,
    ) -> None:
        self.store = store
        self.key = key
        self.defaults = tuple(defaults)

    def stored_order(self) -> list[str]:
        saved = self.store.get(self.key)
        if not isinstance(saved, list):
            return list(self.defaults)
        order = [widget for widget in dict.fromkeys(saved) if widget in self.defaults]
        order.extend(widget for widget in self.defaults if widget not in order)
        return order

    def load(self) -> list[dict]:
        return [{"id": widget, "position": i} for i, widget in enumerate(self.stored_order())]

    def save(self, order: Sequence[Any]) -> None:
        self.store.set(self.key, list(order))

    def reset(self) -> None:
        self.store.delete(self.key)


class OrderedList:
    """A cached, totally ordered list of ids with full-order commits.

    Every commit sends the complete order, which replaces whatever the
    store held before. There is nothing to merge: of two overlapping
    commits, the one that lands last wins.
    """

    def __init__(self, controller: OptimisticUpdateController, view: str, store, label: str = "order") -> None:
        self.controller = controller
        self.view = view
        self.store = store
        self.label = label

    @property
    def items(self) -> ListNode:
        return self.controller.view(self.view)

    def order(self) -> list[Any]:
        """Ids in their current cached order."""
        return [item.id for item in self.items]

    async def refresh(self) -> bool:
        return await self.controller.refresh({self.view: self.store.load})

    async def move(self, from_index: int, to_index: int) -> bool:
        """Move one entry and commit the resulting order.

        Moving an entry onto its own index changes nothing and sends nothing.
        """
        new_order = move_item(self.order(), from_index, to_index)
        if from_index == to_index:
            return True
        return await self.commit(new_order)

    async def commit(self, new_order: Sequence[Any]) -> bool:
        """Show new_order immediately and persist it as the full order."""
        new_order = list(new_order)
        if sorted(str(i) for i in new_order) != sorted(self.items.keys()):
            raise ValidationError(UNKNOWN_ITEM, f"{new_order} does not match the cached {self.label}")
        view = self.items
        return await self.controller.run(
            views=[self.view],
            apply=lambda: apply_order(view, new_order),
            send=lambda: self.store.save(new_order),
            refetch={self.view: self.store.load},
            failure=f"Could not save the new {self.label}.",
        )
