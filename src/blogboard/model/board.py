"""Kanban board: tasks partitioned by status, ordered by position.

Every move renumbers the destination partition densely (0..n-1) so that
ascending position reproduces the intended visual order, even when the
stored positions had gaps left behind by deletions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Sequence

from blogboard.errors import (
    MISSING_NAME,
    UNKNOWN_ITEM,
    UNKNOWN_PARTITION,
    InvalidIndex,
    ValidationError,
)
from blogboard.model.node import ListNode, Node
from blogboard.model.ordered import order_key

if TYPE_CHECKING:
    from blogboard.optimistic import OptimisticUpdateController

TASK_STATUSES = ("TODO", "IN_PROGRESS", "DONE")

Change = tuple[Any, str, int]


class PartitionView:
    """Restartable iterable over one partition of a view.

    Nothing is computed until iteration starts and every new iteration
    reads the cache afresh, sorted by position then id.
    """

    def __init__(self, items: ListNode, partition: str) -> None:
        self._items = items
        self.partition = partition

    def __iter__(self) -> Iterator[Node]:
        members = [item for item in self._items if item.partition == self.partition]
        return iter(sorted(members, key=lambda item: order_key(item.position, item.id)))

    def __len__(self) -> int:
        return sum(1 for item in self._items if item.partition == self.partition)

    def ids(self) -> list[Any]:
        return [item.id for item in self]


def plan_move(items: ListNode, item_id: Any, to_partition: str, target_index: int) -> list[Change]:
    """Work out the (id, partition, position) writes for a move.

    The moved item comes first, followed by every other member of the
    destination partition whose position changes under dense renumbering.
    """
    moved = items[item_id]
    destination = [item for item in PartitionView(items, to_partition) if item is not moved]
    if not 0 <= target_index <= len(destination):
        raise InvalidIndex(target_index, len(destination) + 1)
    destination.insert(target_index, moved)

    changes: list[Change] = [(moved.id, to_partition, target_index)]
    for position, item in enumerate(destination):
        if item is not moved and item.position != position:
            changes.append((item.id, to_partition, position))
    return changes


def apply_changes(items: ListNode, changes: Sequence[Change]) -> None:
    for item_id, partition, position in changes:
        item = items[item_id]
        item.partition = partition
        item.position = position


class PartitionedBoard:
    """Named partitions of one cached view, with cross-partition moves."""

    def __init__(
        self,
        controller: OptimisticUpdateController,
        backend,
        view: str = "tasks",
        partitions: Sequence[str] = TASK_STATUSES,
    ) -> None:
        self.controller = controller
        self.backend = backend
        self.view = view
        self.partitions = tuple(partitions)

    @property
    def items(self) -> ListNode:
        return self.controller.view(self.view)

    def items_by_partition(self, partition: str) -> PartitionView:
        return PartitionView(self.items, partition)

    def locate(self, item_id: Any) -> tuple[str, int]:
        """Return (partition, index) of an item in the ordered view."""
        item = self.items[item_id]
        if item is None:
            raise ValidationError(UNKNOWN_ITEM, f"Unknown task {item_id}")
        for index, member in enumerate(self.items_by_partition(item.partition)):
            if member is item:
                return item.partition, index
        raise ValidationError(UNKNOWN_ITEM, f"Task {item_id} has no partition")

    def _check_partition(self, partition: str) -> None:
        if partition not in self.partitions:
            raise ValidationError(UNKNOWN_PARTITION, f"Unknown column {partition!r}")

    async def refresh(self) -> bool:
        return await self.controller.refresh({self.view: self.backend.list_board_items})

    async def move_item(
        self,
        item_id: Any,
        from_partition: str,
        to_partition: str,
        target_index: int,
    ) -> dict | None:
        """Move an item to target_index of to_partition.

        Returns the new placement once the server accepted it, or None when
        nothing was sent (the item is already there) or the move was rolled
        back.
        """
        self._check_partition(from_partition)
        self._check_partition(to_partition)
        partition, index = self.locate(item_id)
        if partition != from_partition:
            raise ValidationError(UNKNOWN_ITEM, f"Task {item_id} is in {partition}, not {from_partition}")
        if from_partition == to_partition and index == target_index:
            return None

        changes = plan_move(self.items, item_id, to_partition, target_index)
        items = self.items

        def send() -> None:
            for change in changes:
                self.backend.move_board_item(*change)

        ok = await self.controller.run(
            views=[self.view],
            apply=lambda: apply_changes(items, changes),
            send=send,
            refetch={self.view: self.backend.list_board_items},
            failure="Could not move the task.",
        )
        if not ok:
            return None
        return {"partition": to_partition, "position": target_index}

    async def add_item(self, content: str, partition: str = TASK_STATUSES[0]) -> bool:
        """Create a task at the end of a partition."""
        if not content.strip():
            raise ValidationError(MISSING_NAME, "A task needs some content.")
        self._check_partition(partition)
        return await self.controller.run(
            views=[self.view],
            send=lambda: self.backend.create_board_item(content.strip(), partition),
            refetch={self.view: self.backend.list_board_items},
            failure="Could not create the task.",
        )

    async def remove_item(self, item_id: Any) -> bool:
        self.locate(item_id)
        item = self.items[item_id]
        items = self.items

        def apply() -> None:
            items[item_id] = None

        return await self.controller.run(
            views=[self.view],
            apply=apply,
            send=lambda: self.backend.delete_board_item(item.id),
            refetch={self.view: self.backend.list_board_items},
            failure="Could not delete the task.",
        )
