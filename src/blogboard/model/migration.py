"""Category deletion guard and bulk reassignment of posts.

The server is authoritative for whether a category is still referenced:
deleting one that still holds posts comes back as a ConflictError, and
the user has to migrate the posts first. Deletion never migrates
implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Iterator

from blogboard.errors import (
    EMPTY_SELECTION,
    MISSING_NAME,
    MISSING_TARGET,
    PROPOSAL_CLOSED,
    SELF_MIGRATION,
    UNKNOWN_PARTITION,
    BlogboardError,
    ConflictError,
    ValidationError,
)
from blogboard.model.node import ListNode, Node
from blogboard.model.ordered import RemoteOrderStore

if TYPE_CHECKING:
    from blogboard.optimistic import OptimisticUpdateController


@dataclass(frozen=True)
class PostQuery:
    """What the post listing currently shows."""

    page: int = 0
    size: int = 10
    category_id: Any = None
    keyword: str = ""


class Selection:
    """Posts checked in the current listing.

    A selection only makes sense for the listing it was made in, so it is
    bound to a PostQuery and emptied whenever the query changes (page
    turn, category filter, search text).
    """

    def __init__(self, query: PostQuery | None = None) -> None:
        self.query = query or PostQuery()
        self._ids: dict[str, Any] = {}

    def set_query(self, query: PostQuery) -> bool:
        """Switch to a new listing. Returns True if the selection was cleared."""
        if query == self.query:
            return False
        self.query = query
        self._ids.clear()
        return True

    def add(self, item_id: Any) -> None:
        self._ids[str(item_id)] = item_id

    def discard(self, item_id: Any) -> None:
        self._ids.pop(str(item_id), None)

    def toggle(self, item_id: Any) -> bool:
        """Flip membership. Returns True if the item is now selected."""
        if item_id in self:
            self.discard(item_id)
            return False
        self.add(item_id)
        return True

    def clear(self) -> None:
        self._ids.clear()

    def __contains__(self, item_id: Any) -> bool:
        return str(item_id) in self._ids

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._ids.values()))

    def __len__(self) -> int:
        return len(self._ids)


class Proposal:
    """A destructive action waiting for explicit confirmation.

    ``prompt`` is the question to put to the user. ``confirm()`` runs the
    action exactly once; ``cancel()`` drops it.
    """

    def __init__(self, prompt: str, action: Callable[[], Awaitable[bool]]) -> None:
        self.prompt = prompt
        self._action = action
        self.state = "pending"

    async def confirm(self) -> bool:
        if self.state != "pending":
            raise ValidationError(PROPOSAL_CLOSED, f"This action was already {self.state}.")
        self.state = "confirmed"
        return await self._action()

    def cancel(self) -> None:
        if self.state == "pending":
            self.state = "cancelled"

    def __repr__(self) -> str:
        return f"<Proposal {self.state}: {self.prompt}>"


class MigrationGuard:
    """Referential-integrity rules for categories and the posts filed in them."""

    def __init__(
        self,
        controller: OptimisticUpdateController,
        backend,
        partitions_view: str = "categories",
        items_view: str = "posts",
    ) -> None:
        self.controller = controller
        self.backend = backend
        self.partitions_view = partitions_view
        self.items_view = items_view
        self.query = PostQuery()
        self._list_partitions = RemoteOrderStore(backend).load

    @property
    def partitions(self) -> ListNode:
        return self.controller.view(self.partitions_view)

    @property
    def items(self) -> ListNode:
        return self.controller.view(self.items_view)

    def _list_items(self) -> list[dict]:
        return self.backend.list_items(self.query)

    def _loaders(self) -> dict[str, Callable[[], Iterable[dict]]]:
        return {
            self.partitions_view: self._list_partitions,
            self.items_view: self._list_items,
        }

    def _partition(self, partition_id: Any, role: str = "target") -> Node:
        if partition_id is None:
            reason = MISSING_TARGET if role == "target" else UNKNOWN_PARTITION
            raise ValidationError(reason, f"Choose a {role} category.")
        node = self.partitions[partition_id]
        if node is None:
            raise ValidationError(UNKNOWN_PARTITION, f"Category {partition_id} does not exist.")
        return node

    def _check_migration(self, source: Any, target: Any) -> tuple[Node, Node]:
        if target is None:
            raise ValidationError(MISSING_TARGET, "Choose a target category.")
        if str(source) == str(target):
            raise ValidationError(SELF_MIGRATION, "The target category must differ from the source category.")
        return self._partition(source, "source"), self._partition(target)

    async def load_items(self, query: PostQuery | None = None) -> bool:
        """Load one page of posts (and the categories) into the cache."""
        if query is not None:
            self.query = query
        return await self.controller.refresh(self._loaders())

    async def create_partition(self, name: str) -> bool:
        name = name.strip()
        if not name:
            raise ValidationError(MISSING_NAME, "A category needs a name.")
        return await self.controller.run(
            views=[self.partitions_view],
            send=lambda: self.backend.create_partition(name),
            refetch={self.partitions_view: self._list_partitions},
            failure=f"Could not create category {name!r}.",
        )

    async def migrate_partition(self, source: Any, target: Any) -> bool:
        """Move every post of source into target, as one server operation."""
        source_node, target_node = self._check_migration(source, target)
        source_id, target_id = source_node.id, target_node.id
        items = self.items

        def apply() -> None:
            for item in items:
                if str(item.partition) == str(source_id):
                    item.partition = target_id

        return await self.controller.run(
            views=[self.items_view],
            apply=apply,
            send=lambda: self.backend.migrate_partition_items(source_id, target_id),
            refetch=self._loaders(),
            failure=f"Could not move the posts of {source_node.name!r}.",
            success=f"Moved the posts of {source_node.name!r} to {target_node.name!r}.",
        )

    async def delete_partition(self, partition: Any) -> bool:
        """Delete a category the server confirms no post refers to."""
        node = self._partition(partition)
        partitions = self.partitions
        name = node.name

        def apply() -> None:
            partitions[node.id] = None

        def failure(exc: BlogboardError) -> str:
            if isinstance(exc, ConflictError):
                return (
                    f"Category {name!r} still has posts. "
                    "Move them to another category before deleting it."
                )
            return f"Could not delete category {name!r} ({exc.message})."

        return await self.controller.run(
            views=[self.partitions_view],
            apply=apply,
            send=lambda: self.backend.delete_partition(node.id),
            refetch={self.partitions_view: self._list_partitions},
            failure=failure,
        )

    async def reassign_selection(self, item_ids: Iterable[Any], target: Any) -> bool:
        """File every selected post under target. Others are left alone.

        The selection may span several source categories.
        """
        ids = list(item_ids)
        if not ids:
            raise ValidationError(EMPTY_SELECTION, "Select at least one post.")
        target_node = self._partition(target)
        target_id = target_node.id
        items = self.items

        def apply() -> None:
            for item_id in ids:
                item = items[item_id]
                if item is not None:
                    item.partition = target_id

        return await self.controller.run(
            views=[self.items_view],
            apply=apply,
            send=lambda: self.backend.bulk_reassign_items(ids, target_id),
            refetch=self._loaders(),
            failure=f"Could not move the selected posts to {target_node.name!r}.",
            success=f"Moved {len(ids)} posts to {target_node.name!r}.",
        )

    def propose_delete(self, partition: Any) -> Proposal:
        node = self._partition(partition)
        return Proposal(
            f"Delete category {node.name!r}?",
            lambda: self.delete_partition(partition),
        )

    def propose_migration(self, source: Any, target: Any) -> Proposal:
        source_node, target_node = self._check_migration(source, target)
        return Proposal(
            f"Move all posts from {source_node.name!r} to {target_node.name!r}?",
            lambda: self.migrate_partition(source, target),
        )
