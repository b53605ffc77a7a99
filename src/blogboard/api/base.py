"""Server contract consumed by the ordering engine."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

__all__ = ["Backend"]


class Backend(ABC):
    """Operations the blog server exposes for categories, posts and tasks.

    Records are plain dicts. Categories carry ``id``, ``name`` and
    ``position``; tasks carry ``id``, ``content``, ``partition`` (status)
    and ``position``; posts carry ``id``, ``title``, ``author`` and
    ``partition`` (category id).

    Implementations raise ConflictError when the server refuses a change
    on referential-integrity grounds and NetworkError for every other
    failure.
    """

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    @abstractmethod
    def list_partitions(self) -> list[dict]:
        """All categories."""
        raise NotImplementedError

    @abstractmethod
    def create_partition(self, name: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def delete_partition(self, partition_id: Any) -> None:
        """Delete a category.

        Raises:
            ConflictError: If any post still belongs to the category.
        """
        raise NotImplementedError

    @abstractmethod
    def set_partition_order(self, ordered_ids: Sequence[Any]) -> None:
        """Replace the stored category order with ordered_ids."""
        raise NotImplementedError

    @abstractmethod
    def migrate_partition_items(self, source_id: Any, target_id: Any) -> None:
        """Move every post of source_id into target_id, all or nothing."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    @abstractmethod
    def list_items(self, query) -> list[dict]:
        """One page of posts matching a PostQuery."""
        raise NotImplementedError

    @abstractmethod
    def bulk_reassign_items(self, item_ids: Sequence[Any], target_id: Any) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    @abstractmethod
    def list_board_items(self) -> list[dict]:
        raise NotImplementedError

    @abstractmethod
    def create_board_item(self, content: str, partition: str) -> Any:
        raise NotImplementedError

    @abstractmethod
    def delete_board_item(self, item_id: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def move_board_item(self, item_id: Any, partition: str, position: int) -> None:
        """Store a task's status and position."""
        raise NotImplementedError
