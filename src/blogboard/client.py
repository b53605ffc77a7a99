"""One controller, one cache, and the components that share them."""

from pathlib import Path

from blogboard.api.rest import RestBackend
from blogboard.model.board import PartitionedBoard
from blogboard.model.migration import MigrationGuard, PostQuery
from blogboard.model.node import Node
from blogboard.model.ordered import LocalOrderStore, OrderedList, RemoteOrderStore
from blogboard.optimistic import OptimisticUpdateController
from blogboard.storage import LocalStore

STATE_FILE = "state.json"


class BlogClient:
    """Everything a surface (CLI or TUI) needs to drive the ordering engine."""

    def __init__(self, backend, store: LocalStore, controller: OptimisticUpdateController | None = None) -> None:
        self.backend = backend
        self.store = store
        self.controller = controller or OptimisticUpdateController()
        self.layout = LocalOrderStore(store)
        self.categories = OrderedList(self.controller, "categories", RemoteOrderStore(backend), "category order")
        self.widgets = OrderedList(self.controller, "widgets", self.layout, "dashboard layout")
        self.board = PartitionedBoard(self.controller, backend)
        self.guard = MigrationGuard(self.controller, backend)

    @classmethod
    def from_config(cls, config: Node, backend=None) -> "BlogClient":
        if backend is None:
            backend = RestBackend(config.api_url, token=config.token or None, timeout=config.timeout)
        store = LocalStore(Path(config.state_dir).expanduser() / STATE_FILE)
        client = cls(backend, store)
        client.guard.query = PostQuery(size=config.page_size)
        return client

    @property
    def cache(self) -> Node:
        return self.controller.cache

    async def refresh_all(self) -> bool:
        """Load categories, tasks, the first page of posts and the layout."""
        results = [
            await self.guard.load_items(),
            await self.board.refresh(),
            await self.widgets.refresh(),
        ]
        return all(results)
