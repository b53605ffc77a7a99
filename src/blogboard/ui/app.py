"""Main Textual application for blogboard."""

import logging
from typing import Awaitable

from textual.app import App

from blogboard.client import BlogClient
from blogboard.errors import ValidationError
from blogboard.model.node import Node
from blogboard.ui.board import BoardScreen
from blogboard.ui.ordered import CategoryScreen, LayoutScreen
from blogboard.ui.posts import PostScreen
from blogboard.ui.watcher import CacheWatcherMixin

logger = logging.getLogger(__name__)

SEVERITY = {"info": "information", "validation": "warning"}


class BlogboardApp(CacheWatcherMixin, App):
    """Blog admin TUI: task board, categories, posts and dashboard layout."""

    CSS = """
    Tooltip {
        padding: 0 1;
        margin: 0;
    }
    """

    TITLE = "blogboard"
    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, client: BlogClient):
        self._init_watcher()
        super().__init__()
        self.client = client

    @classmethod
    def from_config(cls, config: Node) -> "BlogboardApp":
        return cls(BlogClient.from_config(config))

    def on_mount(self) -> None:
        self.cache_watch(self.client.cache, "notice", self._on_notice)
        self.push_screen(BoardScreen(self.client))
        self.submit(self.client.refresh_all())

    def _on_notice(self, node, key, old, new) -> None:
        if new is None:
            return
        self.notify(new.message, severity=SEVERITY.get(new.kind, "error"))

    def submit(self, operation: Awaitable[bool]) -> None:
        """Run a cache operation in the background.

        The optimistic change shows up immediately; the outcome arrives
        later as a notice.
        """
        self.run_worker(self._run(operation), group="operations")

    async def _run(self, operation: Awaitable[bool]) -> None:
        try:
            await operation
        except ValidationError as e:
            logger.info("rejected: %s", e.message)
            self.notify(e.message, severity="warning")

    def _show(self, screen_type, make) -> None:
        if isinstance(self.screen, screen_type):
            return
        self.push_screen(make())

    def action_show_categories(self) -> None:
        self._show(CategoryScreen, lambda: CategoryScreen(self.client))

    def action_show_posts(self) -> None:
        self._show(PostScreen, lambda: PostScreen(self.client))

    def action_show_layout(self) -> None:
        self._show(LayoutScreen, lambda: LayoutScreen(self.client))
