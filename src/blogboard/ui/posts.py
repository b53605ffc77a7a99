"""Post listing with a checkbox selection and bulk reassignment."""

from dataclasses import replace

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Static

from blogboard.client import BlogClient
from blogboard.model.migration import Selection
from blogboard.model.node import Node
from blogboard.ui.watcher import CacheWatcherMixin


class PostScreen(CacheWatcherMixin, Screen):
    """One page of posts. Turning the page empties the selection."""

    DEFAULT_CSS = """
    PostScreen #header {
        text-style: bold;
        padding: 0 1;
    }
    PostScreen #posts {
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("up", "cursor(-1)", "Up", show=False),
        Binding("down", "cursor(1)", "Down", show=False),
        ("space", "toggle", "Select"),
        ("left_square_bracket", "target(-1)", "Prev target"),
        ("right_square_bracket", "target(1)", "Next target"),
        ("enter", "reassign", "Move selected"),
        ("n", "page(1)", "Next page"),
        ("b", "page(-1)", "Prev page"),
        ("escape", "app.pop_screen", "Back"),
    ]

    def __init__(self, client: BlogClient):
        self._init_watcher()
        super().__init__()
        self.client = client
        self.guard = client.guard
        self.selection = Selection(self.guard.query)
        self.index = 0
        self.target = 0

    def compose(self) -> ComposeResult:
        yield Static(id="header")
        yield Static(id="posts")
        yield Footer()

    def on_mount(self) -> None:
        cache = self.client.cache
        self.cache_watch(cache, self.guard.items_view, self._on_changed)
        self.cache_watch(cache, self.guard.partitions_view, self._on_changed)
        self.redraw()

    def _on_changed(self, node, key, old, new) -> None:
        self.redraw()

    @property
    def target_category(self) -> Node | None:
        categories = list(self.guard.partitions)
        if not categories:
            return None
        return categories[self.target % len(categories)]

    def redraw(self) -> None:
        posts = list(self.guard.items)
        self.index = max(0, min(self.index, len(posts) - 1))
        names = {str(c.id): c.name for c in self.guard.partitions}

        target = self.target_category
        header = f"Page {self.guard.query.page + 1}, {len(self.selection)} selected"
        header += f", target: {target.name}" if target is not None else ", no categories"
        self.query_one("#header", Static).update(header)

        text = Text()
        for index, post in enumerate(posts):
            mark = "[x]" if post.id in self.selection else "[ ]"
            category = names.get(str(post.partition), "-")
            line = f"{mark} {post.title}  ({category})\n"
            text.append(line, style="reverse" if index == self.index else "")
        self.query_one("#posts", Static).update(text)

    def action_cursor(self, delta: int) -> None:
        self.index += delta
        self.redraw()

    def action_toggle(self) -> None:
        posts = list(self.guard.items)
        if self.index < len(posts):
            self.selection.toggle(posts[self.index].id)
            self.redraw()

    def action_target(self, delta: int) -> None:
        self.target += delta
        self.redraw()

    def action_page(self, delta: int) -> None:
        query = self.guard.query
        if query.page + delta < 0:
            return
        query = replace(query, page=query.page + delta)
        self.selection.set_query(query)
        self.index = 0
        self.app.submit(self.guard.load_items(query))

    def action_reassign(self) -> None:
        target = self.target_category
        self.app.submit(self._reassign(list(self.selection), target.id if target is not None else None))

    async def _reassign(self, ids: list, target_id) -> bool:
        ok = await self.guard.reassign_selection(ids, target_id)
        if ok:
            self.selection.clear()
            self.redraw()
        return ok
