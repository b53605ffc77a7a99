"""Screens for the flat ordered lists: categories and the dashboard layout."""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Static

from blogboard.client import BlogClient
from blogboard.errors import StorageError, ValidationError
from blogboard.model.node import Node
from blogboard.model.ordered import OrderedList
from blogboard.ui.confirm import ConfirmScreen
from blogboard.ui.watcher import CacheWatcherMixin

WIDGET_TITLES = {
    "stat-post": "Post count",
    "stat-member": "Member count",
    "chart-post": "Posts per day",
    "chart-member": "Sign-ups per day",
}


class OrderedListScreen(CacheWatcherMixin, Screen):
    """A cursor over one OrderedList. Shift+up/down moves the selected entry."""

    DEFAULT_CSS = """
    OrderedListScreen #title {
        text-style: bold;
        padding: 0 1;
    }
    OrderedListScreen #entries {
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("up", "cursor(-1)", "Up", show=False),
        Binding("down", "cursor(1)", "Down", show=False),
        Binding("shift+up", "move(-1)", "Move up"),
        Binding("shift+down", "move(1)", "Move down"),
        ("r", "reload", "Reload"),
        ("escape", "app.pop_screen", "Back"),
    ]

    title_text = ""

    def __init__(self, client: BlogClient, ordered: OrderedList):
        self._init_watcher()
        super().__init__()
        self.client = client
        self.ordered = ordered
        self.index = 0

    def compose(self) -> ComposeResult:
        yield Static(self.title_text, id="title")
        yield Static(id="entries")
        yield Footer()

    def on_mount(self) -> None:
        self.cache_watch(self.client.cache, self.ordered.view, self._on_items_changed)
        self.redraw()

    def _on_items_changed(self, node, key, old, new) -> None:
        self.redraw()

    def label(self, item: Node) -> str:
        return str(item.id)

    @property
    def selected(self) -> Node | None:
        items = list(self.ordered.items)
        return items[self.index] if self.index < len(items) else None

    def redraw(self) -> None:
        items = list(self.ordered.items)
        self.index = max(0, min(self.index, len(items) - 1))
        text = Text()
        for index, item in enumerate(items):
            text.append(f"{index + 1:>3}. {self.label(item)}\n", style="reverse" if index == self.index else "")
        self.query_one("#entries", Static).update(text)

    def action_cursor(self, delta: int) -> None:
        self.index += delta
        self.redraw()

    def action_move(self, delta: int) -> None:
        to_index = self.index + delta
        if not 0 <= to_index < len(self.ordered.items):
            return
        from_index, self.index = self.index, to_index
        self.app.submit(self.ordered.move(from_index, to_index))

    def action_reload(self) -> None:
        self.app.submit(self.ordered.refresh())


class CategoryScreen(OrderedListScreen):
    """Category order, deletion and migration of posts between categories."""

    BINDINGS = [
        ("d", "delete", "Delete"),
        ("m", "migrate", "Migrate posts"),
    ]

    title_text = "Categories"

    def __init__(self, client: BlogClient):
        super().__init__(client, client.categories)
        self.migrate_from: Node | None = None

    def label(self, item: Node) -> str:
        marker = " (moving posts from here)" if self.migrate_from is item else ""
        return f"{item.name}{marker}"

    def _ask(self, proposal) -> None:
        def answered(confirmed: bool | None) -> None:
            if confirmed:
                self.app.submit(proposal.confirm())
            else:
                proposal.cancel()

        self.app.push_screen(ConfirmScreen(proposal.prompt), answered)

    def action_delete(self) -> None:
        category = self.selected
        if category is None:
            return
        try:
            proposal = self.client.guard.propose_delete(category.id)
        except ValidationError as e:
            self.notify(e.message, severity="warning")
            return
        self._ask(proposal)

    def action_migrate(self) -> None:
        """First press picks the source, second press the target."""
        category = self.selected
        if category is None:
            return
        if self.migrate_from is None:
            self.migrate_from = category
            self.notify(f"Moving posts from {category.name!r}: pick the target and press m again.")
            self.redraw()
            return
        source, self.migrate_from = self.migrate_from, None
        self.redraw()
        try:
            proposal = self.client.guard.propose_migration(source.id, category.id)
        except ValidationError as e:
            self.notify(e.message, severity="warning")
            return
        self._ask(proposal)


class LayoutScreen(OrderedListScreen):
    """Dashboard widget order, kept on this machine only."""

    BINDINGS = [("ctrl+r", "reset", "Default layout")]

    title_text = "Dashboard layout"

    def __init__(self, client: BlogClient):
        super().__init__(client, client.widgets)

    def label(self, item: Node) -> str:
        return WIDGET_TITLES.get(item.id, item.id)

    def action_reset(self) -> None:
        try:
            self.client.layout.reset()
        except StorageError as e:
            self.notify(e.message, severity="error")
            return
        self.app.submit(self.ordered.refresh())
