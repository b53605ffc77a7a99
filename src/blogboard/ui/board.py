"""Task board screen: one column per status, keyboard moves."""

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Static

from blogboard.client import BlogClient
from blogboard.model.node import Node
from blogboard.ui.watcher import CacheWatcherMixin

TITLES = {"TODO": "To do", "IN_PROGRESS": "In progress", "DONE": "Done"}


class TaskColumn(Static):
    """A single status column. Highlights the cursor row when it has one."""

    DEFAULT_CSS = """
    TaskColumn {
        width: 1fr;
        height: 100%;
        min-width: 25;
        padding: 0 1;
        border-right: tall $surface-lighten-1;
    }
    """

    def __init__(self, status: str):
        super().__init__(id=f"column-{status.lower()}")
        self.status = status
        self.shown: list[str] = []

    def show(self, tasks: list[Node], cursor: int | None) -> None:
        self.shown = [task.content for task in tasks]
        text = Text(f"{TITLES.get(self.status, self.status)} ({len(tasks)})\n", style="bold")
        for index, task in enumerate(tasks):
            text.append(f"{task.content}\n", style="reverse" if index == cursor else "")
        self.update(text)


class BoardScreen(CacheWatcherMixin, Screen):
    """Main screen showing the tasks of every status."""

    BINDINGS = [
        Binding("left", "cursor(-1, 0)", "Left", show=False),
        Binding("right", "cursor(1, 0)", "Right", show=False),
        Binding("up", "cursor(0, -1)", "Up", show=False),
        Binding("down", "cursor(0, 1)", "Down", show=False),
        Binding("shift+left", "move(-1, 0)", "Move left"),
        Binding("shift+right", "move(1, 0)", "Move right"),
        Binding("shift+up", "move(0, -1)", "Move up", show=False),
        Binding("shift+down", "move(0, 1)", "Move down", show=False),
        ("x", "remove", "Delete"),
        ("r", "reload", "Reload"),
        ("c", "app.show_categories", "Categories"),
        ("p", "app.show_posts", "Posts"),
        ("w", "app.show_layout", "Layout"),
    ]

    def __init__(self, client: BlogClient):
        self._init_watcher()
        super().__init__()
        self.client = client
        self.board = client.board
        self.column = 0
        self.row = 0

    def compose(self) -> ComposeResult:
        with Horizontal(id="columns"):
            for status in self.board.partitions:
                yield TaskColumn(status)
        yield Footer()

    def on_mount(self) -> None:
        self.cache_watch(self.client.cache, self.board.view, self._on_tasks_changed)
        self.redraw()

    def _on_tasks_changed(self, node, key, old, new) -> None:
        self.redraw()

    def tasks(self, column: int) -> list[Node]:
        return list(self.board.items_by_partition(self.board.partitions[column]))

    @property
    def selected(self) -> Node | None:
        tasks = self.tasks(self.column)
        return tasks[self.row] if self.row < len(tasks) else None

    def redraw(self) -> None:
        self.row = max(0, min(self.row, len(self.tasks(self.column)) - 1))
        for index, widget in enumerate(self.query(TaskColumn)):
            widget.show(self.tasks(index), self.row if index == self.column else None)

    def action_cursor(self, dx: int, dy: int) -> None:
        self.column = max(0, min(self.column + dx, len(self.board.partitions) - 1))
        self.row = max(0, self.row + dy)
        self.redraw()

    def action_move(self, dx: int, dy: int) -> None:
        """Move the selected task one column sideways or one row up/down."""
        task = self.selected
        column = self.column + dx
        if task is None or not 0 <= column < len(self.board.partitions):
            return
        if dx:
            index = min(self.row, len(self.tasks(column)))
        else:
            index = self.row + dy
            if not 0 <= index < len(self.tasks(column)):
                return
        source = self.board.partitions[self.column]
        target = self.board.partitions[column]
        # cursor follows the task
        self.column, self.row = column, index
        self.app.submit(self.board.move_item(task.id, source, target, index))

    def action_remove(self) -> None:
        task = self.selected
        if task is not None:
            self.app.submit(self.board.remove_item(task.id))

    def action_reload(self) -> None:
        self.app.submit(self.board.refresh())
