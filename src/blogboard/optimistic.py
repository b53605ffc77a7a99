"""Optimistic cache updates: apply now, send, then refetch or roll back.

Each mutation snapshots the affected views, applies the new state to the
cache synchronously, awaits the network call, and then either refetches
the views from the server or restores the snapshots verbatim. Blocking
backend calls run via asyncio.to_thread so the event loop keeps serving
gestures while a request is in flight.

Overlapping mutations are not serialized. Whichever request resolves last
decides what the cache ends up showing.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Iterable

from blogboard.errors import BlogboardError, ConflictError, NetworkError
from blogboard.model.node import ListNode, Node, from_items

logger = logging.getLogger(__name__)

VIEWS = ("categories", "tasks", "posts", "widgets")

Loader = Callable[[], Iterable[dict]]


def build_cache() -> Node:
    """Create an empty cache with one ListNode per view."""
    cache = Node()
    for view in VIEWS:
        setattr(cache, view, ListNode())
    return cache


async def _call(fn: Callable[[], Any]) -> Any:
    if inspect.iscoroutinefunction(fn):
        return await fn()
    return await asyncio.to_thread(fn)


class OptimisticUpdateController:
    """Owns the view cache and runs every mutation against it."""

    def __init__(self, cache: Node | None = None) -> None:
        self.cache = cache if cache is not None else build_cache()
        self.last_error: BlogboardError | None = None

    def view(self, name: str) -> ListNode:
        return getattr(self.cache, name)

    def notify(self, kind: str, message: str) -> None:
        """Publish a user-facing notice on the cache."""
        self.cache.notice = Node(kind=kind, message=message)

    async def refresh(self, loaders: dict[str, Loader]) -> bool:
        """Replace views with fresh server data, in place.

        A failed load leaves that view untouched and publishes a notice.
        """
        ok = True
        for name, loader in loaders.items():
            try:
                items = await _call(loader)
            except NetworkError as exc:
                logger.warning("refresh of %s failed: %s", name, exc)
                self.last_error = exc
                self.notify(exc.kind, f"Could not load {name}: {exc.message}")
                ok = False
                continue
            self.view(name).update(from_items(items))
        return ok

    async def run(
        self,
        views: Iterable[str],
        send: Callable[[], Any],
        apply: Callable[[], None] | None = None,
        refetch: dict[str, Loader] | None = None,
        failure: str | Callable[[BlogboardError], str] = "The change could not be saved.",
        success: str | None = None,
    ) -> bool:
        """Apply a mutation optimistically and reconcile with the server.

        Returns True once the server accepted the change. On any failure the
        snapshotted views are restored, a notice is published and False is
        returned. Unexpected exceptions are logged and reported with kind
        "error"; cancellation restores the snapshots and propagates.
        """
        names = tuple(views)
        previous = {name: self.view(name).clone() for name in names}
        if apply is not None:
            apply()

        try:
            await _call(send)
        except (ConflictError, NetworkError) as exc:
            self._roll_back(previous, exc, failure)
            return False
        except asyncio.CancelledError:
            self._restore(previous)
            raise
        except Exception as exc:
            logger.exception("unexpected failure saving %s", ", ".join(names))
            self._roll_back(previous, BlogboardError(str(exc) or type(exc).__name__), failure)
            return False

        self.last_error = None
        if success:
            self.notify("info", success)
        if refetch:
            await self.refresh(refetch)
        return True

    def _restore(self, previous: dict[str, ListNode]) -> None:
        for name, snapshot in previous.items():
            self.view(name).update(snapshot)

    def _roll_back(
        self,
        previous: dict[str, ListNode],
        exc: BlogboardError,
        failure: str | Callable[[BlogboardError], str],
    ) -> None:
        self._restore(previous)
        message = failure(exc) if callable(failure) else f"{failure} ({exc.message})"
        logger.warning("rolled back %s: %s", ", ".join(previous), exc)
        self.last_error = exc
        self.notify(exc.kind, message)
