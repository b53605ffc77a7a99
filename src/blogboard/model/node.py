"""Reactive cache nodes with change notification and bubbling."""

from __future__ import annotations

from typing import Any, Callable, Iterable

Callback = Callable[["Node | ListNode", str, Any, Any], None]


def _wrap(value: Any, parent: Node | ListNode, key: str) -> Any:
    """Auto-wrap dicts as Nodes. Reparent existing Nodes/ListNodes."""
    if isinstance(value, dict):
        return Node(_parent=parent, _key=key, **value)
    if isinstance(value, (Node, ListNode)):
        object.__setattr__(value, "_parent", parent)
        object.__setattr__(value, "_key", key)
    return value


def _clone(value: Any) -> Any:
    if isinstance(value, (Node, ListNode)):
        return value.clone()
    if isinstance(value, list):
        return list(value)
    return value


def _plain(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, ListNode):
        return [_plain(v) for v in value]
    return value


def _emit(node: Node | ListNode, key: str, old: Any, new: Any) -> None:
    """Fire local watchers for key, then bubble up the parent chain."""
    for cb in list(node._watchers.get(key, ())):
        cb(node, key, old, new)
    child = node
    while child._parent is not None:
        parent = child._parent
        for cb in list(parent._watchers.get(child._key, ())):
            cb(node, key, old, new)
        child = parent


def _path(node: Node | ListNode) -> str:
    parts: list[str] = []
    current: Node | ListNode | None = node
    while current is not None and current._key is not None:
        parts.append(current._key)
        current = current._parent
    return ".".join(reversed(parts))


class Node:
    """Reactive dict-like cache entry.

    Values are read and written as attributes. Assigning None deletes the
    key and plain dicts become child Nodes. Every change fires the
    watchers registered for that key and then bubbles to the watchers of
    each ancestor, so a widget watching ``cache.tasks`` hears about a
    position change on any single task.
    """

    def __init__(
        self,
        _parent: Node | ListNode | None = None,
        _key: str | None = None,
        **data: Any,
    ) -> None:
        object.__setattr__(self, "_children", {})
        object.__setattr__(self, "_watchers", {})
        object.__setattr__(self, "_parent", None)
        object.__setattr__(self, "_key", _key)
        object.__setattr__(self, "_version", 0)
        for k, v in data.items():
            setattr(self, k, v)
        object.__setattr__(self, "_parent", _parent)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._children.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        old = self._children.get(name)
        if value is None:
            self._children.pop(name, None)
        else:
            value = _wrap(value, parent=self, key=name)
            self._children[name] = value
        if old != value:
            self._version += 1
            _emit(self, name, old, value)

    def __contains__(self, key: str) -> bool:
        return key in self._children

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Watch a key for changes. Returns an unwatch callable."""
        self._watchers.setdefault(key, []).append(callback)
        return lambda: self._watchers.get(key, []) and self._watchers[key].remove(callback)

    def keys(self):
        return self._children.keys()

    def items(self):
        return self._children.items()

    def values(self):
        return self._children.values()

    @property
    def path(self) -> str:
        """Dotted path from root to this node."""
        return _path(self)

    def clone(self) -> Node:
        """Deep copy of the data, detached and without watchers."""
        copy = Node()
        for key, value in self._children.items():
            setattr(copy, key, _clone(value))
        return copy

    def to_dict(self) -> dict:
        return {key: _plain(value) for key, value in self._children.items()}

    def update(self, other: Node) -> None:
        """Update this node in-place to match other, preserving watchers."""
        for key in set(self.keys()) - set(other.keys()):
            setattr(self, key, None)
        for key in other.keys():
            old_value = self._children.get(key)
            new_value = other._children.get(key)
            if isinstance(old_value, Node) and isinstance(new_value, Node):
                old_value.update(new_value)
            elif isinstance(old_value, ListNode) and isinstance(new_value, ListNode):
                old_value.update(new_value)
            elif old_value == new_value:
                continue
            else:
                setattr(self, key, new_value)

    def __repr__(self) -> str:
        p = self.path
        keys = ", ".join(self._children.keys())
        label = f"Node({p})" if p else "Node"
        return f"<{label} [{keys}]>"


class ListNode:
    """Ordered, id-keyed collection with change notification.

    Keys are always strings, so server ids ``7`` and ``"7"`` address the
    same entry. Iteration yields values in order.
    """

    def __init__(
        self,
        _parent: Node | None = None,
        _key: str | None = None,
    ) -> None:
        object.__setattr__(self, "_by_id", {})
        object.__setattr__(self, "_watchers", {})
        object.__setattr__(self, "_parent", _parent)
        object.__setattr__(self, "_key", _key)
        object.__setattr__(self, "_version", 0)

    def __getitem__(self, key: Any) -> Any:
        return self._by_id.get(str(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        key = str(key)
        old = self._by_id.get(key)
        if value is None:
            if key not in self._by_id:
                return
            del self._by_id[key]
            self._version += 1
            _emit(self, key, old, None)
            return
        value = _wrap(value, parent=self, key=key)
        self._by_id[key] = value
        if old != value:
            self._version += 1
            _emit(self, key, old, value)

    def __iter__(self):
        return iter(list(self._by_id.values()))

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, key: Any) -> bool:
        return str(key) in self._by_id

    def watch(self, key: str, callback: Callback) -> Callable[[], None]:
        """Watch an item id (or "*" for reorders). Returns an unwatch callable."""
        key = str(key)
        self._watchers.setdefault(key, []).append(callback)
        return lambda: self._watchers.get(key, []) and self._watchers[key].remove(callback)

    @property
    def path(self) -> str:
        """Dotted path from root to this node."""
        return _path(self)

    def keys(self) -> list[str]:
        return list(self._by_id.keys())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._by_id.items())

    def clone(self) -> ListNode:
        """Deep copy of the entries in order, detached and without watchers."""
        copy = ListNode()
        for key, value in self._by_id.items():
            copy[key] = _clone(value)
        return copy

    def reorder(self, keys: Iterable[Any]) -> None:
        """Put the entries in the order given by keys.

        keys must be a permutation of the current keys. Fires a single
        "*" change with the old and new key lists.
        """
        new_keys = [str(k) for k in keys]
        old_keys = self.keys()
        if sorted(new_keys) != sorted(old_keys):
            raise ValueError(f"{new_keys} is not a permutation of {old_keys}")
        if new_keys == old_keys:
            return
        object.__setattr__(self, "_by_id", {k: self._by_id[k] for k in new_keys})
        self._version += 1
        _emit(self, "*", old_keys, new_keys)

    def update(self, other: ListNode) -> None:
        """Update this list in-place to match other, preserving watchers."""
        for key in set(self._by_id) - set(other._by_id):
            self[key] = None
        for key in other.keys():
            old_value = self._by_id.get(key)
            new_value = other._by_id.get(key)
            if old_value is None:
                self[key] = new_value
            elif isinstance(old_value, Node) and isinstance(new_value, Node):
                old_value.update(new_value)
            elif isinstance(old_value, ListNode) and isinstance(new_value, ListNode):
                old_value.update(new_value)
            elif old_value != new_value:
                self[key] = new_value
        self.reorder(other.keys())

    def __repr__(self) -> str:
        p = self.path
        ids = ", ".join(self._by_id.keys())
        label = f"ListNode({p})" if p else "ListNode"
        return f"<{label} [{ids}]>"


def from_items(items: Iterable[dict]) -> ListNode:
    """Build a ListNode from server records keyed by their ``id`` field."""
    result = ListNode()
    for item in items:
        result[item["id"]] = dict(item)
    return result
