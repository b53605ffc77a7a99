"""Reactive view cache and the ordering operations built on it."""

from blogboard.model.node import ListNode, Node, from_items

__all__ = [
    "ListNode",
    "Node",
    "from_items",
]
