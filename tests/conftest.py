"""Shared fixtures: an in-memory blog server and a client wired to it."""

import pytest

from blogboard.api.base import Backend
from blogboard.client import BlogClient
from blogboard.errors import ConflictError
from blogboard.storage import LocalStore


class FakeBackend(Backend):
    """In-memory server with the same integrity rules as the real one.

    Every call is recorded in ``calls``. Put an exception in ``fail`` under
    a method name to make that method raise it (after recording the call).
    """

    def __init__(self):
        self.categories = [
            {"id": 1, "name": "News", "position": 0},
            {"id": 2, "name": "Tech", "position": 1},
            {"id": 3, "name": "Empty", "position": 2},
        ]
        self.posts = [
            {"id": 10, "title": "Hello", "author": "ann", "partition": 1},
            {"id": 11, "title": "Release", "author": "bob", "partition": 2},
            {"id": 12, "title": "Patch", "author": "bob", "partition": 2},
        ]
        self.tasks = [
            {"id": 1, "content": "t1", "partition": "TODO", "position": 10},
            {"id": 2, "content": "t2", "partition": "TODO", "position": 20},
            {"id": 3, "content": "t3", "partition": "DONE", "position": 5},
        ]
        self.calls = []
        self.fail = {}

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail:
            raise self.fail[name]

    def called(self, name):
        return [call[1:] for call in self.calls if call[0] == name]

    def list_partitions(self):
        self._record("list_partitions")
        return [dict(c) for c in self.categories]

    def create_partition(self, name):
        self._record("create_partition", name)
        new_id = max((c["id"] for c in self.categories), default=0) + 1
        self.categories.append({"id": new_id, "name": name, "position": len(self.categories)})
        return new_id

    def delete_partition(self, partition_id):
        self._record("delete_partition", partition_id)
        if any(p["partition"] == partition_id for p in self.posts):
            raise ConflictError()
        self.categories = [c for c in self.categories if c["id"] != partition_id]

    def set_partition_order(self, ordered_ids):
        self._record("set_partition_order", list(ordered_ids))
        by_id = {c["id"]: c for c in self.categories}
        for position, category_id in enumerate(ordered_ids):
            by_id[category_id]["position"] = position

    def migrate_partition_items(self, source_id, target_id):
        self._record("migrate_partition_items", source_id, target_id)
        for post in self.posts:
            if post["partition"] == source_id:
                post["partition"] = target_id

    def list_items(self, query):
        self._record("list_items", query)
        posts = [
            dict(p)
            for p in self.posts
            if (query.category_id is None or p["partition"] == query.category_id)
            and query.keyword.lower() in p["title"].lower()
        ]
        start = query.page * query.size
        return posts[start : start + query.size]

    def bulk_reassign_items(self, item_ids, target_id):
        self._record("bulk_reassign_items", list(item_ids), target_id)
        for post in self.posts:
            if post["id"] in item_ids:
                post["partition"] = target_id

    def list_board_items(self):
        self._record("list_board_items")
        return [dict(t) for t in self.tasks]

    def create_board_item(self, content, partition):
        self._record("create_board_item", content, partition)
        new_id = max((t["id"] for t in self.tasks), default=0) + 1
        position = sum(1 for t in self.tasks if t["partition"] == partition)
        self.tasks.append({"id": new_id, "content": content, "partition": partition, "position": position})
        return new_id

    def delete_board_item(self, item_id):
        self._record("delete_board_item", item_id)
        self.tasks = [t for t in self.tasks if t["id"] != item_id]

    def move_board_item(self, item_id, partition, position):
        self._record("move_board_item", item_id, partition, position)
        for task in self.tasks:
            if task["id"] == item_id:
                task["partition"] = partition
                task["position"] = position


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "state.json")


@pytest.fixture
def client(backend, store):
    return BlogClient(backend, store)
