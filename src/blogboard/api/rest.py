"""HTTP implementation of the server contract.

Speaks the blog server's JSON API under a base URL such as
``http://localhost:8080/api``. A bearer token, when configured, is sent
on every request.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import requests

from blogboard.api.base import Backend
from blogboard.errors import REFERENCED_BY_ITEMS, ConflictError, NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _category(data: dict, index: int) -> dict:
    position = data.get("displayOrder")
    return {
        "id": data["id"],
        "name": data.get("name", ""),
        "position": index if position is None else position,
    }


def _task(data: dict) -> dict:
    return {
        "id": data["id"],
        "content": data.get("content", ""),
        "partition": data.get("status"),
        "position": data.get("displayOrder") or 0,
    }


def _post(data: dict) -> dict:
    category = data.get("categoryId")
    if category is None and isinstance(data.get("category"), dict):
        category = data["category"].get("id")
    return {
        "id": data["id"],
        "title": data.get("title", ""),
        "author": data.get("author", ""),
        "partition": category,
    }


class RestBackend(Backend):
    """
    Args:
        base_url: API root, e.g. 'http://localhost:8080/api'
        token:    Bearer token, or None for anonymous requests
        timeout:  Seconds before a request counts as failed
    """

    def __init__(self, base_url: str, token: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> Any:
        logger.info("%s %s", method, path)
        try:
            response = self._session.request(method, self._url(path), timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        self._raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"{method} {path} returned invalid JSON", response.status_code) from exc

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 409:
            raise ConflictError(REFERENCED_BY_ITEMS, f"Server refused the change: {_detail(response)}")
        if not response.ok:
            raise NetworkError(
                f"Server error {response.status_code}: {_detail(response)}",
                response.status_code,
            )

    # ------------------------------------------------------------------
    # Backend contract
    # ------------------------------------------------------------------

    def list_partitions(self) -> list[dict]:
        data = self._request("GET", "/categories") or []
        return [_category(c, i) for i, c in enumerate(data)]

    def create_partition(self, name: str) -> Any:
        return self._request("POST", "/categories", json={"name": name})

    def delete_partition(self, partition_id: Any) -> None:
        self._request("DELETE", f"/categories/{partition_id}")

    def set_partition_order(self, ordered_ids: Sequence[Any]) -> None:
        self._request("PUT", "/categories/order", json=list(ordered_ids))

    def migrate_partition_items(self, source_id: Any, target_id: Any) -> None:
        self._request(
            "POST",
            f"/categories/{source_id}/migrate",
            params={"targetCategoryId": target_id},
        )

    def list_items(self, query) -> list[dict]:
        params: dict[str, Any] = {"page": query.page, "size": query.size}
        if query.category_id is not None:
            params["categoryId"] = query.category_id
        if query.keyword:
            params["keyword"] = query.keyword
        data = self._request("GET", "/posts", params=params) or []
        # Paged responses wrap the rows in "content"
        rows = data.get("content", []) if isinstance(data, dict) else data
        return [_post(p) for p in rows]

    def bulk_reassign_items(self, item_ids: Sequence[Any], target_id: Any) -> None:
        self._request("PUT", "/posts/category", json={"postIds": list(item_ids), "categoryId": target_id})

    def list_board_items(self) -> list[dict]:
        data = self._request("GET", "/tasks") or []
        return [_task(t) for t in data]

    def create_board_item(self, content: str, partition: str) -> Any:
        return self._request("POST", "/tasks", json={"content": content, "status": partition})

    def delete_board_item(self, item_id: Any) -> None:
        self._request("DELETE", f"/tasks/{item_id}")

    def move_board_item(self, item_id: Any, partition: str, position: int) -> None:
        self._request("PUT", f"/tasks/{item_id}/move", json={"status": partition, "displayOrder": position})


def _detail(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
