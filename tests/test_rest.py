"""Tests for the HTTP backend, with the requests session mocked out."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from blogboard.api.rest import RestBackend
from blogboard.errors import ConflictError, NetworkError
from blogboard.model.migration import PostQuery


def _response(status=200, body=None, text=None):
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    if body is not None:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    else:
        response.content = (text or "").encode()
        response.text = text or ""
        response.json.side_effect = ValueError("no json")
    return response


@pytest.fixture
def rest():
    backend = RestBackend("http://blog.test/api/", token="secret", timeout=3)
    backend._session = MagicMock()
    backend._session.request.return_value = _response(204)
    return backend


def last_call(rest):
    args, kwargs = rest._session.request.call_args
    return args, kwargs


def test_token_sets_bearer_header():
    backend = RestBackend("http://blog.test/api", token="secret")
    assert backend._session.headers["Authorization"] == "Bearer secret"


def test_no_token_no_header():
    backend = RestBackend("http://blog.test/api")
    assert "Authorization" not in backend._session.headers


def test_list_partitions_maps_fields(rest):
    rest._session.request.return_value = _response(
        body=[
            {"id": 1, "name": "News", "displayOrder": 3},
            {"id": 2, "name": "Tech"},
        ]
    )
    assert rest.list_partitions() == [
        {"id": 1, "name": "News", "position": 3},
        {"id": 2, "name": "Tech", "position": 1},
    ]
    args, kwargs = last_call(rest)
    assert args == ("GET", "http://blog.test/api/categories")
    assert kwargs["timeout"] == 3


def test_set_partition_order_sends_ids(rest):
    rest.set_partition_order((3, 1, 2))
    args, kwargs = last_call(rest)
    assert args == ("PUT", "http://blog.test/api/categories/order")
    assert kwargs["json"] == [3, 1, 2]


def test_migrate_uses_target_param(rest):
    rest.migrate_partition_items(2, 5)
    args, kwargs = last_call(rest)
    assert args == ("POST", "http://blog.test/api/categories/2/migrate")
    assert kwargs["params"] == {"targetCategoryId": 5}


def test_delete_partition_conflict(rest):
    rest._session.request.return_value = _response(409, {"message": "category in use"})
    with pytest.raises(ConflictError) as exc:
        rest.delete_partition(2)
    assert exc.value.reason == "ReferencedByItems"
    assert "category in use" in exc.value.message


def test_server_error_is_network_error(rest):
    rest._session.request.return_value = _response(500, text="oops")
    with pytest.raises(NetworkError) as exc:
        rest.list_board_items()
    assert exc.value.status == 500
    assert "oops" in exc.value.message


def test_transport_failure_is_network_error(rest):
    rest._session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(NetworkError) as exc:
        rest.list_partitions()
    assert exc.value.status is None
    assert "refused" in exc.value.message


def test_invalid_json_is_network_error(rest):
    response = _response(200, text="<html>")
    rest._session.request.return_value = response
    with pytest.raises(NetworkError):
        rest.list_board_items()


def test_list_items_unwraps_page(rest):
    rest._session.request.return_value = _response(
        body={
            "content": [
                {"id": 10, "title": "Hello", "author": "ann", "categoryId": 1},
                {"id": 11, "title": "Release", "author": "bob", "category": {"id": 2, "name": "Tech"}},
            ],
            "totalElements": 2,
        }
    )
    posts = rest.list_items(PostQuery(page=1, size=5, category_id=2, keyword="re"))

    assert posts == [
        {"id": 10, "title": "Hello", "author": "ann", "partition": 1},
        {"id": 11, "title": "Release", "author": "bob", "partition": 2},
    ]
    _, kwargs = last_call(rest)
    assert kwargs["params"] == {"page": 1, "size": 5, "categoryId": 2, "keyword": "re"}


def test_list_items_plain_list(rest):
    rest._session.request.return_value = _response(body=[{"id": 10, "title": "Hello"}])
    assert rest.list_items(PostQuery()) == [{"id": 10, "title": "Hello", "author": "", "partition": None}]
    _, kwargs = last_call(rest)
    assert kwargs["params"] == {"page": 0, "size": 10}


def test_bulk_reassign_body(rest):
    rest.bulk_reassign_items([10, 11], 3)
    args, kwargs = last_call(rest)
    assert args == ("PUT", "http://blog.test/api/posts/category")
    assert kwargs["json"] == {"postIds": [10, 11], "categoryId": 3}


def test_list_board_items_maps_status(rest):
    rest._session.request.return_value = _response(
        body=[{"id": 1, "content": "t1", "status": "DONE", "displayOrder": 4}]
    )
    assert rest.list_board_items() == [{"id": 1, "content": "t1", "partition": "DONE", "position": 4}]


def test_move_board_item_body(rest):
    rest.move_board_item(7, "IN_PROGRESS", 2)
    args, kwargs = last_call(rest)
    assert args == ("PUT", "http://blog.test/api/tasks/7/move")
    assert kwargs["json"] == {"status": "IN_PROGRESS", "displayOrder": 2}


def test_create_board_item_returns_body(rest):
    rest._session.request.return_value = _response(201, {"id": 9})
    assert rest.create_board_item("write docs", "TODO") == {"id": 9}
    _, kwargs = last_call(rest)
    assert kwargs["json"] == {"content": "write docs", "status": "TODO"}
