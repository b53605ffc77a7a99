"""Tests for the CLI argument parser."""

import pytest

from blogboard.cli import build_parser
from blogboard.cli.category import category_list, category_migrate, category_move
from blogboard.cli.post import post_list, post_reassign
from blogboard.cli.task import task_list, task_move
from blogboard.cli.widget import widget_reset


def parse(*argv):
    return build_parser().parse_args(list(argv))


def test_category_move():
    args = parse("category", "move", "3", "--position", "1")
    assert args.func is category_move
    assert args.id == "3"
    assert args.position == 1


def test_noun_without_verb_lists():
    assert parse("category").func is category_list
    assert parse("task").func is task_list
    assert parse("post").func is post_list


def test_migrate_requires_yes_flag_to_confirm():
    args = parse("category", "migrate", "2", "3")
    assert args.func is category_migrate
    assert (args.source, args.target, args.yes) == ("2", "3", False)
    assert parse("category", "migrate", "2", "3", "--yes").yes


def test_task_move_optional_placement():
    args = parse("task", "move", "7")
    assert args.func is task_move
    assert args.status is None
    assert args.position is None


def test_task_move_rejects_unknown_status():
    with pytest.raises(SystemExit):
        parse("task", "move", "7", "--status", "ARCHIVED")


def test_post_reassign():
    args = parse("post", "reassign", "10", "11", "--to", "3", "--json")
    assert args.func is post_reassign
    assert args.ids == ["10", "11"]
    assert args.target == "3"
    assert args.category is None
    assert args.page == 0
    assert args.json


def test_widget_reset():
    assert parse("widget", "reset").func is widget_reset
