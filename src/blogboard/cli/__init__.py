"""CLI argument parser and dispatch for blogboard."""

import argparse

from blogboard.cli.category import (
    category_add,
    category_delete,
    category_list,
    category_migrate,
    category_move,
)
from blogboard.cli.post import post_list, post_reassign
from blogboard.cli.task import task_add, task_list, task_move, task_remove
from blogboard.cli.widget import widget_list, widget_move, widget_reset
from blogboard.model.board import TASK_STATUSES


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Path to config.yaml (default: ~/.config/blogboard/config.yaml)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log requests and rollbacks")

    parser = argparse.ArgumentParser(
        prog="blogboard",
        description="Blog admin client: categories, posts and the task board",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- category ---
    cat_p = nouns.add_parser("category", help="Category operations", parents=[common])
    cat_verbs = cat_p.add_subparsers(dest="verb")

    cat_list_p = cat_verbs.add_parser("list", help="List categories", parents=[common])
    cat_list_p.set_defaults(func=category_list)

    cat_add_p = cat_verbs.add_parser("add", help="Create a category", parents=[common])
    cat_add_p.add_argument("name", help="Category name")
    cat_add_p.set_defaults(func=category_add)

    cat_move_p = cat_verbs.add_parser("move", help="Move a category", parents=[common])
    cat_move_p.add_argument("id", help="Category ID")
    cat_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    cat_move_p.set_defaults(func=category_move)

    cat_delete_p = cat_verbs.add_parser("delete", help="Delete an empty category", parents=[common])
    cat_delete_p.add_argument("id", help="Category ID")
    cat_delete_p.add_argument("--yes", action="store_true", help="Confirm the deletion")
    cat_delete_p.set_defaults(func=category_delete)

    cat_migrate_p = cat_verbs.add_parser("migrate", help="Move all posts to another category", parents=[common])
    cat_migrate_p.add_argument("source", help="Category to empty")
    cat_migrate_p.add_argument("target", help="Category receiving the posts")
    cat_migrate_p.add_argument("--yes", action="store_true", help="Confirm the migration")
    cat_migrate_p.set_defaults(func=category_migrate)

    # category with no verb = list
    cat_p.set_defaults(func=category_list)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task board operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("--status", choices=TASK_STATUSES, help="Only one column")
    task_list_p.set_defaults(func=task_list)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common])
    task_add_p.add_argument("content", help="Task text")
    task_add_p.add_argument("--status", choices=TASK_STATUSES, default=TASK_STATUSES[0], help="Column")
    task_add_p.set_defaults(func=task_add)

    task_move_p = task_verbs.add_parser("move", help="Move a task", parents=[common])
    task_move_p.add_argument("id", help="Task ID")
    task_move_p.add_argument("--status", choices=TASK_STATUSES, help="Target column (default: current)")
    task_move_p.add_argument("--position", type=int, help="Position in column (1-indexed, default: last)")
    task_move_p.set_defaults(func=task_move)

    task_rm_p = task_verbs.add_parser("rm", help="Delete a task", parents=[common])
    task_rm_p.add_argument("id", help="Task ID")
    task_rm_p.set_defaults(func=task_remove)

    # task with no verb = list
    task_p.set_defaults(func=task_list, status=None)

    # --- post ---
    post_p = nouns.add_parser("post", help="Post operations", parents=[common])
    post_verbs = post_p.add_subparsers(dest="verb")

    listing = argparse.ArgumentParser(add_help=False)
    listing.add_argument("--page", type=int, default=0, help="Page number (0-indexed)")
    listing.add_argument("--size", type=int, help="Posts per page")
    listing.add_argument("--category", help="Only posts of this category ID")
    listing.add_argument("--keyword", help="Search text")

    post_list_p = post_verbs.add_parser("list", help="List posts", parents=[common, listing])
    post_list_p.set_defaults(func=post_list)

    post_reassign_p = post_verbs.add_parser(
        "reassign", help="Move selected posts to a category", parents=[common, listing]
    )
    post_reassign_p.add_argument("ids", nargs="+", help="Post IDs")
    post_reassign_p.add_argument("--to", dest="target", required=True, help="Target category ID")
    post_reassign_p.set_defaults(func=post_reassign)

    # post with no verb = list
    post_p.set_defaults(func=post_list, page=0, size=None, category=None, keyword=None)

    # --- widget ---
    widget_p = nouns.add_parser("widget", help="Dashboard layout", parents=[common])
    widget_verbs = widget_p.add_subparsers(dest="verb")

    widget_list_p = widget_verbs.add_parser("list", help="Show the layout", parents=[common])
    widget_list_p.set_defaults(func=widget_list)

    widget_move_p = widget_verbs.add_parser("move", help="Move a widget", parents=[common])
    widget_move_p.add_argument("id", help="Widget ID")
    widget_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    widget_move_p.set_defaults(func=widget_move)

    widget_reset_p = widget_verbs.add_parser("reset", help="Restore the default layout", parents=[common])
    widget_reset_p.set_defaults(func=widget_reset)

    # widget with no verb = list
    widget_p.set_defaults(func=widget_list)

    return parser
