"""Shared helpers for CLI command handlers."""

import functools
import json
import sys
from typing import Any

from blogboard.client import BlogClient
from blogboard.config import load_config
from blogboard.errors import ConfigError, ValidationError


def open_client(args) -> BlogClient:
    """Build a client from --config and the environment. Exit 1 on bad config."""
    try:
        config = load_config(getattr(args, "config", None))
    except ConfigError as e:
        error(str(e), args.json)
    return BlogClient.from_config(config)


def command(handler):
    """Turn locally rejected requests into an error message and exit 1."""

    @functools.wraps(handler)
    async def wrapper(args) -> int:
        try:
            return await handler(args)
        except ValidationError as e:
            error(e.message, args.json)

    return wrapper


def parse_id(raw: str) -> Any:
    """Server ids are numeric; keep anything else as a string key."""
    return int(raw) if raw.isdigit() else raw


def ensure(ok: bool, client: BlogClient, json_mode: bool) -> None:
    """Exit 1 with the controller's notice if an operation did not succeed."""
    if ok:
        return
    notice = client.cache.notice
    error(notice.message if notice else "operation failed", json_mode)


def confirm_or_die(proposal, args) -> None:
    """Destructive commands only run with --yes."""
    if args.yes:
        return
    proposal.cancel()
    error(f"{proposal.prompt} Re-run with --yes to confirm.", args.json)


def index_from_position(position: int, length: int, json_mode: bool) -> int:
    """Convert a 1-indexed CLI position into a model index."""
    if not 1 <= position <= length:
        error(f"Position must be between 1 and {length}.", json_mode)
    return position - 1


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def find_category(client: BlogClient, raw_id: str, json_mode: bool):
    """Lookup a cached category. Exit 1 listing available categories if not found."""
    category = client.categories.items[raw_id]
    if category is not None:
        return category
    available = [f"  {c.id}  {c.name}" for c in client.categories.items]
    error(f"Category '{raw_id}' not found. Available:\n" + "\n".join(available), json_mode)
