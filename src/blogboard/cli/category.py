"""Handlers for 'blogboard category' commands."""

from blogboard.cli._common import (
    command,
    confirm_or_die,
    ensure,
    find_category,
    index_from_position,
    open_client,
    output_json,
    output_result,
)


def _summaries(client) -> list[dict]:
    return [{"id": c.id, "name": c.name, "position": c.position} for c in client.categories.items]


@command
async def category_list(args) -> int:
    """List categories in display order."""
    client = open_client(args)
    ensure(await client.categories.refresh(), client, args.json)

    items = _summaries(client)
    if args.json:
        output_json(items)
    else:
        for i, c in enumerate(items, start=1):
            print(f"{i:>3}. {c['name']:<20} (id {c['id']})")

    return 0


@command
async def category_add(args) -> int:
    """Create a category."""
    client = open_client(args)
    ensure(await client.guard.create_partition(args.name), client, args.json)

    name = args.name.strip()
    output_result({"name": name, "categories": _summaries(client)}, f'Created category "{name}"', args.json)
    return 0


@command
async def category_move(args) -> int:
    """Move a category to a new position in the list."""
    client = open_client(args)
    categories = client.categories
    ensure(await categories.refresh(), client, args.json)
    category = find_category(client, args.id, args.json)

    # CLI uses 1-indexed positions, model uses 0-indexed
    from_index = categories.items.keys().index(str(category.id))
    to_index = index_from_position(args.position, len(categories.items), args.json)

    ensure(await categories.move(from_index, to_index), client, args.json)

    output_result(
        {"id": category.id, "name": category.name, "position": args.position},
        f'Moved category "{category.name}" to position {args.position}',
        args.json,
    )
    return 0


@command
async def category_delete(args) -> int:
    """Delete a category that no post refers to any more."""
    client = open_client(args)
    ensure(await client.categories.refresh(), client, args.json)
    category = find_category(client, args.id, args.json)

    proposal = client.guard.propose_delete(category.id)
    confirm_or_die(proposal, args)
    ensure(await proposal.confirm(), client, args.json)

    output_result({"id": category.id, "name": category.name}, f'Deleted category "{category.name}"', args.json)
    return 0


@command
async def category_migrate(args) -> int:
    """Move every post of one category into another."""
    client = open_client(args)
    ensure(await client.categories.refresh(), client, args.json)
    source = find_category(client, args.source, args.json)
    target = find_category(client, args.target, args.json)

    proposal = client.guard.propose_migration(source.id, target.id)
    confirm_or_die(proposal, args)
    ensure(await proposal.confirm(), client, args.json)

    output_result(
        {"source": source.id, "target": target.id},
        f'Moved all posts from "{source.name}" to "{target.name}"',
        args.json,
    )
    return 0
