"""Handlers for 'blogboard post' commands."""

from blogboard.cli._common import (
    command,
    ensure,
    find_category,
    open_client,
    output_json,
    output_result,
    parse_id,
)
from blogboard.model.migration import PostQuery, Selection


def _query(client, args) -> PostQuery:
    category = parse_id(args.category) if args.category else None
    size = args.size or client.guard.query.size
    return PostQuery(page=args.page, size=size, category_id=category, keyword=args.keyword or "")


@command
async def post_list(args) -> int:
    """List one page of posts with their categories."""
    client = open_client(args)
    ensure(await client.guard.load_items(_query(client, args)), client, args.json)

    names = {c.id: c.name for c in client.categories.items}
    items = [
        {"id": p.id, "title": p.title, "author": p.author, "category": names.get(p.partition, p.partition)}
        for p in client.guard.items
    ]

    if args.json:
        output_json(items)
    else:
        for p in items:
            print(f"{p['id']:>5}  {p['title']:<40} {p['category'] or '-'}")

    return 0


@command
async def post_reassign(args) -> int:
    """File the given posts under one category."""
    client = open_client(args)
    guard = client.guard
    query = _query(client, args)
    ensure(await guard.load_items(query), client, args.json)
    target = find_category(client, args.target, args.json)

    selection = Selection(query)
    for raw_id in args.ids:
        selection.add(parse_id(raw_id))

    ensure(await guard.reassign_selection(selection, target.id), client, args.json)

    ids = list(selection)
    output_result(
        {"ids": ids, "category": target.id},
        f'Moved {len(ids)} posts to "{target.name}"',
        args.json,
    )
    return 0
