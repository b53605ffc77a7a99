"""Handlers for 'blogboard widget' commands (local dashboard layout)."""

from blogboard.cli._common import (
    command,
    ensure,
    error,
    index_from_position,
    open_client,
    output_json,
    output_result,
)
from blogboard.errors import StorageError


@command
async def widget_list(args) -> int:
    """Show the dashboard widgets in layout order."""
    client = open_client(args)
    ensure(await client.widgets.refresh(), client, args.json)

    order = client.widgets.order()
    if args.json:
        output_json(order)
    else:
        for i, widget in enumerate(order, start=1):
            print(f"{i}. {widget}")

    return 0


@command
async def widget_move(args) -> int:
    """Move a widget to a new slot of the layout."""
    client = open_client(args)
    widgets = client.widgets
    ensure(await widgets.refresh(), client, args.json)

    order = widgets.order()
    if args.id not in order:
        error(f"Widget '{args.id}' not found. Available: {', '.join(order)}", args.json)
    to_index = index_from_position(args.position, len(order), args.json)

    ensure(await widgets.move(order.index(args.id), to_index), client, args.json)

    output_result(
        {"id": args.id, "position": args.position, "layout": widgets.order()},
        f"Moved {args.id} to position {args.position}",
        args.json,
    )
    return 0


@command
async def widget_reset(args) -> int:
    """Forget the saved layout and go back to the default order."""
    client = open_client(args)
    try:
        client.layout.reset()
    except StorageError as e:
        error(e.message, args.json)
    ensure(await client.widgets.refresh(), client, args.json)

    output_result({"layout": client.widgets.order()}, "Restored the default layout", args.json)
    return 0
