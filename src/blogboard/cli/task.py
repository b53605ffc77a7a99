"""Handlers for 'blogboard task' commands."""

from blogboard.cli._common import (
    command,
    ensure,
    error,
    index_from_position,
    open_client,
    output_json,
    output_result,
)


def _find_task(client, raw_id: str, json_mode: bool):
    task = client.board.items[raw_id]
    if task is None:
        error(f"Task '{raw_id}' not found.", json_mode)
    return task


@command
async def task_list(args) -> int:
    """List tasks column by column."""
    client = open_client(args)
    board = client.board
    ensure(await board.refresh(), client, args.json)

    statuses = [args.status] if args.status else list(board.partitions)
    columns = {
        status: [{"id": t.id, "content": t.content, "position": t.position} for t in board.items_by_partition(status)]
        for status in statuses
    }

    if args.json:
        output_json(columns)
    else:
        for status, tasks in columns.items():
            print(f"{status} ({len(tasks)})")
            for t in tasks:
                print(f"  {t['id']:>4}  {t['content']}")

    return 0


@command
async def task_add(args) -> int:
    """Create a task at the bottom of a column."""
    client = open_client(args)
    ensure(await client.board.add_item(args.content, args.status), client, args.json)

    output_result(
        {"content": args.content.strip(), "status": args.status},
        f'Added task "{args.content.strip()}" to {args.status}',
        args.json,
    )
    return 0


@command
async def task_move(args) -> int:
    """Move a task to another column and/or position."""
    client = open_client(args)
    board = client.board
    ensure(await board.refresh(), client, args.json)
    task = _find_task(client, args.id, args.json)

    source, _ = board.locate(task.id)
    target = args.status or source
    slots = len(board.items_by_partition(target)) + (0 if target == source else 1)
    if args.position is None:
        index = slots - 1
    else:
        # CLI uses 1-indexed positions, model uses 0-indexed
        index = index_from_position(args.position, slots, args.json)

    placement = await board.move_item(task.id, source, target, index)
    if placement is None:
        ensure(client.controller.last_error is None, client, args.json)
        placement = {"partition": target, "position": index}

    output_result(
        {"id": task.id, "status": placement["partition"], "position": placement["position"] + 1},
        f'Moved task {task.id} to {placement["partition"]} position {placement["position"] + 1}',
        args.json,
    )
    return 0


@command
async def task_remove(args) -> int:
    """Delete a task."""
    client = open_client(args)
    board = client.board
    ensure(await board.refresh(), client, args.json)
    task = _find_task(client, args.id, args.json)

    ensure(await board.remove_item(task.id), client, args.json)

    output_result({"id": task.id}, f"Deleted task {task.id}", args.json)
    return 0
