"""Tests for 'blogboard widget' commands."""

import json
from argparse import Namespace

import pytest

from blogboard.cli.widget import widget_list, widget_move, widget_reset
from blogboard.model.ordered import DEFAULT_WIDGETS


@pytest.mark.asyncio
async def test_widget_list_defaults(capsys):
    args = Namespace(config=None, json=True)
    assert await widget_list(args) == 0
    assert json.loads(capsys.readouterr().out) == list(DEFAULT_WIDGETS)


@pytest.mark.asyncio
async def test_widget_move_persists(cli_env, capsys):
    args = Namespace(config=None, json=False, id="chart-member", position=1)
    assert await widget_move(args) == 0
    assert "Moved chart-member to position 1" in capsys.readouterr().out

    state = json.loads((cli_env / "state" / "state.json").read_text())
    assert state["dashboard-layout"] == ["chart-member", "stat-post", "stat-member", "chart-post"]

    assert await widget_list(Namespace(config=None, json=True)) == 0
    assert json.loads(capsys.readouterr().out)[0] == "chart-member"


@pytest.mark.asyncio
async def test_widget_move_unknown(capsys):
    args = Namespace(config=None, json=False, id="clock", position=1)
    with pytest.raises(SystemExit, match="1"):
        await widget_move(args)
    assert "Widget 'clock' not found" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_widget_reset(capsys):
    await widget_move(Namespace(config=None, json=False, id="stat-post", position=4))
    capsys.readouterr()

    assert await widget_reset(Namespace(config=None, json=True)) == 0
    assert json.loads(capsys.readouterr().out) == {"layout": list(DEFAULT_WIDGETS)}
