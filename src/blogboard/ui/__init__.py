"""Textual UI for blogboard."""

from blogboard.ui.app import BlogboardApp
from blogboard.ui.confirm import ConfirmScreen

__all__ = [
    "BlogboardApp",
    "ConfirmScreen",
]
