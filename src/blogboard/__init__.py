"""Client for a personal blog and board: categories, posts, tasks."""

from blogboard.client import BlogClient

__all__ = ["BlogClient"]
