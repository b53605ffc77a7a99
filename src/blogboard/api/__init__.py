"""Server access for blogboard."""

from blogboard.api.base import Backend
from blogboard.api.rest import RestBackend

__all__ = ["Backend", "RestBackend"]
