"""Error types shared by the ordering engine, backends and surfaces."""

SELF_MIGRATION = "SelfMigration"
EMPTY_SELECTION = "EmptySelection"
MISSING_TARGET = "MissingTarget"
MISSING_NAME = "MissingName"
UNKNOWN_PARTITION = "UnknownPartition"
UNKNOWN_ITEM = "UnknownItem"
PROPOSAL_CLOSED = "ProposalClosed"
REFERENCED_BY_ITEMS = "ReferencedByItems"


class BlogboardError(Exception):
    """Base class for blogboard errors."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BlogboardError):
    """A request rejected locally, before anything is sent to the server."""

    kind = "validation"

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class InvalidIndex(ValidationError):
    """An index outside the bounds of the list it refers to."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__("InvalidIndex", f"Index {index} is out of range for {length} positions")
        self.index = index
        self.length = length


class ConflictError(BlogboardError):
    """The server refused a change that would break referential integrity."""

    kind = "conflict"

    def __init__(self, reason: str = REFERENCED_BY_ITEMS, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class NetworkError(BlogboardError):
    """Transport failure or an unexpected server response."""

    kind = "network"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class StorageError(NetworkError):
    """Client-local storage could not be written."""


class ConfigError(BlogboardError):
    """Invalid configuration value."""
