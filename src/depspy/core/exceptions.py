"""
Exception types raised by the depspy engine and CLI.
"""


class DepSpyError(Exception):
    """Base class for all depspy errors."""


class NodeNotFoundError(DepSpyError):
    """A graph id was queried that is not part of the loaded graph."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Module not found in graph: {node_id}")


class GraphNotFoundError(DepSpyError):
    """No module records could be loaded from the given location."""

    def __init__(self, path: str, reason: str = "Module records not found"):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class InvalidMaxLevelError(DepSpyError):
    def __init__(self, max_level: int):
        self.max_level = max_level
        super().__init__(f"max_level must be >= 1, got {max_level}")


class RecordValidationError(DepSpyError):
    """A raw module record could not be normalized."""
