"""Impact propagation and tree materialization."""

from .expansion import get_next_level
from .session import StaticSession
from .tree import OccurrenceCounter, find_node_by_id, render_next_level, render_tree_by_graph_id

__all__ = [
    "get_next_level",
    "StaticSession",
    "OccurrenceCounter",
    "find_node_by_id",
    "render_next_level",
    "render_tree_by_graph_id",
]
