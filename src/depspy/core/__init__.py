"""
depspy Core Module.

Record and tree types, module id helpers, and ingestion of build records
into the impact graph.
"""

from .exceptions import (
    DepSpyError,
    GraphNotFoundError,
    InvalidMaxLevelError,
    NodeNotFoundError,
    RecordValidationError,
)
from .graph import ImpactGraph, handle_graph_nodes
from .types import GraphNode, ImportReason, ModuleRecord, NextLevelEntry, TreeNode

__all__ = [
    "DepSpyError",
    "GraphNotFoundError",
    "InvalidMaxLevelError",
    "NodeNotFoundError",
    "RecordValidationError",
    "ImpactGraph",
    "handle_graph_nodes",
    "GraphNode",
    "ImportReason",
    "ModuleRecord",
    "NextLevelEntry",
    "TreeNode",
]
