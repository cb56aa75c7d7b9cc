"""
depspy - Build Impact Explorer.

depspy turns the per-module records collected from a bundler build
(imports, rendered/removed exports, changed files) into an impact graph,
and explains why an export changed by expanding a tree of causes or
consequences from any module.

Key Components:
- core: Record types, ingestion and the impact graph
- analysis: Level expansion, tree building and the exploration session
- cli: Command line exploration of a collected build

Usage:
    from depspy import StaticSession

    session = StaticSession()
    session.load_records(records)
    root = session.build_tree("src/main.ts", reverse=False)
"""

__version__ = "0.1.0"

from .analysis.session import StaticSession
from .core.graph import ImpactGraph, handle_graph_nodes
from .core.types import GraphNode, ImportReason, ModuleRecord, TreeNode

__all__ = [
    "__version__",
    "StaticSession",
    "ImpactGraph",
    "handle_graph_nodes",
    "GraphNode",
    "ImportReason",
    "ModuleRecord",
    "TreeNode",
]
