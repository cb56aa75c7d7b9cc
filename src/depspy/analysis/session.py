"""
Static analysis session.

Holds the state shared between the graph engine and a visualization: the
impact graph of the current build, the rendered tree, its version counter
and the listeners watching it. Every mutation runs under one lock so only a
single build or expansion touches the tree at a time.
"""

import logging
import threading
from typing import Callable, Iterable, List, Optional, Set

from ..config import DEFAULT_MAX_LEVEL
from ..core.graph import ImpactGraph, RawRecord
from ..core.types import TreeNode
from .tree import (
    OccurrenceCounter,
    find_node_by_id,
    render_next_level,
    render_tree_by_graph_id,
)

logger = logging.getLogger(__name__)

VersionListener = Callable[[int], None]


class StaticSession:
    """
    Session-scoped owner of the impact graph and the current tree.

    Listeners registered with `subscribe` receive the new `root_version`
    each time the tree changes.
    """

    def __init__(self, graph: Optional[ImpactGraph] = None, max_level: int = DEFAULT_MAX_LEVEL):
        self.graph = graph or ImpactGraph()
        self.max_level = max_level
        self.static_root: Optional[TreeNode] = None
        self.root_version = 0
        self.highlighted_node_id = ""
        self._counter = OccurrenceCounter()
        self._listeners: List[VersionListener] = []
        self._lock = threading.RLock()

    # =========================================================================
    # Graph
    # =========================================================================

    def load_records(self, records: Iterable[RawRecord]) -> ImpactGraph:
        """Replace the graph with a new build and drop the current tree."""
        graph = ImpactGraph.from_records(records)
        with self._lock:
            self.graph = graph
            self.static_root = None
            self.highlighted_node_id = ""
            self._counter.reset()
        self._bump_version()
        return graph

    @property
    def git_change_set(self) -> Set[str]:
        return self.graph.git_change_set

    @property
    def import_change_set(self) -> Set[str]:
        return self.graph.import_change_set

    def change_roots(self, reverse: bool = False) -> List[str]:
        """
        Candidate tree roots for a traversal direction.

        Reverse trees start at source changes and walk towards the modules
        they affected; forward trees start at the affected modules.
        """
        roots = self.git_change_set if reverse else self.import_change_set
        return sorted(roots)

    # =========================================================================
    # Tree
    # =========================================================================

    def build_tree(
        self,
        root_id: str,
        reverse: bool = False,
        max_level: Optional[int] = None,
    ) -> TreeNode:
        """Build a new tree rooted at `root_id` and make it the session root."""
        with self._lock:
            root = render_tree_by_graph_id(
                self.graph,
                root_id,
                reverse=reverse,
                max_level=self.max_level if max_level is None else max_level,
                counter=self._counter,
            )
            self.static_root = root
            self.highlighted_node_id = ""
        self._bump_version()
        return root

    def expand_node(self, tree_id: str, reverse: bool = False) -> None:
        """Lazily fetch the children of a collapsed tree node."""
        with self._lock:
            if self.static_root is None:
                return
            expanded = render_next_level(
                self.static_root, self.graph, tree_id, reverse, counter=self._counter
            )
        if expanded:
            self._bump_version()

    def toggle_node(self, tree_id: str, reverse: bool = False) -> None:
        """
        Flip a node between collapsed and expanded.

        Expanding a node without children fetches its next level first.
        """
        with self._lock:
            if self.static_root is None:
                return
            node = find_node_by_id(self.static_root, tree_id)
            if node is None:
                return
            if not node.collapsed:
                node.collapsed = True
            elif node.children:
                node.collapsed = False
            else:
                render_next_level(
                    self.static_root, self.graph, tree_id, reverse, counter=self._counter
                )
        self._bump_version()

    def find_node(self, tree_id: str) -> Optional[TreeNode]:
        if self.static_root is None:
            return None
        return find_node_by_id(self.static_root, tree_id)

    # =========================================================================
    # Highlight & version signal
    # =========================================================================

    def set_highlighted_node_id(self, tree_id: str) -> None:
        self.highlighted_node_id = tree_id

    def clear_highlight(self) -> None:
        self.highlighted_node_id = ""

    def subscribe(self, listener: VersionListener) -> Callable[[], None]:
        """Register a version listener; returns a function that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _bump_version(self) -> None:
        with self._lock:
            self.root_version += 1
            version = self.root_version
        logger.debug("Tree version %d, notifying %d listeners", version, len(self._listeners))
        for listener in list(self._listeners):
            listener(version)
