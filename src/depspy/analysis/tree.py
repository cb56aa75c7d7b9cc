"""
Impact Tree materialization.

Builds a depth-bounded tree from the impact graph and expands collapsed
nodes of an existing tree one level at a time.

A module reachable along several paths appears once per path; its tree ids
are made unique by an occurrence counter shared across one tree.
"""

import logging
from typing import Dict, Optional

from ..config import DEFAULT_MAX_LEVEL
from ..core.exceptions import InvalidMaxLevelError, NodeNotFoundError
from ..core.graph import ImpactGraph
from ..core.paths import get_entry_id_from_tree_id, make_tree_id
from ..core.types import TreeNode
from .expansion import get_next_level

logger = logging.getLogger(__name__)


class OccurrenceCounter:
    """Mints `{graph_id}-{n}` tree ids, counting visits per graph id."""

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def next_id(self, graph_id: str) -> str:
        count = self._counts.get(graph_id, 0) + 1
        self._counts[graph_id] = count
        return make_tree_id(graph_id, count)

    def count(self, graph_id: str) -> int:
        return self._counts.get(graph_id, 0)

    def reset(self) -> None:
        self._counts.clear()


def render_tree_by_graph_id(
    graph: ImpactGraph,
    entry_id: str,
    reverse: bool = False,
    max_level: int = DEFAULT_MAX_LEVEL,
    counter: Optional[OccurrenceCounter] = None,
) -> TreeNode:
    """
    Build an impact tree rooted at a graph node.

    Nodes at level `max_level - 1` are left collapsed without children. A
    node already on the current root-to-node path closes a cycle and is
    shown without children. The same module may still appear again on a
    sibling branch.

    Args:
        graph: The loaded impact graph.
        entry_id: Graph id of the root.
        reverse: Build the upstream (cause) tree instead of the downstream one.
        max_level: Number of levels to materialize, at least 1.
        counter: Occurrence counter to mint ids with; reset before use.

    Returns:
        TreeNode: The root of the new tree.

    Raises:
        InvalidMaxLevelError: If `max_level` is below 1.
        NodeNotFoundError: If `entry_id` is not in the graph.
    """
    if max_level < 1:
        raise InvalidMaxLevelError(max_level)
    if not graph.has_node(entry_id):
        raise NodeNotFoundError(entry_id)

    if counter is None:
        counter = OccurrenceCounter()
    counter.reset()

    # Insertion-ordered set of graph ids from the root to the current frame
    paths: Dict[str, None] = {}

    def _build(graph_id: str, current_level: int) -> TreeNode:
        tree_node = TreeNode.from_graph_node(
            graph.get_node(graph_id),
            counter.next_id(graph_id),
            paths,
        )
        if current_level >= max_level - 1:
            tree_node.collapsed = True
            return tree_node
        if graph_id in paths:
            paths.pop(graph_id)
            return tree_node

        paths[graph_id] = None
        for child_id in get_next_level(graph, graph_id, reverse):
            tree_node.children.append(_build(child_id, current_level + 1))
        paths.pop(graph_id, None)
        return tree_node

    root = _build(entry_id, 0)
    logger.debug("Built %s tree for %s", "reverse" if reverse else "forward", entry_id)
    return root


def find_node_by_id(node: TreeNode, target_id: str) -> Optional[TreeNode]:
    """Depth-first search of the materialized tree for a tree id."""
    if node.id == target_id:
        return node
    for child in node.children:
        found = find_node_by_id(child, target_id)
        if found is not None:
            return found
    return None


def render_next_level(
    root: TreeNode,
    graph: ImpactGraph,
    tree_id: str,
    reverse: bool = False,
    counter: Optional[OccurrenceCounter] = None,
) -> bool:
    """
    Expand one childless node of an existing tree in place.

    Only the materialized tree is searched, never the whole graph. New
    children are collapsed so the caller can keep expanding lazily.

    Returns:
        bool: False when the node is missing or already has children.
    """
    target = find_node_by_id(root, tree_id)
    if target is None or target.children:
        return False

    if counter is None:
        counter = OccurrenceCounter()

    graph_id = get_entry_id_from_tree_id(tree_id)
    child_paths = [*target.paths, graph_id]
    for child_id in get_next_level(graph, graph_id, reverse):
        target.children.append(
            TreeNode.from_graph_node(
                graph.get_node(child_id),
                counter.next_id(child_id),
                child_paths,
                collapsed=True,
            )
        )
    target.collapsed = False

    logger.debug("Expanded %s with %d children", tree_id, len(target.children))
    return True
