"""
Level Expansion.

Computes the next hop of an impact tree from one module and the exports
selected on it.

Forward mode follows the module's own reasons down to the imports that
caused its exports to change. Reverse mode walks up to the importers whose
exports changed because of this module.
"""

import logging
from typing import Dict, Set

from ..config import SIDE_EFFECT_NAME
from ..core.exceptions import NodeNotFoundError
from ..core.graph import ImpactGraph
from ..core.types import GraphNode, NextLevelEntry

logger = logging.getLogger(__name__)


def get_next_level(
    graph: ImpactGraph,
    entry_id: str,
    reverse: bool = False,
) -> Dict[str, NextLevelEntry]:
    """
    Collect the children of `entry_id` in an impact tree.

    The selection seed is every rendered export of the entry plus the
    side-effect marker. Ids without a graph node are never returned.

    Args:
        graph: The loaded impact graph.
        entry_id: Graph id to expand.
        reverse: Walk to importers instead of imports.

    Returns:
        Ordered mapping of child id to its NextLevelEntry.

    Raises:
        NodeNotFoundError: If `entry_id` is not in the graph.
    """
    graph_node = graph.get_node(entry_id)
    if graph_node is None:
        raise NodeNotFoundError(entry_id)

    select_exports = set(graph_node.rendered_exports) | {SIDE_EFFECT_NAME}

    if reverse:
        children = _collect_effected_importers(graph, graph_node, select_exports)
    else:
        children = _collect_effecting_imports(graph, graph_node, select_exports)

    logger.debug(
        "%s expanded %s into %d children", "Reverse" if reverse else "Forward",
        entry_id, len(children),
    )
    return children


def _collect_effecting_imports(
    graph: ImpactGraph,
    graph_node: GraphNode,
    select_exports: Set[str],
) -> Dict[str, NextLevelEntry]:
    children: Dict[str, NextLevelEntry] = {}

    # 1. Which imported names caused the selected exports to change
    import_id_to_names: Dict[str, Set[str]] = {}
    for export_name in select_exports:
        reason = graph_node.export_effected_names_to_reasons.get(export_name)
        if reason is None:
            continue
        for import_id, import_names in reason.import_effected_names.items():
            import_id_to_names.setdefault(import_id, set()).update(import_names)

    # 2. Keep only the imports implicated above, or whose evaluation changed
    for child_id in graph_node.all_imported_ids:
        child = graph.get_node(child_id)
        if child is None:
            continue
        names = import_id_to_names.get(child_id)
        if names is not None:
            children[child_id] = NextLevelEntry(child_id, names | {SIDE_EFFECT_NAME})
        elif child.is_side_effect_change:
            children[child_id] = NextLevelEntry(child_id, {SIDE_EFFECT_NAME})

    return children


def _collect_effected_importers(
    graph: ImpactGraph,
    graph_node: GraphNode,
    select_exports: Set[str],
) -> Dict[str, NextLevelEntry]:
    children: Dict[str, NextLevelEntry] = {}
    entry_id = graph_node.relative_id

    for importer_id in graph_node.all_importers:
        importer = graph.get_node(importer_id)
        if importer is None:
            continue
        for export_name, reason in importer.export_effected_names_to_reasons.items():
            if not reason.matches(entry_id, select_exports):
                continue
            existing = children.get(importer_id)
            if existing is not None:
                existing.select_exports.add(export_name)
            else:
                children[importer_id] = NextLevelEntry(
                    importer_id, {export_name, SIDE_EFFECT_NAME}
                )

    return children
