"""
Impact Graph.

Builds the in-memory module graph from the per-module records collected
during a build. Ingestion inverts every import list to derive reverse edges
(`importers`, `dynamic_importers`) and classifies changed modules.

The graph is replaced wholesale on every load; records from a previous
build are never merged in.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

from pydantic import ValidationError

from .exceptions import RecordValidationError
from .types import GraphNode, ModuleRecord

logger = logging.getLogger(__name__)

RawRecord = Union[Mapping[str, Any], ModuleRecord]


def _to_record(raw: RawRecord) -> ModuleRecord:
    if isinstance(raw, ModuleRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise RecordValidationError(f"Expected a module record mapping, got {type(raw).__name__}")
    try:
        return ModuleRecord.model_validate(raw)
    except ValidationError as e:
        raise RecordValidationError(f"Invalid module record: {e}") from e


def _partition_exports(record: ModuleRecord) -> Tuple[Set[str], Set[str]]:
    """Rendered and removed exports, with overlaps kept as rendered."""
    rendered = set(record.rendered_exports)
    removed = set(record.removed_exports)
    overlap = rendered & removed
    if overlap:
        logger.warning(
            "%s lists exports as both rendered and removed, keeping them rendered: %s",
            record.relative_id, sorted(overlap),
        )
        removed -= overlap

    unknown = set(record.export_effected_names_to_reasons) - rendered - removed
    if unknown:
        logger.debug("%s has reasons for untracked exports: %s", record.relative_id, sorted(unknown))
    return rendered, removed


def handle_graph_nodes(
    records: Iterable[RawRecord],
) -> Tuple[Dict[str, GraphNode], Set[str], Set[str]]:
    """
    Normalize raw module records into graph nodes.

    Args:
        records: Module records in the adapter wire shape.

    Returns:
        Tuple of (graph keyed by relative id, git-changed ids, import-changed ids).

    Raises:
        RecordValidationError: If a record is not a mapping or lacks `relativeId`.
    """
    by_id: Dict[str, ModuleRecord] = {}
    importers: Dict[str, Set[str]] = defaultdict(set)
    dynamic_importers: Dict[str, Set[str]] = defaultdict(set)

    # 1. Normalize records, later duplicates win
    for raw in records:
        record = _to_record(raw)
        relative_id = record.relative_id
        if relative_id in by_id:
            logger.warning("Duplicate module record for %s, keeping the last one", relative_id)
        by_id[relative_id] = record

    # 2. Accumulate reverse edges for every referenced child
    for relative_id, record in by_id.items():
        for child_id in record.imported_ids:
            importers[child_id].add(relative_id)
        for child_id in record.dynamically_imported_ids:
            dynamic_importers[child_id].add(relative_id)

    # 3. Merge each record with its accumulated importers
    graph: Dict[str, GraphNode] = {}
    git_change_set: Set[str] = set()
    import_change_set: Set[str] = set()

    for relative_id, record in by_id.items():
        rendered, removed = _partition_exports(record)
        graph[relative_id] = GraphNode(
            relative_id=relative_id,
            imported_ids=list(dict.fromkeys(record.imported_ids)),
            dynamically_imported_ids=list(dict.fromkeys(record.dynamically_imported_ids)),
            importers=set(importers.get(relative_id, ())),
            dynamic_importers=set(dynamic_importers.get(relative_id, ())),
            rendered_exports=rendered,
            removed_exports=removed,
            is_git_change=record.is_git_change,
            is_import_change=record.is_import_change,
            is_side_effect_change=record.is_side_effect_change,
            export_effected_names_to_reasons=record.export_effected_names_to_reasons,
        )
        if record.is_git_change:
            git_change_set.add(relative_id)
        if record.is_import_change:
            import_change_set.add(relative_id)

    dangling = (set(importers) | set(dynamic_importers)) - set(graph)
    if dangling:
        logger.debug("%d imported ids have no module record", len(dangling))

    logger.info(
        "Ingested %d modules (%d git changes, %d import changes)",
        len(graph), len(git_change_set), len(import_change_set),
    )
    return graph, git_change_set, import_change_set


class ImpactGraph:
    """
    Queryable module graph for one build.

    Features:
    - O(1) node lookup by relative id
    - Change sets for git-changed and import-changed modules
    - Substring search used to resolve user input to module ids
    """

    def __init__(self):
        self._nodes: Dict[str, GraphNode] = {}
        self.git_change_set: Set[str] = set()
        self.import_change_set: Set[str] = set()

    @classmethod
    def from_records(cls, records: Iterable[RawRecord]) -> "ImpactGraph":
        graph = cls()
        graph.load_from_records(records)
        return graph

    # =========================================================================
    # Loading
    # =========================================================================

    def load_from_records(self, records: Iterable[RawRecord]) -> None:
        """Replace the graph with a fresh batch of module records."""
        nodes, git_change_set, import_change_set = handle_graph_nodes(records)
        self._nodes = nodes
        self.git_change_set = git_change_set
        self.import_change_set = import_change_set

    def load_from_json(self, json_str: str) -> None:
        """
        Load module records from JSON.

        Accepts either an array of records or an object with a `modules` array.
        """
        data = json.loads(json_str)
        if isinstance(data, dict):
            data = data.get("modules", [])
        if not isinstance(data, list):
            raise RecordValidationError("Expected a JSON array of module records")
        self.load_from_records(data)

    def load_from_file(self, path: Path) -> None:
        self.load_from_json(Path(path).read_text())

    # =========================================================================
    # Queries
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Retrieve a node by relative id."""
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def find_nodes(self, pattern: str) -> List[str]:
        """Find node ids containing `pattern` (case-insensitive), sorted."""
        pattern_lower = pattern.lower()
        return sorted(nid for nid in self._nodes if pattern_lower in nid.lower())

    def iter_nodes(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def get_stats(self) -> Dict[str, Any]:
        edge_count = sum(len(n.imported_ids) for n in self._nodes.values())
        dynamic_edge_count = sum(len(n.dynamically_imported_ids) for n in self._nodes.values())
        side_effect_count = sum(1 for n in self._nodes.values() if n.is_side_effect_change)
        return {
            "total_nodes": self.node_count,
            "static_edges": edge_count,
            "dynamic_edges": dynamic_edge_count,
            "git_changes": len(self.git_change_set),
            "import_changes": len(self.import_change_set),
            "side_effect_changes": side_effect_count,
        }

    def clear(self) -> None:
        self._nodes = {}
        self.git_change_set = set()
        self.import_change_set = set()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modules": [
                node.model_dump(by_alias=True, mode="json")
                for node in sorted(self._nodes.values(), key=lambda n: n.relative_id)
            ],
            "stats": self.get_stats(),
        }
