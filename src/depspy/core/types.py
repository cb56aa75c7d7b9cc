"""
Core type definitions for depspy.

Wire records arrive in the camelCase shape emitted by the bundler adapters;
every model accepts both the camelCase alias and the snake_case field name.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..config import SIDE_EFFECT_NAME, WILDCARD_IMPORT


class ImportReason(BaseModel):
    """
    Why a single export of a module changed.

    Maps each upstream module id to the imported names that caused the change.
    """
    import_effected_names: Dict[str, List[str]] = Field(
        default_factory=dict, alias="importEffectedNames"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def matches(self, upstream_id: str, select_exports: Set[str]) -> bool:
        """
        Check whether the selected exports of `upstream_id` caused this change.

        A wildcard entry matches any selection, even next to specific names.

        Unconfirmed: collectors are only known to emit `["*"]` alone, so the
        wildcard-plus-names case is a guess. Revisit if a collector documents
        that combination.
        """
        names = self.import_effected_names.get(upstream_id)
        if not names:
            return False
        return WILDCARD_IMPORT in names or not select_exports.isdisjoint(names)


class ModuleRecord(BaseModel):
    """
    Raw per-module record as produced by a build adapter.
    """
    relative_id: str = Field(alias="relativeId")
    imported_ids: List[str] = Field(default_factory=list, alias="importedIds")
    dynamically_imported_ids: List[str] = Field(
        default_factory=list, alias="dynamicallyImportedIds"
    )
    removed_exports: List[str] = Field(default_factory=list, alias="removedExports")
    rendered_exports: List[str] = Field(default_factory=list, alias="renderedExports")
    is_git_change: bool = Field(default=False, alias="isGitChange")
    is_import_change: bool = Field(default=False, alias="isImportChange")
    is_side_effect_change: bool = Field(default=False, alias="isSideEffectChange")
    export_effected_names_to_reasons: Dict[str, ImportReason] = Field(
        default_factory=dict, alias="exportEffectedNamesToReasons"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator(
        "imported_ids",
        "dynamically_imported_ids",
        "removed_exports",
        "rendered_exports",
        mode="before",
    )
    @classmethod
    def default_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("export_effected_names_to_reasons", mode="before")
    @classmethod
    def default_reasons(cls, value: Any) -> Any:
        return {} if value is None else value


class GraphNode(BaseModel):
    """
    A module in the impact graph.

    `importers` and `dynamic_importers` are derived during ingestion by
    inverting the import lists of every other node.
    """
    relative_id: str = Field(alias="relativeId")
    imported_ids: List[str] = Field(default_factory=list, alias="importedIds")
    dynamically_imported_ids: List[str] = Field(
        default_factory=list, alias="dynamicallyImportedIds"
    )
    importers: Set[str] = Field(default_factory=set)
    dynamic_importers: Set[str] = Field(default_factory=set, alias="dynamicImporters")
    rendered_exports: Set[str] = Field(default_factory=set, alias="renderedExports")
    removed_exports: Set[str] = Field(default_factory=set, alias="removedExports")
    is_git_change: bool = Field(default=False, alias="isGitChange")
    is_import_change: bool = Field(default=False, alias="isImportChange")
    is_side_effect_change: bool = Field(default=False, alias="isSideEffectChange")
    export_effected_names_to_reasons: Dict[str, ImportReason] = Field(
        default_factory=dict, alias="exportEffectedNamesToReasons"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_serializer(
        "importers", "dynamic_importers", "rendered_exports", "removed_exports"
    )
    def serialize_set(self, value: Set[str]) -> List[str]:
        return sorted(value)

    @property
    def all_imported_ids(self) -> List[str]:
        """Static then dynamic imports, without duplicates."""
        return list(dict.fromkeys([*self.imported_ids, *self.dynamically_imported_ids]))

    @property
    def all_importers(self) -> List[str]:
        """Static and dynamic importers, sorted for stable traversal."""
        return sorted(self.importers | self.dynamic_importers)

    def __hash__(self):
        return hash(self.relative_id)


class TreeNode(GraphNode):
    """
    A GraphNode placed in a rendered impact tree.

    The same module can appear several times in one tree; `id` carries an
    occurrence suffix so every tree node stays unique.
    """
    id: str
    paths: List[str] = Field(default_factory=list)
    children: List["TreeNode"] = Field(default_factory=list)
    collapsed: bool = False

    @classmethod
    def from_graph_node(
        cls,
        graph_node: GraphNode,
        tree_id: str,
        paths: Iterable[str],
        collapsed: bool = False,
    ) -> "TreeNode":
        return cls(
            **dict(graph_node),
            id=tree_id,
            paths=list(paths),
            collapsed=collapsed,
        )


@dataclass
class NextLevelEntry:
    """A child selected by level expansion and the exports that justify it."""
    entry_id: str
    select_exports: Set[str] = field(default_factory=lambda: {SIDE_EFFECT_NAME})
