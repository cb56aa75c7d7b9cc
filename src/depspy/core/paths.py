"""
Helpers for module ids and tree ids.

Tree ids are graph ids with an occurrence suffix: `src/a.ts` becomes
`src/a.ts-1`, `src/a.ts-2`, ... for each place it appears in one tree.
"""

import re
from typing import Callable

from .types import TreeNode

# Matches ".../<dir>/index.<ext>" so index files keep their directory name
_INDEX_RE = re.compile(r"/([^/]+)/index\.([^/]+)$")
_NAME_RE = re.compile(r"/([^/]+)$")


def make_tree_id(graph_id: str, occurrence: int) -> str:
    return f"{graph_id}-{occurrence}"


def get_entry_id_from_tree_id(tree_id: str) -> str:
    """Strip the occurrence suffix from a tree id."""
    return tree_id.rsplit("-", 1)[0]


def extract_file_name(path: str) -> str:
    """
    Short display name for a module path.

    Index files keep their parent directory (`components/index.ts`), other
    files keep only their base name. Pass graph ids, not tree ids: a trailing
    `-N` is part of the name (`chunks/part-2`).
    """
    if "/index." in path:
        match = _INDEX_RE.search(path)
        if match:
            return f"{match.group(1)}/index.{match.group(2)}"

    match = _NAME_RE.search(path)
    if match:
        return match.group(1)
    return path


def traverse_tree(node: TreeNode, callback: Callable[[TreeNode], None]) -> None:
    """Call `callback` on every node of the tree, parents before children."""
    callback(node)
    for child in node.children:
        traverse_tree(child, callback)
