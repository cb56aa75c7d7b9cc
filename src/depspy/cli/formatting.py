"""
Rich rendering of impact trees.
"""

from rich.text import Text
from rich.tree import Tree

from ..config import SIDE_EFFECT_NAME
from ..core.paths import extract_file_name
from ..core.types import TreeNode

GIT_CHANGE_STYLE = "bold red"
IMPORT_CHANGE_STYLE = "yellow"
HIGHLIGHT_STYLE = "reverse"


def node_label(node: TreeNode, highlighted_id: str = "") -> Text:
    """One line describing a tree node: name, change state and exports."""
    style = ""
    if node.is_git_change:
        style = GIT_CHANGE_STYLE
    elif node.is_import_change:
        style = IMPORT_CHANGE_STYLE
    if node.id == highlighted_id:
        style = f"{style} {HIGHLIGHT_STYLE}".strip()

    marker = "▸ " if node.collapsed else ""
    label = Text(f"{marker}{extract_file_name(node.relative_id)}", style=style)
    label.append(f"  [{node.id}]", style="dim")

    exports = sorted(node.rendered_exports - {SIDE_EFFECT_NAME})
    if exports:
        label.append(f"  exports: {', '.join(exports)}", style="cyan")
    if node.removed_exports:
        label.append(f"  removed: {', '.join(sorted(node.removed_exports))}", style="dim red")
    if node.is_side_effect_change:
        label.append("  side effect", style="magenta")
    return label


def build_rich_tree(root: TreeNode, highlighted_id: str = "") -> Tree:
    """Convert a TreeNode hierarchy into a rich Tree, hiding collapsed subtrees."""
    tree = Tree(node_label(root, highlighted_id))
    _add_children(tree, root, highlighted_id)
    return tree


def _add_children(branch: Tree, node: TreeNode, highlighted_id: str) -> None:
    if node.collapsed:
        return
    for child in node.children:
        sub_branch = branch.add(node_label(child, highlighted_id))
        _add_children(sub_branch, child, highlighted_id)
