"""
Tree Command - Explain why a module's exports changed.

Builds the impact tree for one module, forward (which imports caused the
change) or reverse (which importers were affected by it), and prints it.
"""

import json
import logging
import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from ...core.exceptions import DepSpyError, GraphNotFoundError
from ...core.paths import traverse_tree
from ..formatting import build_rich_tree
from ..utils import echo_error, echo_info, echo_warning, get_config, load_session, resolve_module_id

logger = logging.getLogger(__name__)

console = Console()


@click.command()
@click.argument("root")
@click.option("-i", "--input", "records_file", default=None,
              help="Module records JSON file or directory")
@click.option("-r/-f", "--reverse/--forward", default=None,
              help="Walk reverse from a source change, or forward (default from config)")
@click.option("-l", "--max-level", type=click.IntRange(min=1), default=None,
              help="Levels to build before collapsing nodes")
@click.option("-e", "--expand", "expand_ids", multiple=True,
              help="Tree id of a collapsed node to expand (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output the tree as JSON")
@click.pass_context
def tree(
    ctx: click.Context,
    root: str,
    records_file: Optional[str],
    reverse: Optional[bool],
    max_level: Optional[int],
    expand_ids: Tuple[str, ...],
    as_json: bool,
) -> None:
    """
    Show the impact tree rooted at a module.
    """
    config = get_config(ctx)
    if reverse is None:
        reverse = config.reverse

    try:
        session = load_session(records_file or config.records_file, max_level or config.max_level)
    except GraphNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)

    root_id = resolve_module_id(session.graph, root)
    if root_id is None:
        echo_error(f"Module not found: {root}")
        sys.exit(1)

    try:
        static_root = session.build_tree(root_id, reverse=reverse)
        for tree_id in expand_ids:
            if session.find_node(tree_id) is None:
                echo_warning(f"Tree node not found, skipping expand: {tree_id}")
                continue
            session.expand_node(tree_id, reverse=reverse)
    except DepSpyError as e:
        echo_error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "meta": {"status": "success", "reverse": reverse, "version": session.root_version},
            "data": static_root.model_dump(by_alias=True, mode="json"),
        }))
        return

    counts = {"nodes": 0, "collapsed": 0}

    def _count(node) -> None:
        counts["nodes"] += 1
        if node.collapsed and not node.children:
            counts["collapsed"] += 1

    traverse_tree(static_root, _count)

    direction = "Reverse" if reverse else "Forward"
    console.print(f"[bold]{direction} impact of[/bold] [cyan]{root_id}[/cyan]")
    console.print(build_rich_tree(static_root, session.highlighted_node_id))
    echo_info(f"{counts['nodes']} node(s), {counts['collapsed']} collapsed")
    if counts["collapsed"]:
        echo_info("Expand a collapsed node with: depspy tree ROOT --expand <tree id>")
