"""
Graph Command - Summarize or export the impact graph.
"""

import json
import sys
from typing import Optional

import click

from ...core.exceptions import GraphNotFoundError
from ..utils import echo_error, get_config, load_session


@click.command()
@click.option("-i", "--input", "records_file", default=None,
              help="Module records JSON file or directory")
@click.option("--json", "json_mode", is_flag=True,
              help="Output the whole graph, with derived importers, as JSON")
@click.pass_context
def graph(ctx: click.Context, records_file: Optional[str], json_mode: bool) -> None:
    """
    Show impact graph statistics or export it.
    """
    config = get_config(ctx)
    try:
        session = load_session(records_file or config.records_file)
    except GraphNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)

    if json_mode:
        click.echo(json.dumps({
            "meta": {"status": "success"},
            "data": session.graph.to_dict(),
        }))
        return

    stats = session.graph.get_stats()
    click.echo()
    click.echo(f"📊 {click.style('Impact Graph', bold=True)}")
    click.echo("═" * 40)
    click.echo(f"Modules:             {stats['total_nodes']}")
    click.echo(f"Static imports:      {stats['static_edges']}")
    click.echo(f"Dynamic imports:     {stats['dynamic_edges']}")
    click.echo(f"Git changes:         {stats['git_changes']}")
    click.echo(f"Import changes:      {stats['import_changes']}")
    click.echo(f"Side-effect changes: {stats['side_effect_changes']}")
