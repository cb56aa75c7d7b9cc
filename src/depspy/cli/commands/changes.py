"""
Changes Command - List changed modules of a collected build.
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
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def changes(ctx: click.Context, records_file: Optional[str], as_json: bool) -> None:
    """
    List git-changed and import-changed modules.

    Git changes are the roots of reverse trees, import changes the roots of
    forward trees.
    """
    config = get_config(ctx)
    try:
        session = load_session(records_file or config.records_file)
    except GraphNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)

    git_changes = session.change_roots(reverse=True)
    import_changes = session.change_roots(reverse=False)

    if as_json:
        click.echo(json.dumps({
            "git_changes": git_changes,
            "import_changes": import_changes,
        }))
        return

    click.echo()
    click.echo(f"🔀 {click.style('Git changes', bold=True)} ({len(git_changes)})")
    for module_id in git_changes:
        click.echo(f"   {click.style(module_id, fg='red')}")
    click.echo()
    click.echo(f"📦 {click.style('Import changes', bold=True)} ({len(import_changes)})")
    for module_id in import_changes:
        click.echo(f"   {click.style(module_id, fg='yellow')}")
