"""
depspy CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..config import load_config
from .commands import changes, graph, tree


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(package_name="depspy")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to config.yaml (default: .depspy/config.yaml)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """depspy: Build Impact Explorer.

    Explains why a module's exports changed between builds by walking the
    import graph collected from your bundler.

    \b
    Quick Start:
      depspy changes -i .depspy/modules.json
      depspy tree src/utils/format.ts
      depspy tree src/api/client.ts --reverse --max-level 4
    """
    config = load_config(Path(config_path) if config_path else None)
    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


# Register commands
main.add_command(tree.tree)
main.add_command(changes.changes)
main.add_command(graph.graph)

if __name__ == "__main__":
    main()
