"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the CLI commands,
including formatted printing, session loading and module id resolution.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from ..analysis.session import StaticSession
from ..config import DepSpyConfig, load_config
from ..core.exceptions import DepSpyError, GraphNotFoundError
from ..core.graph import ImpactGraph

logger = logging.getLogger(__name__)


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def get_config(ctx: click.Context) -> DepSpyConfig:
    """Configuration loaded by the group, or read fresh when run standalone."""
    if isinstance(ctx.obj, DepSpyConfig):
        return ctx.obj
    return load_config()


def load_session(records_file: str, max_level: Optional[int] = None) -> StaticSession:
    """
    Load collected module records into a new session.

    Handles directory paths by looking for the standard records file names.

    Args:
        records_file (str): Path to a JSON records file or a directory containing one.
        max_level (Optional[int]): Default tree depth for the session.

    Returns:
        StaticSession: The loaded session.

    Raises:
        GraphNotFoundError: If no records file exists or it cannot be read.
    """
    records_path = Path(records_file)

    if records_path.is_dir():
        potential_files = [
            records_path / ".depspy/modules.json",
            records_path / "modules.json",
        ]
        found = next((p for p in potential_files if p.exists()), None)
        if found is None:
            raise GraphNotFoundError(records_file, "No module records found in directory")
        records_path = found

    if not records_path.exists():
        raise GraphNotFoundError(records_file, "Records file not found")

    try:
        graph = ImpactGraph()
        graph.load_from_file(records_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, DepSpyError) as e:
        raise GraphNotFoundError(records_path, f"Failed to load module records ({e})") from e

    logger.info("Loaded %d modules from %s", graph.node_count, records_path)
    session = StaticSession(graph)
    if max_level is not None:
        session.max_level = max_level
    return session


def resolve_module_id(graph: ImpactGraph, name: str) -> Optional[str]:
    """
    Resolve a partial module path to a graph id.

    Tries an exact match, then a path-suffix match, then any substring match.
    """
    if graph.has_node(name):
        return name

    matches = graph.find_nodes(name)
    if not matches:
        return None

    for m in matches:
        if m.endswith(f"/{name}") or m.endswith(name):
            return m

    if len(matches) > 1:
        click.echo(f"Ambiguous module '{name}'. Using first match: {matches[0]}")
    return matches[0]
