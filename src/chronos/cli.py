"""Command-line interface for Chronos."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from chronos import __version__
from chronos.config import (
    ProjectConfig,
    find_project_root,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from chronos.exceptions import ChronosError
from chronos.ui.console import Console

console = Console()


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        console.error(
            "No Chronos project found. Run 'chronos init' first, "
            "or specify a path with --path."
        )
        sys.exit(1)
    return root


def _load_project_config(path: str | None) -> ProjectConfig:
    """Project config if one can be found, defaults otherwise."""
    root = Path(path).resolve() if path else find_project_root()
    if root is None:
        return ProjectConfig()
    try:
        return load_config(root)
    except ChronosError as e:
        console.error(str(e))
        sys.exit(1)


def _load_snapshot(snapshot_path: str):
    from chronos.graph.store import load_snapshot

    try:
        return load_snapshot(snapshot_path)
    except ChronosError as e:
        console.error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="chronos")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Chronos - relevance-ranked narrative context for drafting."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
def init(path: str | None):
    """Initialize a Chronos project with default context settings."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.info(f"Initializing Chronos for: {root}")
    try:
        config = load_config(root)
    except ChronosError as e:
        console.error(str(e))
        sys.exit(1)
    config.name = root.name
    save_config(root, config)
    console.success("Configuration saved")


# =========================================================================
# Smart Context
# =========================================================================

@main.command()
@click.argument("snapshot", type=click.Path(dir_okay=False))
@click.option("--anchor", "-a", required=True, help="Id of the event to build context for.")
@click.option("--depth", "-d", type=click.IntRange(min=0), default=None,
              help="Causal chain depth (hops).")
@click.option("--budget", "-b", type=click.IntRange(min=0), default=None,
              help="Token budget.")
@click.option("--concepts/--no-concepts", default=None,
              help="Include scientific-concept notes as optional context.")
@click.option("--render", is_flag=True, help="Print the text payload instead of the summary.")
@click.option("--show-excluded", is_flag=True, help="List every excluded entity.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def context(
    snapshot: str, anchor: str, depth: int | None, budget: int | None,
    concepts: bool | None, render: bool, show_excluded: bool, path: str | None,
):
    """Select the background context for an event.

    Examples:

        chronos context graph.json --anchor evt-12

        chronos context graph.json -a evt-12 --depth 3 --budget 4000 --no-concepts
    """
    from chronos.context.engine import ContextBuilder

    settings = _load_project_config(path).context
    overrides = {
        "causal_chain_depth": depth,
        "max_tokens": budget,
        "include_scientific_concepts": concepts,
    }
    settings = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    graph = _load_snapshot(snapshot)
    builder = ContextBuilder.from_snapshot(graph, settings)
    try:
        report = builder.build(anchor)
    except ChronosError as e:
        console.error(str(e))
        sys.exit(1)

    if render:
        click.echo(report.render())
    else:
        console.show_report(report, show_excluded=show_excluded)


@main.command()
@click.argument("snapshot", type=click.Path(dir_okay=False))
def events(snapshot: str):
    """List the events in a snapshot, in story order."""
    graph = _load_snapshot(snapshot)
    ordered = graph.events()
    if not ordered:
        console.warning("No events in snapshot")
        return
    console.show_events(ordered)


@main.command()
@click.argument("snapshot", type=click.Path(dir_okay=False))
def stats(snapshot: str):
    """Show entity and relationship counts for a snapshot."""
    graph = _load_snapshot(snapshot)
    console.show_stats(graph.stats())


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage Chronos configuration."""
    root = _get_project_root(path)
    try:
        config = load_config(root)
    except ChronosError as e:
        console.error(str(e))
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: chronos config get <key>")
            sys.exit(1)
        try:
            data = get_config_value(config, key)
        except KeyError:
            console.error(f"Unknown key: {key}")
            sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: chronos config set <key> <value>")
            sys.exit(1)
        # Try to parse as JSON for non-string values
        try:
            parsed_value = json.loads(value)
        except json.JSONDecodeError:
            parsed_value = value

        try:
            config = set_config_value(config, key, parsed_value)
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except ChronosError as e:
            console.error(str(e))
            sys.exit(1)
        save_config(root, config)
        console.success(f"Set {key} = {parsed_value}")


if __name__ == "__main__":
    main()
