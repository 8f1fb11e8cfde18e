"""Rendering of plugin listings as table, JSON or YAML."""

from __future__ import annotations

import json
from collections.abc import Sequence

import click
import yaml
from rich.console import Console
from rich.table import Table

from stowage.plugins.schemas import PluginInfo


def built_in_cell(plugin: PluginInfo) -> str:
    """``true`` for built-in plugins, empty otherwise."""
    return "true" if plugin.built_in else ""


def plugins_table(plugins: Sequence[PluginInfo]) -> Table:
    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("NAME", no_wrap=True)
    table.add_column("KIND", no_wrap=True)
    table.add_column("BUILT-IN", no_wrap=True)
    for plugin in plugins:
        table.add_row(plugin.name, plugin.kind, built_in_cell(plugin))
    return table


def plugins_payload(plugins: Sequence[PluginInfo]) -> list[dict]:
    return [plugin.model_dump(by_alias=True, exclude_none=True) for plugin in plugins]


def render_plugins(plugins: Sequence[PluginInfo], output: str, console: Console) -> None:
    """Print ``plugins`` to stdout in the requested format."""
    if output == "json":
        click.echo(json.dumps(plugins_payload(plugins), indent=2))
    elif output == "yaml":
        click.echo(yaml.safe_dump(plugins_payload(plugins), sort_keys=False), nl=False)
    else:
        console.print(plugins_table(plugins))
