"""Plugin listing and management commands."""

from __future__ import annotations

import asyncio

import click

from stowage.plugins.errors import DeploymentError, PluginResolutionError, StatusUnavailableError
from stowage.plugins.models import InitContainerRecord, ResolutionCandidate
from stowage.plugins.operations import add_plugin, remove_plugin
from stowage.plugins.schemas import ServerStatus

from ..constants import OUTPUT_FORMATS, ExitCode
from ..context import CliContext
from ..formatters import render_plugins
from ..utils import console, error_exit, success

_TIMEOUT_HELP = "Seconds to wait for the server status (default: STOWAGE_STATUS_TIMEOUT_SECONDS)"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def plugin() -> None:
    """Work with plugins."""


@plugin.command("get")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="table", show_default=True)
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help=_TIMEOUT_HELP)
@click.pass_obj
def get_plugins(app_ctx: CliContext, output: str, timeout: float | None) -> None:
    """List the plugins registered with the server, marking built-in ones."""

    async def _fetch() -> ServerStatus:
        client = app_ctx.status_client(timeout)
        try:
            return await client.get_server_status()
        finally:
            await client.close()

    try:
        status = asyncio.run(_fetch())
    except StatusUnavailableError as e:
        error_exit(str(e), code=ExitCode.UNAVAILABLE)

    render_plugins(status.plugins, output, console)


@plugin.command("add")
@click.argument("image")
@click.option(
    "--image-pull-policy",
    type=click.Choice(["Always", "IfNotPresent", "Never"]),
    default=None,
    help="Pull policy for the plugin init container (default: STOWAGE_IMAGE_PULL_POLICY)",
)
@click.pass_obj
def add_plugin_command(app_ctx: CliContext, image: str, image_pull_policy: str | None) -> None:
    """Add a plugin IMAGE to the server deployment as an init container."""
    settings = app_ctx.settings

    async def _add() -> InitContainerRecord:
        adapter = app_ctx.deployment_adapter()
        try:
            return await add_plugin(
                adapter,
                image,
                volume_name=settings.plugins_volume_name,
                mount_path=settings.plugins_mount_path,
                pull_policy=image_pull_policy or settings.image_pull_policy,
            )
        finally:
            await adapter.close()

    try:
        record = asyncio.run(_add())
    except DeploymentError as e:
        error_exit(str(e), code=ExitCode.UNAVAILABLE)

    success(f"Added init container {record.name} ({record.image})")


@plugin.command("remove")
@click.argument("name", metavar="NAME|IMAGE|PLUGIN-NAME")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None, help=_TIMEOUT_HELP)
@click.pass_obj
def remove_plugin_command(app_ctx: CliContext, name: str, timeout: float | None) -> None:
    """Remove a plugin by init container name, image, or plugin name.

    Plugin names (as shown by 'plugin get') are matched to init containers
    heuristically; built-in plugins cannot be removed.
    """

    async def _remove() -> ResolutionCandidate:
        adapter = app_ctx.deployment_adapter()
        client = app_ctx.status_client(timeout)
        try:
            return await remove_plugin(adapter, name, client)
        finally:
            await client.close()
            await adapter.close()

    try:
        candidate = asyncio.run(_remove())
    except PluginResolutionError as e:
        error_exit(str(e), code=ExitCode.RESOLUTION_FAILED)
    except DeploymentError as e:
        error_exit(str(e), code=ExitCode.UNAVAILABLE)

    success(f"Removed init container {candidate.name} ({candidate.image})")
