import click

from stowage import __version__

from .commands import plugin, serve
from .constants import CLI_NAME
from .context import CliContext
from .utils import console


@click.group(name=CLI_NAME, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-n", "--namespace", default=None, help="Namespace of the server deployment (default: STOWAGE_NAMESPACE)")
@click.option("--server", default=None, help="Base URL of the status API (default: STOWAGE_SERVER_URL)")
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log verbosity (default: STOWAGE_LOG_LEVEL)",
)
@click.version_option(__version__, prog_name=CLI_NAME)
@click.pass_context
def cli(ctx: click.Context, namespace: str | None, server: str | None, log_level: str | None) -> None:
    """Stowage - backup/restore control plane."""
    ctx.obj = CliContext.from_cli_args(namespace=namespace, server=server, log_level=log_level)


cli.add_command(plugin)
cli.add_command(serve)


def main() -> None:
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise SystemExit(130)
