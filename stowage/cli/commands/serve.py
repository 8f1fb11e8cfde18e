import click

from ..context import CliContext


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", type=int, default=8085, show_default=True)
@click.pass_obj
def serve(app_ctx: CliContext, host: str, port: int) -> None:
    """Run the server status API."""
    import uvicorn

    uvicorn.run(
        "stowage.main:build_server_app",
        factory=True,
        host=host,
        port=port,
        log_level=app_ctx.settings.log_level.lower(),
    )
