"""flowtree serve command - start the HTTP service."""

import asyncio
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
from rich.console import Console

from flowtree.config.loader import load_config
from flowtree.core.errors import ConfigError

_console = Console(stderr=True)


def _print_banner(host: str, port: int) -> None:
    """Print startup banner with endpoint info using Rich."""
    try:
        ver = version("flowtree")
    except PackageNotFoundError:
        ver = "dev"

    banner_width = 48
    rule_line = "─" * banner_width
    base_url = f"http://{host}:{port}"

    _console.print()
    _console.print(rule_line, style="dim cyan", highlight=False)
    _console.print(f"FlowTree v{ver} · Ready".center(banner_width), style="bold cyan")
    _console.print(rule_line, style="dim cyan", highlight=False)
    _console.print()
    _console.print(f"  Tree:          POST {base_url}/tree/<language>", style="green")
    _console.print(f"  Languages:     {base_url}/languages", highlight=False)
    _console.print(f"  Health Check:  {base_url}/health", highlight=False)
    _console.print()


@click.command()
@click.option("--host", type=str, help="Override bind address")
@click.option("--port", "-p", type=int, help="Override server port")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file",
)
@click.pass_context
def serve_command(
    ctx: click.Context, host: str | None, port: int | None, config_path: Path | None
) -> None:
    """Start the FlowTree HTTP service. Runs in foreground."""
    from flowtree.core.logging import configure_logging
    from flowtree.daemon.lifecycle import run_server

    overrides: dict[str, object] = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port

    try:
        config = load_config(config_path, **({"server": overrides} if overrides else {}))
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    if ctx.obj and ctx.obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)

    _print_banner(config.server.host, config.server.port)

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        click.echo("\nStopped")
