"""FlowTree CLI - flowtree command."""

import click

from flowtree.cli.languages import languages_command
from flowtree.cli.serve import serve_command
from flowtree.cli.tree import tree_command
from flowtree.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="flowtree")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """FlowTree - control-structure trees for C, C++, Python and JavaScript."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(serve_command, name="serve")
cli.add_command(tree_command, name="tree")
cli.add_command(languages_command, name="languages")


if __name__ == "__main__":
    cli()
