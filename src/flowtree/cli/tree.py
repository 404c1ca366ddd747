"""flowtree tree command - print the control tree of a source file."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from flowtree.core.errors import RequestError
from flowtree.parsing.packs import get_pack_for_ext, supported_languages
from flowtree.tree.nodes import NodeKind, SummaryNode, TreeResult
from flowtree.tree.transform import transform

_KIND_STYLES = {
    NodeKind.FUNCTION: "bold cyan",
    NodeKind.IF: "yellow",
    NodeKind.SWITCH: "yellow",
    NodeKind.CASE: "yellow",
    NodeKind.FOR: "magenta",
    NodeKind.WHILE: "magenta",
    NodeKind.DO_WHILE: "magenta",
    NodeKind.INSTRUCTION: "white",
}


def _label(node: SummaryNode) -> str:
    style = _KIND_STYLES.get(node.kind, "white")
    parts = [f"[{style}]{node.kind.value}[/{style}]"]
    if node.branch_tag:
        parts.append(f"[dim]\\[{escape(node.branch_tag)}][/dim]")
    if node.text:
        parts.append(escape(node.text))
    return " ".join(parts)


def render_tree(result: TreeResult, title: str) -> Tree:
    """Rich tree for a transform result."""
    root = Tree(f"[bold]{escape(title)}[/bold] [dim]({result.language})[/dim]")
    stack: list[tuple[Tree, SummaryNode]] = [(root, fn) for fn in reversed(result.functions)]
    while stack:
        parent, node = stack.pop()
        branch = parent.add(_label(node))
        stack.extend((branch, child) for child in reversed(node.children))
    return root


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--language",
    "-l",
    type=click.Choice(supported_languages()),
    help="Source language (default: from file extension)",
)
@click.option("--json", "as_json", is_flag=True, help="Print wire-format JSON")
def tree_command(path: Path, language: str | None, as_json: bool) -> None:
    """Print the control-structure tree of every function in PATH."""
    if language is None:
        pack = get_pack_for_ext(path.suffix)
        if pack is None:
            raise click.UsageError(
                f"Cannot infer language from '{path.name}', pass --language"
            )
        language = pack.name

    try:
        result = transform(language, path.read_bytes())
    except RequestError as e:
        raise click.ClickException(e.message) from e

    if as_json:
        click.echo(json.dumps(result.to_wire(), indent=2))
    else:
        Console().print(render_tree(result, path.name))

    err = Console(stderr=True)
    for warning in result.warnings:
        err.print(f"[yellow]warning[/yellow] line {warning.line}: {escape(warning.message)}")
