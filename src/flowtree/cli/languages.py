"""flowtree languages command - list supported languages."""

import click
from rich.console import Console
from rich.table import Table

from flowtree.parsing.packs import PACKS, supported_languages


@click.command()
def languages_command() -> None:
    """List supported language selectors and their file extensions."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Language")
    table.add_column("Extensions")
    table.add_column("Grammar")
    for name in supported_languages():
        pack = PACKS[name]
        table.add_row(
            name,
            ", ".join(f".{ext}" for ext in sorted(pack.extensions)),
            f"{pack.grammar_package}>={pack.min_version}",
        )
    Console().print(table)
