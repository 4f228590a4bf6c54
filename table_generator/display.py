"""Rich rendering of generation results.

Diagnostics styling is passed in by the caller rather than kept as
console-wide state.
"""

from typing import Sequence

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from .codegen.core.generator import GenerationResult, UnsupportedTypeError

DIAGNOSTIC_STYLE = "red"


def print_diagnostics(
    diagnostics: Sequence[UnsupportedTypeError],
    console: Console,
    style: str = DIAGNOSTIC_STYLE,
) -> None:
    """Print one line per column dropped for an unsupported type."""
    for diagnostic in diagnostics:
        console.print(
            f"ERROR: UNSUPPORTED COLUMN: {diagnostic.native_type}"
            f" ({diagnostic.column_name})",
            style=style,
            markup=False,
            highlight=False,
        )


def print_code(code: str, console: Console, lexer: str = "csharp") -> None:
    """Print generated code with syntax highlighting."""
    border = "─" * 35
    console.print(f"\n[green]{border} Your Generated Class {border}[/green]\n")
    console.print(Syntax(code, lexer, theme="monokai"))
    console.print(f"\n[green]{border}{'─' * 22}{border}[/green]")


def print_metadata(result: GenerationResult, console: Console) -> None:
    """Print the result metadata as a table."""
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )

    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


def print_warnings(warnings: Sequence[str], console: Console) -> None:
    if not warnings:
        return
    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    # Warnings can quote user input, so they are never parsed as markup
    for warning in warnings:
        console.print(Text.assemble(("  • ", "yellow"), warning))
