"""Tests for rich rendering of generation results."""

from table_generator.codegen import UnsupportedTypeError
from table_generator.display import print_diagnostics, print_warnings


def test_warnings_are_printed_verbatim(console_output):
    console, buffer = console_output

    print_warnings(["Class Ord[/er] has no members", "[bold]kept[/bold]"], console)

    output = buffer.getvalue()
    assert "Warnings:" in output
    assert "• Class Ord[/er] has no members" in output
    assert "• [bold]kept[/bold]" in output


def test_no_warnings_prints_nothing(console_output):
    console, buffer = console_output

    print_warnings([], console)

    assert buffer.getvalue() == ""


def test_diagnostics_are_printed_verbatim(console_output):
    console, buffer = console_output

    print_diagnostics([UnsupportedTypeError("hierarchyid", "Path[/x]")], console)

    assert buffer.getvalue() == "ERROR: UNSUPPORTED COLUMN: hierarchyid (Path[/x])\n"
