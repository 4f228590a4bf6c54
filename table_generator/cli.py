"""
Command-line interface for table_generator.

Subcommands:
  generate     Generate a class from a JSON column file or a live object
  interactive  Prompt-driven session against a SQL Server database
  languages    List the available target languages
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .codegen import (
    ConfigError,
    GeneratorError,
    RegistryError,
    generate_code,
    get_generator,
    list_all_language_info,
    load_config,
)
from .display import print_code, print_diagnostics, print_metadata, print_warnings
from .interactive import InteractiveSession
from .logging_config import get_logger, setup_logging
from .schema_reader import (
    ConnectionFailedError,
    SchemaReader,
    SchemaReadError,
    build_connection_url,
    connect,
)
from .utils import ColumnLoaderError, load_columns_file

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="table-generator",
        description="Generate C# classes from SQL Server tables, views and stored procedures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  table-generator generate --columns person.json --class-name Person
  table-generator generate --server . --database Shop --object dbo.GetOrders --class-name Order
  table-generator generate --columns person.json --class-name Person --simple -o Person.cs
  table-generator interactive --server . --database Shop
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate
    generate = subparsers.add_parser("generate", help="Generate a single class")

    source_group = generate.add_argument_group("column source")
    source_group.add_argument("--columns", metavar="FILE", help="JSON file of column descriptors")
    source_group.add_argument("--server", help="SQL Server host")
    source_group.add_argument("--database", help="Database name")
    source_group.add_argument(
        "--object", dest="object_name", metavar="NAME", help="Table, view or stored procedure"
    )
    source_group.add_argument("--driver", help="ODBC driver name")

    generate.add_argument("--class-name", "-c", required=True, help="Name of the generated class")
    generate.add_argument(
        "--language", "-l", default="csharp", help="Target language (default: csharp)"
    )
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument("--namespace", help="Namespace for the generated class")
    generate.add_argument(
        "--simple",
        action="store_true",
        help="Emit auto-properties without change notification or nullable types",
    )
    generate.add_argument(
        "--no-nullable",
        action="store_true",
        help="Treat every column as non-nullable",
    )
    generate.add_argument("--output", "-o", metavar="FILE", help="Write code to FILE")
    generate.add_argument(
        "--plain", action="store_true", help="Print code without highlighting or borders"
    )
    generate.add_argument("--verbose", action="store_true", help="Show generation metadata")
    generate.set_defaults(func=_handle_generate)

    # interactive
    interactive = subparsers.add_parser("interactive", help="Start an interactive session")
    interactive.add_argument("--server", help="SQL Server host")
    interactive.add_argument("--database", help="Database name")
    interactive.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many failed connect/read attempts",
    )
    interactive.add_argument(
        "--simple", action="store_true", help="Emit auto-properties"
    )
    interactive.add_argument("--namespace", help="Namespace for generated classes")
    interactive.set_defaults(func=_handle_interactive)

    # languages
    languages = subparsers.add_parser("languages", help="List supported languages")
    languages.set_defaults(func=_handle_languages)

    return parser


def _build_config_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if getattr(args, "namespace", None):
        overrides["namespace"] = args.namespace
    if getattr(args, "simple", False):
        overrides["emit_change_notification"] = False
        overrides["track_nullability"] = False
    if getattr(args, "no_nullable", False):
        overrides["track_nullability"] = False
    return overrides


def _load_columns(args: argparse.Namespace):
    """Get column descriptors from a file or a live database object."""
    if args.columns:
        try:
            return load_columns_file(args.columns)
        except (FileNotFoundError, ColumnLoaderError) as e:
            raise CLIError(str(e))

    if not (args.server and args.database and args.object_name):
        raise CLIError("Provide --columns FILE, or --server, --database and --object")

    url_options = {"driver": args.driver} if args.driver else {}
    try:
        engine = connect(build_connection_url(args.server, args.database, **url_options))
    except ConnectionFailedError as e:
        raise CLIError(str(e))

    reader = SchemaReader(engine)
    try:
        return reader.read_columns(args.object_name)
    except SchemaReadError as e:
        raise CLIError(str(e))
    finally:
        reader.close()


def _handle_generate(args: argparse.Namespace) -> int:
    try:
        config = load_config(
            args.language.lower(),
            custom_config=_build_config_overrides(args),
            config_file=args.config,
        )
        generator = get_generator(args.language, config)
    except (ConfigError, RegistryError) as e:
        raise CLIError(str(e))

    columns = _load_columns(args)
    result = generate_code(generator, args.class_name, columns)

    if not result.success:
        error_console.print(Text(f"✗ {result.error_message}", style="red"))
        return 1

    print_diagnostics(result.diagnostics, error_console)

    output_file = args.output or generator.config.output_file
    if output_file:
        output_path = Path(output_file)
        try:
            output_path.write_text(result.code + "\n", encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write to {output_path}: {e}")
        error_console.print(
            Text.assemble(
                ("✓", "green"),
                f" Generated {args.class_name} saved to ",
                (str(output_path), "cyan"),
            )
        )
    elif args.plain:
        sys.stdout.write(result.code + "\n")
    else:
        print_code(result.code, console)

    if args.verbose:
        print_metadata(result, error_console)
    print_warnings(result.warnings, error_console)

    return 0


def _handle_interactive(args: argparse.Namespace) -> int:
    if args.max_attempts is not None and args.max_attempts < 1:
        raise CLIError("--max-attempts must be at least 1")

    try:
        generator = get_generator("csharp", _build_config_overrides(args))
    except RegistryError as e:
        raise CLIError(str(e))

    session = InteractiveSession(
        console=console, generator=generator, max_attempts=args.max_attempts
    )
    return session.run(args.server, args.database)


def _handle_languages(args: argparse.Namespace) -> int:
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point for the command line.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, error_console)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        error_console.print(Text.assemble(("✗ Error: ", "red"), str(e)))
        return 1
    except GeneratorError as e:
        error_console.print(Text.assemble(("✗ Generation error: ", "red"), str(e)))
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
