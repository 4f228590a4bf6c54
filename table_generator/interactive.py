"""Interactive session: connect, describe an object, print its class, repeat.

Connection and schema-read failures are retried in a loop. Each retry is
confirmed by the user and ``max_attempts`` caps the total when set.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.text import Text
from sqlalchemy.engine import Engine

from .codegen import CodeGenerator, GeneratorError, get_generator
from .codegen.core.schema import ColumnDescriptor
from .display import print_code, print_diagnostics, print_warnings
from .logging_config import get_logger
from .schema_reader import (
    ConnectionFailedError,
    SchemaReader,
    SchemaReadError,
    build_connection_url,
    connect,
)

logger = get_logger(__name__)

T = TypeVar("T")

WELCOME_TEXT = """[bold]SQL Server to C# Mapper[/bold]
Generates C# classes from tables, views and stored procedures.
Note: only trusted (Windows) authentication is prompted for."""


class InteractiveSession:
    """Drives the prompt loop around the schema reader and generator."""

    def __init__(
        self,
        console: Console | None = None,
        generator: CodeGenerator | None = None,
        max_attempts: int | None = None,
        connect_fn: Callable[..., Engine] = connect,
        reader_factory: Callable[[Engine], SchemaReader] = SchemaReader,
    ) -> None:
        """Initialize the session.

        Args:
            console: Rich console for prompts and output.
            generator: Code generator (defaults to the C# generator).
            max_attempts: Cap on tries per connect/read step; None is unbounded.
            connect_fn: Callable turning a connection URL into an engine.
            reader_factory: Callable building a schema reader from an engine.
        """
        self.console = console or Console()
        self.generator = generator or get_generator("csharp")
        self.max_attempts = max_attempts
        self.connect_fn = connect_fn
        self.reader_factory = reader_factory
        logger.debug("InteractiveSession initialized")

    def run(self, server: str | None = None, database: str | None = None) -> int:
        """Run the session until the user stops mapping classes.

        Returns:
            Exit code (0 for success, 1 if no connection could be made).
        """
        self.console.print(Panel.fit(WELCOME_TEXT, border_style="blue"))

        try:
            engine = self._connect(server, database)
            if engine is None:
                return 1

            reader = self.reader_factory(engine)
            try:
                while True:
                    self.map_one(reader)
                    if not Confirm.ask(
                        "Do you want to map another class?",
                        default=True,
                        console=self.console,
                    ):
                        break
            finally:
                self.console.print("Closing connection...")
                reader.close()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]👋 Session cancelled[/yellow]")
            return 1

        return 0

    def map_one(self, reader: SchemaReader) -> bool:
        """Describe one object and print its generated class.

        Returns:
            True if a class was printed.
        """
        columns = self._read_columns(reader)
        if columns is None:
            return False

        self.console.print(
            f"Object read successfully, found {len(columns)} column/s!"
        )

        class_name = Prompt.ask("Name for generated class", console=self.console)

        try:
            result = self.generator.emit(class_name, columns)
        except GeneratorError as e:
            self.console.print(Text.assemble(("✗ Generation error: ", "red"), str(e)))
            return False

        print_diagnostics(result.diagnostics, self.console)
        print_code(result.code, self.console)
        print_warnings(result.warnings, self.console)
        return True

    def _connect(self, server: str | None, database: str | None) -> Engine | None:
        def attempt() -> Engine:
            nonlocal server, database
            if not server:
                server = Prompt.ask("Enter SQL Server host", console=self.console)
            if not database:
                database = Prompt.ask("Enter database name", console=self.console)

            self.console.print("Connecting...")
            try:
                engine = self.connect_fn(build_connection_url(server, database))
            except ConnectionFailedError:
                # Ask for both values again on the next attempt
                server = database = None
                raise

            self.console.print("[green]✓[/green] Successfully connected!")
            return engine

        return self._retry(
            attempt,
            "An error occurred while connecting. Check the server and database names",
            (ConnectionFailedError,),
        )

    def _read_columns(self, reader: SchemaReader) -> list[ColumnDescriptor] | None:
        def attempt() -> list[ColumnDescriptor]:
            object_name = Prompt.ask(
                "Enter full table, view or stored procedure name",
                console=self.console,
            )
            self.console.print("Finding and reading object...")
            return reader.read_columns(object_name)

        return self._retry(
            attempt,
            "An error occurred while reading the object. Are you sure it exists?",
            (SchemaReadError,),
        )

    def _retry(
        self,
        action: Callable[[], T],
        failure_message: str,
        errors: tuple[type[Exception], ...],
    ) -> T | None:
        """Call ``action`` until it succeeds, the user gives up or attempts run out."""
        attempt = 0
        while True:
            attempt += 1
            try:
                return action()
            except errors as e:
                logger.warning("Attempt %d failed: %s", attempt, e)
                self.console.print(
                    Text.assemble(("✗ " + failure_message, "red"), "\n", (str(e), "dim"))
                )

            if self.max_attempts is not None and attempt >= self.max_attempts:
                self.console.print("[red]Giving up after too many attempts.[/red]")
                return None

            if not Confirm.ask("Try again?", default=True, console=self.console):
                return None
