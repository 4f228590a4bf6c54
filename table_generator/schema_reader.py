"""Read result-set column descriptions from SQL Server.

Uses ``sys.dm_exec_describe_first_result_set_for_object``, which works for
tables, views and stored procedures alike. Connections go through
SQLAlchemy with the ``mssql+pyodbc`` dialect.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from .codegen.core.schema import ColumnDescriptor
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DRIVER = "ODBC Driver 17 for SQL Server"

OBJECT_ID_QUERY = text("SELECT OBJECT_ID(:object_name)")

# A procedure may describe the same column once per result shape; keep the
# first row per name.
DESCRIBE_COLUMNS_QUERY = text(
    """
    SELECT name, system_type_name, is_nullable, column_ordinal
    FROM (
        SELECT name, system_type_name, is_nullable, column_ordinal,
               ROW_NUMBER() OVER (PARTITION BY name ORDER BY column_ordinal) AS rn
        FROM sys.dm_exec_describe_first_result_set_for_object(
            OBJECT_ID(:object_name), NULL
        )
    ) described
    WHERE rn = 1
    ORDER BY column_ordinal
    """
)


class SchemaReadError(Exception):
    """Raised when an object's columns cannot be read."""

    pass


class ObjectNotFoundError(SchemaReadError):
    """Raised when the named table, view or procedure does not exist."""

    pass


class ConnectionFailedError(Exception):
    """Raised when a database connection cannot be established."""

    pass


def build_connection_url(
    server: str,
    database: str,
    driver: str = DEFAULT_DRIVER,
    trusted_connection: bool = True,
    username: str | None = None,
    password: str | None = None,
) -> URL:
    """Build a SQLAlchemy URL for a SQL Server database.

    Without a username the connection uses Windows (trusted) authentication.
    """
    query = {"driver": driver}
    if trusted_connection and not username:
        query["trusted_connection"] = "yes"

    return URL.create(
        "mssql+pyodbc",
        username=username,
        password=password,
        host=server,
        database=database,
        query=query,
    )


def connect(url: URL | str, **engine_options: Any) -> Engine:
    """Create an engine and verify it with a probe connection.

    Raises:
        ConnectionFailedError: If the driver is missing or the server refuses.
    """
    try:
        engine = create_engine(url, **engine_options)
    except (SQLAlchemyError, ImportError) as e:
        raise ConnectionFailedError(f"Could not create engine: {e}") from e

    try:
        with engine.connect():
            pass
    except SQLAlchemyError as e:
        engine.dispose()
        raise ConnectionFailedError(f"Could not connect: {e}") from e

    logger.info("Connected to %s", engine.url.render_as_string(hide_password=True))
    return engine


def _row_to_column(row: Mapping[str, Any]) -> ColumnDescriptor | None:
    name = row.get("name")
    native_type = row.get("system_type_name")
    if not name or not native_type:
        logger.warning("Skipping undescribable column at ordinal %s", row.get("column_ordinal"))
        return None

    return ColumnDescriptor(
        name=name,
        native_type=native_type,
        is_nullable=bool(row.get("is_nullable")),
        ordinal=row.get("column_ordinal"),
    )


class SchemaReader:
    """Reads column descriptors for named database objects."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def read_columns(self, object_name: str) -> list[ColumnDescriptor]:
        """Describe the first result set of a table, view or procedure.

        Args:
            object_name: Object name, optionally schema-qualified.

        Returns:
            Descriptors ordered by column ordinal.

        Raises:
            ObjectNotFoundError: If the object does not exist.
            SchemaReadError: If the query fails.
        """
        if not object_name or not object_name.strip():
            raise SchemaReadError("Object name must not be empty")

        params = {"object_name": object_name.strip()}
        logger.debug("Describing %s", object_name)

        try:
            with self.engine.connect() as connection:
                object_id = connection.execute(OBJECT_ID_QUERY, params).scalar()
                if object_id is None:
                    raise ObjectNotFoundError(f"Object not found: {object_name}")

                rows = connection.execute(DESCRIBE_COLUMNS_QUERY, params).mappings().all()
        except SQLAlchemyError as e:
            raise SchemaReadError(f"Failed to read {object_name}: {e}") from e

        columns = [column for column in map(_row_to_column, rows) if column is not None]
        logger.info("Read %d column(s) from %s", len(columns), object_name)
        return columns

    def close(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
