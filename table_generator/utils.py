"""Utility functions for loading column descriptors from files.

Lets classes be generated offline from a JSON dump of a result-set
description instead of a live database connection.
"""

import json
from pathlib import Path
from typing import Any

from .codegen.core.schema import ColumnDescriptor, SchemaError, columns_from_records
from .logging_config import get_logger

logger = get_logger(__name__)


class ColumnLoaderError(Exception):
    """Custom exception for column file loading errors."""

    pass


def _extract_records(data: Any, source: Path) -> list:
    # Accept either a bare array or {"columns": [...]}
    if isinstance(data, dict) and "columns" in data:
        data = data["columns"]
    if not isinstance(data, list):
        raise ColumnLoaderError(
            f"Expected a JSON array of columns in {source}, got {type(data).__name__}"
        )
    return data


def load_columns_file(file_path: str | Path) -> list[ColumnDescriptor]:
    """Load column descriptors from a JSON file.

    Each entry is an object with a name, a native type (``native_type``,
    ``system_type_name`` or ``type``), and optionally ``is_nullable`` and
    ``ordinal`` / ``column_ordinal``.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Descriptors in file order.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ColumnLoaderError: If the file is unreadable or the records are invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load columns from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise ColumnLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise ColumnLoaderError(f"Error reading file {file_path}: {e}") from e

    records = _extract_records(data, file_path)

    try:
        columns = columns_from_records(records)
    except SchemaError as e:
        raise ColumnLoaderError(f"Invalid column in {file_path}: {e}") from e

    logger.info("Loaded %d column(s) from %s", len(columns), file_path)
    return columns
