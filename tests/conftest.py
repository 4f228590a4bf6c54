"""Shared fixtures for table_generator tests."""

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from table_generator.codegen import ColumnDescriptor
from table_generator.codegen.languages.csharp import (
    create_property_generator,
    create_simple_generator,
)


@pytest.fixture
def person_columns():
    """Two columns: a non-nullable int and a nullable nvarchar."""
    return [
        ColumnDescriptor("Id", "int", is_nullable=False, ordinal=1),
        ColumnDescriptor("Email", "nvarchar(100)", is_nullable=True, ordinal=2),
    ]


@pytest.fixture
def property_generator():
    return create_property_generator()


@pytest.fixture
def simple_generator():
    return create_simple_generator()


@pytest.fixture
def console_output():
    """A console writing into a buffer, returned together with the buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
