"""Tests for loading column descriptors from JSON files."""

import pytest

from table_generator.codegen import ColumnDescriptor
from table_generator.utils import ColumnLoaderError, load_columns_file


def test_load_array(write_json):
    path = write_json(
        "columns.json",
        [
            {"name": "Id", "system_type_name": "int", "is_nullable": False, "column_ordinal": 1},
            {"name": "Email", "system_type_name": "nvarchar(100)", "is_nullable": True, "column_ordinal": 2},
        ],
    )

    columns = load_columns_file(path)

    assert columns == [
        ColumnDescriptor("Id", "int", False, 1),
        ColumnDescriptor("Email", "nvarchar(100)", True, 2),
    ]


def test_load_wrapped_object(write_json):
    path = write_json("columns.json", {"columns": [{"name": "Id", "type": "int"}]})

    assert load_columns_file(path) == [ColumnDescriptor("Id", "int", False, None)]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_columns_file(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "columns.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(ColumnLoaderError, match="Invalid JSON"):
        load_columns_file(path)


def test_not_an_array(write_json):
    with pytest.raises(ColumnLoaderError, match="array"):
        load_columns_file(write_json("columns.json", {"name": "Id"}))


def test_invalid_record(write_json):
    with pytest.raises(ColumnLoaderError, match="Invalid column"):
        load_columns_file(write_json("columns.json", [{"name": "Id"}]))
