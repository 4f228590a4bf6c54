"""Tests for the command line interface."""

from unittest.mock import MagicMock, patch

import pytest

from table_generator.cli import main
from table_generator.codegen import ColumnDescriptor

PERSON_RECORDS = [
    {"name": "Id", "system_type_name": "int", "is_nullable": False, "column_ordinal": 1},
    {"name": "Email", "system_type_name": "nvarchar(100)", "is_nullable": True, "column_ordinal": 2},
]


@pytest.fixture
def person_file(write_json):
    return write_json("person.json", PERSON_RECORDS)


def test_generate_plain(person_file, capsys):
    exit_code = main(["generate", "--columns", str(person_file), "--class-name", "Person", "--plain"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "public partial class Person" in out
    assert "private int _id;" in out
    assert "RaisePropertyChanged();" in out


def test_generate_simple_to_file(person_file, tmp_path, capsys):
    output = tmp_path / "Person.cs"

    exit_code = main(
        [
            "generate",
            "--columns",
            str(person_file),
            "--class-name",
            "Person",
            "--simple",
            "--namespace",
            "Shop.Models",
            "-o",
            str(output),
        ]
    )

    code = output.read_text(encoding="utf-8")
    assert exit_code == 0
    assert "namespace Shop.Models" in code
    assert "public string Email { get; set; }" in code
    assert code.endswith("}\n")


def test_generate_with_config_file(person_file, write_json, capsys):
    config = write_json("config.json", {"type_overrides": {"int": "long"}})

    exit_code = main(
        [
            "generate",
            "--columns",
            str(person_file),
            "--class-name",
            "Person",
            "--config",
            str(config),
            "--no-nullable",
            "--plain",
        ]
    )

    assert exit_code == 0
    assert "public long Id" in capsys.readouterr().out


def test_unsupported_column_reported_on_stderr(write_json, capsys):
    path = write_json(
        "place.json",
        [
            {"name": "A", "type": "geography", "ordinal": 1},
            {"name": "B", "type": "int", "ordinal": 2},
        ],
    )

    exit_code = main(["generate", "--columns", str(path), "--class-name", "Place", "--plain"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "ERROR: UNSUPPORTED COLUMN: geography (A)" in captured.err
    assert "public int B" in captured.out


def test_missing_column_source(capsys):
    assert main(["generate", "--class-name", "Person"]) == 1
    assert "--columns" in capsys.readouterr().err


def test_bad_column_file(tmp_path, capsys):
    assert main(["generate", "--columns", str(tmp_path / "none.json"), "--class-name", "X"]) == 1


def test_blank_class_name(person_file, capsys):
    assert main(["generate", "--columns", str(person_file), "--class-name", " "]) == 1
    assert "Class name" in capsys.readouterr().err


def test_unknown_language(person_file, capsys):
    exit_code = main(
        ["generate", "--columns", str(person_file), "--class-name", "P", "--language", "cobol"]
    )
    assert exit_code == 1


def test_generate_from_database(capsys):
    reader = MagicMock()
    reader.read_columns.return_value = [ColumnDescriptor("Id", "int", ordinal=1)]

    with patch("table_generator.cli.connect") as connect_fn, patch(
        "table_generator.cli.SchemaReader", return_value=reader
    ):
        exit_code = main(
            [
                "generate",
                "--server",
                "db01",
                "--database",
                "Shop",
                "--object",
                "dbo.Person",
                "--class-name",
                "Person",
                "--plain",
            ]
        )

    assert exit_code == 0
    assert connect_fn.call_args.args[0].host == "db01"
    reader.read_columns.assert_called_once_with("dbo.Person")
    reader.close.assert_called_once()
    assert "public int Id" in capsys.readouterr().out


def test_languages(capsys):
    assert main(["languages"]) == 0
    assert "csharp" in capsys.readouterr().out


def test_interactive_rejects_zero_attempts(capsys):
    assert main(["interactive", "--max-attempts", "0"]) == 1


def test_no_command(capsys):
    assert main([]) == 1


def test_invalid_namespace(person_file, capsys):
    exit_code = main(
        ["generate", "--columns", str(person_file), "--class-name", "Person", "--namespace", "My App;"]
    )

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Invalid namespace" in " ".join(captured.err.split())
    assert captured.out == ""


def test_non_identifier_class_name(person_file, capsys):
    exit_code = main(["generate", "--columns", str(person_file), "--class-name", "My Class {", "--plain"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "not a valid identifier" in " ".join(captured.err.split())
    assert captured.out == ""


def test_interactive_invalid_namespace(capsys):
    assert main(["interactive", "--namespace", "My App;"]) == 1
