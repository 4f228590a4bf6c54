"""Tests for C# class emission."""

import pytest

from table_generator.codegen import (
    ColumnDescriptor,
    ConfigError,
    InvalidInputError,
    UnsupportedTypeError,
    generate_code,
    load_config,
)
from table_generator.codegen.languages.csharp import (
    CSharpGenerator,
    create_csharp_generator,
)

PERSON_PROPERTY_CODE = """using System;

namespace TableGenerator
{
    public partial class Person
    {
        public int Id
        {
            get => _id;
            set
            {
                if (_id == value)
                    return;

                _id = value;
                RaisePropertyChanged();
            }
        }

        private int _id;

        public string Email
        {
            get => _email;
            set
            {
                if (_email == value)
                    return;

                _email = value;
                RaisePropertyChanged();
            }
        }

        private string _email;
    }
}"""

PERSON_SIMPLE_CODE = """using System;

namespace TableGenerator
{
    public partial class Person
    {
        public int Id { get; set; }

        public string Email { get; set; }
    }
}"""

EMPTY_CODE = """using System;

namespace TableGenerator
{
    public partial class Empty
    {
    }
}"""


class TestPropertyStyle:
    def test_person_end_to_end(self, property_generator, person_columns):
        result = property_generator.emit("Person", person_columns)

        assert result.success
        assert result.diagnostics == []
        assert [(m.type_name, m.name, m.field_name) for m in result.members] == [
            ("int", "Id", "_id"),
            ("string", "Email", "_email"),
        ]
        assert result.code == PERSON_PROPERTY_CODE

    def test_nullable_value_types(self, property_generator):
        columns = [
            ColumnDescriptor("Age", "int", is_nullable=True, ordinal=1),
            ColumnDescriptor("BornAt", "datetime", is_nullable=True, ordinal=2),
        ]

        result = property_generator.emit("Person", columns)

        assert [m.type_name for m in result.members] == ["int?", "DateTime?"]
        assert "private int? _age;" in result.code
        assert "public DateTime? BornAt" in result.code

    def test_custom_notification_method(self, person_columns):
        generator = create_csharp_generator(
            {"change_notification_method": "OnPropertyChanged", "namespace": "Shop.Models"}
        )

        result = generator.emit("Person", person_columns)

        assert "OnPropertyChanged();" in result.code
        assert "RaisePropertyChanged" not in result.code
        assert "namespace Shop.Models" in result.code


class TestSimpleStyle:
    def test_person_auto_properties(self, simple_generator, person_columns):
        result = simple_generator.emit("Person", person_columns)

        assert result.code == PERSON_SIMPLE_CODE
        assert "_id" not in result.code

    def test_nullability_ignored(self, simple_generator):
        columns = [ColumnDescriptor("Age", "int", is_nullable=True, ordinal=1)]

        result = simple_generator.emit("Person", columns)

        assert result.members[0].type_name == "int"


class TestEmission:
    def test_duplicates_collapse(self, property_generator):
        columns = [
            ColumnDescriptor("Id", "int", ordinal=1),
            ColumnDescriptor("Id", "int", ordinal=2),
            ColumnDescriptor("Name", "varchar(50)", ordinal=3),
        ]

        result = property_generator.emit("Thing", columns)

        assert result.member_names == ["Id", "Name"]
        assert result.code.count("public int Id") == 1
        assert result.metadata["duplicate_count"] == 1

    def test_unsupported_column_is_skipped(self, property_generator):
        columns = [
            ColumnDescriptor("A", "geography", ordinal=1),
            ColumnDescriptor("B", "int", ordinal=2),
        ]

        result = property_generator.emit("Place", columns)

        assert result.success
        assert result.member_names == ["B"]
        assert "public int B" in result.code
        assert " A\n" not in result.code
        assert result.diagnostics == [UnsupportedTypeError("geography", "A")]
        assert result.diagnostics[0].native_type == "geography"
        assert result.diagnostics[0].column_name == "A"

    def test_diagnostics_keep_column_order(self, property_generator):
        columns = [
            ColumnDescriptor("Shape", "geometry", ordinal=2),
            ColumnDescriptor("Price", "money", ordinal=1),
        ]

        result = property_generator.emit("Item", columns)

        assert [d.column_name for d in result.diagnostics] == ["Price", "Shape"]
        assert result.members == []
        assert result.warnings == ["Class Item has no members"]

    def test_empty_input(self, property_generator):
        result = property_generator.emit("Empty", [])

        assert result.code == EMPTY_CODE
        assert result.diagnostics == []
        assert result.members == []

    def test_idempotent(self, property_generator, person_columns):
        first = property_generator.emit("Person", person_columns)
        second = property_generator.emit("Person", person_columns)

        assert first.code == second.code
        assert first.diagnostics == second.diagnostics

    def test_bigint_override(self):
        generator = create_csharp_generator(
            {"type_overrides": {"bigint": "long"}, "nullable_type_overrides": {"bigint": "long?"}}
        )
        columns = [
            ColumnDescriptor("Id", "bigint", ordinal=1),
            ColumnDescriptor("ParentId", "bigint", is_nullable=True, ordinal=2),
        ]

        result = generator.emit("Node", columns)

        assert [m.type_name for m in result.members] == ["long", "long?"]

    def test_non_partial_without_usings(self, person_columns):
        generator = CSharpGenerator(
            load_config(custom_config={"partial_class": False, "add_using_directives": False})
        )

        code = generator.emit("Person", person_columns).code

        assert code.startswith("namespace TableGenerator")
        assert "    public class Person" in code

    def test_metadata(self, property_generator, person_columns):
        metadata = property_generator.emit("Person", person_columns).metadata

        assert metadata["language"] == "csharp"
        assert metadata["member_count"] == 2
        assert metadata["unsupported_count"] == 0
        assert metadata["change_notification"] is True


class TestConfigValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"namespace": "My App;"},
            {"change_notification_method": "Notify()"},
            {"indent_size": -1},
        ],
    )
    def test_output_breaking_config_rejected(self, overrides):
        with pytest.raises(ConfigError):
            create_csharp_generator(overrides)

    def test_bad_notify_method_ignored_without_notification(self, person_columns):
        generator = create_csharp_generator(
            {"emit_change_notification": False, "change_notification_method": "Notify()"}
        )

        assert generator.emit("Person", person_columns).success

    def test_config_warnings_reach_result(self, person_columns):
        generator = create_csharp_generator({"type_overrides": {"varchar(50)": "string"}})

        result = generator.emit("Person", person_columns)

        assert len(result.warnings) == 1
        assert "varchar(50)" in result.warnings[0]
        assert "public int Id" in result.code


class TestInvalidInput:
    @pytest.mark.parametrize("class_name", ["", "   ", None])
    def test_class_name_required(self, property_generator, person_columns, class_name):
        with pytest.raises(InvalidInputError):
            property_generator.emit(class_name, person_columns)

    @pytest.mark.parametrize("class_name", ["My Class {", "Person;", "2Fast", " Person", "Ord[/er]"])
    def test_class_name_must_be_identifier(self, property_generator, person_columns, class_name):
        with pytest.raises(InvalidInputError, match="not a valid identifier"):
            property_generator.emit(class_name, person_columns)

    def test_generate_code_rejects_non_identifier_class_name(self, property_generator, person_columns):
        result = generate_code(property_generator, "My Class {", person_columns)

        assert not result.success
        assert result.code == ""

    def test_non_descriptor_rejected(self, property_generator):
        with pytest.raises(InvalidInputError):
            property_generator.emit("Person", [{"name": "Id", "type": "int"}])

    def test_empty_column_name_rejected(self, property_generator):
        with pytest.raises(InvalidInputError):
            property_generator.emit("Person", [ColumnDescriptor("", "int")])

    def test_generate_code_returns_failed_result(self, property_generator):
        result = generate_code(property_generator, "", [])

        assert not result.success
        assert result.code == ""
        assert "Class name" in result.error_message
        assert isinstance(result.exception, InvalidInputError)
