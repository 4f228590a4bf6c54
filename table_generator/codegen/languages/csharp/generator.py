"""
C# code generator implementation.

Generates a C# class from SQL Server column descriptors, either as
properties with backing fields and change notification or as plain
auto-properties.
"""

from typing import Any, Dict, List, Optional, Sequence
from pathlib import Path

from ...core.config import GeneratorConfig, get_config_manager, load_config
from ...core.generator import (
    CodeGenerator,
    GenerationResult,
    MemberDefinition,
    UnsupportedTypeError,
)
from ...core.naming import backing_field_name, member_name
from ...core.schema import ColumnDescriptor, deduplicate_columns
from ....logging_config import get_logger
from .types import TypeMapper

logger = get_logger(__name__)


class CSharpGenerator(CodeGenerator):
    """Code generator for C# classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize C# generator with configuration.

        Raises:
            ConfigError: If the namespace, notification method or indent
                would produce uncompilable code
        """
        super().__init__(config)
        self.config_warnings = get_config_manager().validate_config(
            self.config, strict=True
        )
        for warning in self.config_warnings:
            logger.warning("Configuration: %s", warning)

        self.type_mapper = TypeMapper(
            type_overrides=self.config.type_overrides,
            nullable_type_overrides=self.config.nullable_type_overrides,
        )

    def get_template_directory(self) -> Optional[Path]:
        """Return the C# templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "csharp"

    @property
    def file_extension(self) -> str:
        """Return C# file extension."""
        return ".cs"

    @property
    def member_template(self) -> str:
        if self.config.emit_change_notification:
            return "property.cs.j2"
        return "auto_property.cs.j2"

    def emit(
        self, class_name: str, columns: Sequence[ColumnDescriptor]
    ) -> GenerationResult:
        """
        Generate a C# class for the given columns.

        Duplicate column names are collapsed to their lowest ordinal.
        Columns whose type cannot be mapped are left out of the class and
        reported in ``GenerationResult.diagnostics``.

        Raises:
            InvalidInputError: If the class name or a column is malformed
        """
        column_list = self.validate_input(class_name, columns)
        unique_columns = deduplicate_columns(column_list)

        if len(unique_columns) != len(column_list):
            logger.debug(
                "Dropped %d duplicate column(s) for %s",
                len(column_list) - len(unique_columns),
                class_name,
            )

        members: List[MemberDefinition] = []
        diagnostics: List[UnsupportedTypeError] = []

        for column in unique_columns:
            try:
                members.append(self._build_member(column))
            except UnsupportedTypeError as e:
                logger.warning(
                    "Skipping column %s: unsupported type %s",
                    column.name,
                    column.native_type,
                )
                diagnostics.append(e.for_column(column.name))

        member_blocks = [self._render_member(member) for member in members]
        code = self.format_code(self._render_class(class_name, member_blocks))

        metadata = {
            "language": self.language_name,
            "file_extension": self.file_extension,
            "class_name": class_name,
            "column_count": len(column_list),
            "duplicate_count": len(column_list) - len(unique_columns),
            "member_count": len(members),
            "unsupported_count": len(diagnostics),
            "change_notification": self.config.emit_change_notification,
            "nullability_tracked": self.config.track_nullability,
        }

        warnings = list(self.config_warnings)
        if not members:
            warnings.append(f"Class {class_name} has no members")

        logger.info(
            "Generated %s with %d member(s), %d unsupported",
            class_name,
            len(members),
            len(diagnostics),
        )

        return GenerationResult(
            code,
            members=members,
            diagnostics=diagnostics,
            warnings=warnings,
            metadata=metadata,
        )

    def _build_member(self, column: ColumnDescriptor) -> MemberDefinition:
        """Resolve the member type and identifiers for one column."""
        nullable = column.is_nullable and self.config.track_nullability
        type_name = self.type_mapper.resolve(column.native_type, nullable)

        return MemberDefinition(
            type_name=type_name,
            name=member_name(column.name),
            field_name=backing_field_name(column.name),
            column=column,
        )

    def _template_context(self) -> Dict[str, Any]:
        return {
            "pad": " " * self.config.indent_size,
            "indent_size": self.config.indent_size,
            "notify_method": self.config.change_notification_method,
        }

    def _render_member(self, member: MemberDefinition) -> str:
        """Render the declaration block for one member."""
        context = self._template_context()
        context["member"] = member
        return self.render_template(self.member_template, context)

    def _render_class(self, class_name: str, member_blocks: List[str]) -> str:
        """Wrap member blocks in the namespace and class declaration."""
        context = self._template_context()
        context.update(
            {
                "class_name": class_name,
                "namespace": self.config.namespace,
                "partial_class": self.config.partial_class,
                "add_using_directives": self.config.add_using_directives,
                "member_blocks": member_blocks,
            }
        )
        return self.render_template("class.cs.j2", context)


def create_csharp_generator(config: Optional[Dict[str, Any]] = None) -> CSharpGenerator:
    """Create a C# generator from default configuration plus overrides."""
    return CSharpGenerator(load_config("csharp", custom_config=config))


def create_property_generator(namespace: str = "TableGenerator") -> CSharpGenerator:
    """Create the change-notifying, nullability-aware generator."""
    return create_csharp_generator(
        {
            "namespace": namespace,
            "emit_change_notification": True,
            "track_nullability": True,
        }
    )


def create_simple_generator(namespace: str = "TableGenerator") -> CSharpGenerator:
    """Create the auto-property generator that ignores nullability."""
    return create_csharp_generator(
        {
            "namespace": namespace,
            "emit_change_notification": False,
            "track_nullability": False,
        }
    )
