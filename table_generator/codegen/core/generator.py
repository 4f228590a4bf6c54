"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path

from .config import GeneratorConfig, load_config
from .naming import is_identifier
from .schema import ColumnDescriptor
from .templates import TemplateEngine, TemplateError, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidInputError(GeneratorError):
    """Raised when the class name or a column descriptor is malformed."""

    pass


class UnsupportedTypeError(GeneratorError):
    """
    A column's native type has no entry in the applicable mapping table.

    Raised by type mappers; generators catch it and report it as a
    diagnostic, so a single unsupported column never aborts a run.
    """

    def __init__(self, native_type: str, column_name: Optional[str] = None):
        self.native_type = native_type
        self.column_name = column_name
        if column_name is None:
            message = f"Unsupported column type: {native_type}"
        else:
            message = f"Unsupported column type: {native_type} (column {column_name})"
        super().__init__(message)

    def for_column(self, column_name: str) -> "UnsupportedTypeError":
        """Return a copy of this error attributed to a column."""
        return UnsupportedTypeError(self.native_type, column_name)

    def __eq__(self, other):
        if not isinstance(other, UnsupportedTypeError):
            return NotImplemented
        return (self.native_type, self.column_name) == (
            other.native_type,
            other.column_name,
        )

    def __hash__(self):
        return hash((self.native_type, self.column_name))


@dataclass(frozen=True)
class MemberDefinition:
    """One successfully mapped member of a generated class."""

    type_name: str
    name: str
    field_name: str
    column: ColumnDescriptor


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'csharp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.cs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def emit(
        self, class_name: str, columns: Sequence[ColumnDescriptor]
    ) -> "GenerationResult":
        """
        Generate one class from a class name and its column descriptors.

        Args:
            class_name: Name of the generated class
            columns: Column descriptors in schema order

        Returns:
            GenerationResult with code, members and diagnostics
        """
        pass

    def validate_input(
        self, class_name: str, columns: Sequence[ColumnDescriptor]
    ) -> List[ColumnDescriptor]:
        """
        Reject structurally invalid input before anything is rendered.

        Returns:
            The columns as a list

        Raises:
            InvalidInputError: On a missing or non-identifier class name, or
                a malformed column
        """
        if not isinstance(class_name, str) or not class_name.strip():
            raise InvalidInputError("Class name must be a non-empty string")
        if not is_identifier(class_name):
            raise InvalidInputError(
                f"Class name is not a valid identifier: {class_name!r}"
            )

        if columns is None:
            raise InvalidInputError("Columns must be a sequence, got None")

        column_list = list(columns)
        for index, column in enumerate(column_list, start=1):
            if not isinstance(column, ColumnDescriptor):
                raise InvalidInputError(
                    f"Column {index} is not a ColumnDescriptor: {column!r}"
                )
            if not isinstance(column.name, str) or not column.name:
                raise InvalidInputError(f"Column {index} has an empty name")
            if not isinstance(column.native_type, str):
                raise InvalidInputError(
                    f"Column '{column.name}' has a non-string native type"
                )

        return column_list

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        members: List[MemberDefinition] = None,
        diagnostics: List[UnsupportedTypeError] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            members: Members that made it into the output, in order
            diagnostics: Columns dropped because their type is unsupported
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.members = members or []
        self.diagnostics = diagnostics or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @property
    def member_names(self) -> List[str]:
        return [member.name for member in self.members]


def generate_code(
    generator: CodeGenerator,
    class_name: str,
    columns: Sequence[ColumnDescriptor],
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Unlike calling ``generator.emit`` directly, structural errors come back
    as a failed result instead of an exception.

    Args:
        generator: Code generator instance
        class_name: Name of the generated class
        columns: Column descriptors

    Returns:
        GenerationResult with code, diagnostics, and metadata
    """
    try:
        return generator.emit(class_name, columns)
    except (GeneratorError, TemplateError) as e:
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
