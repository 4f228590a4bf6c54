"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    InvalidInputError,
    UnsupportedTypeError,
    MemberDefinition,
    GenerationResult,
    generate_code,
)
from .schema import (
    ColumnDescriptor,
    SchemaError,
    deduplicate_columns,
    column_from_record,
    columns_from_records,
)
from .naming import backing_field_name, member_name
from .config import (
    GeneratorConfig,
    ConfigManager,
    ConfigError,
    load_config,
    PROPERTY_STYLE_CONFIG,
    SIMPLE_CONFIG,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "InvalidInputError",
    "UnsupportedTypeError",
    "MemberDefinition",
    "GenerationResult",
    "generate_code",
    # Column model
    "ColumnDescriptor",
    "SchemaError",
    "deduplicate_columns",
    "column_from_record",
    "columns_from_records",
    # Naming
    "backing_field_name",
    "member_name",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "PROPERTY_STYLE_CONFIG",
    "SIMPLE_CONFIG",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
