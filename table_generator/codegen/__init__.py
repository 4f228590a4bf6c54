"""
Table Generator Code Generation Module

Generates class declarations from database column descriptors.
"""

from typing import Any, Dict, Optional, Sequence, Union
from pathlib import Path

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    InvalidInputError,
    MemberDefinition,
    UnsupportedTypeError,
    generate_code,
)
from .core.schema import (
    ColumnDescriptor,
    SchemaError,
    column_from_record,
    columns_from_records,
    deduplicate_columns,
)
from .core.config import (
    GeneratorConfig,
    ConfigManager,
    ConfigError,
    load_config,
    PROPERTY_STYLE_CONFIG,
    SIMPLE_CONFIG,
)


def generate_class(
    class_name: str,
    columns: Sequence[ColumnDescriptor],
    language: str = "csharp",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> GenerationResult:
    """
    Generate a class from column descriptors.

    Args:
        class_name: Name of the generated class
        columns: Column descriptors from the schema reader
        language: Target language name or alias
        config: Generator configuration as object, dict or JSON file path

    Returns:
        GenerationResult; ``success`` is False for structurally invalid input
    """
    generator = get_generator(language, config)
    return generate_code(generator, class_name, columns)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "InvalidInputError",
    "MemberDefinition",
    "UnsupportedTypeError",
    "ColumnDescriptor",
    "SchemaError",
    "column_from_record",
    "columns_from_records",
    "deduplicate_columns",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "PROPERTY_STYLE_CONFIG",
    "SIMPLE_CONFIG",
    "generate_class",
    "generate_code",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
