"""
C# code generator module.

Generates C# classes from SQL Server column descriptors.
"""

from .generator import (
    CSharpGenerator,
    create_csharp_generator,
    create_property_generator,
    create_simple_generator,
)
from .types import (
    TypeMapper,
    SQL_TO_CSHARP,
    SQL_TO_NULLABLE_CSHARP,
    normalize_native_type,
)

__all__ = [
    "CSharpGenerator",
    "create_csharp_generator",
    "create_property_generator",
    "create_simple_generator",
    "TypeMapper",
    "SQL_TO_CSHARP",
    "SQL_TO_NULLABLE_CSHARP",
    "normalize_native_type",
]
