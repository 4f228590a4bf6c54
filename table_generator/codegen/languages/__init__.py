"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .csharp import (
    CSharpGenerator,
    create_csharp_generator,
    create_property_generator,
    create_simple_generator,
)

__all__ = [
    "CSharpGenerator",
    "create_csharp_generator",
    "create_property_generator",
    "create_simple_generator",
]
