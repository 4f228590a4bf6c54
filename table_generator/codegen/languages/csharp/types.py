"""
SQL Server to C# type mapping.

Two fixed tables keyed by the bare, lowercase SQL type family name: one for
non-nullable columns and one for nullable columns. Precision, scale and
length suffixes are discarded before lookup; the C# side does not model
them.
"""

from typing import Dict, Optional

from ...core.generator import UnsupportedTypeError

# bigint maps to double rather than long. Previously generated classes
# depend on this; use type_overrides to opt into long.
SQL_TO_CSHARP = {
    "float": "float",
    "smallint": "short",
    "bit": "bool",
    "int": "int",
    "bigint": "double",
    "tinyint": "byte",
    "varchar": "string",
    "char": "string",
    "nvarchar": "string",
    "nchar": "string",
    "text": "string",
    "ntext": "string",
    "datetime": "DateTime",
    "smalldatetime": "DateTime",
}

# string already represents absence with null, so textual types stay as-is
SQL_TO_NULLABLE_CSHARP = {
    "float": "float?",
    "smallint": "short?",
    "bit": "bool?",
    "int": "int?",
    "bigint": "double?",
    "tinyint": "byte?",
    "varchar": "string",
    "char": "string",
    "nvarchar": "string",
    "nchar": "string",
    "text": "string",
    "ntext": "string",
    "datetime": "DateTime?",
    "smalldatetime": "DateTime?",
}


def normalize_native_type(native_type: str) -> str:
    """
    Reduce a reported SQL type to its table key.

    ``"VARCHAR(255)"`` -> ``"varchar"``, ``"decimal(18,2)"`` -> ``"decimal"``.
    """
    normalized = native_type.lower()
    paren = normalized.find("(")
    if paren != -1:
        normalized = normalized[:paren]
    return normalized.strip()


class TypeMapper:
    """
    Resolves SQL Server column types to C# type names.

    Instances are read-only after construction; overrides are merged into
    private copies of the module tables.
    """

    def __init__(
        self,
        type_overrides: Optional[Dict[str, str]] = None,
        nullable_type_overrides: Optional[Dict[str, str]] = None,
    ):
        self._non_nullable = dict(SQL_TO_CSHARP)
        self._nullable = dict(SQL_TO_NULLABLE_CSHARP)

        for native, target in (type_overrides or {}).items():
            self._non_nullable[normalize_native_type(native)] = target
        for native, target in (nullable_type_overrides or {}).items():
            self._nullable[normalize_native_type(native)] = target

    def resolve(self, native_type: str, nullable: bool = False) -> str:
        """
        Map a native type to its C# type.

        Args:
            native_type: Type name as reported by the schema source
            nullable: Use the nullable table

        Returns:
            C# type name

        Raises:
            UnsupportedTypeError: If the type family is not in the table;
                carries the original, unnormalized input
        """
        table = self._nullable if nullable else self._non_nullable
        try:
            return table[normalize_native_type(native_type)]
        except KeyError:
            raise UnsupportedTypeError(native_type) from None

    def supports(self, native_type: str, nullable: bool = False) -> bool:
        """Check whether a native type can be resolved."""
        table = self._nullable if nullable else self._non_nullable
        return normalize_native_type(native_type) in table

    def supported_types(self) -> list[str]:
        """Return every native type family either table knows about."""
        return sorted(set(self._non_nullable) | set(self._nullable))
