"""
Identifier derivation for generated members.

Column names are used verbatim as member names; no escaping of reserved
words or invalid characters is performed.
"""

import re

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NAMESPACE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def member_name(column_name: str) -> str:
    """Return the public member identifier for a column."""
    return column_name


def backing_field_name(column_name: str, prefix: str = "_") -> str:
    """
    Derive the private backing field for a member.

    Only the first character is lowercased (``Age`` -> ``_age``,
    ``ID`` -> ``_iD``). An empty name yields the bare prefix.
    """
    if not column_name:
        return prefix
    return f"{prefix}{column_name[0].lower()}{column_name[1:]}"


def is_identifier(name: str) -> bool:
    """Check for a plain ASCII identifier (letters, digits, underscore)."""
    return bool(_IDENTIFIER_PATTERN.match(name or ""))


def is_namespace(name: str) -> bool:
    """Check for a dotted sequence of identifiers."""
    return bool(_NAMESPACE_PATTERN.match(name or ""))
