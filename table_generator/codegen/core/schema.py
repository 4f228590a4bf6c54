"""
Core column representation for code generation.

Normalizes whatever the schema source reports into ``ColumnDescriptor``
values that every generator consumes the same way.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

# Accepted spellings for each descriptor attribute in record form. The
# second group matches the column names returned by SQL Server's
# sys.dm_exec_describe_first_result_set_for_object.
NAME_KEYS = ("name", "column_name")
TYPE_KEYS = ("native_type", "system_type_name", "type", "data_type")
NULLABLE_KEYS = ("is_nullable", "nullable")
ORDINAL_KEYS = ("ordinal", "column_ordinal")


class SchemaError(ValueError):
    """Raised when a column record cannot be turned into a descriptor."""

    pass


@dataclass(frozen=True)
class ColumnDescriptor:
    """A single result-set column as reported by the schema source."""

    name: str
    native_type: str
    is_nullable: bool = False
    ordinal: Optional[int] = None


def deduplicate_columns(
    columns: Iterable[ColumnDescriptor],
) -> List[ColumnDescriptor]:
    """
    Drop repeated column names, keeping the lowest ordinal of each.

    Stored procedures can describe the same column once per possible result
    shape. When every descriptor carries an ordinal the survivors come back
    in ordinal order; otherwise input order is kept and the first occurrence
    of a name wins. Names are compared case-sensitively.

    Args:
        columns: Column descriptors in the order the schema source gave them

    Returns:
        New list with one descriptor per distinct name
    """
    ordered = list(columns)

    if ordered and all(column.ordinal is not None for column in ordered):
        # sorted() is stable, so equal ordinals keep their input order
        ordered = sorted(ordered, key=lambda column: column.ordinal)

    seen = set()
    unique = []
    for column in ordered:
        if column.name in seen:
            continue
        seen.add(column.name)
        unique.append(column)

    return unique


def _first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def column_from_record(record: Mapping[str, Any]) -> ColumnDescriptor:
    """
    Build a descriptor from a mapping such as a JSON object or a result row.

    Args:
        record: Mapping with name/type/nullability/ordinal entries. A
            record without an ordinal yields a descriptor without one.

    Returns:
        ColumnDescriptor for the record

    Raises:
        SchemaError: If the name or native type is missing or not a string
    """
    if not isinstance(record, Mapping):
        raise SchemaError(f"Column record must be a mapping, got {type(record).__name__}")

    name = _first_present(record, NAME_KEYS)
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Column record has no usable name: {dict(record)!r}")

    native_type = _first_present(record, TYPE_KEYS)
    if not isinstance(native_type, str) or not native_type.strip():
        raise SchemaError(f"Column '{name}' has no usable native type")

    return ColumnDescriptor(
        name=name,
        native_type=native_type,
        is_nullable=_coerce_bool(_first_present(record, NULLABLE_KEYS)),
        ordinal=_parse_ordinal(name, _first_present(record, ORDINAL_KEYS)),
    )


def _parse_ordinal(name: str, ordinal: Any) -> Optional[int]:
    if ordinal is None:
        return None
    if isinstance(ordinal, bool) or not isinstance(ordinal, (int, str)):
        raise SchemaError(f"Column '{name}' has an invalid ordinal: {ordinal!r}")
    try:
        return int(ordinal)
    except ValueError:
        raise SchemaError(f"Column '{name}' has an invalid ordinal: {ordinal!r}")


def columns_from_records(
    records: Iterable[Mapping[str, Any]],
) -> List[ColumnDescriptor]:
    """Convert a sequence of records; unranked records keep no ordinal."""
    return [column_from_record(record) for record in records]
