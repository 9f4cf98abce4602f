"""
Error classes for the codec.

**Conceptual**: Every failure the library surfaces derives from CsvCodecError,
so callers can catch one base class at their I/O boundary and still inspect the
specific subclass (and its context attributes) when they need to. Messages are
written to be actionable: they say what went wrong, where, and what was
expected.

**Taxonomy**:
  - RecordTypeError: the object passed as a record type is not a dataclass.
  - DuplicateColumnError: two fields resolve to the same external column name.
  - CoercionError: a text value cannot be converted to a field's declared type.
  - RecordConstructionError: a record cannot be built from the parsed values
    (e.g., a required field has no matching column).

Malformed column bindings are NOT errors: they degrade to defaults (see
recordcsv.mapping.fields).
"""

from typing import Any


class CsvCodecError(Exception):
    """Base class for all errors raised by the codec."""
    pass


class RecordTypeError(CsvCodecError, TypeError):
    """Raised when a record type is not a dataclass type."""
    pass


class DuplicateColumnError(CsvCodecError):
    """
    Raised when two or more fields resolve to the same external column name.

    A document with duplicate headers cannot be read back unambiguously, so
    the mapping is rejected when it is resolved rather than when it is used.

    Attributes:
        external_name: The column name claimed more than once.
        fields: Declared names of the fields that claim it, in declaration order.
    """

    def __init__(self, external_name: str, fields: list[str], record_type_name: str = ""):
        self.external_name = external_name
        self.fields = fields
        owner = f"{record_type_name}: " if record_type_name else ""
        super().__init__(
            f"{owner}External column name '{external_name}' is used by more than one field: "
            f"{fields}. Give each field a distinct column name."
        )


class CoercionError(CsvCodecError, ValueError):
    """
    Raised when a text value cannot be converted to a field's declared type.

    Attributes:
        value: The raw text that failed to convert.
        target_type: The declared scalar type of the destination field.
        column: The header name of the column the value came from (if known).
        line_number: 1-based line number in the document (if known; header is line 1).
    """

    def __init__(
        self,
        value: str,
        target_type: Any,
        column: str | None = None,
        line_number: int | None = None,
        reason: str | None = None,
    ):
        self.value = value
        self.target_type = target_type
        self.column = column
        self.line_number = line_number
        self.reason = reason

        type_name = getattr(target_type, "__name__", repr(target_type))
        location = []
        if line_number is not None:
            location.append(f"line {line_number}")
        if column is not None:
            location.append(f"column '{column}'")
        where = f" ({', '.join(location)})" if location else ""
        detail = f" {reason}" if reason else ""
        super().__init__(
            f"Cannot convert {value!r} to {type_name}{where}.{detail}"
        )


class RecordConstructionError(CsvCodecError):
    """
    Raised when a record instance cannot be constructed from parsed values.

    Attributes:
        record_type: The dataclass type being instantiated.
        line_number: 1-based line number of the offending data line.
    """

    def __init__(self, record_type: type, line_number: int, reason: str):
        self.record_type = record_type
        self.line_number = line_number
        super().__init__(
            f"Cannot build {record_type.__name__} from line {line_number}: {reason}"
        )
