"""
Write path: typed records -> delimited text.

**Conceptual**: The FieldMapping is the column contract. The header is the
mapping's external names in order; each record contributes one line with one
value per mapping entry in the same order. Every field (header names
included) is followed by the separator and every line ends with "\\n".

**Sanitization**: Values are not quoted. Carriage returns and line feeds are
stripped and any occurrence of the separator is replaced by a space. This
keeps every document parseable at the cost of being lossy for such values.
"""

from typing import Any, Iterable

from recordcsv.codec.coercion import format_value
from recordcsv.mapping.accessors import get_record_accessor
from recordcsv.mapping.fields import FieldMapping
from recordcsv.utils.text import join_line, sanitize_value


def render_header(mapping: FieldMapping, separator: str) -> str:
    """Render the header line for a mapping."""
    names = [sanitize_value(name, separator) for name in mapping.external_names]
    return join_line(names, separator)


def render_record(record: Any, mapping: FieldMapping, separator: str) -> str:
    """
    Render one record as a terminated line in mapping order.

    None values are written as empty text.
    """
    accessor = get_record_accessor(mapping.record_type)
    values = [
        sanitize_value(format_value(accessor.get(record, entry.name)), separator)
        for entry in mapping
    ]
    return join_line(values, separator)


def serialize_records(records: Iterable[Any], mapping: FieldMapping, separator: str) -> str:
    """
    Serialize records into a delimited document.

    Args:
        records: Any iterable of instances of mapping.record_type.
        mapping: Resolved column mapping (see resolve_field_mapping).
        separator: Single-character field separator.

    Returns:
        Header line followed by one line per record. Zero records yields
        only the header line.

    Example:
        >>> mapping = resolve_field_mapping(Pair)   # a: Alpha/2, b: Beta/1
        >>> serialize_records([Pair(a="x", b="y")], mapping, ";")
        'Beta;Alpha;\\ny;x;\\n'
    """
    parts = [render_header(mapping, separator)]
    parts.extend(render_record(record, mapping, separator) for record in records)
    return "".join(parts)
