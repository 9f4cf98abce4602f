"""
recordcsv - bidirectional codec between typed records / tables and delimited text.

Typed records are dataclasses whose fields may carry an explicit column binding
(external name + order). Untyped tables are pandas DataFrames.
"""

from recordcsv.mapping.fields import (
    ColumnBinding,
    FieldDescriptor,
    FieldMapping,
    MappedField,
    column,
    describe_record_type,
    resolve_field_mapping,
)
from recordcsv.codec.serializer import CsvCodec, DEFAULT_SEPARATOR
from recordcsv.utils.errors import (
    CsvCodecError,
    CoercionError,
    DuplicateColumnError,
    RecordConstructionError,
    RecordTypeError,
)

__all__ = [
    "ColumnBinding",
    "FieldDescriptor",
    "FieldMapping",
    "MappedField",
    "column",
    "describe_record_type",
    "resolve_field_mapping",
    "CsvCodec",
    "DEFAULT_SEPARATOR",
    "CsvCodecError",
    "CoercionError",
    "DuplicateColumnError",
    "RecordConstructionError",
    "RecordTypeError",
]
