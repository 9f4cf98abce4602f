"""
CsvCodec: the public entry point tying the mapper and the codec paths together.

**Conceptual**: A CsvCodec is an immutable value holding one separator. All of
its operations thread that separator explicitly into the write/read functions;
there is no shared mutable separator anywhere in the library, so one codec can
be used from several call sites (or threads) without coordination.

**Usage**:
    >>> @dataclass
    ... class Pair:
    ...     a: str = column(name="Alpha", order=2, default="")
    ...     b: str = column(name="Beta", order=1, default="")
    >>> codec = CsvCodec(";")
    >>> text = codec.serialize([Pair(a="x", b="y")])
    >>> text
    'Beta;Alpha;\\ny;x;\\n'
    >>> list(codec.deserialize(text, Pair))
    [Pair(a='x', b='y')]
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import pandas as pd

from recordcsv.codec.reader import RecordReader, read_records
from recordcsv.codec.table import deserialize_table, iter_table_rows, serialize_table
from recordcsv.codec.writer import serialize_records
from recordcsv.config.settings import (
    DEFAULT_SEPARATOR,
    CodecSettings,
    get_settings,
    validate_separator,
)
from recordcsv.mapping.fields import FieldMapping, resolve_field_mapping


@dataclass(frozen=True)
class CsvCodec:
    """
    Bidirectional codec bound to one separator.

    Attributes:
        separator: Single-character field separator (default ";").
    """
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self):
        validate_separator(self.separator)

    @classmethod
    def from_settings(cls, settings: CodecSettings | None = None) -> "CsvCodec":
        """Build a codec from settings (the environment-loaded singleton by default)."""
        settings = settings or get_settings()
        return cls(separator=settings.separator)

    def mapping_for(self, record_type: type) -> FieldMapping:
        """Resolve (cached) the column mapping of a record type."""
        return resolve_field_mapping(record_type)

    def serialize(self, records: Iterable[Any], record_type: type | None = None) -> str:
        """
        Serialize typed records.

        Args:
            records: Iterable of dataclass instances of one type.
            record_type: The dataclass type. Optional when `records` is
                         non-empty (taken from the first record); required to
                         write the header of an empty collection.

        Raises:
            ValueError: If records is empty and record_type is not given.
            RecordTypeError: If the type is not a dataclass type.
            DuplicateColumnError: If two fields share an external name.
        """
        records = list(records)
        if record_type is None:
            if not records:
                raise ValueError(
                    "Cannot infer the record type of an empty collection; pass record_type."
                )
            record_type = type(records[0])
        return serialize_records(records, self.mapping_for(record_type), self.separator)

    def deserialize(self, text: str, record_type: type) -> RecordReader:
        """
        Lazily deserialize typed records, matching header tokens against the
        resolved external names first and the declared field names second.
        """
        return read_records(text, record_type, self.separator, self.mapping_for(record_type))

    def serialize_table(self, frame: pd.DataFrame) -> str:
        """Serialize a DataFrame using its own columns as the header."""
        return serialize_table(frame, self.separator)

    def iter_table_rows(self, text: str) -> Iterator[dict[str, str | None]]:
        """Lazily parse untyped rows (column name -> text)."""
        return iter_table_rows(text, self.separator)

    def deserialize_table(self, text: str) -> pd.DataFrame:
        """Parse a document into a DataFrame of text cells."""
        return deserialize_table(text, self.separator)
