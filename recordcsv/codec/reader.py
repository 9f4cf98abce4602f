"""
Read path: delimited text -> typed records, produced lazily.

**Conceptual**: The first line of the document is the header. Each header
token is matched once against the record type's fields, producing a column
plan (position -> field). Every following non-empty line is then turned into
one record by coercing each positional value to its planned field's type.

**Header matching**: For header token T at position k, the destination field
is the mapping entry whose external name is T, or failing that the entry whose
declared name is T. When no mapping is supplied only declared names are
considered. A position that matches nothing is dropped for every line.

**Laziness**: RecordReader is an explicit iterator. It holds the remaining
lines and the column plan, and builds one record per __next__ call. It is
single-pass: once exhausted it stays exhausted. The whole document text is in
memory; only the records are materialized on demand.

**Failure**: A value that cannot be coerced raises CoercionError out of
__next__ and exhausts the reader: there is no partial-record recovery, and
later lines of the document are never produced.
"""

import logging
from typing import Any, Iterator

from recordcsv.codec.coercion import coerce_text
from recordcsv.mapping.accessors import get_record_accessor
from recordcsv.mapping.fields import (
    FieldMapping,
    MappedField,
    describe_record_type,
)
from recordcsv.utils.errors import CsvCodecError, RecordConstructionError
from recordcsv.utils.text import is_blank_line, split_line, split_lines

logger = logging.getLogger(__name__)


def _declared_name_mapping(record_type: type) -> FieldMapping:
    """
    Mapping used when the caller supplies none: external names are ignored,
    so every entry is keyed by its declared name.
    """
    entries = tuple(
        MappedField(descriptor, descriptor.name, descriptor.index)
        for descriptor in describe_record_type(record_type)
    )
    return FieldMapping(record_type=record_type, entries=entries)


def plan_columns(header: list[str], mapping: FieldMapping) -> list[MappedField | None]:
    """
    Resolve each header position to a mapping entry (or None if unmatched).

    External-name matches take precedence over declared-name matches.
    """
    plan = []
    for token in header:
        entry = mapping.by_external_name(token) or mapping.by_declared_name(token)
        if entry is None:
            logger.debug("Column %r matches no field of %s; dropping it",
                         token, mapping.record_type.__name__)
        plan.append(entry)
    return plan


class RecordReader:
    """
    Single-pass iterator over the records of a delimited document.

    Usage:
        >>> reader = RecordReader(text, Trade, ";", resolve_field_mapping(Trade))
        >>> for trade in reader:
        ...     print(trade)
    """

    def __init__(
        self,
        text: str,
        record_type: type,
        separator: str,
        mapping: FieldMapping | None = None,
    ):
        self.record_type = record_type
        self.separator = separator
        self._accessor = get_record_accessor(record_type)
        if mapping is None:
            mapping = _declared_name_mapping(record_type)
        self.mapping = mapping

        lines = split_lines(text) if text else []
        self.header = split_line(lines[0], separator) if lines else []
        self._plan = plan_columns(self.header, mapping)
        # Data lines paired with their 1-based document line number
        self._lines: Iterator[tuple[int, str]] = iter(
            list(enumerate(lines, start=1))[1:] if self.header else []
        )

    def __iter__(self) -> "RecordReader":
        return self

    def __next__(self) -> Any:
        for line_number, line in self._lines:
            if is_blank_line(line):
                continue
            try:
                return self._build(split_line(line, self.separator), line_number)
            except CsvCodecError:
                # A failed line ends the read; later lines are never produced
                self._lines = iter(())
                raise
        raise StopIteration

    def _build(self, values: list[str], line_number: int) -> Any:
        parsed = {}
        for position, text in enumerate(values):
            if position >= len(self._plan):
                break
            entry = self._plan[position]
            if entry is None:
                continue
            descriptor = entry.descriptor
            parsed[descriptor.name] = coerce_text(
                text,
                descriptor.type,
                optional=descriptor.optional,
                column=self.header[position],
                line_number=line_number,
            )

        missing = self._accessor.missing_required(parsed)
        if missing:
            raise RecordConstructionError(
                self.record_type,
                line_number,
                f"no value for required field(s) {missing}. "
                f"Header columns: {self.header}.",
            )
        try:
            return self._accessor.build(parsed)
        except (TypeError, ValueError) as e:
            raise RecordConstructionError(self.record_type, line_number, str(e)) from e


def read_records(
    text: str,
    record_type: type,
    separator: str,
    mapping: FieldMapping | None = None,
) -> RecordReader:
    """
    Lazily deserialize a delimited document into records.

    Args:
        text: Complete document text.
        record_type: Dataclass type to instantiate per line.
        separator: Single-character field separator.
        mapping: Resolved mapping to match header tokens against external
                 names. None matches declared field names only.

    Returns:
        A single-pass RecordReader. An empty document or empty header
        yields no records.

    Raises:
        RecordTypeError: If record_type is not a dataclass type (immediately).
        CoercionError: While iterating, if a value cannot be converted.
        RecordConstructionError: While iterating, if a record cannot be built.
    """
    return RecordReader(text, record_type, separator, mapping)
