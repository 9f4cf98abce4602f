"""
Field discovery and column mapping for typed record types.

**Conceptual**: A typed record is a dataclass. Each of its fields becomes one
column of the delimited document. This module answers two questions for a
record type:
  - What is the column (external) name of each field?
  - In which position does each column appear?

The answer is a FieldMapping: an ordered sequence of (field, external name,
order) entries used symmetrically by the write path (header + value order) and
the read path (header token -> field lookup).

**Explicit bindings**: A field may carry a ColumnBinding in its dataclass
metadata, usually attached with the `column()` helper:

    @dataclass
    class Trade:
        symbol: str = column(name="Symbol", order=1)
        price: float = column(name="Price", order=0, default=0.0)
        note: str = ""                      # no binding

**Resolution rule** (per field, in declaration order):
  1. Binding with a non-empty name and an order -> (binding name, binding order).
  2. Binding with an empty/whitespace name      -> (declared name, binding order).
  3. Binding with no order                      -> (name as above, declaration index).
  4. No binding, or an unreadable one           -> (declared name, declaration index).
Entries are then stable-sorted by order, so ties keep declaration order.

**Fail-soft**: A malformed binding never raises; it silently degrades to the
defaults of rule 4 (logged at DEBUG). The one configuration error that IS
rejected is two fields resolving to the same external name, because such a
document cannot be read back unambiguously.
"""

import dataclasses
import logging
import sys
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator

from recordcsv.utils.errors import DuplicateColumnError, RecordTypeError

logger = logging.getLogger(__name__)

# Key under which a ColumnBinding is stored in dataclasses.field(metadata=...)
METADATA_KEY = "recordcsv"


@dataclass(frozen=True)
class ColumnBinding:
    """
    Explicit external binding for one field.

    Attributes:
        name: External column name. None/empty/whitespace means "use the
              declared field name".
        order: Explicit position. None means "use the declaration index".
    """
    name: str | None = None
    order: int | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Description of one declared field of a record type.

    Attributes:
        name: Declared field name (attribute name on the dataclass).
        type: Declared scalar type, with Optional[...] unwrapped.
        index: Zero-based declaration index among the dataclass fields.
        binding: Readable explicit binding, or None.
        optional: True when the annotation was Optional[X] / X | None.
    """
    name: str
    type: Any
    index: int
    binding: ColumnBinding | None = None
    optional: bool = False


@dataclass(frozen=True)
class MappedField:
    """One entry of a FieldMapping: a field plus its resolved column name and order."""
    descriptor: FieldDescriptor
    external_name: str
    order: int

    @property
    def name(self) -> str:
        """Declared field name (shortcut for descriptor.name)."""
        return self.descriptor.name


@dataclass(frozen=True)
class FieldMapping:
    """
    Ordered column contract for one record type.

    Entries are sorted by resolved order ascending. External names are unique.
    Instances are immutable and compare equal when built from the same type.
    """
    record_type: type
    entries: tuple[MappedField, ...]

    def __iter__(self) -> Iterator[MappedField]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, position: int) -> MappedField:
        return self.entries[position]

    @property
    def external_names(self) -> list[str]:
        """Header names in column order."""
        return [entry.external_name for entry in self.entries]

    def by_external_name(self, name: str) -> MappedField | None:
        """Return the entry whose resolved external name equals `name`, or None."""
        for entry in self.entries:
            if entry.external_name == name:
                return entry
        return None

    def by_declared_name(self, name: str) -> MappedField | None:
        """Return the entry whose declared field name equals `name`, or None."""
        for entry in self.entries:
            if entry.descriptor.name == name:
                return entry
        return None


def column(
    name: str | None = None,
    order: int | None = None,
    **field_kwargs: Any,
) -> Any:
    """
    Declare a dataclass field with an explicit column binding.

    Thin wrapper around dataclasses.field(): `default`, `default_factory`,
    `init`, `repr` etc. are passed through unchanged, and the binding is stored
    in the field metadata under METADATA_KEY (merged with any metadata given).

    Args:
        name: External column name (None/empty -> declared name).
        order: Explicit column position (None -> declaration index).
        **field_kwargs: Forwarded to dataclasses.field().

    Returns:
        A dataclasses.Field to assign in the class body.

    Example:
        >>> @dataclass
        ... class Pair:
        ...     a: str = column(name="Alpha", order=2, default="")
        ...     b: str = column(name="Beta", order=1, default="")
        >>> resolve_field_mapping(Pair).external_names
        ['Beta', 'Alpha']
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[METADATA_KEY] = ColumnBinding(name=name, order=order)
    return dataclasses.field(metadata=metadata, **field_kwargs)


def _read_binding(field: dataclasses.Field) -> ColumnBinding | None:
    """
    Read the explicit binding of a field, or None if absent or unreadable.

    Accepts a ColumnBinding or a plain mapping with "name"/"order" keys (for
    metadata written by hand). Anything else, or an order that is not an
    integer, counts as unreadable.
    """
    raw = field.metadata.get(METADATA_KEY)
    if raw is None:
        return None

    if isinstance(raw, ColumnBinding):
        binding = raw
    elif isinstance(raw, Mapping):
        binding = ColumnBinding(name=raw.get("name"), order=raw.get("order"))
    else:
        logger.debug("Ignoring unreadable binding on field %r: %r", field.name, raw)
        return None

    # bool is an int subclass but never a meaningful position
    order_ok = binding.order is None or (
        isinstance(binding.order, int) and not isinstance(binding.order, bool)
    )
    name_ok = binding.name is None or isinstance(binding.name, str)
    if not (order_ok and name_ok):
        logger.debug("Ignoring malformed binding on field %r: %r", field.name, binding)
        return None

    return binding


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Return (scalar type, is_optional) for an annotation."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        is_optional = len(args) < len(typing.get_args(annotation))
        # Unions of several scalar types coerce to the first member
        return (args[0] if args else str), is_optional
    return annotation, False


def _require_dataclass_type(record_type: Any) -> None:
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise RecordTypeError(
            f"Expected a dataclass type, got {record_type!r}. "
            f"Decorate the record class with @dataclass and pass the class itself, "
            f"not an instance."
        )


def _owner_of(record_type: type, field_name: str) -> type:
    """Return the class in the MRO whose own annotations declare field_name."""
    for klass in record_type.__mro__:
        if field_name in klass.__dict__.get("__annotations__", {}):
            return klass
    return record_type


def _resolve_annotation(record_type: type, field: dataclasses.Field) -> Any:
    """
    Resolve the annotation of a single field.

    Only reached when the class-wide typing.get_type_hints() failed, so that
    one unresolvable annotation does not discard the types of the others.

    Raises:
        RecordTypeError: If the field's string annotation cannot be resolved.
    """
    annotation = field.type
    if not isinstance(annotation, str):
        return annotation

    owner = _owner_of(record_type, field.name)
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        # Same evaluation typing.get_type_hints() performs, for one field
        return eval(annotation, globalns, dict(vars(owner)))
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        raise RecordTypeError(
            f"Cannot resolve the type of field {field.name!r} of "
            f"{record_type.__name__} ({annotation!r}): {e}. "
            f"Define the referenced type at module level, or remove "
            f"'from __future__ import annotations' from the defining module."
        ) from e


def describe_record_type(record_type: type) -> tuple[FieldDescriptor, ...]:
    """
    Build the ordered field descriptors of a dataclass type.

    Declared types come from typing.get_type_hints() so that string annotations
    (`from __future__ import annotations`) resolve to real types. If the hints
    of the whole class cannot be resolved, each field is resolved on its own;
    a field whose annotation still cannot be resolved is an error.

    Raises:
        RecordTypeError: If record_type is not a dataclass type, or a field's
                         annotation names a type that cannot be found.
    """
    _require_dataclass_type(record_type)

    try:
        hints = typing.get_type_hints(record_type)
    except (NameError, SyntaxError, TypeError) as e:
        logger.debug("Could not resolve type hints of %s: %s", record_type.__name__, e)
        hints = None

    descriptors = []
    for index, field in enumerate(dataclasses.fields(record_type)):
        if hints is not None and field.name in hints:
            annotation = hints[field.name]
        else:
            annotation = _resolve_annotation(record_type, field)
        scalar_type, is_optional = _unwrap_optional(annotation)
        descriptors.append(
            FieldDescriptor(
                name=field.name,
                type=scalar_type,
                index=index,
                binding=_read_binding(field),
                optional=is_optional,
            )
        )
    return tuple(descriptors)


def unbound_fields(record_type: type) -> list[str]:
    """
    List declared names of fields that have no readable explicit binding.

    Useful to spot fields whose column name and position silently fell back
    to the defaults.
    """
    return [d.name for d in describe_record_type(record_type) if d.binding is None]


def _resolve_entry(descriptor: FieldDescriptor) -> MappedField:
    binding = descriptor.binding
    if binding is None:
        return MappedField(descriptor, descriptor.name, descriptor.index)

    if binding.name is None or not binding.name.strip():
        external_name = descriptor.name
    else:
        external_name = binding.name
    order = descriptor.index if binding.order is None else binding.order
    return MappedField(descriptor, external_name, order)


@lru_cache(maxsize=None)
def resolve_field_mapping(record_type: type) -> FieldMapping:
    """
    Resolve the ordered column mapping of a dataclass type.

    Pure function of the type; results are cached, so repeated calls return
    the same (equal) FieldMapping.

    Args:
        record_type: A dataclass type.

    Returns:
        FieldMapping sorted by resolved order (stable on declaration index).

    Raises:
        RecordTypeError: If record_type is not a dataclass type.
        DuplicateColumnError: If two fields resolve to the same external name.

    Example:
        >>> @dataclass
        ... class Plain:
        ...     x: int = 0
        ...     y: str = ""
        >>> [(e.external_name, e.order) for e in resolve_field_mapping(Plain)]
        [('x', 0), ('y', 1)]
    """
    descriptors = describe_record_type(record_type)
    resolved = [_resolve_entry(d) for d in descriptors]

    claimed: dict[str, list[str]] = {}
    for entry in resolved:
        claimed.setdefault(entry.external_name, []).append(entry.descriptor.name)
    for external_name, owners in claimed.items():
        if len(owners) > 1:
            raise DuplicateColumnError(external_name, owners, record_type.__name__)

    # sorted() is stable: equal orders keep declaration order
    entries = sorted(resolved, key=lambda e: e.order)

    unbound = [d.name for d in descriptors if d.binding is None]
    if unbound:
        logger.debug("%s: fields without column binding: %s", record_type.__name__, unbound)
    logger.debug(
        "%s: resolved column order %s",
        record_type.__name__,
        [entry.external_name for entry in entries],
    )

    return FieldMapping(record_type=record_type, entries=tuple(entries))
