"""
Per-type accessor tables for reading and building records.

**Conceptual**: Instead of looking fields up reflectively for every value, the
codec builds one RecordAccessor per dataclass type (cached) that knows:
  - how to read each declared field from an instance (getter per field name),
  - which fields are constructor arguments and which of them are required,
  - how to build a fresh instance from a dict of parsed values.

Records are constructed with keyword arguments rather than "default-construct
then assign", which means frozen dataclasses work and declared defaults apply
to every field that has no matching column.
"""

import dataclasses
import operator
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Mapping

from recordcsv.mapping.fields import describe_record_type


@dataclass(frozen=True)
class RecordAccessor:
    """
    Accessor table for one dataclass type.

    Attributes:
        record_type: The dataclass type.
        getters: Declared field name -> callable returning the field value.
        init_fields: Names accepted by the constructor.
        required_fields: Constructor fields with neither default nor default_factory.
    """
    record_type: type
    getters: Mapping[str, Callable[[Any], Any]]
    init_fields: frozenset[str]
    required_fields: frozenset[str]

    def get(self, record: Any, field_name: str) -> Any:
        """Read one field value from a record instance."""
        return self.getters[field_name](record)

    def missing_required(self, values: Mapping[str, Any]) -> list[str]:
        """Required constructor fields absent from `values`, sorted by name."""
        return sorted(self.required_fields - set(values))

    def build(self, values: Mapping[str, Any]) -> Any:
        """
        Build a new instance from parsed values.

        Constructor fields are passed as keyword arguments. Fields declared
        with init=False are assigned after construction (object.__setattr__
        so frozen dataclasses are supported).

        Raises:
            TypeError: If a required constructor field is missing, or whatever
                       the dataclass __init__/__post_init__ raises.
        """
        kwargs = {name: value for name, value in values.items() if name in self.init_fields}
        instance = self.record_type(**kwargs)
        for name, value in values.items():
            if name not in self.init_fields:
                object.__setattr__(instance, name, value)
        return instance


@lru_cache(maxsize=None)
def get_record_accessor(record_type: type) -> RecordAccessor:
    """
    Return the cached accessor table of a dataclass type.

    Raises:
        RecordTypeError: If record_type is not a dataclass type.
    """
    # describe_record_type validates the type and fixes the field set
    descriptors = describe_record_type(record_type)
    fields_by_name = {f.name: f for f in dataclasses.fields(record_type)}

    init_fields = set()
    required = set()
    for descriptor in descriptors:
        field = fields_by_name[descriptor.name]
        if not field.init:
            continue
        init_fields.add(field.name)
        if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
            required.add(field.name)

    return RecordAccessor(
        record_type=record_type,
        getters={d.name: operator.attrgetter(d.name) for d in descriptors},
        init_fields=frozenset(init_fields),
        required_fields=frozenset(required),
    )
