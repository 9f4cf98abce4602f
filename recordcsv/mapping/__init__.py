"""
Field discovery and column mapping for typed record types.

Resolves each dataclass field to an external column name and an ordinal
position, honouring explicit bindings and falling back to declaration order.
"""
