"""
Scalar coercion between field values and their textual representation.

**Conceptual**: The document format carries only text. On write, each value is
turned into text with `format_value`; on read, each text token is converted
back into the field's declared scalar type with `coerce_text`. The two are
designed so that format -> coerce is the identity for every supported type.

**Supported declared types**:
  - str (verbatim)
  - int, float, decimal.Decimal
  - bool (case-insensitive true/false, 1/0, yes/no)
  - datetime.datetime, datetime.date, datetime.time (ISO 8601)
  - enum.Enum subclasses (by value, then by member name)
  - numpy scalar types (np.int64, np.float64, np.bool_, ...)
  - any other type whose constructor accepts a single string

**Empty text**: "" coerces to "" for str fields and to None for optional
fields (annotated Optional[X] / X | None). For any other type it is an error:
an empty token is not a number, a date or a boolean.
"""

import datetime as dt
import decimal
import enum
from typing import Any

import numpy as np

from recordcsv.utils.errors import CoercionError

_TRUE_TOKENS = frozenset({"true", "1", "yes"})
_FALSE_TOKENS = frozenset({"false", "0", "no"})


def format_value(value: Any) -> str:
    """
    Convert a field value to its textual representation.

    None becomes empty text. Dates and times use isoformat(); enum members
    are written as their value; everything else uses str().

    Example:
        >>> format_value(dt.date(2024, 1, 15))
        '2024-01-15'
        >>> format_value(None)
        ''
    """
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    return str(value)


def _parse_bool(text: str) -> bool:
    token = text.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE_TOKENS | _FALSE_TOKENS)}")


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        pass
    # Accept integral decimal text such as "3.0", exactly
    try:
        as_decimal = decimal.Decimal(text.strip())
    except decimal.InvalidOperation:
        raise ValueError(f"invalid literal for int: {text!r}") from None
    if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
        raise ValueError("not an integral value")
    return int(as_decimal)


def _parse_enum(text: str, target_type: type[enum.Enum]) -> enum.Enum:
    for member in target_type:
        if str(member.value) == text:
            return member
    try:
        return target_type[text]
    except KeyError:
        raise ValueError(
            f"expected one of {[str(m.value) for m in target_type]}"
        ) from None


def _convert(text: str, target_type: Any) -> Any:
    """Dispatch on the declared type. Raises ValueError/TypeError/ArithmeticError on failure."""
    if target_type is bool:
        return _parse_bool(text)
    if target_type is int:
        return _parse_int(text)
    if target_type is float:
        return float(text)
    if target_type is decimal.Decimal:
        return decimal.Decimal(text)
    # datetime is a subclass of date, so check it first
    if target_type is dt.datetime:
        return dt.datetime.fromisoformat(text)
    if target_type is dt.date:
        return dt.date.fromisoformat(text)
    if target_type is dt.time:
        return dt.time.fromisoformat(text)
    if isinstance(target_type, type):
        if issubclass(target_type, enum.Enum):
            return _parse_enum(text, target_type)
        if issubclass(target_type, np.bool_):
            return target_type(_parse_bool(text))
        if issubclass(target_type, np.generic):
            return target_type(text)
    if callable(target_type):
        return target_type(text)
    raise TypeError(f"unsupported field type {target_type!r}")


def coerce_text(
    text: str,
    target_type: Any,
    optional: bool = False,
    column: str | None = None,
    line_number: int | None = None,
) -> Any:
    """
    Convert a text token into a value of the declared scalar type.

    Args:
        text: Raw token from the document.
        target_type: Declared scalar type of the destination field.
        optional: True if the field is nullable; empty text then maps to None.
        column: Header name of the source column (error context only).
        line_number: 1-based document line number (error context only).

    Returns:
        The converted value.

    Raises:
        CoercionError: If the text cannot be converted.

    Example:
        >>> coerce_text("42", int)
        42
        >>> coerce_text("", int, optional=True) is None
        True
    """
    if target_type is str or target_type is Any:
        return text

    if text == "":
        if optional:
            return None
        raise CoercionError(
            text,
            target_type,
            column=column,
            line_number=line_number,
            reason="Empty value for a non-optional field; declare it Optional to allow blanks.",
        )

    try:
        return _convert(text, target_type)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise CoercionError(
            text,
            target_type,
            column=column,
            line_number=line_number,
            reason=str(e) or None,
        ) from e
