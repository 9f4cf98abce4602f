"""
Untyped table variant: pandas DataFrame <-> delimited text.

**Conceptual**: This is the degenerate case of the codec with no field mapping.
The column contract is simply the DataFrame's own columns, in their existing
order. Nothing is looked up or coerced:
  - On write, the header is the column names; cells are written by position.
  - On read, every cell is kept as text in a column of the same position/name.

**Sanitization on write** follows the column dtype. String/object columns get
the usual treatment (CR/LF stripped, separator -> space). Other dtypes are
written with str() as-is: the text of a number, timestamp or boolean cannot
contain the separator or a line break.

Missing cells (None/NaN/NaT) are written as empty text.
"""

from typing import Any, Iterator

import pandas as pd

from recordcsv.utils.errors import DuplicateColumnError
from recordcsv.utils.text import (
    is_blank_line,
    join_line,
    sanitize_value,
    split_line,
    split_lines,
)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    # pd.isna on list-like cells returns an array; only scalars can be "missing"
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _is_text_dtype(dtype: Any) -> bool:
    if isinstance(dtype, pd.CategoricalDtype):
        return _is_text_dtype(dtype.categories.dtype)
    return pd.api.types.is_object_dtype(dtype) or pd.api.types.is_string_dtype(dtype)


def serialize_table(frame: pd.DataFrame, separator: str) -> str:
    """
    Serialize a DataFrame into a delimited document.

    Args:
        frame: Table to write. The index is not written.
        separator: Single-character field separator.

    Returns:
        Header line (column names) followed by one line per row. A frame with
        no rows yields only the header line.

    Example:
        >>> frame = pd.DataFrame({"name": ["a;b"], "qty": [3]})
        >>> serialize_table(frame, ";")
        'name;qty;\\na b;3;\\n'
    """
    header = [sanitize_value(str(name), separator) for name in frame.columns]
    text_columns = [_is_text_dtype(dtype) for dtype in frame.dtypes]

    parts = [join_line(header, separator)]
    for row in frame.itertuples(index=False, name=None):
        values = []
        for value, is_text in zip(row, text_columns):
            if _is_missing(value):
                values.append("")
            elif is_text:
                values.append(sanitize_value(str(value), separator))
            else:
                values.append(str(value))
        parts.append(join_line(values, separator))
    return "".join(parts)


def _read_header(lines: list[str], separator: str) -> list[str]:
    header = split_line(lines[0], separator) if lines else []
    seen: dict[str, list[str]] = {}
    for position, name in enumerate(header):
        seen.setdefault(name, []).append(f"column {position}")
    for name, positions in seen.items():
        if len(positions) > 1:
            raise DuplicateColumnError(name, positions)
    return header


def iter_table_rows(text: str, separator: str) -> Iterator[dict[str, str | None]]:
    """
    Lazily parse a delimited document into untyped rows.

    Each row is a dict of column name -> text value, in header order. Rows
    shorter than the header get None for the missing cells; values beyond
    the last header column are ignored. Empty lines are skipped.

    Raises:
        DuplicateColumnError: If the header repeats a column name (raised
                              when iteration starts).
    """
    lines = split_lines(text) if text else []
    header = _read_header(lines, separator)
    if not header:
        return

    for line in lines[1:]:
        if is_blank_line(line):
            continue
        values = split_line(line, separator)
        yield {
            name: (values[position] if position < len(values) else None)
            for position, name in enumerate(header)
        }


def deserialize_table(text: str, separator: str) -> pd.DataFrame:
    """
    Parse a delimited document into a DataFrame of text cells.

    All columns have object dtype and hold strings (or None for cells
    missing from short rows). No type coercion is attempted.

    Returns:
        DataFrame with the header's columns. An empty document (or empty
        header) yields an empty DataFrame with no columns.
    """
    lines = split_lines(text) if text else []
    header = _read_header(lines, separator)
    if not header:
        return pd.DataFrame()

    rows = list(iter_table_rows(text, separator))
    if not rows:
        return pd.DataFrame({name: pd.Series(dtype=object) for name in header})
    return pd.DataFrame(rows, columns=header, dtype=object)
