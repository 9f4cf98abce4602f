"""
Tests for recordcsv/codec/table.py (untyped DataFrame variant).

The table variant uses the DataFrame's own columns as the column contract and
keeps every parsed cell as text.
"""

import numpy as np
import pandas as pd
import pytest

from recordcsv.codec.serializer import CsvCodec
from recordcsv.codec.table import deserialize_table, iter_table_rows, serialize_table
from recordcsv.utils.errors import DuplicateColumnError


def make_inventory_df() -> pd.DataFrame:
    """Small table mixing text, integer, float and boolean columns."""
    return pd.DataFrame({
        'item': ['bolt', 'nut;washer', 'gear\r\nbox'],
        'quantity': [100, 250, 3],
        'unit_price': [0.25, 0.1, 12.5],
        'in_stock': [True, False, True],
    })


def test_serialize_table_header_and_rows():
    """Test header from DataFrame columns and positional cell values."""
    text = serialize_table(make_inventory_df(), ";")

    assert text.splitlines() == [
        "item;quantity;unit_price;in_stock;",
        "bolt;100;0.25;True;",
        "nut washer;250;0.1;False;",
        "gearbox;3;12.5;True;",
    ]
    assert text.endswith(";\n")


def test_serialize_table_writes_missing_cells_as_empty():
    """Test that None/NaN cells become empty fields."""
    frame = pd.DataFrame({
        'name': ['a', None],
        'score': [1.5, np.nan],
    })

    assert serialize_table(frame, ";") == "name;score;\na;1.5;\n;;\n"


def test_serialize_table_without_rows_writes_header_only():
    """Test that an empty table still produces its header line."""
    frame = pd.DataFrame(columns=['a', 'b'])

    assert serialize_table(frame, ";") == "a;b;\n"


@pytest.mark.parametrize("series", [
    pd.Series(['x|y'], dtype='string'),
    pd.Series(pd.Categorical(['x|y'])),
])
def test_serialize_table_sanitizes_string_dtype_columns(series):
    """Test that pandas' string and categorical text dtypes are sanitized like object columns."""
    frame = pd.DataFrame({'text': series, 'other': ['z']})

    assert serialize_table(frame, "|") == "text|other|\nx y|z|\n"


def test_serialize_table_categorical_numbers_are_written_as_is():
    """Test that a categorical of numbers keeps its plain textual form."""
    frame = pd.DataFrame({'bucket': pd.Categorical([1, 2, 1])})

    assert serialize_table(frame, ";") == "bucket;\n1;\n2;\n1;\n"


def test_deserialize_table_keeps_text():
    """Test that cells are kept as strings with no type coercion."""
    frame = deserialize_table("item;quantity;\nbolt;100;\nnut;250;\n", ";")

    assert list(frame.columns) == ['item', 'quantity']
    assert frame['quantity'].tolist() == ['100', '250']
    assert frame['item'].tolist() == ['bolt', 'nut']
    assert frame['quantity'].dtype == object


def test_deserialize_table_short_and_long_rows():
    """Test that missing cells become None and extra values are ignored."""
    frame = deserialize_table("a;b;c;\n1;\n1;2;3;4;\n", ";")

    assert frame.iloc[0].tolist() == ['1', None, None]
    assert frame.iloc[1].tolist() == ['1', '2', '3']


@pytest.mark.parametrize("text", ["", "\n", "\na;b;\n"])
def test_deserialize_table_empty_document(text):
    """Test that an empty document or header yields an empty DataFrame."""
    frame = deserialize_table(text, ";")

    assert frame.empty
    assert len(frame.columns) == 0


def test_deserialize_table_header_only():
    """Test that a header-only document yields columns but no rows."""
    frame = deserialize_table("a;b;\n", ";")

    assert list(frame.columns) == ['a', 'b']
    assert len(frame) == 0


def test_deserialize_table_rejects_duplicate_header_names():
    """Test that repeated column names are reported instead of overwritten."""
    with pytest.raises(DuplicateColumnError) as exc_info:
        deserialize_table("a;b;a;\n1;2;3;\n", ";")

    assert exc_info.value.external_name == 'a'
    assert exc_info.value.fields == ['column 0', 'column 2']


def test_iter_table_rows_is_lazy():
    """Test that rows are produced one at a time as dicts."""
    rows = iter_table_rows("k;v;\na;1;\n\nb;2;\n", ";")

    assert next(rows) == {'k': 'a', 'v': '1'}
    assert next(rows) == {'k': 'b', 'v': '2'}
    with pytest.raises(StopIteration):
        next(rows)


def test_table_round_trip_as_text():
    """Test serialize -> deserialize preserves every cell's text."""
    codec = CsvCodec()
    original = pd.DataFrame({
        'symbol': ['QQQ', 'SPY'],
        'closing_price': [403.0, 470.5],
    })

    restored = codec.deserialize_table(codec.serialize_table(original))

    expected = original.astype(str).astype(object)
    pd.testing.assert_frame_equal(restored, expected)
