"""
File readers and writers for delimited documents.

**Conceptual**: The codec itself only transforms in-memory text. This module
is the *only* place that touches the filesystem: it reads a complete document
into memory, hands it to a CsvCodec, and writes complete documents back. This
keeps the codec free of I/O and makes it easy to swap local files for another
store later.

**Rule**: Library code should never open CSV files directly; go through these
functions so encoding and error reporting stay consistent.

Newlines are left untranslated on both read and write (newline=""), so the
"\\n" terminators produced by the codec are written byte-for-byte.
"""

from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from recordcsv.codec.serializer import CsvCodec
from recordcsv.config.settings import get_settings


def read_csv_text(path: Path | str, encoding: str | None = None) -> str:
    """
    Read a complete delimited document as text.

    Args:
        path: File to read.
        encoding: Text encoding (default: settings encoding, "utf-8").

    Returns:
        The document text, line terminators untouched.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    encoding = encoding or get_settings().encoding

    if not path.exists():
        raise FileNotFoundError(
            f"CSV not found: {path}. "
            f"Ensure the file exists and the path is correct."
        )

    with open(path, "r", encoding=encoding, newline="") as f:
        return f.read()


def write_csv_text(text: str, path: Path | str, encoding: str | None = None) -> None:
    """
    Write a complete delimited document, creating parent directories.

    Raises:
        OSError: If the file can't be written (permissions, disk full, etc.).
    """
    path = Path(path)
    encoding = encoding or get_settings().encoding

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(text)
    except OSError as e:
        raise OSError(
            f"{path}: Failed to write CSV. Error: {e}"
        ) from e


def read_records_csv(
    path: Path | str,
    record_type: type,
    codec: CsvCodec | None = None,
) -> list[Any]:
    """
    Read a delimited file into a list of typed records.

    The records are materialized eagerly so that a coercion error surfaces
    here, with the file path in the traceback, rather than later in the
    caller's loop.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        CoercionError / RecordConstructionError: If a line cannot be converted.
    """
    codec = codec or CsvCodec.from_settings()
    return list(codec.deserialize(read_csv_text(path), record_type))


def write_records_csv(
    records: Iterable[Any],
    path: Path | str,
    record_type: type | None = None,
    codec: CsvCodec | None = None,
) -> None:
    """Serialize typed records and write them to a file."""
    codec = codec or CsvCodec.from_settings()
    write_csv_text(codec.serialize(records, record_type), path)


def read_table_csv(path: Path | str, codec: CsvCodec | None = None) -> pd.DataFrame:
    """Read a delimited file into a DataFrame of text cells."""
    codec = codec or CsvCodec.from_settings()
    return codec.deserialize_table(read_csv_text(path))


def write_table_csv(frame: pd.DataFrame, path: Path | str, codec: CsvCodec | None = None) -> None:
    """Serialize a DataFrame and write it to a file."""
    codec = codec or CsvCodec.from_settings()
    write_csv_text(codec.serialize_table(frame), path)
