#!/usr/bin/env python3
"""
Re-write a delimited file with a different field separator.

**Purpose**: Converts a document written with one separator (e.g. ";") into
the same document with another (e.g. "|"), going through the untyped table
variant of the codec. Header and cells are kept as text; values containing the
target separator are sanitized (separator -> space).

**Usage**:
    From project root:
    ```bash
    python actions/redelimit_csv.py data/in.csv data/out.csv --from ";" --to "|"

    # Preview only (no file written)
    python actions/redelimit_csv.py data/in.csv data/out.csv --to tab --dry-run
    ```
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path so we can import recordcsv modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from recordcsv.codec.serializer import CsvCodec
from recordcsv.data.io import read_csv_text, write_csv_text
from recordcsv.utils.errors import CsvCodecError

SEPARATOR_ALIASES = {"tab": "\t", "comma": ",", "semicolon": ";", "pipe": "|"}


def parse_separator(value: str) -> str:
    """Accept a literal single character or one of the SEPARATOR_ALIASES names."""
    separator = SEPARATOR_ALIASES.get(value.lower(), value)
    if len(separator) != 1 or separator in ("\r", "\n", " "):
        raise argparse.ArgumentTypeError(
            f"separator must be one character or one of {sorted(SEPARATOR_ALIASES)}, got: {value!r}"
        )
    return separator


def parse_args(argv=None):
    """
    Parse command line arguments.

    Returns:
        Namespace with attributes: source (Path), target (Path),
        source_separator (str), target_separator (str), dry_run (bool).
    """
    parser = argparse.ArgumentParser(
        description="Re-write a delimited file with a different separator",
        epilog="""
Examples:
  # Semicolon to pipe
  python actions/redelimit_csv.py in.csv out.csv --from ";" --to "|"

  # Semicolon to tab, preview only
  python actions/redelimit_csv.py in.csv out.csv --to tab --dry-run
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("source", type=Path, help="Delimited file to read")
    parser.add_argument("target", type=Path, help="Path to write the converted file to")
    parser.add_argument(
        "--from",
        dest="source_separator",
        type=parse_separator,
        default=";",
        help="Separator of the source file (default: ';')",
    )
    parser.add_argument(
        "--to",
        dest="target_separator",
        type=parse_separator,
        required=True,
        help="Separator for the target file (character or tab/comma/semicolon/pipe)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be written without writing the target file",
    )

    return parser.parse_args(argv)


def redelimit_text(text: str, source_separator: str, target_separator: str) -> tuple[str, int, int]:
    """
    Convert a document from one separator to another.

    Args:
        text: Source document.
        source_separator: Separator the source was written with.
        target_separator: Separator to write with.

    Returns:
        Tuple (converted text, row count, column count).
    """
    frame = CsvCodec(source_separator).deserialize_table(text)
    converted = CsvCodec(target_separator).serialize_table(frame)
    return converted, len(frame), len(frame.columns)


def main(argv=None) -> int:
    """
    Main entrypoint.

    Returns:
        Process exit code (0 on success, 1 on failure).
    """
    args = parse_args(argv)

    print("=" * 80)
    print(f"Re-delimiting {args.source} -> {args.target}")
    print(f"  separator: {args.source_separator!r} -> {args.target_separator!r}")
    print("=" * 80)

    try:
        text = read_csv_text(args.source)
        converted, rows, columns = redelimit_text(
            text, args.source_separator, args.target_separator
        )
    except (OSError, ValueError, CsvCodecError) as e:
        print(f"  ✗ Failed: {e}")
        return 1

    if args.dry_run:
        print(f"  [dry run] would write {rows} rows x {columns} columns")
        return 0

    try:
        write_csv_text(converted, args.target)
    except OSError as e:
        print(f"  ✗ Failed: {e}")
        return 1

    print(f"  ✓ Wrote {rows} rows x {columns} columns")
    return 0


if __name__ == "__main__":
    sys.exit(main())
