"""
Tests for the re-delimit action.

**Purpose**: Verify the conversion logic and the CLI entrypoint without
touching real project data (tmp_path only).
"""

import argparse
import sys
from pathlib import Path

import pytest

# Add project root to path so we can import actions module
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actions.redelimit_csv import main, parse_separator, redelimit_text


def test_redelimit_text_semicolon_to_pipe():
    """Test a straight separator swap."""
    converted, rows, columns = redelimit_text("a;b;\n1;2;\n3;4;\n", ";", "|")

    assert converted == "a|b|\n1|2|\n3|4|\n"
    assert rows == 2
    assert columns == 2


def test_redelimit_text_sanitizes_target_separator():
    """Test that values containing the new separator are sanitized."""
    converted, _, _ = redelimit_text("note;\nx|y;\n", ";", "|")

    assert converted == "note|\nx y|\n"


def test_redelimit_text_keeps_short_rows_as_empty_cells():
    """Test that missing cells are written as empty fields."""
    converted, _, _ = redelimit_text("a;b;\n1;\n", ";", ",")

    assert converted == "a,b,\n1,,\n"


@pytest.mark.parametrize("value,expected", [("tab", "\t"), ("|", "|"), ("Comma", ",")])
def test_parse_separator(value, expected):
    """Test literal characters and word aliases."""
    assert parse_separator(value) == expected


@pytest.mark.parametrize("value", ["colon", " ", "\n"])
def test_parse_separator_rejects_unusable_values(value):
    """Test that unknown words, a space and line breaks are rejected."""
    with pytest.raises(argparse.ArgumentTypeError):
        parse_separator(value)


def test_main_writes_target(tmp_path, capsys):
    """Test the end-to-end CLI run."""
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    source.write_text("a;b;\n1;2;\n", encoding="utf-8")

    exit_code = main([str(source), str(target), "--to", "tab"])

    assert exit_code == 0
    assert target.read_text(encoding="utf-8") == "a\tb\t\n1\t2\t\n"
    assert "Wrote 1 rows x 2 columns" in capsys.readouterr().out


def test_main_dry_run_writes_nothing(tmp_path):
    """Test that --dry-run leaves the target untouched."""
    source = tmp_path / "in.csv"
    target = tmp_path / "out.csv"
    source.write_text("a;\n1;\n", encoding="utf-8")

    assert main([str(source), str(target), "--to", "|", "--dry-run"]) == 0
    assert not target.exists()


def test_main_missing_source_fails(tmp_path, capsys):
    """Test a non-zero exit code and a readable message for a missing source."""
    exit_code = main([str(tmp_path / "nope.csv"), str(tmp_path / "out.csv"), "--to", "|"])

    assert exit_code == 1
    assert "Failed" in capsys.readouterr().out
