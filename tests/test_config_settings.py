"""
Tests for recordcsv/config/settings.py

These tests verify environment loading, aliases, validation and the lazily
cached settings singleton.
"""

import pytest

from recordcsv.config.settings import (
    CodecSettings,
    get_settings,
    reset_settings,
)


def test_defaults():
    """Test that defaults are ';' and utf-8 when nothing is configured."""
    settings = CodecSettings.from_env()

    assert settings.separator == ";"
    assert settings.encoding == "utf-8"


def test_from_env_reads_variables(monkeypatch):
    """Test that RECORDCSV_* variables are honoured."""
    monkeypatch.setenv("RECORDCSV_SEPARATOR", ",")
    monkeypatch.setenv("RECORDCSV_ENCODING", "latin-1")

    settings = CodecSettings.from_env()

    assert settings.separator == ","
    assert settings.encoding == "latin-1"


@pytest.mark.parametrize("alias,expected", [
    ("tab", "\t"), ("Comma", ","), ("semicolon", ";"), ("PIPE", "|"),
])
def test_separator_aliases(monkeypatch, alias, expected):
    """Test the word aliases for separators that are awkward in .env files."""
    monkeypatch.setenv("RECORDCSV_SEPARATOR", alias)

    assert CodecSettings.from_env().separator == expected


def test_invalid_separator_in_env_raises(monkeypatch):
    """Test fail-fast on a multi-character separator."""
    monkeypatch.setenv("RECORDCSV_SEPARATOR", "::")

    with pytest.raises(ValueError) as exc_info:
        CodecSettings.from_env()

    assert "single character" in str(exc_info.value)


def test_unknown_encoding_raises():
    """Test that encodings are validated up front."""
    with pytest.raises(ValueError) as exc_info:
        CodecSettings(encoding="no-such-codec")

    assert "no-such-codec" in str(exc_info.value)


def test_line_break_separator_raises():
    """Test that a line feed can never be the field separator."""
    with pytest.raises(ValueError):
        CodecSettings(separator="\n")


def test_settings_are_frozen():
    """Test that settings cannot be mutated after construction."""
    settings = CodecSettings()

    with pytest.raises(AttributeError):
        settings.separator = ","


def test_get_settings_is_cached_until_reset(monkeypatch):
    """Test singleton caching and reset_settings()."""
    first = get_settings()
    monkeypatch.setenv("RECORDCSV_SEPARATOR", "|")

    # Cached: environment change is not seen yet
    assert get_settings() is first
    assert get_settings().separator == ";"

    reset_settings()
    assert get_settings().separator == "|"


def test_space_separator_raises():
    """Test that a space is rejected, since sanitizing it would change nothing."""
    with pytest.raises(ValueError) as exc_info:
        CodecSettings(separator=" ")

    assert "space" in str(exc_info.value)


def test_codec_rejects_space_separator():
    """Test that CsvCodec applies the same separator validation."""
    from recordcsv.codec.serializer import CsvCodec

    with pytest.raises(ValueError):
        CsvCodec(" ")
