"""
Configuration settings for the codec.

**Conceptual**: This module provides a strongly-typed settings object loaded
from environment variables (via .env files). Values are validated when the
object is built, so a bad separator fails at startup rather than in the middle
of writing a document.

**Why centralized config?**
  - Single source of truth for the default separator and file encoding.
  - Easy to test (inject a CodecSettings instead of reading the environment).
  - Settings are immutable: a codec captures its separator once and it can
    never change under an in-flight serialize/deserialize call.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); a missing file is fine
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_SEPARATOR = ";"
DEFAULT_ENCODING = "utf-8"


def validate_separator(separator: str) -> None:
    """
    Check that a separator is usable.

    Raises:
        ValueError: If the separator is not exactly one character, or is a
                    line break character or a space.
    """
    if not isinstance(separator, str) or len(separator) != 1:
        raise ValueError(
            f"Separator must be a single character, got: {separator!r}"
        )
    if separator in ("\r", "\n"):
        raise ValueError(
            f"Separator cannot be a line break character, got: {separator!r}"
        )
    if separator == " ":
        # Sanitization replaces the separator with a space, which would be a no-op
        raise ValueError(
            "Separator cannot be a space: values containing spaces could not be sanitized"
        )


@dataclass(frozen=True)
class CodecSettings:
    """
    Settings shared by codecs and file collaborators.

    Attributes:
        separator: Field separator character (default ";").
        encoding: Text encoding for file reads/writes (default "utf-8").
    """
    separator: str = DEFAULT_SEPARATOR
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self):
        """Validate settings after initialization."""
        validate_separator(self.separator)
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(
                f"RECORDCSV_ENCODING must name a known text encoding, got: {self.encoding}"
            )

    @classmethod
    def from_env(cls) -> "CodecSettings":
        """
        Load codec settings from environment variables.

        **Environment variables**:
          - RECORDCSV_SEPARATOR (optional): Field separator. Defaults to ";".
            The words "tab", "comma", "semicolon" and "pipe" are accepted as
            aliases so the value survives shells and .env quoting.
          - RECORDCSV_ENCODING (optional): File encoding. Defaults to "utf-8".

        Returns:
            CodecSettings loaded from the environment.

        Raises:
            ValueError: If either value is invalid.

        Usage example:
            >>> # In .env file:
            >>> # RECORDCSV_SEPARATOR=pipe
            >>>
            >>> settings = CodecSettings.from_env()
            >>> settings.separator  # "|"
        """
        separator = os.getenv("RECORDCSV_SEPARATOR", DEFAULT_SEPARATOR)
        encoding = os.getenv("RECORDCSV_ENCODING", DEFAULT_ENCODING)

        aliases = {"tab": "\t", "comma": ",", "semicolon": ";", "pipe": "|"}
        separator = aliases.get(separator.strip().lower(), separator)

        try:
            return cls(separator=separator, encoding=encoding)
        except ValueError as e:
            raise ValueError(f"Invalid RECORDCSV_* settings: {e}")


# Lazily-loaded singleton; tests can build CodecSettings(...) directly instead.
_default_settings: Optional[CodecSettings] = None


def get_settings() -> CodecSettings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached.
    Call reset_settings() to force a reload (tests).
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = CodecSettings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("RECORDCSV_SEPARATOR", "|")
          reset_settings()
          assert get_settings().separator == "|"
      ```
    """
    global _default_settings
    _default_settings = None
