"""
Line-level text helpers shared by the write and read paths.

The document format is deliberately simple: every field is followed by the
separator, and every line (header included) ends with "<separator>\\n". There
is no quoting, so values are sanitized on the way out instead of escaped.
"""

LINE_TERMINATOR = "\n"


def sanitize_value(text: str, separator: str) -> str:
    """
    Make a textual value safe to place between two separators.

    Strips carriage returns and line feeds (values cannot span lines) and
    replaces every occurrence of the separator with a single space. This is
    lossy: a value containing the separator does not round-trip.

    Args:
        text: Textual representation of a field value.
        separator: The single-character field separator.

    Returns:
        Sanitized text.

    Example:
        >>> sanitize_value("a;b\\r\\nc", ";")
        'a bc'
    """
    text = text.replace("\r", "").replace("\n", "")
    return text.replace(separator, " ")


def join_line(values: list[str], separator: str) -> str:
    """Join already-sanitized values into one terminated line."""
    return "".join(value + separator for value in values) + LINE_TERMINATOR


def split_line(line: str, separator: str) -> list[str]:
    """
    Split one line into its values.

    The token after the last separator is discarded: in a well-formed line it
    is empty (or a stray carriage return from CRLF input).

    Example:
        >>> split_line("Beta;Alpha;", ";")
        ['Beta', 'Alpha']
    """
    return line.split(separator)[:-1]


def split_lines(text: str) -> list[str]:
    """Split a document into lines on line feed."""
    return text.split(LINE_TERMINATOR)


def is_blank_line(line: str) -> bool:
    """True for empty lines, including a lone carriage return left by CRLF input."""
    return line == "" or line == "\r"
