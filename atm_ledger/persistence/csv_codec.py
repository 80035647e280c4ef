"""Minimal CSV record codec used by the ledger files.

A field is quoted only when it contains a comma, a double quote or a
newline; embedded quotes are doubled. Everything else is written bare.
"""

from typing import Any, Iterable

DELIMITER = ","
QUOTE = '"'
_SPECIAL = (DELIMITER, QUOTE, "\n")


def encode_field(value: Any) -> str:
    """Encode a single field, quoting it if needed.

    Parameters
    ----------
    value : Any
        Field value. ``None`` encodes as an empty string; other non-string
        values are converted with ``str()``.

    Returns
    -------
    str
        Encoded field text.
    """
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    if any(ch in text for ch in _SPECIAL):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def encode_record(fields: Iterable[Any]) -> str:
    """Encode fields as one comma-separated record."""
    return DELIMITER.join(encode_field(f) for f in fields)


def decode_record(line: str) -> list[str]:
    """Split one record into its fields.

    Inside a quoted section a doubled quote is a literal quote and commas
    are not separators. Text outside quotes is taken as-is.

    Parameters
    ----------
    line : str
        Record text without its trailing line terminator. May contain
        newlines inside quoted fields.

    Returns
    -------
    list[str]
        Decoded fields; an empty line yields a single empty field.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < n and line[i + 1] == QUOTE:
                    current.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        elif ch == QUOTE:
            in_quotes = True
        elif ch == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current))
    return fields


def has_open_quote(text: str) -> bool:
    """Return True if ``text`` ends inside a quoted field.

    Used when reading files line by line to join a record whose quoted
    field contains a newline.
    """
    return text.count(QUOTE) % 2 == 1
