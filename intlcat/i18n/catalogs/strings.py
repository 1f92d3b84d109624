import re
from typing import Optional, Union
from intlcat.i18n.exceptions import (
    ParseError,
    TrailingBackslashError,
    UnterminatedOrMissingStringError,
)

_QUOTE = ord('"')
_BACKSLASH = ord("\\")

_ESCAPES = {ord("n"): ord("\n"), ord("t"): ord("\t"), ord("r"): ord("\r")}

_continuation_re = re.compile(r"\\\r?\n\s*")


def _as_bytes(data: Union[bytes, str]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def _decode(data: bytes, source: Optional[str], lineno: Optional[int]) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise ParseError(
            "string is not valid UTF-8: %s" % err, source=source, lineno=lineno
        ) from err


def find_quoted_string(
    data: Union[bytes, str],
    *,
    start: int = 0,
    source: Optional[str] = None,
    lineno: Optional[int] = None,
) -> str:
    """Return the contents of the first double-quoted literal in `data`.

    Escape sequences are kept as they are: `"A \\"b\\""` gives `A \\"b\\"`.
    A quote closes the literal unless the byte right before it is a
    backslash.

    Raise `UnterminatedOrMissingStringError` if there is no opening quote,
    if the opening quote is the last byte or if no quote closes the literal.
    The search starts at byte offset `start`. `source` and `lineno` are
    attached to any error raised.
    """
    data = _as_bytes(data)
    begin = data.find(b'"', start)
    if begin == -1 or begin + 1 >= len(data):
        raise UnterminatedOrMissingStringError(
            "expected a double-quoted string", source=source, lineno=lineno
        )
    begin += 1

    end = begin
    while end < len(data):
        if data[end] == _QUOTE and data[end - 1] != _BACKSLASH:
            return _decode(data[begin:end], source, lineno)
        end += 1

    raise UnterminatedOrMissingStringError(
        "unterminated string", source=source, lineno=lineno
    )


def unescape_quoted_string(
    data: Union[bytes, str],
    *,
    source: Optional[str] = None,
    lineno: Optional[int] = None,
) -> str:
    """Return the first double-quoted literal in `data`, with escapes resolved.

    `\\n`, `\\t` and `\\r` become newline, tab and carriage return; a
    backslash before any other character yields that character.

    Raise `TrailingBackslashError` if the input ends right after a
    backslash, and `UnterminatedOrMissingStringError` if there is no
    complete literal.
    """
    data = _as_bytes(data)
    begin = data.find(b'"')
    if begin == -1:
        raise UnterminatedOrMissingStringError(
            "expected a double-quoted string", source=source, lineno=lineno
        )

    buf = bytearray()
    i = begin + 1
    while i < len(data):
        byte = data[i]
        if byte == _QUOTE:
            return _decode(bytes(buf), source, lineno)
        elif byte == _BACKSLASH:
            i += 1
            if i >= len(data):
                raise TrailingBackslashError(
                    "backslash at end of input", source=source, lineno=lineno
                )
            buf.append(_ESCAPES.get(data[i], data[i]))
        else:
            buf.append(byte)
        i += 1

    raise UnterminatedOrMissingStringError(
        "unterminated string", source=source, lineno=lineno
    )


def canonicalize(text: str) -> str:
    """Return the form of `text` used as a catalog key.

    First, a backslash that ends a line is removed, along with the newline
    and the indentation of the next line. Then, every remaining newline is
    written as the two characters `\\n`.

    The result never contains a newline, so `canonicalize` is idempotent.
    """
    if "\n" not in text:
        return text
    text = _continuation_re.sub("", text)
    return text.replace("\n", "\\n")
