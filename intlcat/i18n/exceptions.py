from typing import Optional, Union
import pathlib


class CatalogError(Exception):
    """Something went wrong while building the catalogs."""


class ParseError(CatalogError):
    """A source file or a catalog could not be parsed.

    `source` is the language tag of the catalog or the path of the source
    file; `lineno` is 1-based, or `None` when the position is unknown.
    """

    def __init__(
        self, message: str, source: Optional[str] = None, lineno: Optional[int] = None
    ):
        self.message = message
        self.source = source
        self.lineno = lineno
        super().__init__(message)

    def __str__(self):
        if self.source is None:
            return self.message
        elif self.lineno is None:
            return "%s: %s" % (self.source, self.message)
        else:
            return "%s:%d: %s" % (self.source, self.lineno, self.message)

    def locate(self, source: str, lineno: Optional[int]) -> "ParseError":
        """Return a copy of this error that points at `source:lineno`."""
        return type(self)(self.message, source=source, lineno=lineno)


class UnterminatedOrMissingStringError(ParseError):
    """There is no complete double-quoted literal where one is expected."""


class TrailingBackslashError(ParseError):
    """A backslash is the last byte of the input, so it escapes nothing."""


class MissingMsgstrError(ParseError):
    """A `msgid` block is not followed by a `msgstr` line."""


class UnexpectedInputError(ParseError):
    """A catalog line is neither blank, a comment, nor part of an entry."""


class CatalogIOError(CatalogError):
    """A file could not be read or written, or is not valid UTF-8."""

    def __init__(self, path: Union[str, pathlib.Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__("%s: %s" % (self.path, reason))


class UnsupportedLocaleError(CatalogError):
    """An unsupported locale is (attempted to be) used

    A locale may be unsupported because it is not recognised as a locale.
    """
