import logging
import pathlib
from typing import Dict, Iterator, List, Optional, Tuple, Union
from intlcat.i18n import parse_locale
from intlcat.i18n.catalogs.strings import find_quoted_string
from intlcat.i18n.exceptions import (
    MissingMsgstrError,
    ParseError,
    CatalogIOError,
    UnexpectedInputError,
)


logger = logging.getLogger(__name__)


MSGID = "msgid"
MSGSTR = "msgstr"


class LanguageCatalog:
    """Translations of one language: original message => translated message.

    Keys and values are stored exactly as they are written in the catalog
    file (escape sequences are not resolved), so they compare equal to the
    canonical form of extracted messages.
    """

    def __init__(self, locale_id: str, messages: Dict[str, str] = None):
        self.locale_id = locale_id
        self.messages = {}
        for key, value in (messages or {}).items():
            self.insert(key, value)

    def insert(self, key: str, value: str) -> bool:
        """Add a translation, replacing any previous one for `key`.

        Entries with an empty key (the catalog header) or an empty value
        (not translated yet) are not inserted. Return whether `key` was
        inserted.
        """
        if not key or not value:
            return False
        self.messages[key] = value
        return True

    def get(self, key: str) -> Optional[str]:
        return self.messages.get(key)

    def __getitem__(self, key: str) -> str:
        return self.messages[key]

    def __contains__(self, key: str) -> bool:
        return key in self.messages

    def __iter__(self) -> Iterator[str]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __repr__(self):
        return "LanguageCatalog(%r, %r)" % (self.locale_id, self.messages)


def _keyword(line: str) -> Optional[str]:
    """Return "msgid" or "msgstr" if `line` has that keyword before its literal."""
    quote = line.find('"')
    head = line if quote == -1 else line[:quote]
    if MSGSTR in head:
        return MSGSTR
    elif MSGID in head:
        return MSGID
    else:
        return None


def _read_block(
    lines: List[str], i: int, keyword: str, locale_id: str
) -> Tuple[str, int]:
    """Read the literal of `lines[i]` and the bare literals that follow it.

    Return the concatenated text and the index of the first line after the
    block.
    """
    line = lines[i]
    rest = line[line.find(keyword) + len(keyword) :]
    parts = [find_quoted_string(rest, source=locale_id, lineno=i + 1)]
    i += 1
    while i < len(lines) and lines[i].startswith('"'):
        parts.append(find_quoted_string(lines[i], source=locale_id, lineno=i + 1))
        i += 1
    return "".join(parts), i


def parse_catalog(locale_id: str, text: str) -> LanguageCatalog:
    """Parse the text of a catalog into a `LanguageCatalog`.

    The format is a subset of gettext's `.po`: comments start with `#`, and
    each entry is a `msgid "..."` line and a `msgstr "..."` line, each of
    which may be continued by lines holding a bare `"..."` literal.

    Raise `ParseError` (with the language and the 1-based line number) on
    the first malformed line. No partial catalog is returned.
    """
    catalog = LanguageCatalog(locale_id)
    lines = [line.strip() for line in text.splitlines()]

    i = 0
    while i < len(lines):
        line = lines[i]
        if not line or line.startswith("#"):
            # empty line or comment
            i += 1
            continue

        if _keyword(line) != MSGID:
            raise UnexpectedInputError(
                "unexpected input: '%s'" % line, source=locale_id, lineno=i + 1
            )

        msgid_lineno = i + 1
        key, i = _read_block(lines, i, MSGID, locale_id)
        if i >= len(lines) or _keyword(lines[i]) != MSGSTR:
            raise MissingMsgstrError(
                "found 'msgid' without matching 'msgstr' on next line",
                source=locale_id,
                lineno=msgid_lineno,
            )
        value, i = _read_block(lines, i, MSGSTR, locale_id)

        if key in catalog:
            logger.debug(
                "Catalog %s redefines %r on line %d", locale_id, key, msgid_lineno
            )
        catalog.insert(key, value)

    return catalog


def read_catalog_text(path: Union[str, pathlib.Path]) -> str:
    """Read a UTF-8 text file.

    Raise `CatalogIOError` if the file cannot be read or is not UTF-8.
    """
    try:
        with open(path, "rb") as catalog_file:
            data = catalog_file.read()
    except OSError as err:
        raise CatalogIOError(path, "could not read file: %s" % err) from err
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise CatalogIOError(path, "not valid UTF-8: %s" % err) from err


def load_catalog(
    locale_id: str, path: Union[str, pathlib.Path]
) -> LanguageCatalog:
    """ Read and parse the catalog for `locale_id` at `path`.

    Raise `UnsupportedLocaleError` if `locale_id` is not a locale,
    `CatalogIOError` if the file cannot be read and `ParseError` if it is
    malformed.
    """
    parse_locale(locale_id)
    text = read_catalog_text(path)
    try:
        catalog = parse_catalog(locale_id, text)
    except ParseError as err:
        raise err.locate("%s (%s)" % (path, locale_id), err.lineno) from err
    logger.debug("Loaded %d translations for %s from %s", len(catalog), locale_id, path)
    return catalog
