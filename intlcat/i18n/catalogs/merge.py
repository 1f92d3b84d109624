import logging
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple
from intlcat.i18n.catalogs.extract import MessageSet
from intlcat.i18n.catalogs.parse import LanguageCatalog
from intlcat.i18n.catalogs.util import unescape_message


logger = logging.getLogger(__name__)


def has_arguments(text: str) -> bool:
    """Return whether `text` has a `{...}` placeholder.

    Doubled braces (`{{` and `}}`) are escaped braces, not placeholders.
    """
    i = 0
    while i < len(text):
        c = text[i]
        if c == "{" or c == "}":
            if i + 1 < len(text) and text[i + 1] == c:
                i += 2
                continue
            return True
        i += 1
    return False


def format_message(text: str, arguments: tuple, with_arguments: bool) -> str:
    """Substitute positional arguments into `{}` placeholders.

    Messages without placeholders are still formatted, so `{{` becomes `{`.

    Raise `IndexError`, `KeyError` or `ValueError` if `text` does not match
    `arguments`.
    """
    if with_arguments:
        return text.format(*arguments)
    else:
        return text.format()


class DispatchEntry(NamedTuple):
    message: str
    """Canonical message text; also the fallback for unknown languages."""

    translations: Tuple[Tuple[str, str], ...]
    """(locale_id, translation) pairs, in the order catalogs were given."""

    has_arguments: bool
    """Whether the message is formatted with positional arguments."""

    def lookup(self, locale_id: str) -> str:
        for translation_locale_id, translation in self.translations:
            if translation_locale_id == locale_id:
                return translation
        return self.message


class DispatchTable:
    """Maps (language, message) to translated text, with identity fallback.

    `aliases` maps a literal as written at a call site to the canonical
    message it stands for.
    """

    def __init__(
        self, entries: Iterable[DispatchEntry] = (), aliases: Dict[str, str] = None
    ):
        self.entries: Dict[str, DispatchEntry] = {
            entry.message: entry for entry in entries
        }
        self.aliases: Dict[str, str] = dict(aliases or {})

    def resolve(self, message: str) -> Optional[DispatchEntry]:
        """Return the entry for `message` or for the message it is an alias of."""
        try:
            return self.entries[message]
        except KeyError:
            canonical = self.aliases.get(message)
            return None if canonical is None else self.entries.get(canonical)

    def lookup(self, locale_id: str, message: str) -> str:
        """Return the translation of `message` in `locale_id`.

        Never fails: unknown languages and unknown messages give back the
        message itself.
        """
        entry = self.resolve(message)
        if entry is None:
            return message
        return entry.lookup(locale_id)

    def format(self, locale_id: str, message: str, *arguments) -> str:
        """Translate `message` to `locale_id` and format it with `arguments`.

        A message that is not in the table is formatted as it is. Raise
        `IndexError`, `KeyError` or `ValueError` if the text does not match
        `arguments`.
        """
        entry = self.resolve(message)
        if entry is None:
            return format_message(message, arguments, has_arguments(message))
        return format_message(
            unescape_message(entry.lookup(locale_id)), arguments, entry.has_arguments
        )

    @property
    def with_arguments(self) -> List[DispatchEntry]:
        """Entries that are formatted with positional arguments."""
        return [entry for entry in self if entry.has_arguments]

    @property
    def without_arguments(self) -> List[DispatchEntry]:
        """Entries that are formatted without arguments."""
        return [entry for entry in self if not entry.has_arguments]

    @property
    def locale_ids(self) -> List[str]:
        """Every language with at least one translation, in first-seen order."""
        ret = {}
        for entry in self:
            for locale_id, _ in entry.translations:
                ret.setdefault(locale_id, None)
        return list(ret)

    def __iter__(self) -> Iterator[DispatchEntry]:
        return iter(self.entries.values())

    def __contains__(self, message: str) -> bool:
        return self.resolve(message) is not None

    def __len__(self) -> int:
        return len(self.entries)


class _MergeState:
    """Which keys of each catalog have been used so far.

    The parsed catalogs are left untouched; each translation is used at most
    once.
    """

    def __init__(self, catalogs: List[LanguageCatalog]):
        self.catalogs = catalogs
        self.consumed: List[Set[str]] = [set() for _ in catalogs]

    def take_translations(self, message: str) -> Tuple[Tuple[str, str], ...]:
        translations = []
        seen_locale_ids = set()
        for index, catalog in enumerate(self.catalogs):
            if catalog.locale_id in seen_locale_ids:
                # the first catalog for a language wins
                continue
            if message in self.consumed[index]:
                continue
            translation = catalog.get(message)
            if translation is None:
                continue
            self.consumed[index].add(message)
            seen_locale_ids.add(catalog.locale_id)
            translations.append((catalog.locale_id, translation))
            logger.debug("Using %s translation of %r", catalog.locale_id, message)
        return tuple(translations)

    def unused(self) -> List[Tuple[str, str]]:
        return [
            (catalog.locale_id, key)
            for catalog, consumed in zip(self.catalogs, self.consumed)
            for key in catalog
            if key not in consumed
        ]


def _compile(
    messages: MessageSet, catalogs: Iterable[LanguageCatalog]
) -> Tuple[DispatchTable, _MergeState]:
    state = _MergeState(list(catalogs))
    entries = []
    for message in messages.sorted_messages():
        entries.append(
            DispatchEntry(
                message.id,
                state.take_translations(message.id),
                has_arguments(message.id),
            )
        )
    return DispatchTable(entries, messages.original_strings), state


def compile_catalogs(
    messages: MessageSet, catalogs: Iterable[LanguageCatalog]
) -> DispatchTable:
    """ Merge the per-language catalogs into one table for the given messages.

    For each message, each catalog is consulted in the order given. If two
    catalogs have the same language, the first one to translate the message
    wins. Catalog entries for messages that were not extracted are ignored
    (see `find_unused_translations`).
    """
    table, state = _compile(messages, catalogs)
    logger.info(
        "Compiled %d messages in %d languages (%d unused translations)",
        len(table),
        len(table.locale_ids),
        len(state.unused()),
    )
    return table


def find_unused_translations(
    messages: MessageSet, catalogs: Iterable[LanguageCatalog]
) -> List[Tuple[str, str]]:
    """ Return the (locale_id, message) catalog entries that compiling
    `messages` would not use.

    These are obsolete translations, or translations shadowed by an earlier
    catalog of the same language.
    """
    _, state = _compile(messages, catalogs)
    return state.unused()
