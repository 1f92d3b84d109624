import logging
import threading
from typing import Any, Optional
from babel.messages.pofile import escape
from intlcat.i18n import get_language
from intlcat.i18n.catalogs.merge import DispatchTable, format_message, has_arguments
from intlcat.i18n.catalogs.util import unescape_message


logger = logging.getLogger(__name__)


def _message_key(message: str) -> str:
    """Write a runtime string the way it appears between quotes in source code."""
    return escape(message)[1:-1]


class MessageLocalizer:
    """Translates messages using a compiled `DispatchTable`."""

    def __init__(self, table: DispatchTable):
        self.table = table

    def find_entry(self, message: str):
        """Find the entry for `message`, as written in code or at runtime."""
        entry = self.table.resolve(message)
        if entry is None:
            entry = self.table.resolve(_message_key(message))
        return entry

    def localize(self, locale_id: str, message: str, *arguments: Any) -> str:
        """Translate `message` to `locale_id` and format it with `arguments`.

        Unknown messages and languages fall back to `message` itself. A
        translation that cannot be formatted with `arguments` is logged and
        the original message is used instead.
        """
        entry = self.find_entry(message)
        if entry is None:
            return format_message(message, arguments, has_arguments(message))

        if entry.lookup(locale_id) != entry.message:
            try:
                return self.table.format(locale_id, entry.message, *arguments)
            except (IndexError, KeyError, ValueError) as err:
                logger.exception(
                    "Error in catalog for locale %s and message %s: %s",
                    locale_id,
                    entry.message,
                    err,
                )
        return format_message(
            unescape_message(entry.message), arguments, entry.has_arguments
        )


_localizer: Optional[MessageLocalizer] = None
_localizer_lock = threading.Lock()


def install(table: Optional[DispatchTable]) -> None:
    """Make `table` the one `trans` uses. `None` uninstalls it."""
    global _localizer
    with _localizer_lock:
        _localizer = None if table is None else MessageLocalizer(table)


def localize(locale_id: str, message: str, *arguments: Any) -> str:
    """Localize `message` to `locale_id` using the installed table.

    With no table installed, `message` is only formatted.
    """
    with _localizer_lock:
        localizer = _localizer
    if localizer is None:
        return format_message(message, arguments, has_arguments(message))
    return localizer.localize(locale_id, message, *arguments)


def trans(message: str, *arguments: Any) -> str:
    """Mark a message for translation and localize it to the current language.

    Behaves like `message.format(*arguments)`, except `message` might get
    translated.
    """
    return localize(get_language(), message, *arguments)
