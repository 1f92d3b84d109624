from contextlib import contextmanager
import threading
from babel import Locale, UnknownLocaleError
from intlcat import settings
from intlcat.i18n.exceptions import UnsupportedLocaleError

supported_locales = list(settings.SUPPORTED_LOCALES)
default_locale = settings.DEFAULT_LOCALE


def is_supported(locale_id: str) -> bool:
    return bool(locale_id) and locale_id in supported_locales


def parse_locale(locale_id: str) -> Locale:
    """Return the Babel `Locale` for `locale_id`.

    Raise `UnsupportedLocaleError` if `locale_id` is not a known locale.
    """
    try:
        return Locale.parse(locale_id, sep="-" if "-" in locale_id else "_")
    except (UnknownLocaleError, ValueError, TypeError) as err:
        raise UnsupportedLocaleError(
            "The given locale (%s) is not supported" % locale_id
        ) from err


def get_locale_name(locale_id: str) -> str:
    """Returns the name of the locale represented by `locale_id`, in its own language."""
    locale = parse_locale(locale_id)
    return locale.get_display_name(locale)


_current_language = default_locale
_current_language_lock = threading.Lock()


def get_language() -> str:
    """Return the process-wide current language."""
    with _current_language_lock:
        return _current_language


def set_language(locale_id: str) -> None:
    """Replace the process-wide current language.

    Readers on other threads see either the old or the new value.
    """
    global _current_language
    with _current_language_lock:
        _current_language = locale_id


@contextmanager
def override_language(locale_id: str):
    """Set the current language for the duration of a `with` block."""
    previous = get_language()
    set_language(locale_id)
    try:
        yield
    finally:
        set_language(previous)
