"""
Settings for the catalog build: where sources and catalogs live, and how
call sites are recognized.

Every setting may be overridden with an `INTLCAT_*` environment variable.
"""
import os

__all__ = (
    "FalsyStrings",
    "PRODUCTION",
    "PROJECT",
    "LOCALE_DIR",
    "SOURCE_DIR",
    "SOURCE_EXTENSIONS",
    "MARKER",
    "SUPPORTED_LOCALES",
    "DEFAULT_LOCALE",
)

FalsyStrings = frozenset({"", "false", "False", "0", "off"})


def _list_from_env(name: str, default: str):
    return tuple(
        item.strip() for item in os.environ.get(name, default).split(",") if item.strip()
    )


PRODUCTION = os.environ.get("INTLCAT_PRODUCTION", "False") not in FalsyStrings
"""
Log JSON instead of plaintext.
"""

PROJECT = os.environ.get("INTLCAT_PROJECT", "PROJECT")
"""
Project name written in the header of the catalog template.
"""

LOCALE_DIR = os.environ.get("INTLCAT_LOCALE_DIR", "locale")
"""
Directory holding `<locale_id>.po` catalogs and the `messages.pot` template.
"""

SOURCE_DIR = os.environ.get("INTLCAT_SOURCE_DIR", "src")
"""
Directory scanned for call sites by the `extract` and `check` commands.
"""

SOURCE_EXTENSIONS = _list_from_env("INTLCAT_SOURCE_EXTENSIONS", ".rs")
"""
File extensions a directory scan considers. Other files are ignored.
"""

MARKER = os.environ.get("INTLCAT_MARKER", "lformat!")
"""
Call-site marker. A call site is the marker immediately followed by `(`;
the first quoted literal after it is the message.
"""

SUPPORTED_LOCALES = _list_from_env("INTLCAT_SUPPORTED_LOCALES", "en")
"""
Locales that have a catalog under LOCALE_DIR.
"""

DEFAULT_LOCALE = os.environ.get("INTLCAT_DEFAULT_LOCALE", "en")
"""
Language of the messages as written in source code. It is also the initial
current language.
"""
