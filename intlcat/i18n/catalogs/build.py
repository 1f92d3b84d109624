import logging
import sys
from typing import List
from intlcat import settings
from intlcat.i18n import default_locale, supported_locales
from intlcat.i18n.catalogs import catalog_path, template_catalog_path
from intlcat.i18n.catalogs.extract import MessageSet, extract
from intlcat.i18n.catalogs.merge import compile_catalogs, find_unused_translations
from intlcat.i18n.catalogs.parse import LanguageCatalog, load_catalog
from intlcat.i18n.catalogs.util import write_template
from intlcat.i18n.exceptions import CatalogError
import intlcat.logging


logger = logging.getLogger(__name__)


def load_catalogs() -> List[LanguageCatalog]:
    """ Load the catalog of every supported locale except the default one.
    """
    return [
        load_catalog(locale_id, catalog_path(locale_id))
        for locale_id in supported_locales
        if locale_id != default_locale
    ]


def extract_template() -> MessageSet:
    """ Extract messages from the sources and write the template catalog.
    """
    messages = extract([settings.SOURCE_DIR])
    write_template(messages, template_catalog_path())
    return messages


def check() -> bool:
    """ Compile the catalogs and report problems a translator should fix.

    Return `False` if some translations are unused.
    """
    messages = extract([settings.SOURCE_DIR])
    catalogs = load_catalogs()
    table = compile_catalogs(messages, catalogs)

    for catalog in catalogs:
        n_translated = sum(
            1
            for entry in table
            if any(locale_id == catalog.locale_id for locale_id, _ in entry.translations)
        )
        logger.info(
            "%s: %d of %d messages translated",
            catalog.locale_id,
            n_translated,
            len(table),
        )

    unused = find_unused_translations(messages, catalogs)
    for locale_id, message_id in unused:
        logger.warning("%s: unused translation for %r", locale_id, message_id)
    return not unused


def main(mode):
    intlcat.logging.configure()
    try:
        if mode == "extract":
            extract_template()
            return 0
        elif mode == "check":
            return 0 if check() else 1
    except CatalogError as err:
        logger.error("%s", err, extra={"catalog_error": err})
        return 1

    print(
        """
    You must provide one of the following arguments:
        - "extract": scans the sources for messages and writes the template catalog

        - "check": compiles the catalogs of all supported locales
           and reports unused translations
    """
    )
    return 2


if __name__ == "__main__":
    mode = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(mode))
