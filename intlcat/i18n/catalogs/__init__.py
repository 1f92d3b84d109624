from os import path
from intlcat import settings


CATALOG_EXTENSION = ".po"
TEMPLATE_CATALOG_FILENAME = "messages.pot"


def catalog_path(locale_id: str, locale_dir: str = None) -> str:
    """ Return the path of the catalog for the given locale
    """
    return path.join(locale_dir or settings.LOCALE_DIR, locale_id + CATALOG_EXTENSION)


def template_catalog_path(locale_dir: str = None) -> str:
    return path.join(locale_dir or settings.LOCALE_DIR, TEMPLATE_CATALOG_FILENAME)
