from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po
from io import BytesIO
import logging
import pathlib
from typing import Iterator, Union
from intlcat import settings
from intlcat.i18n.catalogs.extract import Message, MessageSet
from intlcat.i18n.catalogs.strings import unescape_quoted_string
from intlcat.i18n.exceptions import CatalogIOError


logger = logging.getLogger(__name__)


_TEMPLATE_WIDTH = 10000000
""" Huge, so that header lines do not wrap.
"""


def unescape_message(message_id: str) -> str:
    """ Resolve the escape sequences of a canonical message.

    Used at runtime, to turn a catalog key or translation into the text that
    gets formatted.
    """
    return unescape_quoted_string('"%s"' % message_id)


def template_header_catalog(project: str = None) -> Catalog:
    """ Build the empty Babel catalog whose header starts every template.
    """
    return Catalog(project=project or settings.PROJECT, charset="UTF-8")


def render_header(project: str = None) -> str:
    buf = BytesIO()
    write_po(buf, template_header_catalog(project), width=_TEMPLATE_WIDTH)
    return buf.getvalue().decode("utf-8")


def render_message(message: Message) -> str:
    """ Render one template block: provenance, `msgid` and an empty `msgstr`.

    `message.id` is written verbatim: it is already the escaped literal and
    never contains a newline.
    """
    return '#: %s\nmsgid "%s"\nmsgstr ""\n\n' % (
        " ".join(str(location) for location in message.locations),
        message.id,
    )


def iter_template(messages: MessageSet, project: str = None) -> Iterator[str]:
    yield render_header(project)
    for message in messages.sorted_messages():
        if not message.id:
            # an empty msgid is the catalog header
            continue
        yield render_message(message)


def render_template(messages: MessageSet, project: str = None) -> str:
    """ Render extracted messages as a catalog template for translators.
    """
    return "".join(iter_template(messages, project))


def write_template(
    messages: MessageSet,
    filename: Union[str, pathlib.Path],
    project: str = None,
):
    """ Write the catalog template for `messages` to the given path.
    Build the directories and the file mentioned in the path if they do not exist.

    Raise `CatalogIOError` on failure.
    """
    logger.info("Writing %d messages to %s", len(messages), filename)
    try:
        # Build parent directories if needed
        pathlib.Path(filename).parent.mkdir(parents=True, exist_ok=True)

        with open(filename, "w", encoding="utf-8", newline="\n") as catalog_file:
            for chunk in iter_template(messages, project):
                catalog_file.write(chunk)
    except OSError as err:
        raise CatalogIOError(filename, "could not write file: %s" % err) from err
