import logging
import pathlib
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union
from intlcat import settings
from intlcat.i18n.catalogs.strings import canonicalize, find_quoted_string
from intlcat.i18n.exceptions import CatalogError, ParseError, CatalogIOError


logger = logging.getLogger(__name__)


# Naive: a "//" inside a string literal also starts a comment.
_comment_re = re.compile(rb"//[^\n]*")


def _compile_marker(marker: str):
    return re.compile(re.escape(marker.encode("utf-8")) + rb"\(")


class Provenance(NamedTuple):
    filename: str
    lineno: int
    """1-based."""

    def __str__(self):
        return "%s:%d" % (self.filename, self.lineno)


@dataclass
class Message:
    """A translatable string and the places it was found.

    `id` is the canonical form of the literal (see `canonicalize`).
    """

    id: str
    locations: List[Provenance] = field(default_factory=list)

    def add_location(self, filename: str, lineno: int) -> "Message":
        self.locations.append(Provenance(filename, lineno))
        return self

    def sort_key(self) -> Tuple[Tuple[Provenance, ...], str]:
        """Order messages by where they were found, then by text."""
        return (tuple(self.locations), self.id)


class MessageSet:
    """Messages extracted from source files, deduplicated by canonical text.

    `original_strings` maps each literal whose canonical form differs from
    the literal itself (a multi-line string, say) to that canonical form.
    """

    def __init__(self, marker: str = None):
        self.marker = marker or settings.MARKER
        self.messages: Dict[str, Message] = {}
        self.original_strings: Dict[str, str] = {}
        self._marker_re = _compile_marker(self.marker)

    def add(self, text: str, filename: str, lineno: int) -> Message:
        """Record a sighting of literal `text` at `filename:lineno`."""
        canonical = canonicalize(text)
        if canonical != text:
            self.original_strings[text] = canonical

        try:
            message = self.messages[canonical]
        except KeyError:
            message = Message(canonical)
            self.messages[canonical] = message
        return message.add_location(filename, lineno)

    def scan_file(self, path: Union[str, pathlib.Path]) -> int:
        """Add all the messages contained in a source file.

        Return the number of call sites found.

        Raise `CatalogIOError` if the file cannot be read or is not UTF-8,
        and `ParseError` if a call site has no string literal.
        """
        filename = str(path)
        try:
            with open(path, "rb") as source_file:
                content = source_file.read()
        except OSError as err:
            raise CatalogIOError(filename, "could not read file: %s" % err) from err
        try:
            content.decode("utf-8")
        except UnicodeDecodeError as err:
            raise CatalogIOError(filename, "not valid UTF-8: %s" % err) from err

        content = _comment_re.sub(b"", content)

        n_found = 0
        for match in self._marker_re.finditer(content):
            pos = match.end()
            lineno = 1 + content.count(b"\n", 0, pos)
            try:
                text = find_quoted_string(content, start=pos)
            except ParseError as err:
                raise err.locate(filename, lineno) from err
            self.add(text, filename, lineno)
            n_found += 1

        logger.debug("Found %d messages in %s", n_found, filename)
        return n_found

    def scan_directory(
        self, path: Union[str, pathlib.Path], *, skip_errors: bool = False
    ) -> int:
        """Scan every source file under `path`, recursively.

        Files are visited in sorted order, so provenance is deterministic.
        By default the first file error aborts the scan. With
        `skip_errors=True`, the error is logged and the file is skipped.

        Return the number of call sites found.
        """
        logger.info("Scanning %s for messages", path)
        n_found = 0
        for source_path in sorted(pathlib.Path(path).rglob("*")):
            if not source_path.is_file() or not _is_source(source_path):
                continue
            try:
                n_found += self.scan_file(source_path)
            except CatalogError as err:
                if not skip_errors:
                    raise
                logger.warning(
                    "Skipping %s: %s", source_path, err, extra={"catalog_error": err}
                )
        return n_found

    def get(self, message_id: str) -> Optional[Message]:
        return self.messages.get(message_id)

    def sorted_messages(self) -> List[Message]:
        """Return the messages in a deterministic order (see `Message.sort_key`)."""
        return sorted(self.messages.values(), key=Message.sort_key)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages.values())

    def __contains__(self, message_id: str) -> bool:
        return message_id in self.messages

    def __len__(self) -> int:
        return len(self.messages)


def _is_source(path: pathlib.Path) -> bool:
    return path.suffix in settings.SOURCE_EXTENSIONS


def extract(
    paths: Iterable[Union[str, pathlib.Path]],
    *,
    marker: str = None,
    skip_errors: bool = False,
) -> MessageSet:
    """Extract messages from every given file and directory."""
    messages = MessageSet(marker=marker)
    for path in paths:
        if pathlib.Path(path).is_dir():
            messages.scan_directory(path, skip_errors=skip_errors)
        else:
            messages.scan_file(path)
    logger.info("Extracted %d distinct messages", len(messages))
    return messages
