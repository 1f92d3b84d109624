import os
import pathlib
import tempfile
import unittest
from contextlib import contextmanager
from typing import Dict, List, Tuple
from intlcat.i18n.catalogs.extract import MessageSet
from intlcat.i18n.catalogs.parse import LanguageCatalog


@contextmanager
def source_tree(files: Dict[str, str]):
    """Yield a temporary directory holding `files` (relative path => UTF-8 text)."""
    with tempfile.TemporaryDirectory() as tempdir:
        root = pathlib.Path(tempdir)
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode("utf-8"))
        yield root


def assert_locations_equal(
    message_set: MessageSet,
    message_id: str,
    locations: List[Tuple[str, int]],
    msg: str = "",
):
    tc = unittest.TestCase()
    msg = f"{msg}: " if msg else ""
    message = message_set.get(message_id)
    tc.assertIsNotNone(message, msg=f"{msg}Message {message_id!r} not found")
    tc.assertEqual(
        [(location.filename, location.lineno) for location in message.locations],
        [(os.fspath(filename), lineno) for filename, lineno in locations],
        msg=f"{msg}Message {message_id!r} has different locations",
    )


def assert_catalog_equal(
    catalog: LanguageCatalog, locale_id: str, messages: Dict[str, str], msg: str = ""
):
    tc = unittest.TestCase()
    msg = f"{msg}: " if msg else ""
    tc.assertEqual(
        catalog.locale_id, locale_id, msg=f"{msg}The catalog has a different locale"
    )
    tc.assertEqual(
        dict(catalog.messages), messages, msg=f"{msg}The catalog has different messages"
    )
