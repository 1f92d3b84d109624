import json
import logging
import sys
import unittest
from intlcat.i18n.exceptions import (
    CatalogError,
    CatalogIOError,
    UnterminatedOrMissingStringError,
)
from intlcat.logging.json import JsonFormatter


class JsonFormatterTest(unittest.TestCase):
    def _record(self, msg, *args, exc_info=None, **extra):
        record = logging.LogRecord(
            "intlcat.test", logging.WARNING, "/src/x.py", 12, msg, args, exc_info, "fn"
        )
        record.__dict__.update(extra)
        return record

    def _format(self, record):
        return json.loads(JsonFormatter().format(record))

    def test_format(self):
        data = self._format(self._record("%s: unused", "fr"))
        self.assertEqual(data["severity"], "WARNING")
        self.assertEqual(data["logger"], "intlcat.test")
        self.assertEqual(data["message"], "fr: unused")
        self.assertEqual(
            data["sourceLocation"], {"file": "/src/x.py", "line": 12, "function": "fn"}
        )
        self.assertRegex(
            data["timestamp"], r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z$"
        )
        self.assertNotIn("catalogLocation", data)
        self.assertNotIn("error", data)

    def test_parse_error_location(self):
        err = UnterminatedOrMissingStringError(
            "unterminated string", source="src/main.rs", lineno=3
        )
        data = self._format(self._record("%s", err, catalog_error=err))
        self.assertEqual(data["error"], "UnterminatedOrMissingStringError")
        self.assertEqual(data["catalogLocation"], {"file": "src/main.rs", "line": 3})
        self.assertEqual(data["message"], "src/main.rs:3: unterminated string")

    def test_io_error_location(self):
        err = CatalogIOError("locale/fr.po", "could not read file: nope")
        data = self._format(self._record("%s", err, catalog_error=err))
        self.assertEqual(data["catalogLocation"], {"file": "locale/fr.po", "line": None})

    def test_error_from_exc_info(self):
        try:
            raise CatalogIOError("src/bad.rs", "not valid UTF-8: oops")
        except CatalogIOError:
            record = self._record("failed", exc_info=sys.exc_info())
        data = self._format(record)
        self.assertEqual(data["error"], "CatalogIOError")
        self.assertEqual(data["catalogLocation"], {"file": "src/bad.rs", "line": None})
        self.assertIn("Traceback", data["message"])

    def test_error_without_location(self):
        err = CatalogError("something")
        data = self._format(self._record("%s", err, catalog_error=err))
        self.assertEqual(data["error"], "CatalogError")
        self.assertNotIn("catalogLocation", data)
