import unittest
from unittest.mock import patch
from intlcat.i18n.catalogs.build import check, extract_template, load_catalogs, main
from intlcat.i18n.catalogs.parse import parse_catalog
from intlcat.tests.i18n.catalogs.util import source_tree


FILES = {
    "src/main.rs": 'fn main() {\n    lformat!("hello, {}", 42);\n    lformat!("kwak!");\n}\n',
    "locale/fr.po": 'msgid "hello, {}"\nmsgstr "bonjour, {}"\n\nmsgid "kwak!"\nmsgstr "coin !"\n',
    "locale/es.po": 'msgid "hello, {}"\nmsgstr "hola, {}"\n\nmsgid "Oi!"\nmsgstr "¡Oi!"\n',
}


class BuildTest(unittest.TestCase):
    def _patch(self, root):
        patches = [
            patch("intlcat.settings.SOURCE_DIR", str(root / "src")),
            patch("intlcat.settings.LOCALE_DIR", str(root / "locale")),
            patch(
                "intlcat.i18n.catalogs.build.supported_locales", ["en", "fr", "es"]
            ),
            patch("intlcat.i18n.catalogs.build.default_locale", "en"),
            patch("intlcat.logging.configure"),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def test_extract_template(self):
        with source_tree(FILES) as root:
            self._patch(root)
            messages = extract_template()
            self.assertEqual(list(messages.messages), ["hello, {}", "kwak!"])
            template = (root / "locale" / "messages.pot").read_text(encoding="utf-8")
            catalog = parse_catalog(
                "fr", template.replace('msgstr ""', 'msgstr "x"')
            )
            self.assertEqual(list(catalog), ["hello, {}", "kwak!"])

    def test_load_catalogs_skips_default_locale(self):
        with source_tree(FILES) as root:
            self._patch(root)
            self.assertEqual(
                [catalog.locale_id for catalog in load_catalogs()], ["fr", "es"]
            )

    def test_check_reports_unused(self):
        with source_tree(FILES) as root:
            self._patch(root)
            with self.assertLogs("intlcat.i18n.catalogs.build", level="INFO") as cm:
                self.assertFalse(check())
            self.assertIn(
                "WARNING:intlcat.i18n.catalogs.build:es: unused translation for 'Oi!'",
                cm.output,
            )
            self.assertIn(
                "INFO:intlcat.i18n.catalogs.build:fr: 2 of 2 messages translated",
                cm.output,
            )
            self.assertIn(
                "INFO:intlcat.i18n.catalogs.build:es: 1 of 2 messages translated",
                cm.output,
            )

    def test_main(self):
        files = dict(FILES)
        files["locale/es.po"] = 'msgid "hello, {}"\nmsgstr "hola, {}"\n'
        with source_tree(files) as root:
            self._patch(root)
            self.assertEqual(main("extract"), 0)
            self.assertTrue((root / "locale" / "messages.pot").exists())
            self.assertEqual(main("check"), 0)

    def test_main_reports_errors(self):
        files = dict(FILES)
        files["locale/fr.po"] = 'msgstr "oops"\n'
        with source_tree(files) as root:
            self._patch(root)
            with self.assertLogs("intlcat.i18n.catalogs.build", level="ERROR"):
                self.assertEqual(main("check"), 1)

    def test_main_unknown_mode(self):
        with patch("intlcat.logging.configure"), patch("builtins.print"):
            self.assertEqual(main(None), 2)
