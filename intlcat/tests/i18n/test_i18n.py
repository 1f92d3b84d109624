import threading
import unittest
from intlcat.i18n import (
    default_locale,
    get_language,
    get_locale_name,
    is_supported,
    override_language,
    parse_locale,
    set_language,
)
from intlcat.i18n.exceptions import UnsupportedLocaleError


class LocaleTest(unittest.TestCase):
    def test_is_supported(self):
        self.assertTrue(is_supported(default_locale))
        self.assertFalse(is_supported(""))
        self.assertFalse(is_supported(None))

    def test_get_locale_name(self):
        self.assertEqual(get_locale_name("fr"), "français")
        self.assertEqual(get_locale_name("el"), "Ελληνικά")

    def test_parse_locale_with_dash(self):
        self.assertEqual(str(parse_locale("pt-BR")), "pt_BR")

    def test_unsupported_locale(self):
        with self.assertRaises(UnsupportedLocaleError):
            parse_locale("not a locale")


class CurrentLanguageTest(unittest.TestCase):
    def setUp(self):
        self.previous = get_language()

    def tearDown(self):
        set_language(self.previous)

    def test_set_language(self):
        set_language("fr")
        self.assertEqual(get_language(), "fr")

    def test_override_language_restores(self):
        set_language("es")
        with override_language("fr"):
            self.assertEqual(get_language(), "fr")
        self.assertEqual(get_language(), "es")

    def test_override_language_restores_on_error(self):
        set_language("es")
        with self.assertRaises(RuntimeError):
            with override_language("fr"):
                raise RuntimeError
        self.assertEqual(get_language(), "es")

    def test_visible_from_other_threads(self):
        set_language("fr")
        seen = []
        thread = threading.Thread(target=lambda: seen.append(get_language()))
        thread.start()
        thread.join()
        self.assertEqual(seen, ["fr"])
