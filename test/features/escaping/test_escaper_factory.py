import threading
import unittest

from features.escaping.dialect import custom_dialect
from features.escaping.dialect_library import COMMONMARK, GFM
from features.escaping.escaper_factory import EscaperFactory
from features.escaping.escapers.base_escaper import BaseEscaper, CustomEscaper
from features.escaping.escapers.code_block_escaper import CodeBlockEscaper
from features.escaping.escapers.inline_code_escaper import InlineCodeEscaper
from features.escaping.escapers.prose_escaper import ProseEscaper
from features.escaping.escapers.url_escaper import UrlEscaper
from features.escaping.escaping_context import (
    code_block_context,
    custom_context,
    general_content_context,
    inline_code_context,
    url_context,
)
from features.escaping.escaping_errors import UnsupportedContextError, UnsupportedDialectError
from util.error_codes import INVALID_ESCAPER_CLASS, UNSUPPORTED_CONTEXT, UNSUPPORTED_DIALECT


class NotAnEscaper:

    def __init__(self, context, dialect):
        self.context = context
        self.dialect = dialect


class CommonMarkOnlyEscaper(BaseEscaper):

    def supports_dialect(self, dialect) -> bool:
        return dialect.name == "commonmark"


class EscaperFactoryTest(unittest.TestCase):

    factory: EscaperFactory

    def setUp(self):
        self.factory = EscaperFactory()

    def test_default_escaper_classes(self):
        self.assertIsInstance(self.factory.create_escaper(general_content_context(), COMMONMARK), ProseEscaper)
        self.assertIsInstance(self.factory.create_escaper(url_context(), COMMONMARK), UrlEscaper)
        self.assertIsInstance(self.factory.create_escaper(inline_code_context(), COMMONMARK), InlineCodeEscaper)
        self.assertIsInstance(self.factory.create_escaper(code_block_context(), COMMONMARK), CodeBlockEscaper)

    def test_escapers_are_cached(self):
        first = self.factory.create_escaper(url_context(), GFM)
        second = self.factory.create_escaper(url_context(), GFM)

        self.assertIs(first, second)

    def test_cache_is_keyed_by_names(self):
        first = self.factory.create_escaper(code_block_context(), GFM)
        second = self.factory.create_escaper(code_block_context(use_fences = True), custom_dialect("gfm"))

        self.assertIs(first, second)

    def test_dialects_get_separate_escapers(self):
        commonmark = self.factory.create_escaper(general_content_context(), COMMONMARK)
        gfm = self.factory.create_escaper(general_content_context(), GFM)

        self.assertIsNot(commonmark, gfm)
        self.assertIs(gfm.dialect, GFM)

    def test_factories_do_not_share_caches(self):
        other = EscaperFactory()

        self.assertIsNot(
            self.factory.create_escaper(url_context(), GFM),
            other.create_escaper(url_context(), GFM),
        )

    def test_unknown_context(self):
        with self.assertRaises(UnsupportedContextError) as context:
            self.factory.create_escaper(custom_context("table_cell"), COMMONMARK)

        self.assertEqual(context.exception.error_code, UNSUPPORTED_CONTEXT)
        self.assertEqual(context.exception.message, "No escaper available for context \"table_cell\"")

    def test_unknown_context_is_not_cached(self):
        with self.assertRaises(UnsupportedContextError):
            self.factory.create_escaper(custom_context("table_cell"), COMMONMARK)

        self.assertFalse(self.factory.has_escaper(custom_context("table_cell"), COMMONMARK))

    def test_registered_escaper(self):
        escaper = CustomEscaper(custom_context("table_cell"), GFM, lambda text: text.replace("|", "\\|"))

        self.factory.register_escaper("table_cell", "gfm", escaper)

        self.assertIs(self.factory.create_escaper(custom_context("table_cell"), GFM), escaper)
        self.assertTrue(self.factory.has_escaper(custom_context("table_cell"), GFM))
        self.assertFalse(self.factory.has_escaper(custom_context("table_cell"), COMMONMARK))

    def test_registered_escaper_overrides_default(self):
        escaper = CustomEscaper(url_context(), COMMONMARK, str.upper)

        self.factory.register_escaper("url", "commonmark", escaper)

        self.assertIs(self.factory.create_escaper(url_context(), COMMONMARK), escaper)
        self.assertIsInstance(self.factory.create_escaper(url_context(), GFM), UrlEscaper)

    def test_registered_escaper_replaces_cached_one(self):
        self.factory.create_escaper(url_context(), COMMONMARK)
        escaper = CustomEscaper(url_context(), COMMONMARK, str.upper)

        self.factory.register_escaper("url", "commonmark", escaper)

        self.assertIs(self.factory.create_escaper(url_context(), COMMONMARK), escaper)

    def test_registered_escaper_is_not_checked_against_dialect(self):
        escaper = CustomEscaper(url_context(), COMMONMARK, str.upper)

        self.factory.register_escaper("url", "gfm", escaper)

        self.assertIs(self.factory.create_escaper(url_context(), GFM), escaper)

    def test_has_escaper_for_defaults(self):
        self.assertTrue(self.factory.has_escaper(general_content_context(), COMMONMARK))
        self.assertTrue(self.factory.has_escaper(url_context(), custom_dialect("anything")))
        self.assertFalse(self.factory.has_escaper(custom_context("table_cell"), GFM))

    def test_register_default_escaper_class(self):
        self.factory.register_default_escaper_class("table_cell", BaseEscaper)

        escaper = self.factory.create_escaper(custom_context("table_cell"), COMMONMARK)

        self.assertIs(type(escaper), BaseEscaper)
        self.assertEqual(escaper.escape("a|b"), "a\\|b")
        self.assertTrue(self.factory.has_escaper(custom_context("table_cell"), GFM))

    def test_default_escaper_class_replacement_is_local(self):
        self.factory.register_default_escaper_class("url", BaseEscaper)

        self.assertIs(type(self.factory.create_escaper(url_context(), GFM)), BaseEscaper)
        self.assertIsInstance(EscaperFactory().create_escaper(url_context(), GFM), UrlEscaper)

    def test_class_that_is_not_an_escaper(self):
        self.factory.register_default_escaper_class("table_cell", NotAnEscaper)

        with self.assertRaises(UnsupportedContextError) as context:
            self.factory.create_escaper(custom_context("table_cell"), GFM)

        self.assertEqual(context.exception.error_code, INVALID_ESCAPER_CLASS)
        self.assertEqual(context.exception.message, "Class \"NotAnEscaper\" must implement BaseEscaper")

    def test_escaper_rejecting_the_dialect(self):
        self.factory.register_default_escaper_class("general_content", CommonMarkOnlyEscaper)

        self.assertIsInstance(
            self.factory.create_escaper(general_content_context(), COMMONMARK),
            CommonMarkOnlyEscaper,
        )
        with self.assertRaises(UnsupportedDialectError) as context:
            self.factory.create_escaper(general_content_context(), GFM)

        self.assertEqual(context.exception.error_code, UNSUPPORTED_DIALECT)
        self.assertEqual(
            context.exception.message,
            "Dialect \"gfm\" is not supported by escaper for context \"general_content\"",
        )

    def test_concurrent_creation_yields_one_escaper(self):
        results: list[BaseEscaper] = []
        results_lock = threading.Lock()
        barrier = threading.Barrier(8)

        def create():
            barrier.wait()
            escaper = self.factory.create_escaper(general_content_context(), GFM)
            with results_lock:
                results.append(escaper)

        threads = [threading.Thread(target = create) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 8)
        for escaper in results:
            self.assertIs(escaper, results[0])
