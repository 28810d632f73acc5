from typing import Any

from features.escaping.dialect import Dialect
from features.escaping.dialect_library import COMMONMARK, GFM, find_dialect
from features.escaping.escaper_factory import EscaperFactory
from features.escaping.escaping_context import (
    EscapingContext,
    code_block_context,
    general_content_context,
    inline_code_context,
    url_context,
)
from features.escaping.escaping_errors import UnsupportedDialectError
from util import log
from util.config import config
from util.error_codes import INVALID_DEFAULT_DIALECT
from util.errors import ConfigurationError


class MarkdownEscape:
    """
    Entry point for callers (e.g. template rendering): one dialect, one factory, and a method
    per embedding context. Options are passed through to the context, e.g.
    `escape_code_block(code, use_fences = True, language = "python")`.
    """

    __dialect: Dialect
    __factory: EscaperFactory

    def __init__(self, dialect: Dialect | None = None, factory: EscaperFactory | None = None):
        self.__dialect = dialect or self.__default_dialect()
        self.__factory = factory or EscaperFactory()

    @staticmethod
    def commonmark() -> "MarkdownEscape":
        return MarkdownEscape(COMMONMARK)

    @staticmethod
    def gfm() -> "MarkdownEscape":
        return MarkdownEscape(GFM)

    @property
    def dialect(self) -> Dialect:
        return self.__dialect

    @property
    def factory(self) -> EscaperFactory:
        return self.__factory

    def with_dialect(self, dialect: Dialect) -> "MarkdownEscape":
        return MarkdownEscape(dialect, self.__factory)

    def escape_content(self, content: str, **options: Any) -> str:
        return self.escape(content, general_content_context(**options))

    def escape_url(self, url: str, **options: Any) -> str:
        return self.escape(url, url_context(**options))

    def escape_inline_code(self, code: str, **options: Any) -> str:
        return self.escape(code, inline_code_context(**options))

    def escape_code_block(self, code: str, **options: Any) -> str:
        return self.escape(code, code_block_context(**options))

    def escape_within_code_block(self, code: str) -> str:
        return self.escape(code, code_block_context(within = True))

    def escape(self, content: str, context: EscapingContext) -> str:
        escaper = self.__factory.create_escaper(context, self.__dialect)
        # the factory caches per context name, this call's options still have to apply
        return escaper.with_context(context).escape(content)

    @staticmethod
    def __default_dialect() -> Dialect:
        try:
            return find_dialect(config.default_dialect)
        except UnsupportedDialectError as e:
            message = log.e(f"Default dialect '{config.default_dialect}' is not a built-in dialect")
            raise ConfigurationError(message, INVALID_DEFAULT_DIALECT) from e
