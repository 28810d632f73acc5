import copy
from typing import Callable

from features.escaping.dialect import Dialect
from features.escaping.escaping_context import EscapingContext


class BaseEscaper:
    """
    Escapes text for one (context, dialect) pair.

    The default algorithm walks the dialect's special tokens for the context in order and
    replaces every occurrence of each one, one whole-string pass per token, so text produced
    by an earlier pass is visible to later passes. The `post_process` hook runs last, and only
    when there was at least one token to look for.
    """

    _context: EscapingContext
    _dialect: Dialect

    def __init__(self, context: EscapingContext, dialect: Dialect):
        self._dialect = dialect
        self._bind_context(context)

    @property
    def context(self) -> EscapingContext:
        return self._context

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def escape(self, text: str) -> str:
        tokens = self._dialect.special_characters(self._context)
        if not tokens:
            return text
        escaped = text
        for token in tokens:
            escaped = escaped.replace(token, self._dialect.escape_character(token, self._context))
        return self.post_process(escaped)

    def supports_dialect(self, dialect: Dialect) -> bool:
        return self._dialect.name == dialect.name

    def with_context(self, context: EscapingContext) -> "BaseEscaper":
        """Same escaper and dialect, bound to another context of the same name (e.g. other options)."""
        if context.name != self._context.name or context == self._context:
            return self
        sibling = copy.copy(self)
        sibling._bind_context(context)
        return sibling

    def post_process(self, text: str) -> str:
        return text

    def _bind_context(self, context: EscapingContext):
        # escapers reading options parse them here
        self._context = context


class CustomEscaper(BaseEscaper):
    """Wraps a caller-supplied escaping function, e.g. for contexts the library doesn't know."""

    __escape_fn: Callable[[str], str]

    def __init__(self, context: EscapingContext, dialect: Dialect, escape_fn: Callable[[str], str]):
        super().__init__(context, dialect)
        self.__escape_fn = escape_fn

    def escape(self, text: str) -> str:
        return self.post_process(self.__escape_fn(text))
