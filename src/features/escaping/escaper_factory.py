from threading import Lock
from typing import Any, Callable

from features.escaping.dialect import Dialect
from features.escaping.escapers.base_escaper import BaseEscaper
from features.escaping.escapers.code_block_escaper import CodeBlockEscaper
from features.escaping.escapers.inline_code_escaper import InlineCodeEscaper
from features.escaping.escapers.prose_escaper import ProseEscaper
from features.escaping.escapers.url_escaper import UrlEscaper
from features.escaping.escaping_context import ContextName, EscapingContext
from features.escaping.escaping_errors import UnsupportedContextError, UnsupportedDialectError
from util import log
from util.error_codes import INVALID_ESCAPER_CLASS

EscaperClass = Callable[[EscapingContext, Dialect], Any]

DEFAULT_ESCAPER_CLASSES: dict[str, EscaperClass] = {
    ContextName.general_content.value: ProseEscaper,
    ContextName.url.value: UrlEscaper,
    ContextName.inline_code.value: InlineCodeEscaper,
    ContextName.code_block.value: CodeBlockEscaper,
}


class EscaperFactory:
    """
    Hands out escapers per (context name, dialect name), building each one once.

    The cache only grows. Escapers registered explicitly sit in the same cache, so they win
    over the default classes and are never replaced by them. Safe to share between threads.
    """

    __escapers: dict[tuple[str, str], BaseEscaper]
    __default_escaper_classes: dict[str, EscaperClass]
    __lock: Lock

    def __init__(self):
        self.__escapers = {}
        self.__default_escaper_classes = dict(DEFAULT_ESCAPER_CLASSES)
        self.__lock = Lock()

    def create_escaper(self, context: EscapingContext, dialect: Dialect) -> BaseEscaper:
        key = (context.name, dialect.name)
        escaper = self.__escapers.get(key)
        if escaper is not None:
            return escaper
        with self.__lock:
            escaper = self.__escapers.get(key)
            if escaper is not None:
                log.t(f"Escaper for {key} was created while waiting")
                return escaper
            escaper = self.__build_escaper(context, dialect)
            self.__escapers[key] = escaper
            log.t(f"Cached {type(escaper).__name__} for {key}")
            return escaper

    def register_escaper(self, context_name: str, dialect_name: str, escaper: BaseEscaper):
        with self.__lock:
            self.__escapers[(context_name, dialect_name)] = escaper
        log.d(f"Registered {type(escaper).__name__} for ('{context_name}', '{dialect_name}')")

    def has_escaper(self, context: EscapingContext, dialect: Dialect) -> bool:
        # optimistic: a default class counts even if it would reject the dialect
        return (context.name, dialect.name) in self.__escapers or context.name in self.__default_escaper_classes

    def register_default_escaper_class(self, context_name: str, escaper_class: EscaperClass):
        with self.__lock:
            self.__default_escaper_classes[context_name] = escaper_class
        log.d(f"Default escaper for '{context_name}' is now {getattr(escaper_class, '__name__', escaper_class)}")

    def __build_escaper(self, context: EscapingContext, dialect: Dialect) -> BaseEscaper:
        escaper_class = self.__default_escaper_classes.get(context.name)
        if escaper_class is None:
            raise UnsupportedContextError(log.w(f"No escaper available for context \"{context.name}\""))

        escaper = escaper_class(context, dialect)
        if not isinstance(escaper, BaseEscaper):
            class_name = getattr(escaper_class, "__name__", repr(escaper_class))
            raise UnsupportedContextError(
                log.e(f"Class \"{class_name}\" must implement BaseEscaper"),
                INVALID_ESCAPER_CLASS,
            )

        if not escaper.supports_dialect(dialect):
            raise UnsupportedDialectError(
                log.w(f"Dialect \"{dialect.name}\" is not supported by escaper for context \"{context.name}\""),
            )
        return escaper
