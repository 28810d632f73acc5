from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping


class ContextName(str, Enum):
    general_content = "general_content"  # prose
    url = "url"  # link and image destinations
    inline_code = "inline_code"  # code spans
    code_block = "code_block"  # fenced or indented blocks


GENERAL_CONTENT_ESCAPING_TYPES = frozenset({
    "emphasis", "strong", "link", "image", "code",
    "heading", "list", "blockquote", "horizontal_rule", "html",
})
URL_ESCAPING_TYPES = frozenset({"parentheses", "spaces", "angle_brackets"})
INLINE_CODE_ESCAPING_TYPES = frozenset({"backtick"})
CODE_BLOCK_ESCAPING_TYPES = frozenset({"fence", "indentation"})


@dataclass(frozen = True)
class EscapingContext:
    """
    Where a piece of text is about to be embedded in a Markdown document.

    Contexts are cheap values: callers build a fresh one per escape call. The escaping
    types are fixed at construction and the options are exposed as a read-only mapping.
    """

    name: str
    escaping_types: frozenset[str] = frozenset()
    options: Mapping[str, Any] = field(default_factory = dict)

    def __post_init__(self):
        name = self.name.value if isinstance(self.name, ContextName) else str(self.name)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "escaping_types", frozenset(self.escaping_types))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def requires_escaping(self, escaping_type: str) -> bool:
        return escaping_type in self.escaping_types


def general_content_context(**options: Any) -> EscapingContext:
    return EscapingContext(ContextName.general_content, GENERAL_CONTENT_ESCAPING_TYPES, options)


def url_context(**options: Any) -> EscapingContext:
    return EscapingContext(ContextName.url, URL_ESCAPING_TYPES, options)


def inline_code_context(**options: Any) -> EscapingContext:
    return EscapingContext(ContextName.inline_code, INLINE_CODE_ESCAPING_TYPES, options)


def code_block_context(**options: Any) -> EscapingContext:
    return EscapingContext(ContextName.code_block, CODE_BLOCK_ESCAPING_TYPES, options)


def custom_context(name: str, escaping_types: Iterable[str] = (), **options: Any) -> EscapingContext:
    return EscapingContext(name, frozenset(escaping_types), options)
