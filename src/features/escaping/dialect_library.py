from features.escaping.dialect import Dialect
from features.escaping.escaping_context import ContextName
from features.escaping.escaping_errors import UnsupportedDialectError
from util import log
from util.error_codes import UNKNOWN_DIALECT

# Dialect arrays are at the end of the file

###  CommonMark  ###

COMMONMARK_NAME = "commonmark"

COMMONMARK_FEATURES = frozenset({
    "emphasis", "strong_emphasis", "strikethrough", "links", "images", "code_blocks", "inline_code",
    "lists", "blockquotes", "headings", "horizontal_rules", "html_blocks", "tables",
})

# '-', '.' and '!' are missing on purpose: the prose escaper decides on those from their position
COMMONMARK_PROSE_MAPPINGS = {
    "\\": "\\\\",
    "*": "\\*",
    "_": "\\_",
    "[": "\\[",
    "]": "\\]",
    "(": "\\(",
    ")": "\\)",
    "#": "\\#",
    "+": "\\+",
    "|": "\\|",
    "{": "\\{",
    "}": "\\}",
    ">": "\\>",
    "`": "\\`",
}

COMMONMARK_URL_MAPPINGS = {
    " ": "%20",
    "(": "%28",
    ")": "%29",
    "<": "%3C",
    ">": "%3E",
    "\"": "%22",
    "'": "%27",
    "\\": "%5C",
}

INLINE_CODE_MAPPINGS = {"`": "\\`"}

COMMONMARK = Dialect(
    name = COMMONMARK_NAME,
    features = COMMONMARK_FEATURES,
    character_mappings = {
        ContextName.general_content.value: COMMONMARK_PROSE_MAPPINGS,
        ContextName.url.value: COMMONMARK_URL_MAPPINGS,
        ContextName.inline_code.value: INLINE_CODE_MAPPINGS,
        ContextName.code_block.value: {},  # fences keep code blocks safe
    },
    default_special_characters = tuple(COMMONMARK_PROSE_MAPPINGS.keys()),
    default_character_mappings = COMMONMARK_PROSE_MAPPINGS,
)

###  GitHub Flavored Markdown  ###

GFM_NAME = "gfm"

GFM_FEATURES = COMMONMARK_FEATURES | frozenset({
    "task_lists", "mentions", "emoji", "autolinks", "footnotes",
})

GFM_PROSE_MAPPINGS = {
    **COMMONMARK_PROSE_MAPPINGS,
    "~": "\\~",  # strikethrough
    "@": "\\@",  # mentions
    ":": "\\:",  # emoji shortcodes and autolinks
}

GFM_URL_MAPPINGS = {
    **COMMONMARK_URL_MAPPINGS,
    "[": "%5B",  # footnotes and reference links
    "]": "%5D",
}

GFM = Dialect(
    name = GFM_NAME,
    features = GFM_FEATURES,
    character_mappings = {
        ContextName.general_content.value: GFM_PROSE_MAPPINGS,
        ContextName.url.value: GFM_URL_MAPPINGS,
        ContextName.inline_code.value: INLINE_CODE_MAPPINGS,
        ContextName.code_block.value: {},
    },
    default_special_characters = tuple(GFM_PROSE_MAPPINGS.keys()),
    default_character_mappings = GFM_PROSE_MAPPINGS,
)

###  Arrays  ###

BUILT_IN_DIALECTS: list[Dialect] = [COMMONMARK, GFM]
BUILT_IN_DIALECT_NAMES = frozenset(dialect.name for dialect in BUILT_IN_DIALECTS)


def find_dialect(name: str) -> Dialect:
    for dialect in BUILT_IN_DIALECTS:
        if dialect.name == name.strip().lower():
            return dialect
    raise UnsupportedDialectError(log.w(f"Unknown dialect '{name}'"), UNKNOWN_DIALECT)
