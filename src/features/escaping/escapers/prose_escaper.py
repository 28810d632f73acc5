import re

from features.escaping.dialect_library import BUILT_IN_DIALECT_NAMES
from features.escaping.escapers.base_escaper import BaseEscaper
from util.functions import join_lines, split_lines

# checked in this order, only at the start of a line
HEADING_PATTERN = re.compile(r"(\s*)(#+)", re.ASCII)
BLOCKQUOTE_PATTERN = re.compile(r"(\s*)(>+)", re.ASCII)
LIST_PATTERN = re.compile(r"(\s*)([-+*])", re.ASCII)
ORDERED_LIST_PATTERN = re.compile(r"(\s*)(\d+)(\.)\s", re.ASCII)

ALWAYS_ESCAPED = frozenset("*_[]()`|{}+")
DIALECT_ESCAPED = frozenset("@:~")


class ProseEscaper(BaseEscaper):
    """
    Escapes prose (general content) line by line.

    Block markers (headings, quotes, list bullets, ordered list dots) are escaped only at the
    start of a line; inline syntax characters are escaped anywhere. A backslash is doubled and
    the character right after it is copied through untouched.
    """

    def escape(self, text: str) -> str:
        special_characters = frozenset(self._dialect.special_characters(self._context))
        lines = [self.__escape_line(line, special_characters) for line in split_lines(text)]
        return join_lines(lines)

    def __escape_line(self, line: str, special_characters: frozenset[str]) -> str:
        result: list[str] = []
        index = 0
        while index < len(line):
            char = line[index]

            if char == "\\":
                result.append("\\\\")
                result.append(line[index + 1:index + 2])
                index += 2
                continue

            if index == 0:
                line_start = self.__escape_line_start(line)
                if line_start:
                    escaped_marker, consumed = line_start
                    result.append(escaped_marker)
                    index = consumed
                    continue

            result.append(self.__escape_inline(line, index, special_characters))
            index += 1
        return "".join(result)

    @staticmethod
    def __escape_line_start(line: str) -> tuple[str, int] | None:
        for pattern in (HEADING_PATTERN, BLOCKQUOTE_PATTERN, LIST_PATTERN):
            match = pattern.match(line)
            if match:
                indentation, marker = match.groups()
                return f"{indentation}\\{marker}", match.end()
        match = ORDERED_LIST_PATTERN.match(line)
        if match:
            indentation, digits, dot = match.groups()
            return f"{indentation}{digits}\\{dot}", match.end(3)
        return None

    def __escape_inline(self, line: str, index: int, special_characters: frozenset[str]) -> str:
        char = line[index]
        if char in ALWAYS_ESCAPED:
            return f"\\{char}"
        if char == "!":
            # only images need it
            return "\\!" if line[index + 1:index + 2] == "[" else char
        if char == "#":
            # built-in dialects treat '#' as a heading marker only, third-party ones may want it everywhere
            if char in special_characters and self._dialect.name not in BUILT_IN_DIALECT_NAMES:
                return f"\\{char}"
            return char
        if char in DIALECT_ESCAPED and char in special_characters:
            return f"\\{char}"
        return char
