from features.escaping.escape_options import CodeBlockOptions, parse_options
from features.escaping.escapers.base_escaper import BaseEscaper
from features.escaping.escaping_context import EscapingContext
from util.functions import join_lines, longest_run, split_lines

BACKTICK = "`"
TILDE = "~"
MIN_FENCE_LENGTH = 3
INDENTATION = "    "


class CodeBlockEscaper(BaseEscaper):
    """
    Turns text into a code block. Options pick the mode, first match wins:
      - raw: the caller already placed the text inside a fence
      - within: same, the body of a fenced block is literal
      - use_fences: fenced block (with optional `language`)
      - otherwise: indented block
    """

    __options: CodeBlockOptions

    def escape(self, text: str) -> str:
        if self.__options.raw:
            return text
        if self.__options.within:
            # fence collisions are up to whoever picks the enclosing fence
            return text
        if self.__options.use_fences:
            return self.__fence(text, self.__options.language)
        return self.__indent(text)

    def _bind_context(self, context: EscapingContext):
        super()._bind_context(context)
        self.__options = parse_options(CodeBlockOptions, context)

    @staticmethod
    def __fence(text: str, language: str) -> str:
        fence_char = BACKTICK if longest_run(text, BACKTICK) <= longest_run(text, TILDE) else TILDE
        fence = fence_char * max(MIN_FENCE_LENGTH, longest_run(text, fence_char) + 1)
        body = text if text.endswith("\n") else f"{text}\n"
        return f"{fence}{language}\n{body}{fence}"

    @staticmethod
    def __indent(text: str) -> str:
        return join_lines([f"{INDENTATION}{line}" if line else line for line in split_lines(text)])
