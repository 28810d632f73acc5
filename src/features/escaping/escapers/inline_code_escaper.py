from features.escaping.escapers.base_escaper import BaseEscaper
from util.functions import longest_run

BACKTICK = "`"


class InlineCodeEscaper(BaseEscaper):
    """
    Wraps text into a code span whose delimiter is one backtick longer than the longest
    backtick run inside. Nothing inside is altered, so the dialect's mappings don't apply.
    """

    def escape(self, text: str) -> str:
        delimiter = BACKTICK * (longest_run(text, BACKTICK) + 1)
        if len(delimiter) == 1:
            return f"{delimiter}{text}{delimiter}"
        # a span touching the delimiter needs a space on both sides, CommonMark strips one of each
        padding = " " if text.startswith(BACKTICK) or text.endswith(BACKTICK) else ""
        return f"{delimiter}{padding}{text}{padding}{delimiter}"
