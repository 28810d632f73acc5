import re


def longest_run(text: str, char: str) -> int:
    """Length of the longest run of consecutive `char` in `text`, 0 when absent."""
    runs = re.findall(f"{re.escape(char)}+", text)
    return max((len(run) for run in runs), default = 0)


def split_lines(text: str) -> list[str]:
    # only "\n" separates lines, so "\r" stays attached to its line and "a\n" yields a trailing ""
    return text.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)
