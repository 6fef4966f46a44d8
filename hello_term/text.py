"""
Row formatting for the report box.

All widths are counted in extended grapheme clusters so that emoji and
accented text pad the same way plain ASCII does.
"""

from typing import List

import regex

BODY_WIDTH = 45
HEADER_WIDTH = 55
TRUNCATE_AFTER = 41
TRUNCATE_KEEP = 37
ELLIPSIS = "..."

_GRAPHEME = regex.compile(r"\X")


def graphemes(text: str) -> List[str]:
    """Split text into user-perceived characters"""
    return _GRAPHEME.findall(text)


def visible_length(text: str) -> int:
    return len(graphemes(text))


def truncate(text: str, limit: int = TRUNCATE_AFTER, keep: int = TRUNCATE_KEEP) -> str:
    """Shorten text longer than ``limit`` to ``keep`` characters plus an ellipsis"""
    clusters = graphemes(text)
    if len(clusters) <= limit:
        return text
    return "".join(clusters[:keep]) + ELLIPSIS


def upper_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def format_row(text: str, width: int = BODY_WIDTH, fill: str = " ", border: str = "│") -> str:
    """
    Pad text to ``width`` characters and close it with a border glyph.

    Text already wider than ``width`` is left as is and gets no padding.
    """
    padding = max(0, width - visible_length(text))
    return f"{text}{fill * padding}{border}"


def format_header(hostname: str) -> str:
    # Width includes the colour escape codes around the hostname
    return format_row(f"╭─\x1b[32m{hostname}\x1b[0m", HEADER_WIDTH, fill="─", border="╮")


def format_footer() -> str:
    return "╰" + "─" * BODY_WIDTH + "╯"
