"""
Text Normalizer

Turns raw textarea input into comparable line tokens at three levels of
strictness: trailing whitespace only, collapsed whitespace, no whitespace.
"""

import re
from typing import List

_WS_RUN = re.compile(r"\s+")


def normalize_line(line: str) -> str:
    """Remove trailing whitespace; leading and internal spacing is kept."""
    return line.rstrip()


def normalize_lines(text: str) -> List[str]:
    """
    Split text into normalized lines.

    Blank lines at the start and end are dropped to absorb stray newlines
    from copy and paste. Blank lines inside the snippet are kept.
    """
    parts = [normalize_line(part) for part in text.split("\n")]

    start = 0
    end = len(parts)
    while start < end and parts[start] == "":
        start += 1
    while end > start and parts[end - 1] == "":
        end -= 1

    return parts[start:end]


def normalize_for_comparison(line: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WS_RUN.sub(" ", normalize_line(line)).strip()


def strip_all_whitespace(line: str) -> str:
    return _WS_RUN.sub("", line).strip()
