"""
Expand bracket-style citation text into explicit reference numbers.

"[3-5]"   -> [3, 4, 5]
"[1,2,3]" -> [1, 2, 3]
"[3–5,8]" -> [3, 4, 5, 8]
"""
import re
from typing import List

from citemark.config.annotation_limits import MAX_CITATION_NUMBER, MAX_RANGE_SPAN

# Hyphen, en-dash and em-dash between two integers
RANGE_PATTERN = re.compile(r"(\d+)\s*[-–—]\s*(\d+)")
NUMBER_PATTERN = re.compile(r"\d+")

# Whole-text bracketed numeric citation, e.g. "[1, 3-5]"
BRACKET_PATTERN = re.compile(r"^\[([^\]]+)\]$")


def expand_citation_range(text: str) -> List[int]:
    """
    Extract every reference number cited by a citation text.

    Ranges are expanded first; spans that are reversed or wider than
    MAX_RANGE_SPAN are dropped. Standalone numbers outside
    (0, MAX_CITATION_NUMBER) are treated as noise (years, page numbers).

    Args:
        text: Citation raw text

    Returns:
        Sorted, deduplicated list of numbers; empty if not number-like
    """
    if not text:
        return []

    numbers = set()
    for match in RANGE_PATTERN.finditer(text):
        start, end = int(match.group(1)), int(match.group(2))
        if end > start and end - start < MAX_RANGE_SPAN:
            numbers.update(range(start, end + 1))

    remainder = RANGE_PATTERN.sub(" ", text)
    for match in NUMBER_PATTERN.finditer(remainder):
        num = int(match.group(0))
        if 0 < num < MAX_CITATION_NUMBER:
            numbers.add(num)

    return sorted(numbers)


def bracket_numbers(text: str) -> List[int]:
    """
    Numbers of a citation written entirely in brackets.

    Args:
        text: Citation raw text

    Returns:
        Expanded numbers for "[...]" text, empty list for any other shape
    """
    match = BRACKET_PATTERN.match(text or "")
    if not match:
        return []
    return expand_citation_range(match.group(1))
