"""
Reference section detection.

Domain knowledge: heading shapes that start the bibliography in rendered
documents. Everything from the heading on is excluded from annotation so
reference entries like "[3] Smith, J. ..." are not highlighted as
citations. Patterns are tried in order; the first match wins.
"""
import re
from typing import List, NamedTuple, Optional, Pattern

_HEADING = r"(References|Bibliography|Works Cited)"

REFERENCE_HEADING_PATTERNS: List[Pattern] = [
    # <p><strong>References</strong></p>
    re.compile(r"<p[^>]*>\s*<strong[^>]*>\s*" + _HEADING + r"\s*</strong>\s*</p>", re.IGNORECASE),
    # <p><b>References</b></p>
    re.compile(r"<p[^>]*><b[^>]*>" + _HEADING + r"</b></p>", re.IGNORECASE),
    # <h2>References</h2>
    re.compile(r"<h[1-6][^>]*>" + _HEADING + r"</h[1-6]>", re.IGNORECASE),
    # <p><em>References</em></p>
    re.compile(r"<p[^>]*>\s*<em[^>]*>\s*" + _HEADING + r"\s*</em>\s*</p>", re.IGNORECASE),
    # <p>References</p>
    re.compile(r"<p[^>]*>\s*" + _HEADING + r"\s*</p>", re.IGNORECASE),
    # Plain-text line holding only the heading
    re.compile(r"^[ \t]*" + _HEADING + r"[ \t]*:?[ \t]*$", re.IGNORECASE | re.MULTILINE),
]


class SectionSplit(NamedTuple):
    """Document body split at the reference heading."""

    body: str
    reference_section: str
    heading: Optional[str]


def split_reference_section(markup: str) -> SectionSplit:
    """
    Split markup at the first reference-section heading.

    Args:
        markup: Document markup (HTML or plain text)

    Returns:
        SectionSplit with the body before the heading, the remainder
        (heading included) and the matched heading text, or the whole
        markup as body when no heading is found
    """
    for pattern in REFERENCE_HEADING_PATTERNS:
        match = pattern.search(markup)
        if match:
            start = match.start()
            return SectionSplit(markup[:start], markup[start:], match.group(0))
    return SectionSplit(markup, "", None)
