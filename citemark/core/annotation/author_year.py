"""
Author-year (APA style) citation parsing.

Handles:
- "Smith, 2020" / "Smith 2020" / "Smith (2020)"
- "Marcus & Davis, 2019" / "Marcus and Davis, 2019"
- "Brown et al., 2020"
- Multiple citations in one parenthetical: "(Brown et al., 2020; Bommasani et al., 2021)"
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from citemark.core.models.citation import ReferenceEntry

logger = logging.getLogger(__name__)

_NAME = r"([A-Z][a-zA-Z'-]+)"

# Ordered: first pattern that matches a segment wins
AUTHOR_YEAR_PATTERNS: List[Tuple[str, Pattern]] = [
    ("two_authors", re.compile(_NAME + r"(?:\s*&\s*|\s+and\s+)" + _NAME + r",?\s*(\d{4})", re.IGNORECASE)),
    ("et_al", re.compile(_NAME + r"\s+et\s+al\.?,?\s*(\d{4})", re.IGNORECASE)),
    ("single", re.compile(_NAME + r",?\s*(?:\((\d{4})\)|(\d{4}))", re.IGNORECASE)),
]

SEGMENT_SEPARATOR = re.compile(r"\s*;\s*")


@dataclass(frozen=True)
class AuthorYearMatch:
    """One author-year segment and the reference it resolved to."""

    author: str
    year: str
    ref_number: Optional[int]
    matched_span: str


def parse_author_year(
    text: str,
    references: Sequence[ReferenceEntry],
) -> List[AuthorYearMatch]:
    """
    Parse author-year segments and match them against references.

    A reference matches when its year equals the cited year and at least
    one cited last name equals one of its derived last names
    (case-insensitive). The first matching reference in list order wins.

    Args:
        text: Citation raw text
        references: Current reference list snapshot

    Returns:
        One AuthorYearMatch per parsed segment (ref_number None if unmatched)
    """
    if not text:
        return []

    body = text.strip()
    if body.startswith("(") and body.endswith(")"):
        body = body[1:-1]
    results = []

    for segment in SEGMENT_SEPARATOR.split(body):
        parsed = _parse_segment(segment)
        if parsed is None:
            continue
        names, year, span = parsed
        ref = _find_reference(names, year, references)
        results.append(AuthorYearMatch(
            author=names[0],
            year=year,
            ref_number=ref.number if ref else None,
            matched_span=span,
        ))

    return results


def _parse_segment(segment: str) -> Optional[Tuple[List[str], str, str]]:
    """Return (candidate last names, year, matched span) for one segment."""
    for kind, pattern in AUTHOR_YEAR_PATTERNS:
        match = pattern.search(segment)
        if not match:
            continue
        groups = match.groups()
        names = list(groups[:2]) if kind == "two_authors" else [groups[0]]
        # The single-author pattern has separate groups for "2020" and "(2020)"
        year = [g for g in groups[len(names):] if g][0]
        return names, year, match.group(0).strip()
    return None


def _find_reference(
    names: List[str],
    year: str,
    references: Sequence[ReferenceEntry],
) -> Optional[ReferenceEntry]:
    """Find the first reference sharing the year and a last name."""
    wanted = {name.lower() for name in names}
    for ref in references:
        if ref.year != year:
            continue
        if wanted.intersection(ref.last_names()):
            return ref
    logger.debug(f"No reference for {names} ({year})")
    return None
