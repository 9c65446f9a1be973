"""
Citation data models for the annotation engine.

Three independent snapshots supplied by upstream collaborators:
- Citation: an in-text marker found by the detection service
- ReferenceEntry: one bibliography item with its display number
- ChangeRecord: how a citation changed since the last stable render

All models are read-only; the engine derives classifications from them
and never mutates them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class ChangeType(str, Enum):
    """Kind of transition described by a ChangeRecord."""

    STYLE = "style"
    RENUMBER = "renumber"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Citation:
    """
    In-text citation as detected upstream.

    raw_text is the exact substring expected in the markup. Offsets index
    into the plain-text rendering and are only used as a last-resort
    search fallback.
    """

    id: str
    raw_text: str

    # Position in the plain-text rendering
    paragraph_index: Optional[int] = None
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None

    # Numeric identity
    citation_number: Optional[int] = None
    reference_number: Optional[int] = None

    is_orphaned: bool = False

    def plain_text_span(self, full_text: Optional[str]) -> Optional[str]:
        """
        Extract this citation's text from the plain-text rendering.

        Args:
            full_text: Plain-text rendering the offsets refer to

        Returns:
            The substring at [start_offset:end_offset], or None when the
            offsets are missing or out of order
        """
        if not full_text:
            return None
        start, end = self.start_offset, self.end_offset
        if start is None or end is None or start < 0 or end <= start:
            return None
        return full_text[start:end] or None


@dataclass(frozen=True)
class ReferenceEntry:
    """Bibliography entry with a 1-indexed display number."""

    id: str
    number: int
    authors: Tuple[str, ...] = ()
    year: Optional[str] = None

    def last_names(self) -> List[str]:
        """
        Derive lowercase last names for author matching.

        "Marcus, Gary" -> "marcus" (text before the first comma),
        "Gary Marcus" -> "marcus" (final whitespace-delimited token).
        """
        names = []
        for author in self.authors:
            if "," in author:
                name = author.split(",")[0].strip()
            else:
                parts = author.split()
                name = parts[-1].strip() if parts else ""
            if name:
                names.append(name.lower())
        return names


@dataclass(frozen=True)
class ChangeRecord:
    """
    Transition of one citation between two render passes.

    new_number is None when the target reference was deleted.
    """

    citation_id: str = ""
    old_number: Optional[int] = None
    new_number: Optional[int] = None
    old_text: Optional[str] = None
    new_text: Optional[str] = None
    change_type: ChangeType = ChangeType.UNCHANGED

    @property
    def is_text_change(self) -> bool:
        """True when both texts are known and differ (style or renumber in flight)."""
        return bool(self.old_text and self.new_text and self.old_text != self.new_text)

    @property
    def is_deletion(self) -> bool:
        """True when the record describes a citation whose reference was deleted."""
        if self.change_type == ChangeType.DELETED:
            return True
        return self.new_number is None and self.old_text == self.new_text

    @property
    def display_text(self) -> str:
        """Text that still shows in the markup for a deletion record."""
        return self.old_text or self.new_text or ""
