"""
Validity classification for in-text citations.

Combines range expansion, author-year parsing, the resolved change record
and the current reference numbers into one of six mutually exclusive
states. States are evaluated in priority order; the first that applies
wins. A change in flight is checked before orphan detection so that a
citation being renumbered keeps its transition badge.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Set

from citemark.core.annotation.author_year import AuthorYearMatch, parse_author_year
from citemark.core.annotation.range_expander import expand_citation_range
from citemark.core.models.citation import ChangeRecord, Citation, ReferenceEntry

logger = logging.getLogger(__name__)


class ClassificationState(str, Enum):
    """Markup state of a citation, in priority order."""

    CHANGED = "changed"
    ORPHANED = "orphaned"
    UNMATCHED = "unmatched"
    MATCHED_NUMBER = "matched-number"
    MATCHED_AUTHOR_YEAR = "matched-author-year"
    DEFAULT = "default"


@dataclass
class Classification:
    """Classification result for one citation."""

    state: ClassificationState
    citation: Citation
    search_text: str
    alternate_texts: List[str] = field(default_factory=list)
    change: Optional[ChangeRecord] = None
    cited_numbers: List[int] = field(default_factory=list)
    valid_numbers: List[int] = field(default_factory=list)
    deleted_numbers: List[int] = field(default_factory=list)
    author_year: List[AuthorYearMatch] = field(default_factory=list)

    @property
    def author_year_matches(self) -> List[AuthorYearMatch]:
        """Author-year segments that resolved to a reference."""
        return [m for m in self.author_year if m.ref_number is not None]

    @property
    def search_texts(self) -> List[str]:
        """Primary search text followed by alternates, deduplicated."""
        texts = []
        for text in [self.search_text] + self.alternate_texts:
            if text and text not in texts:
                texts.append(text)
        return texts


class ValidityClassifier:
    """
    Classify citations against one reference list snapshot.

    Usage:
        classifier = ValidityClassifier(references)
        result = classifier.classify(citation, change)
        result.state  # ClassificationState.MATCHED_NUMBER
    """

    def __init__(self, references: Optional[Sequence[ReferenceEntry]] = None):
        """
        Initialize with the current reference list.

        Args:
            references: ReferenceEntry snapshot (may be empty or None)
        """
        self.references: List[ReferenceEntry] = list(references or [])
        self.existing_numbers: Set[int] = {r.number for r in self.references}

    def classify(
        self,
        citation: Citation,
        change: Optional[ChangeRecord] = None,
    ) -> Classification:
        """
        Decide the markup state for a citation.

        Args:
            citation: Citation to classify
            change: ChangeRecord resolved for this citation, if any

        Returns:
            Classification with state and search texts
        """
        cited = expand_citation_range(citation.raw_text)
        valid = [n for n in cited if n in self.existing_numbers]
        deleted = [n for n in cited if n not in self.existing_numbers]

        result = Classification(
            state=ClassificationState.DEFAULT,
            citation=citation,
            search_text=citation.raw_text,
            change=change,
            cited_numbers=cited,
            valid_numbers=valid,
            deleted_numbers=deleted,
        )

        if change is not None and change.is_text_change:
            result.state = ClassificationState.CHANGED
            if citation.raw_text == change.new_text:
                result.search_text = change.new_text
                result.alternate_texts = [change.old_text]
            else:
                result.search_text = change.old_text
                result.alternate_texts = [change.new_text]
            return result

        if self._is_orphaned(citation, change, deleted):
            result.state = ClassificationState.ORPHANED
            if change is not None and change.old_text:
                result.search_text = change.old_text
            logger.debug(f"Orphaned citation {citation.raw_text!r}, deleted numbers {deleted}")
            return result

        if not self.existing_numbers:
            # No references to compare against
            return result

        ref_num = citation.reference_number
        if ref_num is not None or valid:
            result.state = ClassificationState.MATCHED_NUMBER
            return result

        result.author_year = parse_author_year(citation.raw_text, self.references)
        if result.author_year_matches:
            result.state = ClassificationState.MATCHED_AUTHOR_YEAR
            return result

        result.state = ClassificationState.UNMATCHED
        return result

    def _is_orphaned(
        self,
        citation: Citation,
        change: Optional[ChangeRecord],
        deleted_numbers: List[int],
    ) -> bool:
        """Check every orphan indicator; reference checks need a non-empty list."""
        if citation.is_orphaned:
            return True
        if change is not None and change.is_deletion:
            return True
        if not self.existing_numbers:
            return False
        ref_num = citation.reference_number
        if ref_num is not None and ref_num not in self.existing_numbers:
            return True
        return bool(deleted_numbers)
