"""
ChangeResolver - Find the pending change record for a citation.

A citation's displayed text may reflect either the pre- or post-change
state depending on whether the surrounding markup has been regenerated,
so lookup falls back from identity to resulting text to old text.

Usage:
    from citemark.core.annotation.change_resolver import ChangeResolver

    resolver = ChangeResolver(change_records)
    change = resolver.resolve(citation)  # ChangeRecord or None
"""
import logging
from typing import Dict, List, Optional, Sequence

from citemark.core.models.citation import ChangeRecord, Citation

logger = logging.getLogger(__name__)


class ChangeResolver:
    """
    Resolve the most relevant ChangeRecord for a citation.

    Lookup order (first hit wins):
    1. citation_id equals citation.id
    2. new_text equals citation.raw_text
    3. old_text equals citation.raw_text
    """

    def __init__(self, changes: Optional[Sequence[ChangeRecord]] = None):
        """
        Initialize with the pending change records.

        Args:
            changes: ChangeRecords for this render pass (may be None)
        """
        self._changes: List[ChangeRecord] = list(changes or [])
        # First record wins within each tier, matching list order
        self._by_id: Dict[str, ChangeRecord] = {}
        self._by_new_text: Dict[str, ChangeRecord] = {}
        self._by_old_text: Dict[str, ChangeRecord] = {}
        for change in self._changes:
            if change.citation_id:
                self._by_id.setdefault(change.citation_id, change)
            if change.new_text is not None:
                self._by_new_text.setdefault(change.new_text, change)
            if change.old_text is not None:
                self._by_old_text.setdefault(change.old_text, change)

    @property
    def changes(self) -> List[ChangeRecord]:
        """All change records in supplied order."""
        return list(self._changes)

    def resolve(self, citation: Citation) -> Optional[ChangeRecord]:
        """
        Resolve the change record for a citation.

        Args:
            citation: Citation to look up

        Returns:
            Matching ChangeRecord or None
        """
        if not self._changes:
            return None

        if citation.id and citation.id in self._by_id:
            logger.debug(f"Change for {citation.raw_text!r} matched by citation id")
            return self._by_id[citation.id]

        if citation.raw_text in self._by_new_text:
            logger.debug(f"Change for {citation.raw_text!r} matched by new text")
            return self._by_new_text[citation.raw_text]

        if citation.raw_text in self._by_old_text:
            logger.debug(f"Change for {citation.raw_text!r} matched by old text")
            return self._by_old_text[citation.raw_text]

        return None

    def deletions(self) -> List[ChangeRecord]:
        """
        Change records describing deleted references.

        Returns:
            Records of type deleted, or with no new number and unchanged text
        """
        return [c for c in self._changes if c.is_deletion]
