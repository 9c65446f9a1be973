"""Domain models and entities.

Citation, reference and change-record snapshots consumed by the annotator.
"""

from citemark.core.models.citation import (
    ChangeRecord,
    ChangeType,
    Citation,
    ReferenceEntry,
)

__all__ = [
    "Citation",
    "ReferenceEntry",
    "ChangeRecord",
    "ChangeType",
]
