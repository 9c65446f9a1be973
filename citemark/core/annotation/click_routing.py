"""
Click-routing contract between annotated markup and the host viewer.

Each clickable unit is a span with class "citation-link" and a "data-ref"
attribute holding the reference number. The host scrolls to the element
with id "ref-N" (or "reference-N") and may notify a selection callback.
Legacy markup put data-ref directly on the <mark> element; both shapes
route the same way.
"""
from typing import List, Mapping, Optional

LINK_CLASS = "citation-link"
REF_ATTRIBUTE = "data-ref"

ANCHOR_ID_FORMATS = ("ref-{number}", "reference-{number}")


def resolve_click_target(tag: str, attributes: Mapping[str, str]) -> Optional[int]:
    """
    Resolve the reference number a clicked element routes to.

    Args:
        tag: Element tag name (case-insensitive)
        attributes: Element attributes

    Returns:
        Reference number, or None when the element is not clickable
    """
    if REF_ATTRIBUTE not in attributes:
        return None

    classes = (attributes.get("class") or "").split()
    if LINK_CLASS not in classes and tag.lower() != "mark":
        return None

    try:
        number = int(attributes[REF_ATTRIBUTE])
    except (TypeError, ValueError):
        return None
    return number or None


def reference_anchor_ids(number: int) -> List[str]:
    """
    Element ids to try, in order, when scrolling to a reference.

    Args:
        number: Reference number

    Returns:
        Candidate element ids
    """
    return [fmt.format(number=number) for fmt in ANCHOR_ID_FORMATS]
