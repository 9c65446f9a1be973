"""
Bleach adapter for markup sanitization.

Implements SanitizerPort with an allow-list matching what the document
viewer renders. Inline styles are not allowed; citation states are carried
by classes only.
"""
import logging
from typing import Dict, List, Optional

import bleach

from citemark.core.annotation.click_routing import REF_ATTRIBUTE
from citemark.core.exceptions import SanitizerError
from citemark.core.ports.sanitizer import SanitizerPort

logger = logging.getLogger(__name__)

ALLOWED_TAGS = [
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br', 'hr',
    'strong', 'b', 'em', 'i', 'u', 's', 'del', 'ins', 'sup', 'sub', 'span', 'mark',
    'ul', 'ol', 'li',
    'table', 'thead', 'tbody', 'tfoot', 'tr', 'th', 'td', 'caption',
    'blockquote', 'pre', 'code',
    'a', 'img',
    'figure', 'figcaption',
]

ALLOWED_ATTRIBUTES: Dict[str, List[str]] = {
    'a': ['href'],
    'img': ['src', 'alt', 'width', 'height'],
    'td': ['colspan', 'rowspan', 'scope'],
    'th': ['colspan', 'rowspan', 'scope'],
    '*': ['class', 'id', 'title', REF_ATTRIBUTE],
}

ALLOWED_PROTOCOLS = ['http', 'https', 'mailto']


class BleachSanitizer(SanitizerPort):
    """
    bleach implementation of SanitizerPort.

    Disallowed tags are stripped (their text content is kept, escaped).
    """

    def __init__(
        self,
        tags: Optional[List[str]] = None,
        attributes: Optional[Dict[str, List[str]]] = None,
        protocols: Optional[List[str]] = None,
    ):
        """
        Initialize the sanitizer.

        Args:
            tags: Allowed tags (default: ALLOWED_TAGS)
            attributes: Allowed attributes per tag (default: ALLOWED_ATTRIBUTES)
            protocols: Allowed URL schemes (default: ALLOWED_PROTOCOLS)
        """
        self.tags = tags or ALLOWED_TAGS
        self.attributes = attributes or ALLOWED_ATTRIBUTES
        self.protocols = protocols or ALLOWED_PROTOCOLS

    def sanitize(self, markup: str) -> str:
        """Clean markup against the allow-list."""
        if not markup:
            return ""
        try:
            return bleach.clean(
                markup,
                tags=self.tags,
                attributes=self.attributes,
                protocols=self.protocols,
                strip=True,
            )
        except Exception as e:
            logger.error(f"Sanitization failed: {e}")
            raise SanitizerError(f"Failed to sanitize markup: {e}") from e


# Singleton instance
_sanitizer: Optional[BleachSanitizer] = None


def get_sanitizer() -> BleachSanitizer:
    """Get or create the shared sanitizer instance."""
    global _sanitizer
    if _sanitizer is None:
        _sanitizer = BleachSanitizer()
    return _sanitizer
