"""Sanitizer port interface.

Defines the contract for cleaning annotated markup before it reaches a
browser. Core code depends only on this abstraction, not on a specific
HTML cleaning library.
"""
from abc import ABC, abstractmethod


class SanitizerPort(ABC):
    """Abstract interface for HTML sanitization.

    Implementations: BleachSanitizer
    """

    @abstractmethod
    def sanitize(self, markup: str) -> str:
        """Remove disallowed tags and attributes from markup.

        Must keep the citation wrappers intact: mark and span elements with
        class, title and data-ref attributes.

        Args:
            markup: Annotated HTML

        Returns:
            Sanitized HTML
        """
        pass
