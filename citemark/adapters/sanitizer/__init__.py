"""HTML sanitizer adapters."""
from citemark.adapters.sanitizer.bleach_sanitizer import BleachSanitizer, get_sanitizer

__all__ = [
    "BleachSanitizer",
    "get_sanitizer",
]
