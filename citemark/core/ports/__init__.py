"""Abstract interfaces for external dependencies."""
from citemark.core.ports.sanitizer import SanitizerPort

__all__ = [
    "SanitizerPort",
]
