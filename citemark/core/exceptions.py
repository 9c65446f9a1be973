"""Core domain exceptions.

All exceptions raised by core logic inherit from CoreError.
Adapters catch provider-specific errors and re-raise as these.
"""


class CoreError(Exception):
    """Base for all core domain errors."""
    pass


class ConfigurationError(CoreError):
    """Markup template configuration is missing or malformed."""
    pass


class SanitizerError(CoreError):
    """Markup sanitization failed."""
    pass
