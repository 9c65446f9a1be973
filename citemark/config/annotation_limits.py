"""
Citation annotation limits and constants.

Centralized configuration for numeric bounds and placeholder tokens
used across the annotation pipeline.
"""

# Range expansion limits
MAX_RANGE_SPAN = 50
"""Largest accepted (end - start) for a citation range like [3-5] (malformed input guard)"""

MAX_CITATION_NUMBER = 1000
"""Standalone numbers must fall strictly between 0 and this value to count as citations"""

# Placeholder substitution
PLACEHOLDER_OPEN = "\ue000"
"""Private-use character opening a placeholder token (repeated until absent from the body)"""

PLACEHOLDER_CLOSE = "\ue001"
"""Private-use character closing a placeholder token"""
