"""
Significance filtering for resource change events.
"""

from .significance import (
    DEFAULT_SUPPRESSIONS,
    Suppression,
    is_suppressed,
    parse_suppressions,
    should_notify,
)

__all__ = [
    "DEFAULT_SUPPRESSIONS",
    "Suppression",
    "is_suppressed",
    "parse_suppressions",
    "should_notify",
]
