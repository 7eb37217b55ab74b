"""
Kind-specific payload extraction.
"""

from .kinds import (
    EMPTY_PAYLOAD,
    KIND_EXTRACTORS,
    BindingExtractor,
    DataExtractor,
    ExtractedPayload,
    KindExtractor,
    RulesExtractor,
    SpecExtractor,
    describe_binding,
    extract,
    supported_kinds,
)

__all__ = [
    "EMPTY_PAYLOAD",
    "KIND_EXTRACTORS",
    "BindingExtractor",
    "DataExtractor",
    "ExtractedPayload",
    "KindExtractor",
    "RulesExtractor",
    "SpecExtractor",
    "describe_binding",
    "extract",
    "supported_kinds",
]
