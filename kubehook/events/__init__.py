"""
Event models and the metadata accessor.
"""

from .models import Event, ResourceKind, ResourceMetadata, CLUSTER_SCOPED_KINDS
from .metadata import get_metadata

__all__ = [
    "Event",
    "ResourceKind",
    "ResourceMetadata",
    "CLUSTER_SCOPED_KINDS",
    "get_metadata",
]
