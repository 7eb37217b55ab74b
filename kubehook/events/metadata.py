# kubehook/events/metadata.py
"""
Metadata accessor for resource objects.
"""

from typing import Any, Mapping

from .models import ResourceMetadata


def get_metadata(obj: Any) -> ResourceMetadata:
    """
    Read name, namespace, labels, generation and resourceVersion.

    Args:
        obj: Resource manifest, or None (old object on a create event)

    Returns:
        ResourceMetadata, zero-valued if obj is absent or not a mapping
    """
    if not isinstance(obj, Mapping):
        return ResourceMetadata()

    meta = obj.get("metadata")
    if not isinstance(meta, Mapping):
        return ResourceMetadata()

    labels = meta.get("labels")
    if not isinstance(labels, Mapping):
        labels = {}

    generation = meta.get("generation")
    # bool is an int subclass; never a real generation
    if not isinstance(generation, int) or isinstance(generation, bool):
        generation = 0

    return ResourceMetadata(
        name=str(meta.get("name") or ""),
        namespace=str(meta.get("namespace") or ""),
        labels={str(k): str(v) for k, v in labels.items()},
        generation=generation,
        resource_version=str(meta.get("resourceVersion") or ""),
    )
