# kubehook/filtering/significance.py
"""
Significance filter - decides whether a change is worth a notification.

Order of evaluation:
1. Hard suppressions by (namespace, kind)
2. Generation comparison for kinds that track a generation
3. resourceVersion comparison for kinds that don't (generation == 0)

Create events (no old object) pass unless suppressed.

Generation only moves on spec edits, so status-only churn (scaling,
rollout progress) is dropped for workload kinds.
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from ..events.metadata import get_metadata
from ..events.models import Event
from ..logging import get_logger

logger = get_logger(__name__)

Suppression = Tuple[str, str]  # (namespace, kind)

DEFAULT_SUPPRESSIONS: FrozenSet[Suppression] = frozenset({
    ("kube-system", "ConfigMap"),
    ("gke-cluster-dataproc-pgv2-poc", "ConfigMap"),
})


def parse_suppressions(raw: Optional[str]) -> Optional[FrozenSet[Suppression]]:
    """
    Parse "namespace/Kind,namespace/Kind" into a suppression set.

    Returns None for a blank value so callers keep their default.

    Raises:
        ValueError: If an entry is not of the form namespace/Kind
    """
    if raw is None or not raw.strip():
        return None

    pairs = set()
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        namespace, sep, kind = entry.partition("/")
        if not sep or not namespace or not kind:
            raise ValueError(f"Invalid suppression entry: {entry!r} (expected namespace/Kind)")
        pairs.add((namespace.strip(), kind.strip()))
    return frozenset(pairs)


def is_suppressed(
    event: Event,
    suppressions: Iterable[Suppression] = DEFAULT_SUPPRESSIONS,
) -> bool:
    """Check the event against the static (namespace, kind) exclusion list."""
    namespace = get_metadata(event.new_object).namespace or event.namespace
    return (namespace, event.kind) in set(suppressions)


def should_notify(
    event: Event,
    suppressions: Iterable[Suppression] = DEFAULT_SUPPRESSIONS,
) -> bool:
    """
    Decide whether an event should produce a notification.

    Args:
        event: Observed change
        suppressions: (namespace, kind) pairs that never notify

    Returns:
        True if the change is significant
    """
    if is_suppressed(event, suppressions):
        logger.debug("event_suppressed", kind=event.kind, name=event.name)
        return False

    # First sighting: nothing to compare against
    if event.old_object is None:
        return True

    current = get_metadata(event.new_object)
    previous = get_metadata(event.old_object)

    if current.generation == 0:
        return current.resource_version != previous.resource_version
    return current.generation != previous.generation
