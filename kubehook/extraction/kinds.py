# kubehook/extraction/kinds.py
"""
Kind extractor - normalizes old/new resource objects into payloads.

Resource kinds have no common "spec" shape, so each kind is mapped to
one extractor variant:
- SpecExtractor:    the desired-state `spec` (workloads, networking, ...)
- DataExtractor:    the `data` map (ConfigMap, Secret)
- RulesExtractor:   the permission `rules` (Role, ClusterRole)
- BindingExtractor: a summary of `subjects` + `roleRef` (bindings)

New kinds are added by extending ResourceKind and KIND_EXTRACTORS.
Extraction never raises: a missing or mistyped object degrades to an
empty payload.
"""

from typing import Any, Dict, List, Mapping, Tuple
from dataclasses import dataclass

from ..events.metadata import get_metadata
from ..events.models import Event, ResourceKind
from ..logging import get_logger

logger = get_logger(__name__)

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class ExtractedPayload:
    """Normalized view of one resource object."""
    name: str = ""
    namespace: str = ""
    spec: Any = None

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.namespace and self.spec is None


EMPTY_PAYLOAD = ExtractedPayload()


class KindExtractor:
    """Base extractor: identity from metadata, spec-payload from a subclass."""

    def normalize(self, kind: ResourceKind, obj: Mapping[str, Any]) -> ExtractedPayload:
        meta = get_metadata(obj)
        return ExtractedPayload(
            name=meta.name,
            namespace=meta.namespace,
            spec=self.spec_payload(kind, obj),
        )

    def spec_payload(self, kind: ResourceKind, obj: Mapping[str, Any]) -> Any:
        raise NotImplementedError


class SpecExtractor(KindExtractor):
    """Desired-state spec."""

    def spec_payload(self, kind: ResourceKind, obj: Mapping[str, Any]) -> Any:
        return obj.get("spec")


class DataExtractor(KindExtractor):
    """
    Data map of config-like kinds.

    ConfigMap binaryData keys are merged in. With redact_secrets set,
    Secret values are masked and only the keys are kept.
    """

    def __init__(self, redact_secrets: bool = False):
        self.redact_secrets = redact_secrets

    def spec_payload(self, kind: ResourceKind, obj: Mapping[str, Any]) -> Any:
        data = obj.get("data")
        if kind == ResourceKind.CONFIG_MAP and isinstance(obj.get("binaryData"), Mapping):
            data = {**(data or {}), **obj["binaryData"]}

        if kind == ResourceKind.SECRET and self.redact_secrets and isinstance(data, Mapping):
            return {key: REDACTED for key in data}
        return data


class RulesExtractor(KindExtractor):
    """Permission rules of role-like kinds."""

    def spec_payload(self, kind: ResourceKind, obj: Mapping[str, Any]) -> Any:
        return obj.get("rules")


class BindingExtractor(KindExtractor):
    """Composite description of a binding's subjects and role reference."""

    def spec_payload(self, kind: ResourceKind, obj: Mapping[str, Any]) -> Any:
        return describe_binding(obj.get("subjects"), obj.get("roleRef"))


def _describe_subject(subject: Any) -> str:
    if not isinstance(subject, Mapping):
        return str(subject)
    parts = [subject.get("kind"), subject.get("namespace"), subject.get("name")]
    return "/".join(str(p) for p in parts if p)


def describe_binding(subjects: Any, role_ref: Any) -> str:
    """
    Render subjects and roleRef as one line.

    Example:
        "Subjects: User/alice, ServiceAccount/ci/deployer; RoleRef: ClusterRole/admin"
    """
    if isinstance(subjects, list) and subjects:
        subjects_text = ", ".join(_describe_subject(s) for s in subjects)
    else:
        subjects_text = "none"

    if isinstance(role_ref, Mapping):
        role_text = "/".join(
            str(p) for p in (role_ref.get("kind"), role_ref.get("name")) if p
        ) or "none"
    else:
        role_text = "none"

    return f"Subjects: {subjects_text}; RoleRef: {role_text}"


_SPEC = SpecExtractor()
_DATA = DataExtractor()
_RULES = RulesExtractor()
_BINDING = BindingExtractor()

KIND_EXTRACTORS: Dict[ResourceKind, KindExtractor] = {
    ResourceKind.DEPLOYMENT: _SPEC,
    ResourceKind.DAEMON_SET: _SPEC,
    ResourceKind.STATEFUL_SET: _SPEC,
    ResourceKind.REPLICA_SET: _SPEC,
    ResourceKind.POD: _SPEC,
    ResourceKind.JOB: _SPEC,
    ResourceKind.CRON_JOB: _SPEC,
    ResourceKind.SERVICE: _SPEC,
    ResourceKind.INGRESS: _SPEC,
    ResourceKind.HORIZONTAL_POD_AUTOSCALER: _SPEC,
    ResourceKind.PERSISTENT_VOLUME: _SPEC,
    ResourceKind.PERSISTENT_VOLUME_CLAIM: _SPEC,
    ResourceKind.NAMESPACE: _SPEC,
    ResourceKind.SERVICE_ACCOUNT: _SPEC,  # no spec; payload stays None
    ResourceKind.CONFIG_MAP: _DATA,
    ResourceKind.SECRET: _DATA,
    ResourceKind.ROLE: _RULES,
    ResourceKind.CLUSTER_ROLE: _RULES,
    ResourceKind.ROLE_BINDING: _BINDING,
    ResourceKind.CLUSTER_ROLE_BINDING: _BINDING,
}


def _extract_one(
    kind: ResourceKind,
    extractor: KindExtractor,
    obj: Any,
    side: str,
) -> ExtractedPayload:
    if obj is None:
        return EMPTY_PAYLOAD

    if not isinstance(obj, Mapping):
        logger.warning(
            "extraction_mismatch",
            kind=kind.value,
            side=side,
            got=type(obj).__name__,
        )
        return EMPTY_PAYLOAD

    declared = obj.get("kind")
    if declared and declared != kind.value:
        logger.warning(
            "extraction_mismatch",
            kind=kind.value,
            side=side,
            got=str(declared),
        )
        return EMPTY_PAYLOAD

    try:
        return extractor.normalize(kind, obj)
    except Exception as e:
        logger.warning(
            "extraction_failed",
            kind=kind.value,
            side=side,
            error=str(e),
        )
        return EMPTY_PAYLOAD


def extract(
    event: Event,
    redact_secrets: bool = False,
) -> Tuple[ExtractedPayload, ExtractedPayload]:
    """
    Extract (current, previous) payloads from an event.

    Args:
        event: Observed change
        redact_secrets: Mask Secret values in the data payload

    Returns:
        Tuple of (current, previous); either may be EMPTY_PAYLOAD
    """
    kind = event.resource_kind
    if kind is None:
        logger.info("unhandled_kind", kind=event.kind, name=event.name)
        return EMPTY_PAYLOAD, EMPTY_PAYLOAD

    extractor = KIND_EXTRACTORS[kind]
    if redact_secrets and kind == ResourceKind.SECRET:
        extractor = DataExtractor(redact_secrets=True)

    current = _extract_one(kind, extractor, event.new_object, "current")
    previous = _extract_one(kind, extractor, event.old_object, "previous")
    return current, previous


def supported_kinds() -> List[str]:
    """Kind strings with a registered extractor."""
    return sorted(kind.value for kind in KIND_EXTRACTORS)
