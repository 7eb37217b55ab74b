# kubehook/webhooks/builder.py
"""
Message builder - assembles the outbound webhook record for an event.

The record combines the event's text fields, labels of the triggering
object, the extracted old/new payloads, and two static lookups keyed
by resource kind: who acts on the kind, and how risky a change is.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ..events.metadata import get_metadata
from ..events.models import Event, ResourceKind
from ..extraction.kinds import ExtractedPayload, extract


class RiskLevel(str, Enum):
    """Severity attached to a change notification."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_ACTION_BY = "kubernetes-controller"
DEFAULT_RISK_LEVEL = RiskLevel.MEDIUM

ACTION_BY: Dict[ResourceKind, str] = {
    ResourceKind.DEPLOYMENT: "deployment-controller",
    ResourceKind.DAEMON_SET: "daemonset-controller",
    ResourceKind.STATEFUL_SET: "statefulset-controller",
    ResourceKind.REPLICA_SET: "replicaset-controller",
    ResourceKind.POD: "kubelet",
    ResourceKind.JOB: "job-controller",
    ResourceKind.CRON_JOB: "cronjob-controller",
    ResourceKind.SERVICE: "service-controller",
    ResourceKind.INGRESS: "ingress-controller",
    ResourceKind.HORIZONTAL_POD_AUTOSCALER: "horizontal-pod-autoscaler",
    ResourceKind.PERSISTENT_VOLUME: "persistentvolume-controller",
    ResourceKind.PERSISTENT_VOLUME_CLAIM: "persistentvolume-controller",
    ResourceKind.CONFIG_MAP: "configmap-controller",
    ResourceKind.SECRET: "secret-controller",
    ResourceKind.SERVICE_ACCOUNT: "serviceaccount-controller",
    ResourceKind.NAMESPACE: "namespace-controller",
    ResourceKind.ROLE: "rbac-controller",
    ResourceKind.ROLE_BINDING: "rbac-controller",
    ResourceKind.CLUSTER_ROLE: "rbac-controller",
    ResourceKind.CLUSTER_ROLE_BINDING: "rbac-controller",
}

RISK_LEVELS: Dict[ResourceKind, RiskLevel] = {
    ResourceKind.DEPLOYMENT: RiskLevel.MEDIUM,
    ResourceKind.DAEMON_SET: RiskLevel.LOW,
    ResourceKind.STATEFUL_SET: RiskLevel.HIGH,
    ResourceKind.REPLICA_SET: RiskLevel.LOW,
    ResourceKind.POD: RiskLevel.LOW,
    ResourceKind.JOB: RiskLevel.LOW,
    ResourceKind.CRON_JOB: RiskLevel.MEDIUM,
    ResourceKind.SERVICE: RiskLevel.HIGH,
    ResourceKind.INGRESS: RiskLevel.HIGH,
    ResourceKind.HORIZONTAL_POD_AUTOSCALER: RiskLevel.MEDIUM,
    ResourceKind.PERSISTENT_VOLUME: RiskLevel.HIGH,
    ResourceKind.PERSISTENT_VOLUME_CLAIM: RiskLevel.MEDIUM,
    ResourceKind.CONFIG_MAP: RiskLevel.MEDIUM,
    ResourceKind.SECRET: RiskLevel.MEDIUM,
    ResourceKind.SERVICE_ACCOUNT: RiskLevel.MEDIUM,
    ResourceKind.NAMESPACE: RiskLevel.HIGH,
    ResourceKind.ROLE: RiskLevel.HIGH,
    ResourceKind.ROLE_BINDING: RiskLevel.HIGH,
    ResourceKind.CLUSTER_ROLE: RiskLevel.HIGH,
    ResourceKind.CLUSTER_ROLE_BINDING: RiskLevel.HIGH,
}

# Message field -> label key on the triggering object
LABEL_KEYS = {
    "pod": "pod",
    "entity": "entity",
    "env": "environment",
    "service_name": "service",
}


def get_action_by(kind: str) -> str:
    """Actor for a kind string (case-insensitive)."""
    resolved = _resolve_kind(kind)
    if resolved is None:
        return DEFAULT_ACTION_BY
    return ACTION_BY[resolved]


def get_risk_level(kind: str) -> RiskLevel:
    """Risk level for a kind string (case-insensitive)."""
    resolved = _resolve_kind(kind)
    if resolved is None:
        return DEFAULT_RISK_LEVEL
    return RISK_LEVELS[resolved]


_LOWERCASE_KINDS = {kind.value.lower(): kind for kind in ResourceKind}


def _resolve_kind(kind: str) -> Optional[ResourceKind]:
    return _LOWERCASE_KINDS.get(kind.lower())


@dataclass
class ObjectData:
    """Current and previous payloads of the changed object."""
    current_config_name: str = ""
    current_config_namespace: str = ""
    current_config_spec: Any = None
    old_config_name: str = ""
    old_config_namespace: str = ""
    old_config_spec: Any = None

    @classmethod
    def from_payloads(cls, current: ExtractedPayload, previous: ExtractedPayload) -> "ObjectData":
        return cls(
            current_config_name=current.name,
            current_config_namespace=current.namespace,
            current_config_spec=current.spec,
            old_config_name=previous.name,
            old_config_namespace=previous.namespace,
            old_config_spec=previous.spec,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentConfigName": self.current_config_name,
            "currentConfigNamespace": self.current_config_namespace,
            "currentConfigSpec": self.current_config_spec,
            "oldConfigName": self.old_config_name,
            "oldConfigNamespace": self.old_config_namespace,
            "oldConfigSpec": self.old_config_spec,
        }


@dataclass
class OutboundMessage:
    """Webhook record for one change event."""
    type: str
    name: str
    summary: str
    pod: str
    entity: str
    env: str
    service_name: str
    action: str
    created_at: datetime
    action_by: str
    risk_level: RiskLevel
    data: ObjectData
    metadata: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (JSON-ready apart from payload specs)."""
        return {
            "type": self.type,
            "name": self.name,
            "summary": self.summary,
            "pod": self.pod,
            "entity": self.entity,
            "env": self.env,
            "serviceName": self.service_name,
            "action": self.action,
            "createdAt": self.created_at.isoformat(),
            "actionBy": self.action_by,
            "riskLevel": self.risk_level.value,
            "metadata": dict(self.metadata),
            "data": self.data.to_dict(),
        }


@dataclass
class LegacyWebhookMessage:
    """Plain output format: event identity plus the summary text."""
    kind: str
    name: str
    namespace: str
    reason: str
    text: str
    time: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eventmeta": {
                "kind": self.kind,
                "name": self.name,
                "namespace": self.namespace,
                "reason": self.reason,
            },
            "text": self.text,
            "time": self.time.isoformat(),
        }


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_message(
    event: Event,
    now: Optional[datetime] = None,
    redact_secrets: bool = False,
) -> OutboundMessage:
    """
    Build the outbound record for an event.

    Args:
        event: Observed change
        now: Timestamp for created_at (defaults to current UTC time)
        redact_secrets: Mask Secret values in the payloads

    Returns:
        OutboundMessage
    """
    kind = event.kind.lower()
    labels = get_metadata(event.new_object).labels
    current, previous = extract(event, redact_secrets=redact_secrets)

    return OutboundMessage(
        type=kind,
        name=event.name or current.name,
        summary=event.summary(),
        pod=labels.get(LABEL_KEYS["pod"], ""),
        entity=labels.get(LABEL_KEYS["entity"], ""),
        env=labels.get(LABEL_KEYS["env"], ""),
        service_name=labels.get(LABEL_KEYS["service_name"], ""),
        action=event.reason.lower(),
        created_at=now or _now(),
        action_by=get_action_by(kind),
        risk_level=get_risk_level(kind),
        data=ObjectData.from_payloads(current, previous),
    )


def build_legacy_message(event: Event, now: Optional[datetime] = None) -> LegacyWebhookMessage:
    """Build the plain eventmeta/text record for an event."""
    meta = get_metadata(event.new_object)
    return LegacyWebhookMessage(
        kind=event.kind,
        name=event.name or meta.name,
        namespace=event.namespace or meta.namespace,
        reason=event.reason,
        text=event.summary(),
        time=now or _now(),
    )
