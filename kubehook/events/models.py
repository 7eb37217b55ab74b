# kubehook/events/models.py
"""
Event models.

An Event is one observed change on a cluster resource, handed to a
notification handler by the watch pipeline. Resource objects are API
manifests as mappings (kind, metadata, spec, ...).
"""

from typing import Optional, Dict, Any, Mapping
from dataclasses import dataclass, field
from enum import Enum


class ResourceKind(str, Enum):
    """Resource kinds the notification pipeline knows how to extract."""
    # Workloads
    DEPLOYMENT = "Deployment"
    DAEMON_SET = "DaemonSet"
    STATEFUL_SET = "StatefulSet"
    REPLICA_SET = "ReplicaSet"
    POD = "Pod"
    JOB = "Job"
    CRON_JOB = "CronJob"
    # Networking
    SERVICE = "Service"
    INGRESS = "Ingress"
    # Scaling
    HORIZONTAL_POD_AUTOSCALER = "HorizontalPodAutoscaler"
    # Storage
    PERSISTENT_VOLUME = "PersistentVolume"
    PERSISTENT_VOLUME_CLAIM = "PersistentVolumeClaim"
    # Config
    CONFIG_MAP = "ConfigMap"
    SECRET = "Secret"
    # Identity / RBAC
    SERVICE_ACCOUNT = "ServiceAccount"
    NAMESPACE = "Namespace"
    ROLE = "Role"
    ROLE_BINDING = "RoleBinding"
    CLUSTER_ROLE = "ClusterRole"
    CLUSTER_ROLE_BINDING = "ClusterRoleBinding"

    @classmethod
    def lookup(cls, kind: str) -> Optional["ResourceKind"]:
        """Resolve an exact kind string, None if unsupported."""
        try:
            return cls(kind)
        except ValueError:
            return None


# Kinds that are not namespaced; summaries omit the namespace for them
CLUSTER_SCOPED_KINDS = {
    ResourceKind.NAMESPACE,
    ResourceKind.PERSISTENT_VOLUME,
    ResourceKind.CLUSTER_ROLE,
    ResourceKind.CLUSTER_ROLE_BINDING,
}


@dataclass(frozen=True)
class ResourceMetadata:
    """Identity and versioning view of a resource object."""
    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    generation: int = 0  # 0 when the kind does not track generations
    resource_version: str = ""


@dataclass(frozen=True)
class Event:
    """
    One observed resource change.

    old_object is None on creation events. When message is blank,
    summary() derives one from kind, namespace, reason and name.
    """
    kind: str
    name: str = ""
    namespace: str = ""
    reason: str = ""
    status: str = ""
    message: str = ""
    new_object: Optional[Mapping[str, Any]] = None
    old_object: Optional[Mapping[str, Any]] = None

    @property
    def resource_kind(self) -> Optional[ResourceKind]:
        return ResourceKind.lookup(self.kind)

    @property
    def object_name(self) -> str:
        """metadata.name of the new object, "" if unavailable."""
        meta = self.new_object.get("metadata") if isinstance(self.new_object, Mapping) else None
        if not isinstance(meta, Mapping):
            return ""
        return str(meta.get("name") or "")

    def summary(self) -> str:
        """Human readable description of the change."""
        if self.message:
            return self.message

        name = self.name or self.object_name
        kind = self.resource_kind
        if kind in CLUSTER_SCOPED_KINDS or not self.namespace:
            return f"A `{self.kind}` `{name}` has been `{self.reason}`"
        return (
            f"A `{self.kind}` in namespace `{self.namespace}` "
            f"has been `{self.reason}`:\n`{name}`"
        )
