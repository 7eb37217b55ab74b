# tests/test_builder.py
"""
Test outbound message assembly.
"""

import json
from datetime import datetime, timedelta, timezone

from kubehook.events import Event, ResourceKind
from kubehook.webhooks.builder import (
    ACTION_BY,
    RISK_LEVELS,
    RiskLevel,
    build_legacy_message,
    build_message,
    get_action_by,
    get_risk_level,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _deployment_event(manifest, **kwargs):
    labels = kwargs.pop("labels", {"pod": "web-pod", "entity": "payments", "environment": "prod", "service": "web-svc"})
    return Event(
        kind="Deployment",
        name="web",
        namespace="shop",
        reason="Updated",
        status="Normal",
        new_object=manifest("Deployment", namespace="shop", generation=2, labels=labels, spec={"replicas": 3}),
        old_object=manifest("Deployment", namespace="shop", generation=1, spec={"replicas": 2}),
        **kwargs,
    )


class TestBuildMessage:
    """Tests for build_message."""

    def test_deployment_scenario(self, manifest):
        """Deployment update maps to lowercased type/action and table lookups."""
        message = build_message(_deployment_event(manifest), now=NOW)

        assert message.type == "deployment"
        assert message.action == "updated"
        assert message.action_by == "deployment-controller"
        assert message.risk_level == RiskLevel.MEDIUM
        assert message.created_at == NOW
        assert message.metadata == {}

    def test_labels_copied(self, manifest):
        message = build_message(_deployment_event(manifest), now=NOW)

        assert message.pod == "web-pod"
        assert message.entity == "payments"
        assert message.env == "prod"
        assert message.service_name == "web-svc"

    def test_missing_labels_are_empty(self, manifest):
        """No label map on the object yields empty strings."""
        event = Event(kind="Service", name="svc", reason="Created", new_object=manifest("Service"))
        message = build_message(event, now=NOW)

        assert (message.pod, message.entity, message.env, message.service_name) == ("", "", "", "")

    def test_payloads_in_data(self, manifest):
        message = build_message(_deployment_event(manifest), now=NOW)
        data = message.to_dict()["data"]

        assert data["currentConfigName"] == "web"
        assert data["currentConfigNamespace"] == "shop"
        assert data["currentConfigSpec"] == {"replicas": 3}
        assert data["oldConfigSpec"] == {"replicas": 2}

    def test_builds_differ_only_in_timestamp(self, manifest):
        """Two builds of the same event differ only in createdAt."""
        event = _deployment_event(manifest)
        first = build_message(event, now=NOW).to_dict()
        second = build_message(event, now=NOW + timedelta(seconds=5)).to_dict()

        assert first["createdAt"] != second["createdAt"]
        first.pop("createdAt")
        second.pop("createdAt")
        assert first == second

    def test_wire_dict_is_json(self, manifest):
        payload = build_message(_deployment_event(manifest), now=NOW).to_dict()
        decoded = json.loads(json.dumps(payload))

        assert decoded["createdAt"] == "2026-10-19T12:00:00+00:00"
        assert decoded["riskLevel"] == "medium"
        assert set(decoded) == {
            "type", "name", "summary", "pod", "entity", "env", "serviceName",
            "action", "createdAt", "actionBy", "riskLevel", "metadata", "data",
        }

    def test_binding_data_keys(self, manifest):
        """Payload pair uses currentConfig*/oldConfig* keys; bindings carry the composite string."""
        event = Event(
            kind="ClusterRoleBinding",
            name="admins",
            reason="Created",
            new_object=manifest(
                "ClusterRoleBinding",
                name="admins",
                namespace=None,
                subjects=[{"kind": "User", "name": "alice"}],
                roleRef={"kind": "ClusterRole", "name": "admin"},
            ),
        )
        data = build_message(event, now=NOW).to_dict()["data"]

        assert set(data) == {
            "currentConfigName", "currentConfigNamespace", "currentConfigSpec",
            "oldConfigName", "oldConfigNamespace", "oldConfigSpec",
        }
        assert data["currentConfigSpec"] == "Subjects: User/alice; RoleRef: ClusterRole/admin"
        assert data["oldConfigSpec"] is None

    def test_summary_from_event_message(self, manifest):
        event = _deployment_event(manifest, message="Deployment web scaled")
        assert build_message(event, now=NOW).summary == "Deployment web scaled"

    def test_summary_derived_when_blank(self, manifest):
        message = build_message(_deployment_event(manifest), now=NOW)
        assert message.summary == "A `Deployment` in namespace `shop` has been `Updated`:\n`web`"

    def test_cluster_scoped_summary(self, manifest):
        event = Event(kind="Namespace", name="team-a", reason="Created", new_object=manifest("Namespace", namespace=None))
        assert build_message(event, now=NOW).summary == "A `Namespace` `team-a` has been `Created`"

    def test_name_falls_back_to_object(self, manifest):
        event = Event(kind="Job", reason="Created", new_object=manifest("Job", name="nightly"))
        assert build_message(event, now=NOW).name == "nightly"

    def test_summary_name_falls_back_to_object(self, manifest):
        """The derived summary uses the object name when the event has none."""
        event = Event(kind="Job", namespace="batch", reason="Created", new_object=manifest("Job", name="nightly"))
        message = build_message(event, now=NOW)

        assert message.summary == "A `Job` in namespace `batch` has been `Created`:\n`nightly`"

    def test_unknown_kind_defaults(self, manifest):
        event = Event(kind="Widget", name="w", reason="Created", new_object=manifest("Widget"))
        message = build_message(event, now=NOW)

        assert message.type == "widget"
        assert message.action_by == "kubernetes-controller"
        assert message.risk_level == RiskLevel.MEDIUM


class TestLookupTables:
    """actor and risk lookups per kind."""

    def test_tables_cover_every_kind(self):
        assert set(ACTION_BY) == set(ResourceKind)
        assert set(RISK_LEVELS) == set(ResourceKind)

    def test_lookups_are_case_insensitive(self):
        assert get_action_by("daemonset") == "daemonset-controller"
        assert get_action_by("DaemonSet") == "daemonset-controller"
        assert get_risk_level("daemonset") == RiskLevel.LOW

    def test_known_risk_levels(self):
        assert get_risk_level("service") == RiskLevel.HIGH
        assert get_risk_level("statefulset") == RiskLevel.HIGH
        assert get_risk_level("configmap") == RiskLevel.MEDIUM
        assert get_risk_level("namespace") == RiskLevel.HIGH


class TestLegacyMessage:
    """Plain eventmeta/text format."""

    def test_shape(self, manifest):
        event = Event(kind="Service", name="svc", namespace="shop", reason="Deleted", new_object=manifest("Service"))
        payload = build_legacy_message(event, now=NOW).to_dict()

        assert payload == {
            "eventmeta": {"kind": "Service", "name": "svc", "namespace": "shop", "reason": "Deleted"},
            "text": "A `Service` in namespace `shop` has been `Deleted`:\n`svc`",
            "time": "2026-10-19T12:00:00+00:00",
        }
