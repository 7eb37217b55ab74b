# tests/conftest.py
"""
Pytest configuration and fixtures.

Webhook delivery is exercised against httpx.MockTransport; no network
access is needed.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from kubehook.config import Config, WebhookConfig
from kubehook.webhooks.handler import WebhookHandler

WEBHOOK_URL = "https://hooks.example.com/kubehook"


@pytest.fixture(autouse=True)
def _clean_webhook_env(monkeypatch):
    """Keep KW_WEBHOOK_* from the host environment out of tests."""
    for var in (
        "KW_WEBHOOK_URL",
        "KW_WEBHOOK_CERT",
        "KW_WEBHOOK_TLS_SKIP",
        "KW_WEBHOOK_TIMEOUT",
        "KW_WEBHOOK_CUSTOM_OUTPUT",
        "KW_WEBHOOK_REDACT_SECRETS",
        "KW_WEBHOOK_SUPPRESS",
    ):
        monkeypatch.delenv(var, raising=False)


def _make_manifest(
    kind: str,
    name: str = "web",
    namespace: Optional[str] = "default",
    generation: Optional[int] = None,
    resource_version: str = "1",
    labels: Optional[Dict[str, str]] = None,
    **fields: Any,
) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"name": name, "resourceVersion": resource_version}
    if namespace:
        metadata["namespace"] = namespace
    if generation is not None:
        metadata["generation"] = generation
    if labels is not None:
        metadata["labels"] = labels
    return {"kind": kind, "metadata": metadata, **fields}


@pytest.fixture
def manifest():
    """Factory for resource manifests shaped like API watch objects."""
    return _make_manifest


class RecordingEndpoint:
    """MockTransport handler that records requests and answers with a fixed status."""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None):
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text="ok")

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def make_endpoint():
    """The RecordingEndpoint class, for custom statuses and errors."""
    return RecordingEndpoint


@pytest.fixture
def endpoint():
    """Webhook endpoint answering 200."""
    return RecordingEndpoint()


@pytest.fixture
def make_handler():
    """Build an initialized WebhookHandler wired to a RecordingEndpoint."""
    handlers = []

    def _make(endpoint: RecordingEndpoint, **webhook_fields: Any) -> WebhookHandler:
        webhook_fields.setdefault("url", WEBHOOK_URL)
        handler = WebhookHandler(transport=httpx.MockTransport(endpoint))
        handler.init(Config(webhook=WebhookConfig(**webhook_fields)))
        handlers.append(handler)
        return handler

    yield _make

    for handler in handlers:
        handler.close()
