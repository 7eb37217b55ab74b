"""
Webhook module for outbound change notifications.

Builds a message per significant event and POSTs it to the configured
endpoint.
"""

from .builder import (
    LegacyWebhookMessage,
    ObjectData,
    OutboundMessage,
    RiskLevel,
    build_legacy_message,
    build_message,
    get_action_by,
    get_risk_level,
)
from .transport import (
    DeliveryError,
    DeliveryStatusError,
    DeliveryTransportError,
    SerializationError,
    WebhookDelivery,
    WebhookTransport,
)
from .handler import WebhookHandler

__all__ = [
    "LegacyWebhookMessage",
    "ObjectData",
    "OutboundMessage",
    "RiskLevel",
    "build_legacy_message",
    "build_message",
    "get_action_by",
    "get_risk_level",
    "DeliveryError",
    "DeliveryStatusError",
    "DeliveryTransportError",
    "SerializationError",
    "WebhookDelivery",
    "WebhookTransport",
    "WebhookHandler",
]
