# kubehook/webhooks/handler.py
"""
Webhook handler - filters, builds and delivers one event at a time.

Per-event failures (serialization, transport, non-2xx) are logged and
the event is dropped; nothing propagates to the watch pipeline.
"""

from typing import Optional

import httpx

from ..config import (
    Config,
    ConfigurationError,
    WebhookConfig,
    check_missing_webhook_vars,
    resolve_webhook_config,
)
from ..events.models import Event
from ..filtering.significance import should_notify
from ..handlers.base import Handler
from ..logging import get_handler_logger
from .builder import build_legacy_message, build_message
from .transport import (
    DeliveryError,
    DeliveryStatusError,
    WebhookDelivery,
    WebhookTransport,
)


class WebhookHandler(Handler):
    """Relays significant events to the configured webhook URL."""

    name = "webhook"

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport passed to the client
        """
        self.logger = get_handler_logger(self.name)
        self.config: Optional[WebhookConfig] = None
        self.transport: Optional[WebhookTransport] = None
        self._httpx_transport = transport

    @property
    def url(self) -> str:
        return self.config.url if self.config else ""

    def init(self, config: Config) -> None:
        """
        Resolve URL/cert/TLS settings and build the delivery transport.

        Raises:
            ConfigurationError: Missing URL or invalid environment value
            CertificateLoadError: Certificate unreadable or unparsable
        """
        resolved = resolve_webhook_config(config.webhook)
        check_missing_webhook_vars(resolved)

        # Build first so a failed re-init leaves the working transport in place
        transport = WebhookTransport(
            tls_skip=resolved.tls_skip,
            cert=resolved.cert or None,
            timeout_seconds=resolved.timeout_seconds,
            transport=self._httpx_transport,
        )
        if self.transport is not None:
            self.transport.close()
        self.transport = transport
        self.config = resolved

        self.logger.info(
            "webhook_handler_initialized",
            url=resolved.url,
            tls_skip=resolved.tls_skip,
            cert=resolved.cert or None,
            custom_output=resolved.custom_output,
        )

    def handle(self, event: Event) -> Optional[WebhookDelivery]:
        """
        Notify the webhook about an event if it is significant.

        Returns:
            WebhookDelivery on success, None if dropped or failed

        Raises:
            ConfigurationError: If called before init()
        """
        if self.config is None or self.transport is None:
            raise ConfigurationError("Webhook handler used before init()")

        if not should_notify(event, self.config.suppressions):
            return None

        if self.config.custom_output:
            message = build_message(event, redact_secrets=self.config.redact_secrets)
        else:
            message = build_legacy_message(event)

        event_log = self.logger.bind(url=self.config.url, kind=event.kind, name=event.name)
        try:
            delivery = self.transport.deliver(self.config.url, message)
        except DeliveryStatusError as e:
            event_log.error("webhook_delivery_rejected", status_code=e.status_code, error=str(e))
            return None
        except DeliveryError as e:
            event_log.error("webhook_delivery_failed", error=str(e))
            return None

        event_log.info(
            "webhook_delivery_complete",
            status_code=delivery.status_code,
            delivered_at=delivery.delivered_at,
        )
        return delivery

    def close(self) -> None:
        if self.transport is not None:
            self.transport.close()
