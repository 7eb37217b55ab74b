# kubehook/webhooks/transport.py
"""
Delivery transport - POSTs serialized messages to the webhook endpoint.

TLS trust is fixed when the transport is constructed: verification
disabled (explicit opt-in), a CA bundle loaded from a certificate file,
or the system default trust store. One attempt per message, no retry.
"""

import json
import ssl
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import httpx

from .. import __version__
from ..config import CertificateLoadError, DEFAULT_TIMEOUT_SECONDS
from ..logging import get_logger

logger = get_logger(__name__)


class DeliveryError(Exception):
    """Base exception for a failed delivery of one message."""
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class SerializationError(DeliveryError):
    """Raised when the message cannot be encoded as JSON."""
    def __init__(self, url: str, reason: str):
        super().__init__(url, f"Cannot serialize webhook message: {reason}")


class DeliveryTransportError(DeliveryError):
    """Raised on connection, TLS or timeout failures."""
    def __init__(self, url: str, cause: Exception):
        self.cause = cause
        super().__init__(url, f"POST {url} failed: {type(cause).__name__}: {cause}")


class DeliveryStatusError(DeliveryError):
    """Raised when the endpoint answers with a non-2xx status."""
    def __init__(self, url: str, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(url, f"POST {url} returned HTTP {status_code}")


@dataclass
class WebhookDelivery:
    """Record of a completed delivery."""
    url: str
    status_code: int
    delivered_at: datetime
    payload_bytes: int


def build_verify(tls_skip: bool = False, cert: Optional[str] = None) -> Union[bool, ssl.SSLContext]:
    """
    Build the httpx `verify` value for the configured trust.

    Args:
        tls_skip: Disable certificate verification
        cert: Path to a PEM CA bundle that replaces the system roots

    Returns:
        False, an SSLContext, or True for system trust

    Raises:
        CertificateLoadError: If cert is unreadable or holds no certificates
    """
    if tls_skip:
        return False
    if not cert:
        logger.info("webhook_cert_not_configured")
        return True
    try:
        return ssl.create_default_context(cafile=cert)
    except OSError as e:
        # ssl.SSLError is an OSError subclass
        raise CertificateLoadError(cert, str(e)) from e


class WebhookTransport:
    """
    HTTP client for webhook delivery.

    Holds a single httpx.Client with its trust configuration baked in.
    Safe to share across threads once constructed.
    """

    def __init__(
        self,
        tls_skip: bool = False,
        cert: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize transport.

        Args:
            tls_skip: Disable certificate verification
            cert: CA certificate file for self-signed endpoints
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.timeout = timeout_seconds
        self.tls_skip = tls_skip
        self.client = httpx.Client(
            verify=build_verify(tls_skip, cert),
            timeout=timeout_seconds,
            transport=transport,
            headers={"User-Agent": f"kubehook/{__version__}"},
        )

    def deliver(self, url: str, message: Any) -> WebhookDelivery:
        """
        Serialize a message and POST it once.

        Args:
            url: Webhook endpoint
            message: Object with a to_dict() wire representation

        Returns:
            WebhookDelivery for a 2xx response

        Raises:
            SerializationError: Message is not JSON-encodable
            DeliveryTransportError: Connection, TLS or timeout failure
            DeliveryStatusError: Non-2xx response
        """
        try:
            body = json.dumps(message.to_dict()).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(url, str(e)) from e

        headers: Dict[str, str] = {"Content-Type": "application/json"}

        try:
            response = self.client.post(url, content=body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryTransportError(url, e) from e

        if not 200 <= response.status_code < 300:
            raise DeliveryStatusError(
                url,
                response.status_code,
                response.text[:500] if response.text else None,
            )

        return WebhookDelivery(
            url=url,
            status_code=response.status_code,
            delivered_at=datetime.now(timezone.utc),
            payload_bytes=len(body),
        )

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
