# kubehook/config.py
"""
Handler configuration.

The watch pipeline hands each handler an already-parsed Config. Webhook
fields left blank there are filled from the environment:

    KW_WEBHOOK_URL          webhook endpoint (required)
    KW_WEBHOOK_CERT         CA certificate file for self-signed endpoints
    KW_WEBHOOK_TLS_SKIP     "true" to disable certificate verification
    KW_WEBHOOK_TIMEOUT      request timeout in seconds
    KW_WEBHOOK_CUSTOM_OUTPUT  "false" for the plain eventmeta/text format
    KW_WEBHOOK_REDACT_SECRETS "true" to mask Secret values
    KW_WEBHOOK_SUPPRESS     "namespace/Kind,..." exclusion list

Explicit configuration always takes precedence over the environment.
"""

import os
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Mapping, Optional

from .filtering.significance import DEFAULT_SUPPRESSIONS, Suppression, parse_suppressions

DEFAULT_TIMEOUT_SECONDS = 10.0

WEBHOOK_USAGE = """
{reason}

You need to set Webhook url, and Webhook cert if you use self signed certificates,
using "url" and "cert" in the handler configuration, or using environment variables:

export KW_WEBHOOK_URL=webhook_url
export KW_WEBHOOK_CERT=/path/of/cert

Configuration values override environment variables
"""


class ConfigurationError(Exception):
    """Raised when a handler cannot be initialized from its configuration."""
    pass


class CertificateLoadError(ConfigurationError):
    """Raised when a configured certificate file is unreadable or invalid."""
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Cannot load webhook certificate {path}: {message}")


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(value: Optional[str]) -> Optional[bool]:
    if value is None or not value.strip():
        return None
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


@dataclass
class WebhookConfig:
    """Webhook handler settings. None means "not configured here"."""
    url: str = ""
    cert: str = ""
    tls_skip: Optional[bool] = None
    timeout_seconds: Optional[float] = None
    custom_output: Optional[bool] = None
    redact_secrets: Optional[bool] = None
    suppressions: Optional[FrozenSet[Suppression]] = None


@dataclass
class Config:
    """Top-level handler configuration."""
    handler: str = "webhook"
    webhook: WebhookConfig = field(default_factory=WebhookConfig)


def resolve_webhook_config(
    config: Optional[WebhookConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> WebhookConfig:
    """
    Merge explicit configuration with environment variables.

    Args:
        config: Explicit webhook configuration (wins when set)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Fully resolved WebhookConfig; url may still be empty

    Raises:
        ConfigurationError: If an environment value cannot be parsed
    """
    config = config or WebhookConfig()
    env = os.environ if environ is None else environ

    url = config.url or env.get("KW_WEBHOOK_URL", "")
    cert = config.cert or env.get("KW_WEBHOOK_CERT", "")
    tls_skip = config.tls_skip
    if tls_skip is None:
        tls_skip = bool(_env_flag(env.get("KW_WEBHOOK_TLS_SKIP")))

    timeout = config.timeout_seconds
    if timeout is None:
        raw_timeout = env.get("KW_WEBHOOK_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout.strip() else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigurationError(f"Invalid KW_WEBHOOK_TIMEOUT: {raw_timeout!r}")

    custom_output = config.custom_output
    if custom_output is None:
        custom_output = _env_flag(env.get("KW_WEBHOOK_CUSTOM_OUTPUT"))
        if custom_output is None:
            custom_output = True

    redact_secrets = config.redact_secrets
    if redact_secrets is None:
        redact_secrets = bool(_env_flag(env.get("KW_WEBHOOK_REDACT_SECRETS")))

    suppressions = config.suppressions
    if suppressions is None:
        try:
            suppressions = parse_suppressions(env.get("KW_WEBHOOK_SUPPRESS"))
        except ValueError as e:
            raise ConfigurationError(str(e))
        if suppressions is None:
            suppressions = DEFAULT_SUPPRESSIONS

    return replace(
        config,
        url=url.strip(),
        cert=cert.strip(),
        tls_skip=tls_skip,
        timeout_seconds=timeout,
        custom_output=custom_output,
        redact_secrets=redact_secrets,
        suppressions=suppressions,
    )


def check_missing_webhook_vars(config: WebhookConfig) -> None:
    """Raise ConfigurationError if the resolved config has no URL."""
    if not config.url:
        raise ConfigurationError(WEBHOOK_USAGE.format(reason="Missing Webhook url"))
