# kubehook/handlers/registry.py
"""
Handler registry - maps configured handler names to implementations.
"""

from typing import Dict, Type

from ..config import Config, ConfigurationError
from ..webhooks.handler import WebhookHandler
from .base import Handler, DefaultHandler

HANDLER_MAP: Dict[str, Type[Handler]] = {
    DefaultHandler.name: DefaultHandler,
    WebhookHandler.name: WebhookHandler,
}


def new_handler(config: Config) -> Handler:
    """
    Create and initialize the handler named in the configuration.

    Raises:
        ConfigurationError: Unknown handler name or failed initialization
    """
    handler_cls = HANDLER_MAP.get(config.handler.lower())
    if handler_cls is None:
        raise ConfigurationError(
            f"Unknown handler {config.handler!r}; expected one of {sorted(HANDLER_MAP)}"
        )
    handler = handler_cls()
    handler.init(config)
    return handler
