# kubehook/handlers/base.py
"""
Notification handler interface.

The watch pipeline treats every destination the same way: initialize
it once from the parsed configuration, then hand it each event.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..config import Config
from ..events.models import Event
from ..logging import get_handler_logger


class Handler(ABC):
    """A notification sink for resource change events."""

    name = "handler"

    @abstractmethod
    def init(self, config: Config) -> None:
        """
        Prepare the handler.

        Raises:
            ConfigurationError: If the handler cannot be used
        """

    @abstractmethod
    def handle(self, event: Event) -> Any:
        """Process one event. Must not raise for per-event failures."""

    def close(self) -> None:
        pass


class DefaultHandler(Handler):
    """Logs every event and sends nothing."""

    name = "default"

    def __init__(self):
        self.logger = get_handler_logger(self.name)

    def init(self, config: Config) -> None:
        pass

    def handle(self, event: Event) -> None:
        self.logger.info(
            "event_observed",
            kind=event.kind,
            name=event.name,
            namespace=event.namespace,
            reason=event.reason,
            summary=event.summary(),
        )
