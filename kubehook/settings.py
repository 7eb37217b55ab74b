# kubehook/settings.py
"""
Process settings.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from .config import Config, WebhookConfig


@dataclass
class Settings:
    """Process configuration."""

    # Handler selection ("webhook" or "default")
    handler: str = os.getenv("KW_HANDLER", "webhook")

    # Logging
    log_level: str = os.getenv("KW_LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("KW_LOG_JSON", "true").lower() == "true"
    log_file: Optional[str] = os.getenv("KW_LOG_FILE") or None

    # Ingest API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))

    def to_config(self) -> Config:
        """
        Handler configuration for this process.

        Webhook fields are left blank so the handler resolves them from
        KW_WEBHOOK_* at init time.
        """
        return Config(handler=self.handler, webhook=WebhookConfig())


# Global settings instance
settings = Settings()
