"""Configuration module for agencyledger."""

from agencyledger.config.logging import configure_logging
from agencyledger.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
