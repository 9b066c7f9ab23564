"""Configuration for Podpublisher."""

from podpublisher.config.manager import ConfigManager
from podpublisher.config.schema import PublisherConfig

__all__ = ["ConfigManager", "PublisherConfig"]
