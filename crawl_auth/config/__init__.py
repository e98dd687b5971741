"""Module de chargement de configuration."""

from crawl_auth.config.loader import ConfigLoader, FileConfigLoader

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
]
