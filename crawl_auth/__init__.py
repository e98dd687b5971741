"""
Crawl Auth - Store de credentials HTTP Basic pour crawlers web.

Modules disponibles:
- auth: Store de credentials par sous-arborescence de site
  (AuthStore, MemoryBackend, RedisBackend)
- config: Chargement de configuration (TOML, JSON)
- logging: Interface de logging injectable (Logger, StandardLogger)
- errors: Exceptions de base (ApplicationError, ConfigurationError)
"""

__version__ = "1.0.0"

from crawl_auth.logging import Logger, StandardLogger
from crawl_auth.config import ConfigLoader, FileConfigLoader
from crawl_auth.errors import (
    ApplicationError,
    ConfigurationError,
    ValidationError,
)
from crawl_auth.auth import (
    AuthStore,
    AuthStoreConfig,
    AuthStoreError,
    BackendUnavailableError,
    Credential,
    CredentialEntry,
    MalformedUrlError,
    MemoryBackend,
    RedisBackend,
    RedisSettings,
    SiteRoot,
    StoreBackend,
    UrlParts,
    absolute_path,
    normalize_path,
)

__all__ = [
    # Logging
    "Logger",
    "StandardLogger",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    # Errors
    "ApplicationError",
    "ConfigurationError",
    "ValidationError",
    # Auth - Facade
    "AuthStore",
    "AuthStoreConfig",
    "RedisSettings",
    # Auth - Backends
    "StoreBackend",
    "MemoryBackend",
    "RedisBackend",
    # Auth - Modèles
    "Credential",
    "CredentialEntry",
    "SiteRoot",
    "UrlParts",
    "normalize_path",
    "absolute_path",
    # Auth - Exceptions
    "AuthStoreError",
    "BackendUnavailableError",
    "MalformedUrlError",
]
