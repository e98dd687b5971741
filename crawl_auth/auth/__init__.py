"""Store de credentials HTTP Basic par sous-arborescence de site.

Résout, pour une URL, le credential le plus spécifique dont le
chemin est un préfixe (segment par segment) du chemin de l'URL.
Deux backends : mémoire du processus ou serveur Redis partagé.

Dépendances :
    redis           # pour RedisBackend
    python-dotenv   # pour AuthStoreConfig.from_env(dotenv_path=...)

Exemple d'utilisation :

    from crawl_auth.auth import AuthStore, AuthStoreConfig

    store = AuthStore.from_config(AuthStoreConfig.from_env())
    store.add("https://intranet.local/admin/", "alice", "s3cr3t")
    store.lookup("https://intranet.local/admin/users")
"""

from crawl_auth.auth.backends.memory import MemoryBackend
from crawl_auth.auth.backends.redis import RedisBackend
from crawl_auth.auth.base import StoreBackend
from crawl_auth.auth.config import AuthStoreConfig, RedisSettings
from crawl_auth.auth.exceptions import (
    AuthStoreError,
    BackendUnavailableError,
    MalformedUrlError,
)
from crawl_auth.auth.models import (
    Credential,
    CredentialEntry,
    SiteRoot,
    UrlParts,
)
from crawl_auth.auth.paths import (
    absolute_path,
    is_segment_prefix,
    normalize_path,
    path_depth,
    path_segments,
)
from crawl_auth.auth.store import AuthStore

__all__ = [
    # ABC
    "StoreBackend",
    # Modèles
    "Credential",
    "CredentialEntry",
    "SiteRoot",
    "UrlParts",
    # Chemins
    "normalize_path",
    "absolute_path",
    "path_segments",
    "path_depth",
    "is_segment_prefix",
    # Exceptions
    "AuthStoreError",
    "BackendUnavailableError",
    "MalformedUrlError",
    # Configuration
    "AuthStoreConfig",
    "RedisSettings",
    # Backends
    "MemoryBackend",
    "RedisBackend",
    # Facade
    "AuthStore",
]
