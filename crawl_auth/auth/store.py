"""Facade du store de credentials HTTP Basic.

Ce module fournit AuthStore qui associe des credentials à des
sous-arborescences de sites et résout, pour une URL donnée, le
credential le plus spécifique dont le chemin est un préfixe (par
segments) du chemin de l'URL.
"""

from typing import Any, Optional, Set

from crawl_auth.auth.backends.memory import MemoryBackend
from crawl_auth.auth.backends.redis import RedisBackend
from crawl_auth.auth.base import StoreBackend
from crawl_auth.auth.config import BACKEND_REDIS, AuthStoreConfig
from crawl_auth.auth.models import (
    Credential,
    CredentialEntry,
    SiteRoot,
    UrlParts,
)
from crawl_auth.auth.paths import (
    is_segment_prefix,
    absolute_path,
    path_segments,
)
from crawl_auth.logging.base import Logger


class AuthStore:
    """Credentials HTTP Basic rangés par site et par chemin.

    Usage typique dans un crawler :

        store = AuthStore()
        store.add("http://intranet/admin/", "alice", "s3cr3t")
        header = store.encoded_authorization_for(
            "http://intranet/admin/users"
        )

    Les URL peuvent être des chaînes ou des objets exposant
    scheme, host, port et path.

    Attributes:
        _backend: Backend de stockage.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        backend: Optional[StoreBackend] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le store.

        Args:
            backend: Backend de stockage, MemoryBackend par défaut.
            logger: Logger optionnel (injection de dépendance).
        """
        self._backend = backend if backend is not None else MemoryBackend(
            logger=logger
        )
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        config: AuthStoreConfig,
        logger: Optional[Logger] = None,
    ) -> "AuthStore":
        """Crée un store avec le backend désigné par la configuration.

        Args:
            config: Configuration du store.
            logger: Logger optionnel partagé avec le backend.

        Returns:
            Instance de AuthStore.
        """
        backend: StoreBackend
        if config.backend == BACKEND_REDIS:
            backend = RedisBackend.from_config(config.redis, logger=logger)
        else:
            backend = MemoryBackend(logger=logger)
        if logger:
            logger.log_info(
                f"Store de credentials initialisé "
                f"(backend={backend.backend_name!r})"
            )
        return cls(backend=backend, logger=logger)

    @property
    def backend(self) -> StoreBackend:
        """Backend de stockage utilisé."""
        return self._backend

    def lookup(self, url: Any) -> Optional[Credential]:
        """Retourne le credential le plus spécifique pour une URL.

        Args:
            url: URL complète, chemin optionnel.

        Returns:
            Credential le plus profond dont le chemin préfixe celui
            de l'URL, ou None si aucun ne correspond.

        Raises:
            MalformedUrlError: si l'URL n'a pas d'hôte.
            BackendUnavailableError: si le backend est injoignable.
        """
        parts = UrlParts.parse(url)
        site_key = SiteRoot.from_url(parts).key

        if self._backend.path_count(site_key) == 0:
            return None

        query = path_segments(absolute_path(parts.path))
        ranked = self._backend.ranked_paths_at_or_below(
            site_key, len(query)
        )
        for depth, stored_path in ranked:
            stored = path_segments(stored_path)
            if len(stored) != depth or not is_segment_prefix(stored, query):
                continue
            entry_key = site_key + stored_path
            credential = Credential.from_fields(
                self._backend.fetch_fields(entry_key)
            )
            if credential is None:
                # Chemin enregistré mais champs absents : écriture
                # partielle, on échoue fermé
                if self._logger:
                    self._logger.log_warning(
                        f"Chemin {entry_key!r} sans credential associé, "
                        f"recherche traitée comme absente"
                    )
                return None
            return credential
        return None

    def set_credential(self, url: Any, credential: Credential) -> Credential:
        """Associe un credential au chemin d'une URL.

        Un credential déjà présent pour ce chemin est remplacé.

        Args:
            url: URL de base de la sous-arborescence protégée.
            credential: Credential à associer.

        Returns:
            Le credential stocké.

        Raises:
            MalformedUrlError: si l'URL n'a pas d'hôte.
            BackendUnavailableError: si le backend est injoignable.
        """
        parts = UrlParts.parse(url)
        entry = CredentialEntry.create(
            SiteRoot.from_url(parts), parts.path, credential
        )
        self._backend.record_path(
            entry.site_root.key, entry.path, entry.depth
        )
        self._backend.store_fields(entry.entry_key, credential.to_fields())
        if self._logger:
            self._logger.log_info(
                f"Credential enregistré pour {entry.entry_key!r} "
                f"(profondeur {entry.depth})"
            )
        return credential

    def add(self, url: Any, username: str, password: str) -> Credential:
        """Raccourci de set_credential() à partir des deux champs.

        Args:
            url: URL de base de la sous-arborescence protégée.
            username: Identifiant HTTP Basic.
            password: Mot de passe HTTP Basic.

        Returns:
            Le credential stocké.
        """
        return self.set_credential(url, Credential(username, password))

    def encoded_authorization_for(self, url: Any) -> Optional[str]:
        """Retourne base64("username:password") pour une URL.

        Returns:
            Valeur encodée, ou None si aucun credential ne
            correspond.
        """
        credential = self.lookup(url)
        if credential is None:
            return None
        return credential.authorization_header_value()

    def size(self) -> int:
        """Nombre de chemins stockés."""
        return self._backend.count()

    def keys(self) -> Set[str]:
        """Clés (site racine + chemin) des credentials stockés."""
        return self._backend.all_keys()

    def clear(self) -> "AuthStore":
        """Vide entièrement le store.

        Returns:
            Le store vidé.
        """
        self._backend.clear()
        if self._logger:
            self._logger.log_info("Store de credentials vidé.")
        return self

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, url: Any) -> bool:
        return self.lookup(url) is not None

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {sorted(self.keys())!r}>"
