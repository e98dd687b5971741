"""Backend de stockage sur un serveur Redis partagé.

Ce module fournit RedisBackend qui range les chemins dans des
sorted sets (score = profondeur) et les credentials dans des
hashes, toutes les clés étant préfixées par un namespace :

    <namespace>::<scheme>://<host>[:<port>]          sorted set
    <namespace>::<scheme>://<host>[:<port>]<path>    hash username/password

Le client Redis appartient à l'appelant : aucune connexion
globale n'est ouverte par ce module.
"""

from typing import Any, Callable, Dict, List, Optional, Set, Tuple

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from crawl_auth.auth.base import StoreBackend
from crawl_auth.auth.config import DEFAULT_NAMESPACE, RedisSettings
from crawl_auth.auth.exceptions import BackendUnavailableError
from crawl_auth.logging.base import Logger

NAMESPACE_SEPARATOR = "::"
_DELETE_BATCH_SIZE = 500
_GLOB_SPECIAL = "\\*?[]"


def _decode(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _escape_glob(text: str) -> str:
    """Échappe les caractères spéciaux d'un motif MATCH Redis."""
    return "".join(
        f"\\{char}" if char in _GLOB_SPECIAL else char for char in text
    )


class RedisBackend(StoreBackend):
    """Stocke les entrées dans Redis (sorted sets + hashes).

    record_path() et store_fields() sont deux commandes distinctes,
    sans transaction : un lookup concurrent peut voir le chemin
    avant ses champs, ce que le store traite comme une absence.
    Les erreurs de connexion et de timeout sont remontées en
    BackendUnavailableError, sans nouvel essai.

    Attributes:
        _client: Client redis.Redis fourni par l'appelant.
        _prefix: Namespace suivi de "::".
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        client: "redis.Redis",
        namespace: str = DEFAULT_NAMESPACE,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le backend Redis.

        Args:
            client: Client redis.Redis (decode_responses indifférent).
            namespace: Préfixe des clés, évite les collisions avec
                d'autres données du même serveur.
            logger: Logger optionnel (injection de dépendance).

        Raises:
            ValueError: si le namespace est vide.
        """
        if not namespace or not namespace.strip():
            raise ValueError("Le namespace ne peut pas être vide.")
        self._client = client
        self._namespace = namespace
        self._prefix = namespace + NAMESPACE_SEPARATOR
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        settings: RedisSettings,
        logger: Optional[Logger] = None,
    ) -> "RedisBackend":
        """Crée un client Redis depuis les paramètres et l'enveloppe.

        La connexion est ouverte paresseusement par redis-py à la
        première commande.

        Args:
            settings: Paramètres de connexion.
            logger: Logger optionnel.

        Returns:
            Instance de RedisBackend propriétaire de son client.
        """
        client = redis.Redis(
            host=settings.host,
            port=settings.port,
            db=settings.db,
            password=settings.password,
            socket_timeout=settings.socket_timeout,
            decode_responses=True,
        )
        return cls(client, namespace=settings.namespace, logger=logger)

    @property
    def namespace(self) -> str:
        """Namespace appliqué à toutes les clés."""
        return self._namespace

    def _key(self, key: str) -> str:
        return self._prefix + key

    def _call(self, operation: str, func: Callable[..., Any],
              *args: Any, **kwargs: Any) -> Any:
        """Exécute une commande Redis en traduisant les erreurs réseau.

        Raises:
            BackendUnavailableError: connexion refusée ou timeout.
        """
        try:
            return func(*args, **kwargs)
        except (RedisConnectionError, RedisTimeoutError) as exc:
            if self._logger:
                self._logger.log_error(
                    f"Redis indisponible pendant {operation} : {exc}"
                )
            raise BackendUnavailableError(
                f"Redis indisponible pendant {operation} : {exc}"
            ) from exc

    def record_path(
        self,
        site_root_key: str,
        path: str,
        depth: int,
    ) -> None:
        self._call(
            "record_path",
            self._client.zadd,
            self._key(site_root_key),
            {path: depth},
        )

    def store_fields(
        self,
        entry_key: str,
        fields: Dict[str, str],
    ) -> None:
        self._call(
            "store_fields",
            self._client.hset,
            self._key(entry_key),
            mapping=dict(fields),
        )

    def ranked_paths_at_or_below(
        self,
        site_root_key: str,
        max_depth: int,
    ) -> List[Tuple[int, str]]:
        rows = self._call(
            "ranked_paths_at_or_below",
            self._client.zrevrangebyscore,
            self._key(site_root_key),
            max_depth,
            0,
            withscores=True,
        )
        return [(int(score), _decode(member)) for member, score in rows]

    def fetch_fields(self, entry_key: str) -> Optional[Dict[str, str]]:
        raw = self._call(
            "fetch_fields", self._client.hgetall, self._key(entry_key)
        )
        if not raw:
            return None
        return {_decode(k): _decode(v) for k, v in raw.items()}

    def path_count(self, site_root_key: str) -> int:
        return int(self._call(
            "path_count", self._client.zcard, self._key(site_root_key)
        ))

    def all_keys(self) -> Set[str]:
        pattern = _escape_glob(self._prefix) + "*"
        keys = self._call(
            "all_keys",
            lambda: list(self._client.scan_iter(match=pattern, _type="HASH")),
        )
        return {_decode(key)[len(self._prefix):] for key in keys}

    def count(self) -> int:
        return len(self.all_keys())

    def clear(self) -> None:
        pattern = _escape_glob(self._prefix) + "*"
        keys = self._call(
            "clear", lambda: list(self._client.scan_iter(match=pattern))
        )
        for start in range(0, len(keys), _DELETE_BATCH_SIZE):
            self._call(
                "clear",
                self._client.delete,
                *keys[start:start + _DELETE_BATCH_SIZE],
            )
        if self._logger:
            self._logger.log_info(
                f"Namespace Redis {self._namespace!r} vidé "
                f"({len(keys)} clé(s) supprimée(s))."
            )

    @property
    def backend_name(self) -> str:
        """Nom court du backend.

        Returns:
            "redis"
        """
        return "redis"
