"""Configuration du store de credentials.

Ce module définit les dataclasses immuables RedisSettings et
AuthStoreConfig, chargeables depuis un dict, un fichier TOML/JSON
ou les variables d'environnement (avec un fichier .env optionnel).

Exemple de fichier TOML :

    [auth_store]
    backend = "redis"

    [auth_store.redis]
    host = "cache.interne"
    port = 6380
    namespace = "crawler"
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv

from crawl_auth.config.loader import ConfigLoader, FileConfigLoader
from crawl_auth.errors.exceptions import ConfigurationError

BACKEND_MEMORY = "memory"
BACKEND_REDIS = "redis"
SUPPORTED_BACKENDS = (BACKEND_MEMORY, BACKEND_REDIS)

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379
DEFAULT_NAMESPACE = "crawl_auth"

CONFIG_SECTION = "auth_store"
ENV_PREFIX = "CRAWL_AUTH_"


@dataclass(frozen=True)
class RedisSettings:
    """Paramètres de connexion au serveur Redis.

    Attributes:
        host: Hôte du serveur.
        port: Port du serveur.
        db: Numéro de base Redis.
        password: Mot de passe Redis optionnel.
        namespace: Préfixe de toutes les clés écrites.
        socket_timeout: Timeout transport en secondes (None = aucun).
    """

    host: str = DEFAULT_REDIS_HOST
    port: int = DEFAULT_REDIS_PORT
    db: int = 0
    password: Optional[str] = None
    namespace: str = DEFAULT_NAMESPACE
    socket_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        """Valide le port, la base et le namespace.

        Raises:
            ConfigurationError: si une valeur est invalide.
        """
        if not self.host:
            raise ConfigurationError("Hôte Redis vide.")
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Port Redis invalide : {self.port}")
        if self.db < 0:
            raise ConfigurationError(f"Base Redis invalide : {self.db}")
        if not self.namespace or not self.namespace.strip():
            raise ConfigurationError("Le namespace ne peut pas être vide.")
        if self.socket_timeout is not None and self.socket_timeout <= 0:
            raise ConfigurationError(
                f"socket_timeout invalide : {self.socket_timeout}"
            )


@dataclass(frozen=True)
class AuthStoreConfig:
    """Configuration du store : choix du backend et paramètres Redis.

    Attributes:
        backend: "memory" ou "redis".
        redis: Paramètres Redis (ignorés pour le backend mémoire).
    """

    backend: str = BACKEND_MEMORY
    redis: RedisSettings = field(default_factory=RedisSettings)

    def __post_init__(self) -> None:
        """Valide le nom du backend.

        Raises:
            ConfigurationError: si le backend est inconnu.
        """
        if self.backend not in SUPPORTED_BACKENDS:
            raise ConfigurationError(
                f"Backend inconnu : {self.backend!r}. "
                f"Valeurs possibles : {', '.join(SUPPORTED_BACKENDS)}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthStoreConfig":
        """Construit la configuration depuis un dict brut.

        La section [auth_store] est utilisée si présente, sinon
        le dict est lu tel quel.

        Args:
            data: Configuration brute.

        Returns:
            Instance de AuthStoreConfig.

        Raises:
            ConfigurationError: si une valeur est invalide.
        """
        section = data.get(CONFIG_SECTION, data)
        if not isinstance(section, Mapping):
            raise ConfigurationError(
                f"Section [{CONFIG_SECTION}] invalide : table attendue."
            )
        redis_section = section.get("redis", {}) or {}
        if not isinstance(redis_section, Mapping):
            raise ConfigurationError(
                "Section redis invalide : table attendue."
            )
        try:
            redis = RedisSettings(
                host=str(redis_section.get("host", DEFAULT_REDIS_HOST)),
                port=int(redis_section.get("port", DEFAULT_REDIS_PORT)),
                db=int(redis_section.get("db", 0)),
                password=redis_section.get("password"),
                namespace=str(
                    redis_section.get("namespace", DEFAULT_NAMESPACE)
                ),
                socket_timeout=_optional_float(
                    redis_section.get("socket_timeout")
                ),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Section redis invalide : {exc}"
            ) from exc
        return cls(
            backend=str(section.get("backend", BACKEND_MEMORY)).lower(),
            redis=redis,
        )

    @classmethod
    def from_file(
        cls,
        config_path: Union[str, Path],
        loader: Optional[ConfigLoader] = None,
    ) -> "AuthStoreConfig":
        """Charge la configuration depuis un fichier TOML ou JSON.

        Args:
            config_path: Chemin du fichier.
            loader: Chargeur injectable, FileConfigLoader par défaut.

        Raises:
            ConfigurationError: si le fichier est absent, illisible
                ou invalide.
        """
        loader = loader or FileConfigLoader()
        try:
            data = loader.load(config_path)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Lecture de la configuration impossible : {exc}"
            ) from exc
        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AuthStoreConfig":
        """Construit la configuration depuis les variables CRAWL_AUTH_*.

        Si dotenv_path est fourni, le fichier .env est chargé sans
        écraser les variables shell existantes (override=False).

        Args:
            dotenv_path: Chemin optionnel vers un fichier .env.
            environ: Environnement à lire, os.environ par défaut.

        Raises:
            ConfigurationError: si une valeur est invalide.
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path=Path(dotenv_path), override=False)
        env = os.environ if environ is None else environ

        def read(name: str, default: Any = None) -> Any:
            value = env.get(ENV_PREFIX + name)
            return value if value else default

        redis_section: Dict[str, Any] = {
            "host": read("REDIS_HOST", DEFAULT_REDIS_HOST),
            "port": read("REDIS_PORT", DEFAULT_REDIS_PORT),
            "db": read("REDIS_DB", 0),
            "password": read("REDIS_PASSWORD"),
            "namespace": read("NAMESPACE", DEFAULT_NAMESPACE),
            "socket_timeout": read("REDIS_TIMEOUT"),
        }
        return cls.from_dict({
            "backend": read("BACKEND", BACKEND_MEMORY),
            "redis": redis_section,
        })


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)
