"""Tests pour AuthStoreConfig et RedisSettings."""

import json
import os
from unittest.mock import MagicMock

import pytest

from crawl_auth.auth.config import AuthStoreConfig, RedisSettings
from crawl_auth.config.loader import ConfigLoader
from crawl_auth.errors.exceptions import ConfigurationError

_ENV_KEYS = (
    "CRAWL_AUTH_BACKEND",
    "CRAWL_AUTH_REDIS_HOST",
    "CRAWL_AUTH_REDIS_PORT",
    "CRAWL_AUTH_NAMESPACE",
)


@pytest.fixture
def clean_env():
    """Retire les variables CRAWL_AUTH_* posées par python-dotenv."""
    saved = {key: os.environ.pop(key) for key in _ENV_KEYS
             if key in os.environ}
    yield
    for key in _ENV_KEYS:
        os.environ.pop(key, None)
    os.environ.update(saved)


class TestRedisSettings:
    """Tests de la dataclass RedisSettings."""

    def test_valeurs_par_defaut(self):
        """Les valeurs par défaut visent un Redis local."""
        settings = RedisSettings()
        assert settings.host == "localhost"
        assert settings.port == 6379
        assert settings.db == 0
        assert settings.namespace == "crawl_auth"
        assert settings.socket_timeout is None

    @pytest.mark.parametrize("kwargs", [
        {"port": 0},
        {"port": 70000},
        {"db": -1},
        {"namespace": "  "},
        {"host": ""},
        {"socket_timeout": 0},
    ])
    def test_valeurs_invalides(self, kwargs):
        """Une valeur invalide lève ConfigurationError."""
        with pytest.raises(ConfigurationError):
            RedisSettings(**kwargs)


class TestAuthStoreConfig:
    """Tests de AuthStoreConfig."""

    def test_defaut_memoire(self):
        """Le backend par défaut est la mémoire."""
        assert AuthStoreConfig().backend == "memory"

    def test_backend_inconnu(self):
        """Un backend inconnu lève ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Backend inconnu"):
            AuthStoreConfig(backend="memcached")

    def test_from_dict_section(self):
        """from_dict() lit la section [auth_store]."""
        config = AuthStoreConfig.from_dict({
            "auth_store": {
                "backend": "Redis",
                "redis": {"host": "cache", "port": "6380",
                          "namespace": "spider", "socket_timeout": 2},
            }
        })
        assert config.backend == "redis"
        assert config.redis == RedisSettings(
            host="cache", port=6380, namespace="spider", socket_timeout=2.0
        )

    def test_from_dict_sans_section(self):
        """Sans section [auth_store], le dict est lu tel quel."""
        config = AuthStoreConfig.from_dict({"backend": "memory"})
        assert config == AuthStoreConfig()

    def test_from_dict_port_non_numerique(self):
        """Un port non numérique lève ConfigurationError."""
        with pytest.raises(ConfigurationError, match="redis"):
            AuthStoreConfig.from_dict({"redis": {"port": "abc"}})

    @pytest.mark.parametrize("data", [
        {"auth_store": "redis"},
        {"auth_store": ["memory"]},
        {"redis": "x"},
        {"auth_store": {"backend": "redis", "redis": 42}},
    ])
    def test_from_dict_section_non_table(self, data):
        """Une section qui n'est pas une table lève ConfigurationError."""
        with pytest.raises(ConfigurationError, match="table attendue"):
            AuthStoreConfig.from_dict(data)

    def test_from_file_redis_non_table(self, tmp_path):
        """'redis = "x"' dans le TOML lève ConfigurationError."""
        config_file = tmp_path / "crawler.toml"
        config_file.write_text('[auth_store]\nredis = "x"\n')
        with pytest.raises(ConfigurationError):
            AuthStoreConfig.from_file(config_file)

    def test_from_file_toml(self, tmp_path):
        """from_file() charge un fichier TOML."""
        config_file = tmp_path / "crawler.toml"
        config_file.write_text(
            '[auth_store]\nbackend = "redis"\n\n'
            '[auth_store.redis]\nhost = "cache"\ndb = 3\n'
        )
        config = AuthStoreConfig.from_file(config_file)
        assert config.backend == "redis"
        assert config.redis.host == "cache"
        assert config.redis.db == 3

    def test_from_file_json(self, tmp_path):
        """from_file() charge un fichier JSON."""
        config_file = tmp_path / "crawler.json"
        config_file.write_text(json.dumps({"auth_store": {
            "backend": "memory"}}))
        assert AuthStoreConfig.from_file(config_file).backend == "memory"

    def test_from_file_absent(self, tmp_path):
        """Un fichier absent lève ConfigurationError."""
        with pytest.raises(ConfigurationError):
            AuthStoreConfig.from_file(tmp_path / "absent.toml")

    def test_from_file_loader_injecte(self):
        """Le chargeur injecté est utilisé."""
        loader = MagicMock(spec=ConfigLoader)
        loader.load.return_value = {"auth_store": {"backend": "redis"}}
        config = AuthStoreConfig.from_file("peu/importe.toml", loader=loader)
        loader.load.assert_called_once_with("peu/importe.toml")
        assert config.backend == "redis"

    def test_from_env(self):
        """from_env() lit les variables CRAWL_AUTH_*."""
        config = AuthStoreConfig.from_env(environ={
            "CRAWL_AUTH_BACKEND": "redis",
            "CRAWL_AUTH_REDIS_HOST": "cache",
            "CRAWL_AUTH_REDIS_PORT": "6380",
            "CRAWL_AUTH_REDIS_DB": "1",
            "CRAWL_AUTH_REDIS_PASSWORD": "pw",
            "CRAWL_AUTH_NAMESPACE": "spider",
            "CRAWL_AUTH_REDIS_TIMEOUT": "0.5",
        })
        assert config == AuthStoreConfig(
            backend="redis",
            redis=RedisSettings(host="cache", port=6380, db=1,
                                password="pw", namespace="spider",
                                socket_timeout=0.5),
        )

    def test_from_env_vide(self):
        """Sans variable, la configuration par défaut est retournée."""
        assert AuthStoreConfig.from_env(environ={}) == AuthStoreConfig()

    def test_from_env_dotenv(self, tmp_path, clean_env):
        """Le fichier .env est chargé avant la lecture."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text(
            "CRAWL_AUTH_BACKEND=redis\nCRAWL_AUTH_REDIS_HOST=cache\n"
        )
        config = AuthStoreConfig.from_env(dotenv_path=dotenv_file)
        assert config.backend == "redis"
        assert config.redis.host == "cache"

    def test_from_env_shell_prioritaire(self, tmp_path, clean_env):
        """Une variable shell n'est pas écrasée par le .env."""
        os.environ["CRAWL_AUTH_REDIS_HOST"] = "shell"
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("CRAWL_AUTH_REDIS_HOST=dotenv\n")
        config = AuthStoreConfig.from_env(dotenv_path=dotenv_file)
        assert config.redis.host == "shell"
