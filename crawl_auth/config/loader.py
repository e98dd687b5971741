"""Chargement de fichiers de configuration TOML ou JSON."""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Union


def _read_toml(path: Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Dict[str, Any]]] = {
    ".toml": _read_toml,
    ".json": _read_json,
}


class ConfigLoader(ABC):
    """
    Interface abstraite pour le chargement de configuration.

    Injectée dans AuthStoreConfig.from_file() pour pouvoir
    substituer un mock dans les tests.
    """

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Charge un fichier de configuration.

        Args:
            config_path: Chemin vers le fichier de configuration
            schema: Classe pydantic BaseModel optionnelle

        Returns:
            Dictionnaire brut ou instance du schema
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Chargeur de configuration depuis un fichier local.

    Le format est choisi d'après l'extension (.toml ou .json).
    La validation par un modèle pydantic est optionnelle et
    n'exige pydantic que si un schema est fourni.
    """

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Charge un fichier de configuration TOML ou JSON.

        Args:
            config_path: Chemin vers le fichier de configuration
            schema: Classe pydantic BaseModel optionnelle

        Returns:
            Dictionnaire brut, ou instance du schema si fourni

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si l'extension n'est pas supportée
            ImportError: Si schema fourni mais pydantic absent
            TypeError: Si schema n'est pas un BaseModel
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration introuvable: {path}"
            )

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(
                f"Extension non supportée: {path.suffix}. "
                "Utilisez .toml ou .json"
            )
        raw_config = reader(path)

        if schema is None:
            return raw_config
        return self._validate_with_schema(raw_config, schema)

    @staticmethod
    def _validate_with_schema(
        data: Dict[str, Any], schema: type
    ) -> Any:
        """Valide le dict brut avec un modèle pydantic.

        Raises:
            ImportError: Si pydantic n'est pas installe.
            TypeError: Si schema n'est pas un BaseModel.
        """
        try:
            from pydantic import BaseModel
        except ImportError:
            raise ImportError(
                "pydantic est requis pour valider un schema. "
                "Installez-le avec: pip install crawl-auth[validation]"
            )

        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Le schema doit hériter de pydantic.BaseModel, "
                f"reçu: {schema}"
            )
        return schema.model_validate(data)
