"""Modèles de données du store de credentials.

Ce module définit les dataclasses immuables Credential, UrlParts,
SiteRoot et CredentialEntry manipulées par le store et ses backends.
"""

import base64
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import ParseResult, SplitResult, urlsplit

from crawl_auth.auth.exceptions import MalformedUrlError
from crawl_auth.auth.paths import absolute_path, path_depth

USERNAME_FIELD = "username"
PASSWORD_FIELD = "password"


def _as_text(value: Any) -> str:
    """Décode les valeurs bytes renvoyées par un client Redis brut."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


@dataclass(frozen=True)
class Credential:
    """Couple identifiant / mot de passe HTTP Basic.

    Aucune validation de contenu : les chaînes vides sont
    acceptées (un mot de passe vide est valide).

    Attributes:
        username: Identifiant HTTP Basic.
        password: Mot de passe HTTP Basic.
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"

    def authorization_header_value(self) -> str:
        """Retourne base64("username:password").

        Returns:
            Valeur encodée, sans retour à la ligne final.
        """
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def authorization_header(self) -> str:
        """Retourne la valeur complète de l'en-tête Authorization.

        Returns:
            Chaîne de la forme "Basic <base64>".
        """
        return f"Basic {self.authorization_header_value()}"

    def to_fields(self) -> Dict[str, str]:
        """Retourne les champs stockés par les backends."""
        return {
            USERNAME_FIELD: self.username,
            PASSWORD_FIELD: self.password,
        }

    @classmethod
    def from_fields(
        cls, fields: Optional[Mapping[Any, Any]]
    ) -> Optional["Credential"]:
        """Reconstruit un credential depuis les champs stockés.

        Les clés et valeurs bytes sont décodées en UTF-8.

        Args:
            fields: Champs lus depuis un backend, ou None.

        Returns:
            Credential, ou None si l'un des deux champs manque.
        """
        if not fields:
            return None
        decoded = {_as_text(k): _as_text(v) for k, v in fields.items()}
        if USERNAME_FIELD not in decoded or PASSWORD_FIELD not in decoded:
            return None
        return cls(
            username=decoded[USERNAME_FIELD],
            password=decoded[PASSWORD_FIELD],
        )


@dataclass(frozen=True)
class UrlParts:
    """URL pre-découpée consommée par le store.

    Attributes:
        scheme: Schéma (ex: "https").
        host: Nom d'hôte, casse conservée.
        port: Port explicite ou None.
        path: Chemin brut, non normalisé.
    """

    scheme: str
    host: str
    port: Optional[int] = None
    path: str = "/"

    @classmethod
    def parse(cls, url: Any) -> "UrlParts":
        """Convertit une URL en UrlParts.

        Accepte une chaîne, un résultat de urllib.parse, ou tout
        objet exposant scheme, host, port et path.

        Raises:
            MalformedUrlError: si le port n'est pas un entier valide.
        """
        if isinstance(url, UrlParts):
            return url
        if isinstance(url, (SplitResult, ParseResult)):
            url = url.geturl()
        if isinstance(url, str):
            return cls._from_string(url)
        return cls(
            scheme=url.scheme,
            host=url.host,
            port=url.port,
            path=url.path or "",
        )

    @classmethod
    def _from_string(cls, url: str) -> "UrlParts":
        parts = urlsplit(url)
        # hostname est mis en minuscules par urllib : on relit netloc
        hostport = parts.netloc.rpartition("@")[2]
        if hostport.startswith("["):
            host = hostport[:hostport.find("]") + 1]
        else:
            host = hostport.partition(":")[0]
        try:
            port = parts.port
        except ValueError as exc:
            raise MalformedUrlError(
                f"Port invalide dans l'URL : {url!r}"
            ) from exc
        return cls(
            scheme=parts.scheme,
            host=host,
            port=port,
            path=parts.path,
        )


@dataclass(frozen=True)
class SiteRoot:
    """Identité schéma + hôte + port sous laquelle sont rangés
    les credentials.

    L'égalité est sensible à la casse, sans normalisation.

    Attributes:
        scheme: Schéma de l'URL.
        host: Nom d'hôte.
        port: Port explicite ou None.
    """

    scheme: str
    host: str
    port: Optional[int] = None

    def __post_init__(self) -> None:
        """Valide la présence d'un hôte.

        Raises:
            MalformedUrlError: si l'hôte est vide.
        """
        if not self.host:
            raise MalformedUrlError(
                "Impossible de dériver un site racine : hôte absent."
            )

    @property
    def key(self) -> str:
        """Clé du site : "<scheme>://<host>[:<port>]"."""
        port = f":{self.port}" if self.port is not None else ""
        return f"{self.scheme}://{self.host}{port}"

    @classmethod
    def from_url(cls, url: Any) -> "SiteRoot":
        """Dérive le site racine d'une URL."""
        parts = UrlParts.parse(url)
        return cls(scheme=parts.scheme, host=parts.host, port=parts.port)


@dataclass(frozen=True)
class CredentialEntry:
    """Credential rattaché à un chemin normalisé d'un site.

    Attributes:
        site_root: Site racine propriétaire.
        path: Chemin normalisé.
        depth: Nombre de segments de path.
        credential: Credential associé.
    """

    site_root: SiteRoot
    path: str
    depth: int
    credential: Credential

    @property
    def entry_key(self) -> str:
        """Clé complète de l'entrée : clé du site suivie du chemin."""
        return self.site_root.key + self.path

    @classmethod
    def create(
        cls,
        site_root: SiteRoot,
        path: str,
        credential: Credential,
    ) -> "CredentialEntry":
        """Normalise le chemin depuis la racine et calcule sa profondeur."""
        normalized = absolute_path(path)
        return cls(
            site_root=site_root,
            path=normalized,
            depth=path_depth(normalized),
            credential=credential,
        )
