"""Interface abstraite des backends de stockage.

Ce module définit l'ABC StoreBackend que satisfont le backend
mémoire et le backend Redis. Le store ne connaît que cette
interface ; le backend est choisi explicitement à la construction.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple


class StoreBackend(ABC):
    """Stockage des chemins classes par profondeur et des champs
    de credential associés."""

    @abstractmethod
    def record_path(
        self,
        site_root_key: str,
        path: str,
        depth: int,
    ) -> None:
        """Enregistre un chemin à sa profondeur sous un site racine.

        Idempotent : réenregistrer le même chemin ne crée pas
        de doublon.

        Args:
            site_root_key: Clé du site racine.
            path: Chemin normalisé.
            depth: Profondeur du chemin (score de tri).

        Raises:
            BackendUnavailableError: si le backend est injoignable.
        """
        pass  # pragma: no cover

    @abstractmethod
    def store_fields(
        self,
        entry_key: str,
        fields: Dict[str, str],
    ) -> None:
        """Persiste les champs username et password d'une entrée.

        Args:
            entry_key: Clé du site racine suivie du chemin.
            fields: Champs à stocker.

        Raises:
            BackendUnavailableError: si le backend est injoignable.
        """
        pass  # pragma: no cover

    @abstractmethod
    def ranked_paths_at_or_below(
        self,
        site_root_key: str,
        max_depth: int,
    ) -> List[Tuple[int, str]]:
        """Retourne les chemins de profondeur 0 à max_depth.

        Args:
            site_root_key: Clé du site racine.
            max_depth: Profondeur maximale incluse.

        Returns:
            Couples (profondeur, chemin) par profondeur
            décroissante, liste vide si le site est inconnu.
        """
        pass  # pragma: no cover

    @abstractmethod
    def fetch_fields(self, entry_key: str) -> Optional[Dict[str, str]]:
        """Lit les champs d'une entrée.

        Args:
            entry_key: Clé du site racine suivie du chemin.

        Returns:
            Copie des champs, ou None si l'entrée est absente.
            Un mot de passe vide n'est pas une absence.
        """
        pass  # pragma: no cover

    @abstractmethod
    def path_count(self, site_root_key: str) -> int:
        """Nombre de chemins enregistrés sous un site racine."""
        pass  # pragma: no cover

    @abstractmethod
    def all_keys(self) -> Set[str]:
        """Clés de toutes les entrées stockées."""
        pass  # pragma: no cover

    @abstractmethod
    def count(self) -> int:
        """Nombre d'entrées stockées."""
        pass  # pragma: no cover

    @abstractmethod
    def clear(self) -> None:
        """Vide entièrement le backend."""
        pass  # pragma: no cover

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Nom court du backend (ex: "memory", "redis")."""
        pass  # pragma: no cover
