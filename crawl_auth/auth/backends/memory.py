"""Backend de stockage en mémoire du processus.

Ce module fournit MemoryBackend, sans dépendance externe, adapté
à un crawl mono-processus avec plusieurs workers en threads.
"""

import bisect
import threading
from typing import Dict, List, Optional, Set, Tuple

from crawl_auth.auth.base import StoreBackend
from crawl_auth.logging.base import Logger


class _Partition:
    """Chemins d'un site racine, triés par (profondeur, chemin).

    Chaque partition porte son propre verrou : deux sites
    différents ne se bloquent jamais mutuellement.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.ranked: List[Tuple[int, str]] = []
        self.depths: Dict[str, int] = {}

    def record(self, path: str, depth: int) -> None:
        with self.lock:
            previous = self.depths.get(path)
            if previous == depth:
                return
            if previous is not None:
                self.ranked.remove((previous, path))
            bisect.insort(self.ranked, (depth, path))
            self.depths[path] = depth

    def at_or_below(self, max_depth: int) -> List[Tuple[int, str]]:
        with self.lock:
            snapshot = list(self.ranked)
        return [
            (depth, path)
            for depth, path in reversed(snapshot)
            if 0 <= depth <= max_depth
        ]

    def reset(self) -> None:
        with self.lock:
            self.ranked.clear()
            self.depths.clear()

    def __len__(self) -> int:
        return len(self.depths)


class MemoryBackend(StoreBackend):
    """Stocke les entrées dans des dictionnaires du processus.

    L'ordre de restitution est (profondeur, chemin) décroissant,
    identique à celui de ZREVRANGEBYSCORE côté Redis.

    Attributes:
        _partitions: Partition de chemins par clé de site racine.
        _fields: Champs de credential par clé d'entrée.
        _logger: Logger optionnel.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        """Initialise un backend vide.

        Args:
            logger: Logger optionnel (injection de dépendance).
        """
        self._partitions: Dict[str, _Partition] = {}
        self._fields: Dict[str, Dict[str, str]] = {}
        self._logger = logger

    def record_path(
        self,
        site_root_key: str,
        path: str,
        depth: int,
    ) -> None:
        # setdefault est atomique : pas de verrou global
        partition = self._partitions.setdefault(site_root_key, _Partition())
        partition.record(path, depth)

    def store_fields(
        self,
        entry_key: str,
        fields: Dict[str, str],
    ) -> None:
        self._fields[entry_key] = dict(fields)

    def ranked_paths_at_or_below(
        self,
        site_root_key: str,
        max_depth: int,
    ) -> List[Tuple[int, str]]:
        partition = self._partitions.get(site_root_key)
        if partition is None:
            return []
        return partition.at_or_below(max_depth)

    def fetch_fields(self, entry_key: str) -> Optional[Dict[str, str]]:
        fields = self._fields.get(entry_key)
        return dict(fields) if fields is not None else None

    def path_count(self, site_root_key: str) -> int:
        partition = self._partitions.get(site_root_key)
        return len(partition) if partition is not None else 0

    def all_keys(self) -> Set[str]:
        return set(self._fields.copy())

    def count(self) -> int:
        return len(self._fields)

    def clear(self) -> None:
        """Vide le backend en place.

        Chaque partition est vidée sous son propre verrou et reste
        enregistrée : un add() concurrent qui la détient déjà écrit
        dans la partition vivante, jamais dans une copie écartée.
        Si ses champs sont effacés après l'écriture du chemin, la
        recherche échoue fermée jusqu'au prochain add().
        """
        for partition in list(self._partitions.values()):
            partition.reset()
        self._fields.clear()
        if self._logger:
            self._logger.log_info("Backend mémoire vidé.")

    @property
    def backend_name(self) -> str:
        """Nom court du backend.

        Returns:
            "memory"
        """
        return "memory"
