"""Normalisation et découpage des chemins d'URL.

Fonctions pures, sans état, utilisées pour calculer la clé et la
profondeur d'un chemin avant stockage ou recherche.
"""

import re
from typing import List, Sequence

_REPEATED_SEPARATORS = re.compile(r"/{2,}")
# Un segment garde son "/" final pour distinguer "a/" de "a"
_SEGMENT = re.compile(r"[^/]*/|[^/]+\Z")

_CURRENT_DIR = (".", "./")
_PARENT_DIR = ("..", "../")


def normalize_path(path: str) -> str:
    """Résout les segments '.' et '..' et fusionne les '/' répétés.

    Un chemin terminé par '/' reste un répertoire, un chemin
    relatif reste relatif. Remonter au-dessus de la racine est
    sans effet.

    Args:
        path: Chemin brut issu d'une URL.

    Returns:
        Chemin normalisé, '/' si rien ne subsiste.

    Example:
        >>> normalize_path("/test/../path")
        '/path'
        >>> normalize_path("./path")
        'path'
        >>> normalize_path("/test/path/")
        '/test/path/'
    """
    segments = _SEGMENT.findall(_REPEATED_SEPARATORS.sub("/", path or ""))
    root = ""
    if segments and segments[0] == "/":
        root = "/"
        segments = segments[1:]

    stack: List[str] = []
    for segment in segments:
        if segment in _PARENT_DIR:
            if stack:
                stack.pop()
        elif segment not in _CURRENT_DIR:
            stack.append(segment)

    return (root + "".join(stack)) or "/"


def path_segments(path: str) -> List[str]:
    """Retourne les composants non vides d'un chemin."""
    return [segment for segment in path.split("/") if segment]


def path_depth(path: str) -> int:
    """Nombre de segments non vides, utilisé comme score de spécificité."""
    return len(path_segments(path))


def is_segment_prefix(
    prefix: Sequence[str], segments: Sequence[str]
) -> bool:
    """Indique si prefix correspond aux premiers segments de segments.

    Comparaison segment par segment : ["admin"] n'est pas un
    préfixe de ["admin2", "page"].
    """
    if len(prefix) > len(segments):
        return False
    return list(segments[:len(prefix)]) == list(prefix)


def absolute_path(path: str) -> str:
    """Normalise un chemin d'URL en le rattachant à la racine.

    Le chemin d'une URL qui a un hôte est toujours absolu : un
    chemin sans '/' initial est donc lu depuis la racine.

    Example:
        >>> absolute_path("admin/../secure/")
        '/secure/'
    """
    if not path or not path.startswith("/"):
        path = "/" + (path or "")
    return normalize_path(path)
