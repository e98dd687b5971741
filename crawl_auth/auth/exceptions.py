"""Exceptions pour le module auth.

Ce module définit les exceptions métier levées par le store de
credentials et ses backends. Toutes héritent de ApplicationError.
Une recherche sans résultat n'est pas une erreur : lookup()
retourne None.
"""

from crawl_auth.errors.exceptions import ApplicationError, ValidationError


class AuthStoreError(ApplicationError):
    """Exception de base pour toutes les erreurs du store."""


class BackendUnavailableError(AuthStoreError):
    """Levée quand le backend distant est injoignable ou expire."""


class MalformedUrlError(AuthStoreError, ValidationError):
    """Levée quand une URL ne permet pas de dériver un site racine."""
