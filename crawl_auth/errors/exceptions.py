"""
Exceptions de base communes à tout le package crawl_auth.

Les exceptions métier des sous-modules héritent de ApplicationError
pour pouvoir être interceptées d'un seul bloc par l'appelant.
"""


class ApplicationError(Exception):
    """Exception de base pour toutes les erreurs du package."""
    pass


class ConfigurationError(ApplicationError):
    """Configuration absente, illisible ou invalide."""
    pass


class ValidationError(ApplicationError):
    """Donnée d'entrée rejetée par une validation."""
    pass
