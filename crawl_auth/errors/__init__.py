"""Module de gestion des erreurs."""

from crawl_auth.errors.exceptions import (
    ApplicationError,
    ConfigurationError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "ValidationError",
]
