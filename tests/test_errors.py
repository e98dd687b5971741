"""Tests pour la hiérarchie d'exceptions."""

import pytest

from crawl_auth.auth.exceptions import (
    AuthStoreError,
    BackendUnavailableError,
    MalformedUrlError,
)
from crawl_auth.errors import (
    ApplicationError,
    ConfigurationError,
    ValidationError,
)


class TestHierarchie:
    """Toutes les erreurs métier dérivent de ApplicationError."""

    @pytest.mark.parametrize("error_type", [
        ConfigurationError,
        ValidationError,
        AuthStoreError,
        BackendUnavailableError,
        MalformedUrlError,
    ])
    def test_application_error(self, error_type):
        """Chaque exception est interceptable via ApplicationError."""
        with pytest.raises(ApplicationError):
            raise error_type("message")

    def test_malformed_url_error(self):
        """MalformedUrlError hérite de AuthStoreError et ValidationError."""
        assert issubclass(MalformedUrlError, AuthStoreError)
        assert issubclass(MalformedUrlError, ValidationError)

    def test_backend_unavailable_n_est_pas_une_validation(self):
        """L'indisponibilité n'est pas une erreur de donnée."""
        assert not issubclass(BackendUnavailableError, ValidationError)
