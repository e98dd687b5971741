"""Implémentation du Logger au-dessus du module logging standard."""

import logging
import os
from typing import Any, Dict, Optional

from crawl_auth.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StandardLogger(Logger):
    """
    Logger nommé s'appuyant sur logging.getLogger().

    Caractéristiques:
    - Un logger par nom (le crawler peut en partager un entre workers)
    - Sortie console par défaut, fichier UTF-8 optionnel
    - Pas de propagation (évite les logs en double chez l'appelant)
    - Niveau et format lus depuis une config optionnelle
    """

    def __init__(
        self,
        name: str = "crawl_auth",
        config: Optional[Dict[str, Any]] = None,
        log_file: Optional[str] = None,
        console_output: bool = True
    ) -> None:
        """
        Initialise le logger.

        Args:
            name: Nom du logger sous-jacent
            config: Configuration optionnelle, clés supportées:
                    logging.level, logging.format
            log_file: Chemin d'un fichier de log optionnel
            console_output: Activer la sortie console
        """
        logging_cfg = (config or {}).get("logging", {})
        level_name = str(logging_cfg.get("level", "INFO")).upper()
        log_format = logging_cfg.get("format", DEFAULT_FORMAT)
        level = getattr(logging, level_name, logging.INFO)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        # Les handlers sont posés une seule fois par nom de logger
        if not self.logger.handlers:
            formatter = logging.Formatter(log_format)
            if log_file:
                log_dir = os.path.dirname(log_file)
                if log_dir:
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = logging.FileHandler(
                    log_file, encoding="utf-8"
                )
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)
            if console_output or not log_file:
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)

        for handler in self.logger.handlers:
            handler.setLevel(level)

    def _flush(self) -> None:
        for handler in self.logger.handlers:
            handler.flush()

    def log_debug(self, message: str) -> None:
        """Log un message de diagnostic."""
        self.logger.debug(message)

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()
