"""Module de logging."""

from crawl_auth.logging.base import Logger
from crawl_auth.logging.standard_logger import StandardLogger

__all__ = [
    "Logger",
    "StandardLogger",
]
