"""Cardano wallet tracker backed by the VESPR API."""

from .app import Application, create_application
from .clients import VesprApiError, VesprClient
from .config import AppConfig, get_config
from .repository import VesprRepository

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "Application",
    "VesprApiError",
    "VesprClient",
    "VesprRepository",
    "create_application",
    "get_config",
]
