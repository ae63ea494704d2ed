"""Storage configuration for imposter fairness.

This module provides configuration for storage backends and a factory
function to create the appropriate repository based on configuration.
"""

import os
from enum import Enum

from .file_repo import FileFairnessStateRepository
from .repository import FairnessStateRepository
from .sqlite_repo import SQLiteFairnessStateRepository


class StorageBackend(Enum):
    """Available storage backends."""

    FILE = "file"
    SQLITE = "sqlite"


# Default configuration (can be overridden via environment variables)
DEFAULT_STORAGE_BACKEND = StorageBackend.FILE
DEFAULT_STATES_PATH = "fairness_states"
DEFAULT_DATABASE_URI = "instance/imposter_fairness.db"


def get_storage_backend() -> StorageBackend:
    """Get configured storage backend from environment.

    Returns:
        StorageBackend enum value
    """
    backend_str = os.environ.get("IMPOSTER_FAIRNESS_STORAGE_BACKEND", "file").lower()
    if backend_str == "sqlite":
        return StorageBackend.SQLITE
    return StorageBackend.FILE


def get_states_path() -> str:
    """Get configured states path from environment."""
    return os.environ.get("IMPOSTER_FAIRNESS_STATES_PATH", DEFAULT_STATES_PATH)


def get_database_uri() -> str:
    """Get configured database URI from environment."""
    return os.environ.get("IMPOSTER_FAIRNESS_DATABASE_URI", DEFAULT_DATABASE_URI)


def get_state_repository(
    backend: StorageBackend | None = None,
) -> FairnessStateRepository:
    """Factory function to create a fairness-state repository.

    Args:
        backend: Storage backend to use. If None, uses environment config.

    Returns:
        FairnessStateRepository instance
    """
    if backend is None:
        backend = get_storage_backend()

    if backend == StorageBackend.SQLITE:
        return SQLiteFairnessStateRepository(get_database_uri())
    return FileFairnessStateRepository(get_states_path())
