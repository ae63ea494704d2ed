"""Storage module for imposter fairness.

This module provides a repository interface and implementations for
persisting a session's FairnessState across app restarts.

Usage:
    from imposter_fairness.storage import get_state_repository

    repo = get_state_repository()
    repo.save_state("friday-night", state)
    state = repo.load_state("friday-night")

Configuration via environment variables:
    IMPOSTER_FAIRNESS_STORAGE_BACKEND: "file" or "sqlite" (default: "file")
    IMPOSTER_FAIRNESS_STATES_PATH: Path to states directory (default: "fairness_states")
    IMPOSTER_FAIRNESS_DATABASE_URI: SQLite database path (default: "instance/imposter_fairness.db")
"""

from .config import (
    StorageBackend,
    get_database_uri,
    get_state_repository,
    get_states_path,
    get_storage_backend,
)
from .file_repo import FileFairnessStateRepository
from .repository import FairnessStateRepository
from .sqlite_repo import SQLiteFairnessStateRepository

__all__ = [
    # Abstract interface
    "FairnessStateRepository",
    # Implementations
    "FileFairnessStateRepository",
    "SQLiteFairnessStateRepository",
    # Configuration
    "StorageBackend",
    "get_storage_backend",
    "get_states_path",
    "get_database_uri",
    # Factory function
    "get_state_repository",
]
