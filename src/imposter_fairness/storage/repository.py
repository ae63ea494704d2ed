"""Abstract repository interface for fairness-state storage.

A host that wants fairness memory to survive app restarts saves the
FairnessState of a session after each round and loads it when the session
resumes. Both file-based (JSON) and SQLite backends implement this
interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from imposter_fairness.models.state import FairnessState


class FairnessStateRepository(ABC):
    """Abstract base class for fairness-state storage."""

    @abstractmethod
    def save_state(self, session_id: str, state: FairnessState) -> None:
        """Persist the complete fairness state of a session.

        Args:
            session_id: Unique identifier for the play session
            state: State to persist (overwrites any previous save)

        Raises:
            ValueError: If session_id is empty
        """
        pass

    @abstractmethod
    def load_state(self, session_id: str) -> Optional[FairnessState]:
        """Load a session's fairness state.

        Args:
            session_id: ID of session to load

        Returns:
            FairnessState, or None if not found
        """
        pass

    @abstractmethod
    def list_sessions(self) -> list[dict]:
        """List saved sessions.

        Returns:
            List of dicts containing: {id, current_round, players, updated_at},
            most recently updated first
        """
        pass

    @abstractmethod
    def delete_state(self, session_id: str) -> bool:
        """Delete a session's saved state.

        Args:
            session_id: ID of session to delete

        Returns:
            True if deleted, False if not found
        """
        pass
