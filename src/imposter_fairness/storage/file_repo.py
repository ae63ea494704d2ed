"""File-based fairness-state repository using JSON files.

One JSON file per session in the states directory, named by a slug of the
session id plus a short hash of it; the file holds the state snapshot plus
save metadata.
"""

import hashlib
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from imposter_fairness.models.state import FairnessState

from .repository import FairnessStateRepository

logger = logging.getLogger(__name__)


def safe_filename(session_id: str) -> str:
    """Convert a session id to a filesystem-safe file stem.

    Examples:
        >>> safe_filename("Friday Night")
        'Friday-Night'
        >>> safe_filename("../etc/passwd")
        'etc-passwd'
    """
    text = re.sub(r"[^A-Za-z0-9_-]+", "-", session_id)
    return text.strip("-")


def _require_session_id(session_id: str) -> str:
    stem = safe_filename(session_id)
    if not stem:
        raise ValueError("Session id must contain at least one letter or digit")
    return stem


def session_filename(session_id: str) -> str:
    """File stem for a session: readable slug plus a short hash of the raw id.

    The hash keeps ids that slug identically ("game night", "game-night")
    in separate files.
    """
    stem = _require_session_id(session_id)
    digest = hashlib.sha1(session_id.encode("utf-8")).hexdigest()[:8]
    return f"{stem}-{digest}"


class FileFairnessStateRepository(FairnessStateRepository):
    """JSON file-based fairness-state repository."""

    def __init__(self, states_path: str | Path = "fairness_states"):
        """Initialize repository.

        Args:
            states_path: Path to states directory
        """
        self.states_path = Path(states_path)
        self.states_path.mkdir(parents=True, exist_ok=True)

    def _get_state_path(self, session_id: str) -> Path:
        """Get path to state file."""
        return self.states_path / f"{session_filename(session_id)}.json"

    def save_state(self, session_id: str, state: FairnessState) -> None:
        """Persist the complete fairness state of a session."""
        path = self._get_state_path(session_id)
        record = {
            "id": session_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "state": state.to_dict(),
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
        logger.debug(f"Saved fairness state for {session_id} at round {state.current_round}")

    def load_state(self, session_id: str) -> Optional[FairnessState]:
        """Load a session's fairness state."""
        if not safe_filename(session_id):
            return None
        path = self._get_state_path(session_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            record = json.load(f)
        logger.debug(f"Loaded fairness state for {session_id}")
        return FairnessState.from_dict(record["state"])

    def list_sessions(self) -> list[dict]:
        """List saved sessions."""
        sessions = []
        for path in self.states_path.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                record = json.load(f)
            state = record.get("state", {})
            sessions.append({
                "id": record.get("id", path.stem),
                "current_round": state.get("current_round", 0),
                "players": len(state.get("per_player", {})),
                "updated_at": record.get("updated_at", ""),
            })
        return sorted(sessions, key=lambda x: x.get("updated_at", ""), reverse=True)

    def delete_state(self, session_id: str) -> bool:
        """Delete a session's saved state."""
        if not safe_filename(session_id):
            return False
        path = self._get_state_path(session_id)
        if path.exists():
            path.unlink()
            return True
        return False
