"""SQLite-based fairness-state repository.

Stores each session's state snapshot as a JSON column, with the current
round and player count denormalized for listing.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from imposter_fairness.models.state import FairnessState

from .repository import FairnessStateRepository

logger = logging.getLogger(__name__)


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> dict:
    """Convert sqlite3 row to dict."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


class SQLiteFairnessStateRepository(FairnessStateRepository):
    """SQLite-based fairness-state repository."""

    def __init__(self, database_uri: str = "instance/imposter_fairness.db"):
        """Initialize repository.

        Args:
            database_uri: Path to SQLite database file
        """
        self.database_path = Path(database_uri)
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = dict_factory
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS fairness_states (
                id TEXT PRIMARY KEY,
                current_round INTEGER NOT NULL,
                players INTEGER NOT NULL,
                data TEXT NOT NULL,
                created_at TEXT,
                updated_at TEXT
            )
        """)
        conn.commit()
        conn.close()

    def save_state(self, session_id: str, state: FairnessState) -> None:
        """Persist the complete fairness state of a session."""
        if not session_id:
            raise ValueError("Session id must not be empty")
        now = datetime.now(timezone.utc).isoformat()
        data = state.to_dict()

        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO fairness_states (id, current_round, players, data, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                current_round = excluded.current_round,
                players = excluded.players,
                data = excluded.data,
                updated_at = excluded.updated_at
        """, (
            session_id,
            state.current_round,
            len(data["per_player"]),
            json.dumps(data),
            now,
            now,
        ))
        conn.commit()
        conn.close()
        logger.debug(f"Saved fairness state for {session_id} at round {state.current_round}")

    def load_state(self, session_id: str) -> Optional[FairnessState]:
        """Load a session's fairness state."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("SELECT data FROM fairness_states WHERE id = ?", (session_id,))
        row = cursor.fetchone()
        conn.close()

        if row is None:
            return None
        return FairnessState.from_dict(json.loads(row["data"]))

    def list_sessions(self) -> list[dict]:
        """List saved sessions."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, current_round, players, updated_at
            FROM fairness_states
            ORDER BY updated_at DESC
        """)
        rows = cursor.fetchall()
        conn.close()
        return rows

    def delete_state(self, session_id: str) -> bool:
        """Delete a session's saved state."""
        conn = self._get_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM fairness_states WHERE id = ?", (session_id,))
        deleted = cursor.rowcount > 0
        conn.commit()
        conn.close()
        return deleted
