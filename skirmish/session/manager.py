"""
Session Manager - Creates and manages game sessions.

A session represents one game:
- Created when a client starts a game
- Holds the GameLoop that owns the game state
- Destroyed when the client ends it or it sits idle too long

Sessions are EPHEMERAL:
- No persistence
- State lives only in process memory
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
import uuid

from ..engine_core.rules import GameConfig
from ..engine_core.state import GameState
from .game_loop import GameLoop

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """An ephemeral game session."""
    session_id: str
    game_loop: GameLoop
    created_at: float
    last_active_at: float = 0.0

    @property
    def state(self) -> GameState:
        return self.game_loop.state

    def touch(self):
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own GameLoop
    - Track active sessions
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, max_idle_seconds: int = 3600):
        self._sessions: dict[str, Session] = {}
        self.max_idle_seconds = max_idle_seconds

    def create_session(self, config: GameConfig | None = None) -> Session:
        """
        Create a new game session.

        Args:
            config: Board size, credits and seed for the game

        Returns:
            New Session in the deployment phase
        """
        self.cleanup_stale_sessions()

        session_id = str(uuid.uuid4())
        now = time.time()
        session = Session(
            session_id=session_id,
            game_loop=GameLoop(config, game_id=session_id),
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session_id] = session
        logger.info(
            "Created session %s (%dx%d board)",
            session_id,
            session.state.grid.width,
            session.state.grid.height,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_idle_seconds: int | None = None) -> int:
        """
        End sessions with no activity for max_idle_seconds.

        Runs whenever a session is created, so abandoned games do not
        accumulate. Defaults to the manager's max_idle_seconds.

        Returns the number of sessions removed.
        """
        if max_idle_seconds is None:
            max_idle_seconds = self.max_idle_seconds
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_idle_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
