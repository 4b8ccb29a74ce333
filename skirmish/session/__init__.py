"""
Session Module - Manages ephemeral games.

A session represents one game from deployment to game over:
- Created when a client starts a game
- Holds the GameLoop that owns the current state
- Destroyed when the client ends it or it goes idle

Nothing is persisted.
"""

from .manager import SessionManager, Session
from .game_loop import GameLoop

__all__ = [
    "SessionManager",
    "Session",
    "GameLoop",
]
