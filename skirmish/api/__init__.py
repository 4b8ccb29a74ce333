"""
API Module - HTTP interface to the engine.

Exposes games via a REST API. A client:
1. Creates a game
2. Deploys units for both sides
3. Starts the battle
4. Sends board commands and renders the returned state and notices

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PositionRequest,
    DeployRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    UnitTypesResponse,
    ErrorResponse,
    # Shared
    UnitInfo,
    NoticeInfo,
    PositionInfo,
)
from .service import APIService, GameNotFoundError
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PositionRequest",
    "DeployRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "LegalActionsResponse",
    "UnitTypesResponse",
    "ErrorResponse",
    # Shared
    "UnitInfo",
    "NoticeInfo",
    "PositionInfo",
    # Service
    "APIService",
    "GameNotFoundError",
    "create_app",
]
