"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client (board UI, bot
harness, test script) and the engine.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has ended
- VALIDATION_ERROR: Request body failed validation

Rejected game actions are not errors at this level: they come back as
ActionResponse with accepted=false, an engine error code and notices.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class PlayerColor(str, Enum):
    BLUE = "blue"
    RED = "red"


class UnitKind(str, Enum):
    INFANTRY = "infantry"
    TANK = "tank"
    HELICOPTER = "helicopter"


class PhaseName(str, Enum):
    DEPLOYMENT = "deployment"
    BATTLE = "battle"
    GAME_OVER = "game_over"


class NoticeLevelName(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Structured error codes for HTTP-level failures."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Requests
# =============================================================================

class CreateGameRequest(BaseModel):
    """Options for a new game. All fields are optional."""
    width: int = Field(10, ge=3, le=50, description="Board columns")
    height: int = Field(8, ge=1, le=50, description="Board rows")
    starting_credits: int = Field(1000, ge=0, description="Credits per player")
    seed: Optional[int] = Field(None, description="Seed for terrain generation")


class PositionRequest(BaseModel):
    """A board cell. Upper bounds are checked by the engine."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class DeployRequest(PositionRequest):
    """Deploy a unit for a player on a cell."""
    unit_type: UnitKind
    player: PlayerColor


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    x: int
    y: int


class UnitInfo(BaseModel):
    """A unit on the board."""
    id: str
    unit_type: UnitKind
    player: PlayerColor
    position: PositionInfo
    health: float
    max_health: float
    attack: int
    defense: int
    move_range: int
    attack_range: int
    cost: int
    has_moved: bool = False
    has_attacked: bool = False


class NoticeInfo(BaseModel):
    """A message for the player."""
    level: NoticeLevelName
    message: str


class UnitTypeInfo(BaseModel):
    """Stat block for a deployable unit type."""
    unit_type: UnitKind
    health: int
    attack: int
    defense: int
    move_range: int
    attack_range: int
    cost: int


class LegalActionInfo(BaseModel):
    """One action the game would currently accept."""
    action_type: str
    position: Optional[PositionInfo] = None
    unit_type: Optional[UnitKind] = None
    player: Optional[PlayerColor] = None


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    phase: PhaseName
    current_player: PlayerColor
    winner: Optional[PlayerColor] = None
    turn: int
    blue_credits: int
    red_credits: int
    width: int
    height: int
    terrain: list[list[str]] = Field(
        default_factory=list, description="terrain[y][x]: grass, water, mountain, road"
    )
    units: list[UnitInfo] = Field(default_factory=list)
    selected_unit: Optional[UnitInfo] = None
    available_moves: list[PositionInfo] = Field(default_factory=list)
    available_attacks: list[PositionInfo] = Field(default_factory=list)
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of a game command."""
    accepted: bool
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, description="Engine rejection code")
    notices: list[NoticeInfo] = Field(default_factory=list)
    state: GameStateResponse
    api_version: str = "v1"


class LegalActionsResponse(BaseModel):
    game_id: str
    actions: list[LegalActionInfo]
    count: int


class UnitTypesResponse(BaseModel):
    unit_types: list[UnitTypeInfo]
    starting_credits: int


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameListResponse(BaseModel):
    """Response listing active games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
