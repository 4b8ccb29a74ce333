"""
FastAPI Application - REST API for the skirmish engine.

Endpoints:
    GET    /api/v1/health                       Health check
    GET    /api/v1/unit-types                   Unit stat table
    POST   /api/v1/games                        Create a game
    GET    /api/v1/games                        List active games
    GET    /api/v1/games/{id}                   Get game state
    DELETE /api/v1/games/{id}                   End a game
    GET    /api/v1/games/{id}/legal-actions     Actions the game accepts now
    POST   /api/v1/games/{id}/select            Select a unit        {x, y}
    POST   /api/v1/games/{id}/move              Move selected unit   {x, y}
    POST   /api/v1/games/{id}/attack            Attack with selection {x, y}
    POST   /api/v1/games/{id}/cell              Board click          {x, y}
    POST   /api/v1/games/{id}/cancel            Clear selection
    POST   /api/v1/games/{id}/end-turn          End the current turn
    POST   /api/v1/games/{id}/deploy            Deploy a unit        {unit_type, x, y, player}
    POST   /api/v1/games/{id}/start-battle      Leave deployment
    POST   /api/v1/games/{id}/reset             Start over

Every command returns an ActionResponse. A rejected command is still
HTTP 200, with accepted=false, the engine error code and any notices.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService, GameNotFoundError
from .schemas import (
    # Request models
    CreateGameRequest,
    PositionRequest,
    DeployRequest,
    # Response models
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    UnitTypesResponse,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)

# Environment configuration
SKIRMISH_ENV = os.getenv("SKIRMISH_ENV", "development")
SKIRMISH_LOG_LEVEL = os.getenv("SKIRMISH_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Skirmish Engine API",
        description="""
Rules engine for a turn-based grid tactics game.

## Game Flow

1. `POST /games` creates a game in the **deployment** phase
2. `POST /games/{id}/deploy` places units for each side
3. `POST /games/{id}/start-battle` starts the **battle** with blue to move
4. `select` / `move` / `attack` / `end-turn` until one side has no units

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or has ended |
| `VALIDATION_ERROR` | Request body is invalid |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()
    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(GameNotFoundError)
    async def game_not_found_handler(request: Request, exc: GameNotFoundError):
        return make_error_response(
            ErrorCode.GAME_NOT_FOUND,
            str(exc),
            status_code=404,
            details={"game_id": exc.game_id},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request body is invalid",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Meta Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Meta"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="skirmish", version=__version__)

    @app.get(
        "/api/v1/unit-types",
        response_model=UnitTypesResponse,
        tags=["Meta"],
        summary="Stat table for deployable units",
    )
    async def unit_types() -> UnitTypesResponse:
        return api_service.unit_types()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(request: Optional[CreateGameRequest] = None) -> GameStateResponse:
        """
        Create a new game in the deployment phase.

        Pass a `seed` for a reproducible board.
        """
        return api_service.create_game(request)

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> GameStateResponse:
        return api_service.get_state(game_id)

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """End a game and release its state."""
        return api_service.end_game(game_id)

    @app.get(
        "/api/v1/games/{game_id}/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="List the actions the game accepts right now",
    )
    async def legal_actions(game_id: str) -> LegalActionsResponse:
        return api_service.legal_actions(game_id)

    # =========================================================================
    # Command Endpoints
    # =========================================================================

    command_responses = {404: {"model": ErrorResponse, "description": "Game not found"}}

    @app.post(
        "/api/v1/games/{game_id}/select",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Select one of the current player's units",
    )
    async def select(game_id: str, request: PositionRequest) -> ActionResponse:
        return api_service.select(game_id, request)

    @app.post(
        "/api/v1/games/{game_id}/move",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Move the selected unit",
    )
    async def move(game_id: str, request: PositionRequest) -> ActionResponse:
        return api_service.move(game_id, request)

    @app.post(
        "/api/v1/games/{game_id}/attack",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Attack with the selected unit",
    )
    async def attack(game_id: str, request: PositionRequest) -> ActionResponse:
        return api_service.attack(game_id, request)

    @app.post(
        "/api/v1/games/{game_id}/cell",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Click a board cell",
    )
    async def click(game_id: str, request: PositionRequest) -> ActionResponse:
        """
        Route a board click during battle.

        Moves or attacks when the cell is a legal target for the
        selection, otherwise selects the current player's unit there.
        """
        return api_service.click(game_id, request)

    @app.post(
        "/api/v1/games/{game_id}/cancel",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
    )
    async def cancel(game_id: str) -> ActionResponse:
        return api_service.cancel(game_id)

    @app.post(
        "/api/v1/games/{game_id}/end-turn",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
    )
    async def end_turn(game_id: str) -> ActionResponse:
        return api_service.end_turn(game_id)

    @app.post(
        "/api/v1/games/{game_id}/deploy",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
        summary="Deploy a unit",
    )
    async def deploy(game_id: str, request: DeployRequest) -> ActionResponse:
        """
        Deploy a unit during the deployment phase.

        Blue deploys in the left third of the board, red in the right third.
        """
        return api_service.deploy(game_id, request)

    @app.post(
        "/api/v1/games/{game_id}/start-battle",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
    )
    async def start_battle(game_id: str) -> ActionResponse:
        return api_service.start_battle(game_id)

    @app.post(
        "/api/v1/games/{game_id}/reset",
        response_model=ActionResponse,
        responses=command_responses,
        tags=["Commands"],
    )
    async def reset(game_id: str) -> ActionResponse:
        return api_service.reset(game_id)

    return app


# For running directly: uvicorn skirmish.api.app:app
app = create_app()
