"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to GameLoop commands
2. Manages sessions
3. Formats engine states and results for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

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
    GameListResponse,
    EndGameResponse,
    # Shared
    PositionInfo,
    UnitInfo,
    NoticeInfo,
    UnitTypeInfo,
    LegalActionInfo,
)
from ..engine_core.action import Action, ActionResult
from ..engine_core.rules import GameConfig, UnitType, UNIT_STATS, STARTING_CREDITS
from ..engine_core.state import GameState
from ..engine_core.units import Player, Position, Unit
from ..session import SessionManager, Session


class GameNotFoundError(KeyError):
    """No active game with the given id."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(game_id)

    def __str__(self) -> str:
        return f"Game {self.game_id} not found"


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_game(CreateGameRequest(seed=3))
        service.deploy(state.game_id, DeployRequest(unit_type="tank", x=0, y=0, player="blue"))
        service.start_battle(state.game_id)
        response = service.select(state.game_id, PositionRequest(x=0, y=0))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Games
    # =========================================================================

    def create_game(self, request: CreateGameRequest | None = None) -> GameStateResponse:
        """Create a new game in the deployment phase."""
        request = request or CreateGameRequest()
        config = GameConfig(
            width=request.width,
            height=request.height,
            starting_credits=request.starting_credits,
            seed=request.seed,
        )
        session = self.session_manager.create_session(config)
        return state_to_response(session.state)

    def get_state(self, game_id: str) -> GameStateResponse:
        return state_to_response(self._get_session(game_id).state)

    def end_game(self, game_id: str) -> EndGameResponse:
        success = self.session_manager.end_session(game_id, reason="user_ended")
        return EndGameResponse(success=success, game_id=game_id)

    def list_games(self) -> GameListResponse:
        games = self.session_manager.list_active_sessions()
        return GameListResponse(games=games, count=len(games))

    def legal_actions(self, game_id: str) -> LegalActionsResponse:
        actions = self._get_session(game_id).game_loop.legal_actions()
        return LegalActionsResponse(
            game_id=game_id,
            actions=[action_to_info(a) for a in actions],
            count=len(actions),
        )

    def unit_types(self) -> UnitTypesResponse:
        return UnitTypesResponse(
            unit_types=[
                UnitTypeInfo(
                    unit_type=unit_type.value,
                    health=stats.health,
                    attack=stats.attack,
                    defense=stats.defense,
                    move_range=stats.move_range,
                    attack_range=stats.attack_range,
                    cost=stats.cost,
                )
                for unit_type, stats in UNIT_STATS.items()
            ],
            starting_credits=STARTING_CREDITS,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def select(self, game_id: str, request: PositionRequest) -> ActionResponse:
        return self._run(game_id, Action.select(_position(request)))

    def move(self, game_id: str, request: PositionRequest) -> ActionResponse:
        return self._run(game_id, Action.move(_position(request)))

    def attack(self, game_id: str, request: PositionRequest) -> ActionResponse:
        return self._run(game_id, Action.attack(_position(request)))

    def cancel(self, game_id: str) -> ActionResponse:
        return self._run(game_id, Action.cancel())

    def end_turn(self, game_id: str) -> ActionResponse:
        return self._run(game_id, Action.end_turn())

    def deploy(self, game_id: str, request: DeployRequest) -> ActionResponse:
        action = Action.deploy_unit(
            UnitType(request.unit_type.value),
            _position(request),
            Player(request.player.value),
        )
        return self._run(game_id, action)

    def start_battle(self, game_id: str) -> ActionResponse:
        return self._run(game_id, Action.start_battle())

    def reset(self, game_id: str) -> ActionResponse:
        return self._run(game_id, Action.reset_game())

    def click(self, game_id: str, request: PositionRequest) -> ActionResponse:
        """
        Board click: move, attack or select depending on the cell.

        A click that does nothing comes back accepted with the
        unchanged state and no notices.
        """
        session = self._get_session(game_id)
        result = session.game_loop.click(_position(request))
        if result is None:
            return ActionResponse(accepted=True, state=state_to_response(session.state))
        return result_to_response(result)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_session(self, game_id: str) -> Session:
        session = self.session_manager.get_session(game_id)
        if not session:
            raise GameNotFoundError(game_id)
        session.touch()
        return session

    def _run(self, game_id: str, action: Action) -> ActionResponse:
        session = self._get_session(game_id)
        return result_to_response(session.game_loop.dispatch(action))


def _position(request: PositionRequest) -> Position:
    return Position(request.x, request.y)


def _position_info(position: Position) -> PositionInfo:
    return PositionInfo(x=position.x, y=position.y)


def unit_to_info(unit: Unit) -> UnitInfo:
    return UnitInfo(
        id=unit.id,
        unit_type=unit.unit_type.value,
        player=unit.player.value,
        position=_position_info(unit.position),
        health=unit.health,
        max_health=unit.max_health,
        attack=unit.attack,
        defense=unit.defense,
        move_range=unit.move_range,
        attack_range=unit.attack_range,
        cost=unit.cost,
        has_moved=unit.has_moved,
        has_attacked=unit.has_attacked,
    )


def state_to_response(state: GameState) -> GameStateResponse:
    """Convert an engine GameState to its API shape."""
    grid = state.grid
    return GameStateResponse(
        game_id=state.game_id,
        phase=state.phase.value,
        current_player=state.current_player.value,
        winner=state.winner.value if state.winner else None,
        turn=state.turn,
        blue_credits=state.blue_credits,
        red_credits=state.red_credits,
        width=grid.width,
        height=grid.height,
        terrain=[[cell.terrain.value for cell in row] for row in grid.rows],
        units=[unit_to_info(u) for u in grid.units()],
        selected_unit=unit_to_info(state.selected_unit) if state.selected_unit else None,
        available_moves=[_position_info(p) for p in state.available_moves],
        available_attacks=[_position_info(p) for p in state.available_attacks],
    )


def result_to_response(result: ActionResult) -> ActionResponse:
    """Convert an engine ActionResult to its API shape."""
    return ActionResponse(
        accepted=result.success,
        error=result.error,
        error_code=result.error_code.value if result.error_code else None,
        notices=[
            NoticeInfo(level=n.level.value, message=n.message)
            for n in result.notices
        ],
        state=state_to_response(result.new_state),
    )


def action_to_info(action: Action) -> LegalActionInfo:
    payload = action.payload
    return LegalActionInfo(
        action_type=action.action_type.value,
        position=_position_info(payload.position) if payload.position else None,
        unit_type=payload.unit_type.value if payload.unit_type else None,
        player=payload.player.value if payload.player else None,
    )
