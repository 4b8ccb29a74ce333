"""
Action System - Actions, payloads, notices and results.

Actions are the command surface of the engine:
1. Board actions (select, move, attack, cancel)
2. Turn actions (end turn)
3. Setup actions (deploy unit, start battle, reset game)

All state changes flow through actions. Notices are the structured
side channel the presentation layer renders however it likes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .rules import UnitType
from .units import Player, Position


class ActionType(Enum):
    """Types of actions the reducer accepts."""
    SELECT = "select"
    MOVE = "move"
    ATTACK = "attack"
    CANCEL = "cancel"
    END_TURN = "end_turn"
    DEPLOY_UNIT = "deploy_unit"
    START_BATTLE = "start_battle"
    RESET_GAME = "reset_game"


class NoticeLevel(Enum):
    """Severity of a user-facing notice."""
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(Enum):
    """Why an action left the state unchanged."""
    NO_SELECTION = "NO_SELECTION"
    EMPTY_CELL = "EMPTY_CELL"
    NOT_YOUR_UNIT = "NOT_YOUR_UNIT"
    UNIT_EXHAUSTED = "UNIT_EXHAUSTED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    INVALID_TARGET = "INVALID_TARGET"
    WRONG_PHASE = "WRONG_PHASE"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    INVALID_DEPLOYMENT_ZONE = "INVALID_DEPLOYMENT_ZONE"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    UNKNOWN_UNIT_TYPE = "UNKNOWN_UNIT_TYPE"
    NO_HANDLER = "NO_HANDLER"
    GRID_ERROR = "GRID_ERROR"


@dataclass(frozen=True)
class Notice:
    """A message for the player, e.g. 'Enemy unit destroyed!'."""
    level: NoticeLevel
    message: str

    @classmethod
    def info(cls, message: str) -> Notice:
        return cls(NoticeLevel.INFO, message)

    @classmethod
    def success(cls, message: str) -> Notice:
        return cls(NoticeLevel.SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> Notice:
        return cls(NoticeLevel.ERROR, message)


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    position: Position | None = None
    unit_type: UnitType | None = None
    player: Player | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged in the state's history when accepted
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def select(cls, position: Position) -> Action:
        """Factory for select action."""
        return cls(ActionType.SELECT, ActionPayload(position=position))

    @classmethod
    def move(cls, position: Position) -> Action:
        """Factory for move action."""
        return cls(ActionType.MOVE, ActionPayload(position=position))

    @classmethod
    def attack(cls, position: Position) -> Action:
        """Factory for attack action."""
        return cls(ActionType.ATTACK, ActionPayload(position=position))

    @classmethod
    def cancel(cls) -> Action:
        return cls(ActionType.CANCEL)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(ActionType.END_TURN)

    @classmethod
    def deploy_unit(cls, unit_type: UnitType, position: Position, player: Player) -> Action:
        """Factory for deploy action."""
        return cls(
            ActionType.DEPLOY_UNIT,
            ActionPayload(position=position, unit_type=unit_type, player=player),
        )

    @classmethod
    def start_battle(cls) -> Action:
        return cls(ActionType.START_BATTLE)

    @classmethod
    def reset_game(cls) -> Action:
        return cls(ActionType.RESET_GAME)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always set: the updated state on success, the
    untouched input state on failure. Callers can render it either way.
    """
    success: bool
    new_state: Any  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    # For UI/presentation
    notices: list[Notice] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        state: Any,
        error: str,
        error_code: ErrorCode,
        notice: Notice | None = None,
    ) -> ActionResult:
        """Create a failure result that leaves the state unchanged."""
        return cls(
            success=False,
            new_state=state,
            error=error,
            error_code=error_code,
            notices=[notice] if notice else [],
        )

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        notices: list[Notice] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, notices=notices or [])
