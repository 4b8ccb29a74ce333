"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> ActionResult holding the new state
- Rejections are results, not exceptions: the input state comes back
  unchanged together with an error code and, where the player should
  be told, a notice
- Positions outside the board are rejected
- Move and attack targets are re-checked against the selection's
  available moves/attacks
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .action import Action, ActionResult, ActionType, ErrorCode, Notice
from .action_generator import calculate_attacks, calculate_moves, in_deployment_zone
from .combat import resolve_attack
from .grid import GridError
from .rules import GameConfig, UnitType, get_stats
from .state import GameState, GamePhase
from .units import Player, Position, create_unit

logger = logging.getLogger(__name__)


def _format_amount(value: float) -> str:
    """50.0 -> '50', 22.5 -> '22.5'."""
    return f"{value:g}"


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    All game state lives in GameState. The reducer only carries what a
    reset needs to build a new board.
    """
    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                state,
                f"No handler for action type: {action.action_type}",
                ErrorCode.NO_HANDLER,
            )

        try:
            result = handler(state, action)
        except GridError as e:
            logger.warning("Grid error while applying %s: %s", action.action_type.value, e)
            return ActionResult.failure(state, str(e), ErrorCode.GRID_ERROR, Notice.error(str(e)))

        if not result.success:
            logger.debug(
                "Rejected %s: %s (%s)",
                action.action_type.value, result.error, result.error_code.value,
            )
            return result

        # Log action to history; a reset starts a fresh history
        if action.action_type != ActionType.RESET_GAME:
            result.new_state = result.new_state._copy_with(
                action_history=result.new_state.action_history + (action,),
            )
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT: self._handle_select,
            ActionType.MOVE: self._handle_move,
            ActionType.ATTACK: self._handle_attack,
            ActionType.CANCEL: self._handle_cancel,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.DEPLOY_UNIT: self._handle_deploy_unit,
            ActionType.START_BATTLE: self._handle_start_battle,
            ActionType.RESET_GAME: self._handle_reset_game,
        }
        return handlers.get(action_type)

    def _check_position(self, state: GameState, position: Position | None) -> ActionResult | None:
        """Return a failure if the position is missing or off the board."""
        if position is None:
            message = "No position given"
            return ActionResult.failure(
                state, message, ErrorCode.INVALID_TARGET, Notice.error(message),
            )
        if not state.grid.in_bounds(position):
            message = (
                f"Position {position} is outside the "
                f"{state.grid.width}x{state.grid.height} board"
            )
            return ActionResult.failure(
                state, message, ErrorCode.OUT_OF_BOUNDS, Notice.error(message),
            )
        return None

    def _handle_select(self, state: GameState, action: Action) -> ActionResult:
        """Handle select action."""
        position = action.payload.position
        out_of_bounds = self._check_position(state, position)
        if out_of_bounds:
            return out_of_bounds

        unit = state.grid.unit_at(position)
        if unit is None:
            return ActionResult.failure(state, f"No unit at {position}", ErrorCode.EMPTY_CELL)

        if unit.player != state.current_player:
            return ActionResult.failure(
                state,
                f"Unit at {position} belongs to {unit.player.value}",
                ErrorCode.NOT_YOUR_UNIT,
            )

        if unit.is_exhausted:
            message = "This unit has already completed its actions for this turn"
            return ActionResult.failure(
                state, message, ErrorCode.UNIT_EXHAUSTED, Notice.info(message),
            )

        new_state = state._copy_with(
            selected_unit=unit,
            available_moves=() if unit.has_moved else tuple(calculate_moves(state.grid, unit)),
            available_attacks=() if unit.has_attacked else tuple(calculate_attacks(state.grid, unit)),
        )
        return ActionResult.success_with_state(new_state)

    def _handle_move(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle move action.

        The selected unit leaves its cell and a copy with has_moved set
        is placed on the destination.
        """
        if state.selected_unit is None:
            return ActionResult.failure(state, "No unit selected", ErrorCode.NO_SELECTION)

        position = action.payload.position
        out_of_bounds = self._check_position(state, position)
        if out_of_bounds:
            return out_of_bounds

        if position not in state.available_moves:
            message = f"Unit cannot move to {position}"
            return ActionResult.failure(
                state, message, ErrorCode.INVALID_TARGET, Notice.error(message),
            )

        unit = state.grid.find_unit(state.selected_unit.id) or state.selected_unit
        updated_unit = unit.moved_to(position)
        new_grid = state.grid.move_unit(unit.position, updated_unit)

        available_attacks = (
            () if updated_unit.has_attacked
            else tuple(calculate_attacks(new_grid, updated_unit))
        )

        new_state = state._copy_with(
            grid=new_grid,
            selected_unit=updated_unit,
            available_moves=(),
            available_attacks=available_attacks,
        )
        return ActionResult.success_with_state(
            new_state,
            notices=[Notice.success(f"Unit moved to {position}")],
        )

    def _handle_attack(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle attack action.

        Resolves combat, then checks whether either side has been wiped
        out. Only a wipe-out during battle ends the game.
        """
        if state.selected_unit is None:
            return ActionResult.failure(state, "No unit selected", ErrorCode.NO_SELECTION)

        position = action.payload.position
        out_of_bounds = self._check_position(state, position)
        if out_of_bounds:
            return out_of_bounds

        defender = state.grid.unit_at(position)
        if defender is None:
            return ActionResult.failure(state, f"No unit at {position}", ErrorCode.EMPTY_CELL)

        if position not in state.available_attacks:
            message = f"Target at {position} is not within attack range"
            return ActionResult.failure(
                state, message, ErrorCode.INVALID_TARGET, Notice.error(message),
            )

        attacker = state.grid.find_unit(state.selected_unit.id) or state.selected_unit
        outcome = resolve_attack(state.grid, attacker, defender)

        if outcome.destroyed:
            notice = Notice.success("Enemy unit destroyed!")
        else:
            notice = Notice.info(f"Dealt {_format_amount(outcome.damage)} damage to enemy unit")

        winner = None
        blue_units = outcome.grid.count_units(Player.BLUE)
        red_units = outcome.grid.count_units(Player.RED)
        if state.phase == GamePhase.BATTLE and (blue_units == 0 or red_units == 0):
            winner = Player.RED if blue_units == 0 else Player.BLUE

        new_state = state._copy_with(
            grid=outcome.grid,
            selected_unit=outcome.attacker,
            available_moves=(),
            available_attacks=(),
            winner=winner,
            phase=GamePhase.GAME_OVER if winner else state.phase,
        )

        notices = [notice]
        if winner:
            logger.info("Game %s over: %s wins on turn %d", state.game_id, winner.value, state.turn)
            notices.append(Notice.success(f"{winner.display_name} player wins!"))

        return ActionResult.success_with_state(new_state, notices=notices)

    def _handle_cancel(self, state: GameState, action: Action) -> ActionResult:
        """Handle cancel action. Always succeeds."""
        return ActionResult.success_with_state(state.cleared_selection())

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle end of turn, advance to next player.

        Only the outgoing player's units get their flags reset. The turn
        counter counts rounds, so it only advances when blue is up again.
        """
        current = state.current_player
        new_grid = state.grid.map_units(
            lambda unit: unit.refreshed() if unit.player == current else unit
        )
        next_player = current.opponent
        new_turn = state.turn + 1 if next_player == Player.BLUE else state.turn

        new_state = state._copy_with(
            grid=new_grid,
            current_player=next_player,
            turn=new_turn,
        ).cleared_selection()

        return ActionResult.success_with_state(
            new_state,
            notices=[Notice.info(f"{next_player.display_name} player's turn")],
        )

    def _handle_deploy_unit(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle deploy action.

        Checked in order: phase, unit type, credits, bounds, deployment
        zone, occupancy. Only the deploying player's credits are debited.
        """
        if state.phase != GamePhase.DEPLOYMENT:
            return ActionResult.failure(
                state, "Units can only be deployed during deployment", ErrorCode.WRONG_PHASE,
            )

        payload = action.payload
        player = payload.player or state.current_player

        try:
            unit_type = UnitType(payload.unit_type)
            stats = get_stats(unit_type)
        except (ValueError, KeyError):
            message = f"Unknown unit type: {payload.unit_type}"
            return ActionResult.failure(
                state, message, ErrorCode.UNKNOWN_UNIT_TYPE, Notice.error(message),
            )

        if state.credits_for(player) < stats.cost:
            message = f"Not enough credits to deploy {unit_type.value}"
            return ActionResult.failure(
                state, message, ErrorCode.INSUFFICIENT_CREDITS, Notice.error(message),
            )

        position = payload.position
        out_of_bounds = self._check_position(state, position)
        if out_of_bounds:
            return out_of_bounds

        if not in_deployment_zone(player, position, state.grid.width):
            message = f"Invalid deployment position for {player.value} player"
            return ActionResult.failure(
                state, message, ErrorCode.INVALID_DEPLOYMENT_ZONE, Notice.error(message),
            )

        if state.grid.unit_at(position) is not None:
            message = "This cell is already occupied"
            return ActionResult.failure(
                state, message, ErrorCode.CELL_OCCUPIED, Notice.error(message),
            )

        unit = create_unit(unit_type, player, position)
        new_state = state._copy_with(grid=state.grid.place_unit(unit))
        new_state = new_state.with_credits(player, state.credits_for(player) - stats.cost)

        return ActionResult.success_with_state(
            new_state,
            notices=[Notice.success(f"Deployed {unit_type.value} for {player.value} player")],
        )

    def _handle_start_battle(self, state: GameState, action: Action) -> ActionResult:
        """Handle the move from deployment to battle. Does not require any units."""
        if state.phase != GamePhase.DEPLOYMENT:
            return ActionResult.failure(
                state, "Battle has already started", ErrorCode.WRONG_PHASE,
            )

        new_state = state._copy_with(
            phase=GamePhase.BATTLE,
            current_player=Player.BLUE,
            turn=1,
        )
        logger.info(
            "Game %s: battle started with %d blue and %d red units",
            state.game_id,
            state.grid.count_units(Player.BLUE),
            state.grid.count_units(Player.RED),
        )
        return ActionResult.success_with_state(
            new_state,
            notices=[Notice.success("Deployment phase complete. Battle begins!")],
        )

    def _handle_reset_game(self, state: GameState, action: Action) -> ActionResult:
        """Handle reset: a new randomized board, full credits, back to deployment."""
        new_state = GameState.create(config=self.config, rng=self.rng, game_id=state.game_id)
        logger.info("Game %s reset", state.game_id)
        return ActionResult.success_with_state(
            new_state,
            notices=[Notice.info("Game reset")],
        )


def apply_action(
    state: GameState,
    action: Action,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action. Without a config, a reset
    keeps the board size of the given state.
    """
    if config is None:
        config = GameConfig(width=state.grid.width, height=state.grid.height)
    reducer = Reducer(config=config, rng=rng or random.Random())
    return reducer.apply(state, action)
