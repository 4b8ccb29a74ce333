"""
Game Loop - The command surface of a single game.

The loop owns the current GameState and is its only writer:
1. The caller issues a command (select, move, deploy, ...)
2. The command becomes an Action
3. The reducer produces the next state
4. The loop stores it and hands back the ActionResult

Each command runs to completion before the next one is accepted.
Snapshots returned by `state` are immutable and safe to keep.
"""

from __future__ import annotations
import random

from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.rules import GameConfig, UnitType
from ..engine_core.state import GameState, GamePhase
from ..engine_core.units import Player, Position


class GameLoop:
    """
    An explicit, owned state machine for one game.

    Usage:
        loop = GameLoop(GameConfig(seed=7))
        loop.deploy_unit(UnitType.TANK, Position(0, 0), Player.BLUE)
        loop.start_battle()
        result = loop.select(Position(0, 0))
    """

    def __init__(self, config: GameConfig | None = None, game_id: str | None = None):
        self.config = config or GameConfig()
        self._reducer = Reducer(config=self.config, rng=random.Random(self.config.seed))
        self._state = GameState.create(
            config=self.config, rng=self._reducer.rng, game_id=game_id,
        )

    @property
    def state(self) -> GameState:
        """Read-only snapshot of the current state."""
        return self._state

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an action and keep the resulting state."""
        result = self._reducer.apply(self._state, action)
        self._state = result.new_state
        return result

    def legal_actions(self) -> list[Action]:
        return legal_actions(self._state)

    # =========================================================================
    # Commands
    # =========================================================================

    def select(self, position: Position) -> ActionResult:
        return self.dispatch(Action.select(position))

    def move(self, position: Position) -> ActionResult:
        return self.dispatch(Action.move(position))

    def attack(self, position: Position) -> ActionResult:
        return self.dispatch(Action.attack(position))

    def cancel(self) -> ActionResult:
        return self.dispatch(Action.cancel())

    def end_turn(self) -> ActionResult:
        return self.dispatch(Action.end_turn())

    def deploy_unit(self, unit_type: UnitType, position: Position, player: Player) -> ActionResult:
        return self.dispatch(Action.deploy_unit(unit_type, position, player))

    def start_battle(self) -> ActionResult:
        return self.dispatch(Action.start_battle())

    def reset_game(self) -> ActionResult:
        return self.dispatch(Action.reset_game())

    def click(self, position: Position) -> ActionResult | None:
        """
        Route a click on a board cell to the matching command.

        Returns None when the click does nothing:
        - outside the battle phase
        - on the already selected unit
        - on an empty or enemy cell that is not a legal target
        """
        state = self._state
        if state.phase != GamePhase.BATTLE or not state.grid.in_bounds(position):
            return None

        unit = state.grid.unit_at(position)
        selected = state.selected_unit

        if selected is not None:
            if position in state.available_moves:
                return self.move(position)
            if position in state.available_attacks:
                return self.attack(position)
            if unit is not None and unit.id == selected.id:
                return None

        if unit is not None and unit.player == state.current_player:
            return self.select(position)
        return None
