"""
Game State - The authoritative state container for a skirmish.

Design principles:
- Immutable: every transition returns a new GameState
- Single source of truth: the grid owns the units, selection is a copy
- Only the reducer produces new states from actions
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any
import random
import uuid

from .grid import Grid, generate_grid
from .rules import GameConfig
from .units import Player, Position, Unit


class GamePhase(Enum):
    """High-level game phases. Transitions only run forward until a reset."""
    DEPLOYMENT = "deployment"
    BATTLE = "battle"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    available_moves and available_attacks always describe the current
    selected_unit; both are empty when nothing is selected.
    """
    grid: Grid
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    current_player: Player = Player.BLUE
    phase: GamePhase = GamePhase.DEPLOYMENT
    winner: Player | None = None
    turn: int = 1

    credits: dict[Player, int] = field(default_factory=dict)

    # Selection
    selected_unit: Unit | None = None
    available_moves: tuple[Position, ...] = ()
    available_attacks: tuple[Position, ...] = ()

    # Accepted actions since the last reset
    action_history: tuple[Any, ...] = ()

    @classmethod
    def create(
        cls,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        game_id: str | None = None,
    ) -> GameState:
        """
        Create a fresh deployment-phase state.

        Args:
            config: Board size and starting credits (defaults if not provided)
            rng: Random source for terrain (seeded from config.seed if not provided)
            game_id: Keep an existing id, e.g. across a reset

        Returns:
            New GameState with an empty, randomized board
        """
        config = config or GameConfig()
        if rng is None:
            rng = random.Random(config.seed)
        state = cls(
            grid=generate_grid(config.width, config.height, rng),
            credits={
                Player.BLUE: config.starting_credits,
                Player.RED: config.starting_credits,
            },
        )
        if game_id:
            state = state._copy_with(game_id=game_id)
        return state

    @property
    def blue_credits(self) -> int:
        return self.credits.get(Player.BLUE, 0)

    @property
    def red_credits(self) -> int:
        return self.credits.get(Player.RED, 0)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def credits_for(self, player: Player) -> int:
        return self.credits.get(player, 0)

    def with_credits(self, player: Player, amount: int) -> GameState:
        """Return new state with one player's credits replaced."""
        new_credits = dict(self.credits)
        new_credits[player] = amount
        return self._copy_with(credits=new_credits)

    def cleared_selection(self) -> GameState:
        """Return new state with no selection and no available actions."""
        return self._copy_with(
            selected_unit=None,
            available_moves=(),
            available_attacks=(),
        )

    def units_of(self, player: Player) -> list[Unit]:
        return [unit for unit in self.grid.units() if unit.player == player]

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
