"""
Pytest fixtures for Skirmish tests.
"""

import pytest

from ..engine_core.rules import GameConfig, UnitType
from ..engine_core.state import GameState, GamePhase
from ..engine_core.units import Player, Position, create_unit


@pytest.fixture
def config() -> GameConfig:
    """Default-sized board with a fixed terrain seed."""
    return GameConfig(seed=1234)


@pytest.fixture
def empty_state(config: GameConfig) -> GameState:
    """A fresh deployment-phase state with no units."""
    return GameState.create(config=config)


@pytest.fixture
def place():
    """
    Put a unit straight onto the board, bypassing deployment rules.

    Usage: state = place(state, UnitType.TANK, Player.BLUE, 2, 3, health=40)
    """
    def _place(state, unit_type, player, x, y, **overrides):
        unit = create_unit(unit_type, player, Position(x, y))
        if overrides:
            from dataclasses import replace
            unit = replace(unit, **overrides)
        return state._copy_with(grid=state.grid.place_unit(unit))
    return _place


@pytest.fixture
def battle_state(empty_state: GameState, place) -> GameState:
    """
    Battle phase, blue to move.

    Blue tank at (2, 3), red infantry at (4, 3) - two cells apart,
    inside the tank's attack range.
    """
    state = place(empty_state, UnitType.TANK, Player.BLUE, 2, 3)
    state = place(state, UnitType.INFANTRY, Player.RED, 4, 3)
    return state._copy_with(phase=GamePhase.BATTLE)
