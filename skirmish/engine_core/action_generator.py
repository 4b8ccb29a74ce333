"""
Action Generator - Range queries and legal action enumeration.

Used by:
1. The reducer, to fill available moves/attacks for a selection
2. UI to show available actions
3. Validation (is this move/attack target legal?)

Ranges are a Manhattan-distance scan of the bounding box around the
unit. Terrain never affects range. Results are full lists in row-major
order and must be recomputed after any grid change.
"""

from __future__ import annotations
from typing import Iterator

from .action import Action
from .grid import Grid
from .rules import UNIT_STATS
from .state import GameState, GamePhase
from .units import Player, Position, Unit


def _scan(grid: Grid, unit: Unit, reach: int) -> Iterator[Position]:
    """Yield in-bounds positions within Manhattan distance reach, skipping the unit's own cell."""
    origin = unit.position
    for y in range(max(0, origin.y - reach), min(grid.height, origin.y + reach + 1)):
        for x in range(max(0, origin.x - reach), min(grid.width, origin.x + reach + 1)):
            if x == origin.x and y == origin.y:
                continue
            candidate = Position(x, y)
            if origin.distance_to(candidate) <= reach:
                yield candidate


def calculate_moves(grid: Grid, unit: Unit | None) -> list[Position]:
    """Empty cells the unit can reach with its move range."""
    if unit is None:
        return []
    return [
        position for position in _scan(grid, unit, unit.move_range)
        if grid.unit_at(position) is None
    ]


def calculate_attacks(grid: Grid, unit: Unit | None) -> list[Position]:
    """Cells within attack range holding a unit of another player."""
    if unit is None:
        return []
    attacks = []
    for position in _scan(grid, unit, unit.attack_range):
        target = grid.unit_at(position)
        if target is not None and target.player != unit.player:
            attacks.append(position)
    return attacks


def in_deployment_zone(player: Player, position: Position, width: int) -> bool:
    """Blue deploys in the left third of the board, red in the right third."""
    if player == Player.BLUE:
        return position.x < width / 3
    return position.x >= width * 2 / 3


def legal_actions(state: GameState) -> list[Action]:
    """
    Generate the actions a player would normally take in this state.

    The reducer also accepts select, cancel and end_turn outside
    battle; those are left out here.

    Returns a list of fully-specified Action objects.
    """
    if state.phase == GamePhase.GAME_OVER:
        return [Action.reset_game()]

    if state.phase == GamePhase.DEPLOYMENT:
        return _generate_deployment_actions(state)

    actions = []

    for unit in state.units_of(state.current_player):
        if not unit.is_exhausted:
            actions.append(Action.select(unit.position))

    if state.selected_unit is not None:
        actions.extend(Action.move(p) for p in state.available_moves)
        actions.extend(Action.attack(p) for p in state.available_attacks)
        actions.append(Action.cancel())

    actions.append(Action.end_turn())
    return actions


def _generate_deployment_actions(state: GameState) -> list[Action]:
    """Generate every affordable deployment for both players, then start battle."""
    actions = []
    for player in Player:
        credits = state.credits_for(player)
        affordable = [t for t, stats in UNIT_STATS.items() if stats.cost <= credits]
        if not affordable:
            continue
        for cell in state.grid.cells():
            if not cell.is_empty:
                continue
            if not in_deployment_zone(player, cell.position, state.grid.width):
                continue
            for unit_type in affordable:
                actions.append(Action.deploy_unit(unit_type, cell.position, player))
    actions.append(Action.start_battle())
    return actions
