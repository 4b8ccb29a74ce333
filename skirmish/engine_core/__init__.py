"""
Engine Core - Game state management and rules resolution.

The engine is the runtime that:
1. Builds the board and the initial GameState
2. Computes move and attack ranges
3. Resolves combat
4. Applies actions via the reducer
"""

from .rules import GameConfig, UnitType, Terrain, UnitStats, UNIT_STATS, TERRAIN_COSTS
from .units import Player, Position, Unit, create_unit
from .grid import Cell, Grid, GridError, OutOfBoundsError, CellOccupiedError, generate_grid
from .state import GameState, GamePhase
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode, Notice, NoticeLevel
from .action_generator import calculate_moves, calculate_attacks, in_deployment_zone, legal_actions
from .combat import CombatOutcome, calculate_damage, resolve_attack
from .reducer import Reducer, apply_action

__all__ = [
    "GameConfig",
    "UnitType",
    "Terrain",
    "UnitStats",
    "UNIT_STATS",
    "TERRAIN_COSTS",
    "Player",
    "Position",
    "Unit",
    "create_unit",
    "Cell",
    "Grid",
    "GridError",
    "OutOfBoundsError",
    "CellOccupiedError",
    "generate_grid",
    "GameState",
    "GamePhase",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Notice",
    "NoticeLevel",
    "calculate_moves",
    "calculate_attacks",
    "in_deployment_zone",
    "legal_actions",
    "CombatOutcome",
    "calculate_damage",
    "resolve_attack",
    "Reducer",
    "apply_action",
]
