"""
Units - Players, board positions and unit instances.

Units are immutable values. Every change (moving, taking damage,
spending an action) produces a new Unit; the grid cell holding the
old value is replaced by the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
import uuid

from .rules import UnitType, get_stats


class Player(Enum):
    """The two sides of a skirmish."""
    BLUE = "blue"
    RED = "red"

    @property
    def opponent(self) -> Player:
        return Player.RED if self is Player.BLUE else Player.BLUE

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Position:
    """Board coordinates. x is the column, y is the row."""
    x: int
    y: int

    def distance_to(self, other: Position) -> int:
        """Manhattan distance."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Unit:
    """
    A deployed unit.

    Invariant: 0 <= health <= max_health. A unit whose health reaches
    zero is removed from the grid rather than kept at zero.
    """
    id: str
    unit_type: UnitType
    player: Player
    position: Position
    health: float
    max_health: float
    attack: int
    defense: int
    move_range: int
    attack_range: int
    cost: int
    has_moved: bool = False
    has_attacked: bool = False

    @property
    def is_exhausted(self) -> bool:
        """True once the unit has both moved and attacked this turn."""
        return self.has_moved and self.has_attacked

    def moved_to(self, position: Position) -> Unit:
        return replace(self, position=position, has_moved=True)

    def with_health(self, health: float) -> Unit:
        return replace(self, health=health)

    def mark_attacked(self) -> Unit:
        return replace(self, has_attacked=True)

    def refreshed(self) -> Unit:
        """Return the unit with its per-turn flags cleared."""
        return replace(self, has_moved=False, has_attacked=False)


def create_unit(
    unit_type: UnitType,
    player: Player,
    position: Position,
    unit_id: str | None = None,
) -> Unit:
    """
    Create a fresh unit from the stat table.

    Args:
        unit_type: Which stat block to copy
        player: Owning side
        position: Where the unit will stand
        unit_id: Explicit id (a new uuid4 if not given)

    Returns:
        Unit at full health with both per-turn flags cleared
    """
    stats = get_stats(unit_type)
    return Unit(
        id=unit_id or str(uuid.uuid4()),
        unit_type=unit_type,
        player=player,
        position=position,
        health=stats.health,
        max_health=stats.health,
        attack=stats.attack,
        defense=stats.defense,
        move_range=stats.move_range,
        attack_range=stats.attack_range,
        cost=stats.cost,
    )
