"""
Rules Table - Fixed constants for a skirmish.

Holds:
- Unit stat blocks per unit type
- Terrain movement costs
- Starting credits and default board size
- GameConfig for per-game overrides
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class UnitType(Enum):
    """Deployable unit types."""
    INFANTRY = "infantry"
    TANK = "tank"
    HELICOPTER = "helicopter"


class Terrain(Enum):
    """Terrain of a board cell. Cosmetic only."""
    GRASS = "grass"
    WATER = "water"
    MOUNTAIN = "mountain"
    ROAD = "road"


@dataclass(frozen=True)
class UnitStats:
    """Stat block copied onto every unit of a type when deployed."""
    health: int
    attack: int
    defense: int
    move_range: int
    attack_range: int
    cost: int


UNIT_STATS: dict[UnitType, UnitStats] = {
    UnitType.INFANTRY: UnitStats(
        health=100,
        attack=30,
        defense=20,
        move_range=3,
        attack_range=1,
        cost=100,
    ),
    UnitType.TANK: UnitStats(
        health=200,
        attack=60,
        defense=50,
        move_range=5,
        attack_range=2,
        cost=300,
    ),
    UnitType.HELICOPTER: UnitStats(
        health=150,
        attack=70,
        defense=30,
        move_range=7,
        attack_range=3,
        cost=400,
    ),
}

# Never consulted by range or movement; ranges are plain Manhattan distance.
TERRAIN_COSTS: dict[Terrain, float] = {
    Terrain.GRASS: 1,
    Terrain.ROAD: 0.5,
    Terrain.WATER: 3,
    Terrain.MOUNTAIN: 2,
}

# Cumulative draw thresholds, checked in order; anything above is grass.
TERRAIN_THRESHOLDS: list[tuple[float, Terrain]] = [
    (0.05, Terrain.MOUNTAIN),
    (0.15, Terrain.WATER),
    (0.30, Terrain.ROAD),
]

STARTING_CREDITS = 1000
GRID_WIDTH = 10
GRID_HEIGHT = 8
MIN_DAMAGE = 5


@dataclass(frozen=True)
class GameConfig:
    """
    Per-game settings.

    seed=None draws terrain from an unseeded generator.
    """
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    starting_credits: int = STARTING_CREDITS
    seed: int | None = None

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.width}x{self.height}")
        if self.starting_credits < 0:
            raise ValueError("Starting credits cannot be negative")


def get_stats(unit_type: UnitType | str) -> UnitStats:
    """Look up the stat block for a unit type (enum or its string value)."""
    if isinstance(unit_type, str):
        unit_type = UnitType(unit_type)
    return UNIT_STATS[unit_type]
