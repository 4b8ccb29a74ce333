"""
Grid Model - The board of cells.

A grid is a fixed-size rectangle of cells addressed by (x, y) with
x in [0, width) and y in [0, height). Cells hold terrain and at most
one unit.

Grids are immutable: every placement or removal returns a new Grid
that shares the untouched rows with the old one.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator
import random

from .rules import Terrain, TERRAIN_THRESHOLDS
from .units import Player, Position, Unit


class GridError(ValueError):
    """Base class for grid invariant violations."""


class OutOfBoundsError(GridError):
    """A position outside the board was addressed."""

    def __init__(self, position: Position, width: int, height: int):
        self.position = position
        super().__init__(f"Position {position} is outside the {width}x{height} board")


class CellOccupiedError(GridError):
    """A unit was placed on a cell that already holds one."""

    def __init__(self, position: Position):
        self.position = position
        super().__init__(f"Cell {position} is already occupied")


@dataclass(frozen=True)
class Cell:
    """A single board square. The cell owns the unit standing on it."""
    position: Position
    terrain: Terrain
    unit: Unit | None = None

    @property
    def is_empty(self) -> bool:
        return self.unit is None


@dataclass(frozen=True)
class Grid:
    """Row-major board: rows[y][x]."""
    rows: tuple[tuple[Cell, ...], ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def cell(self, position: Position) -> Cell:
        """Get the cell at a position, raising OutOfBoundsError off the board."""
        if not self.in_bounds(position):
            raise OutOfBoundsError(position, self.width, self.height)
        return self.rows[position.y][position.x]

    def unit_at(self, position: Position) -> Unit | None:
        return self.cell(position).unit

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell, y ascending then x ascending."""
        for row in self.rows:
            yield from row

    def units(self) -> Iterator[Unit]:
        """Iterate over every unit on the board in row-major order."""
        for cell in self.cells():
            if cell.unit is not None:
                yield cell.unit

    def count_units(self, player: Player) -> int:
        return sum(1 for unit in self.units() if unit.player == player)

    def find_unit(self, unit_id: str) -> Unit | None:
        for unit in self.units():
            if unit.id == unit_id:
                return unit
        return None

    def with_unit(self, position: Position, unit: Unit | None) -> Grid:
        """
        Return a new grid with the cell at position holding unit.

        Overwrites whatever the cell held. Use place_unit to enforce
        single occupancy.
        """
        old_cell = self.cell(position)
        new_cell = Cell(position=old_cell.position, terrain=old_cell.terrain, unit=unit)
        row = self.rows[position.y]
        new_row = row[:position.x] + (new_cell,) + row[position.x + 1:]
        return Grid(rows=self.rows[:position.y] + (new_row,) + self.rows[position.y + 1:])

    def place_unit(self, unit: Unit) -> Grid:
        """Return a new grid with unit on its own position. Rejects occupied cells."""
        if not self.cell(unit.position).is_empty:
            raise CellOccupiedError(unit.position)
        return self.with_unit(unit.position, unit)

    def remove_unit(self, position: Position) -> Grid:
        return self.with_unit(position, None)

    def move_unit(self, origin: Position, unit: Unit) -> Grid:
        """
        Transfer a unit from origin to unit.position.

        The destination must be empty; the origin cell is cleared.
        """
        return self.remove_unit(origin).place_unit(unit)

    def map_units(self, fn) -> Grid:
        """Return a new grid with fn applied to every unit."""
        return Grid(rows=tuple(
            tuple(
                cell if cell.unit is None
                else Cell(position=cell.position, terrain=cell.terrain, unit=fn(cell.unit))
                for cell in row
            )
            for row in self.rows
        ))


def draw_terrain(rng: random.Random) -> Terrain:
    """Weighted random terrain: 5% mountain, 10% water, 15% road, rest grass."""
    draw = rng.random()
    for threshold, terrain in TERRAIN_THRESHOLDS:
        if draw < threshold:
            return terrain
    return Terrain.GRASS


def generate_grid(width: int, height: int, rng: random.Random | None = None) -> Grid:
    """
    Create an empty board with randomized terrain.

    Args:
        width: Number of columns
        height: Number of rows
        rng: Random source (a fresh unseeded one if not provided)

    Returns:
        Grid with no units
    """
    rng = rng or random.Random()
    return Grid(rows=tuple(
        tuple(
            Cell(position=Position(x, y), terrain=draw_terrain(rng))
            for x in range(width)
        )
        for y in range(height)
    ))
