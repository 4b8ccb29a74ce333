"""
Combat Resolver - Damage calculation and application.

damage = max(MIN_DAMAGE, attacker.attack - defender.defense / 2)

Damage is never rounded, so health can become fractional
(e.g. 30 attack against 15 defense deals 22.5).
"""

from __future__ import annotations
from dataclasses import dataclass

from .grid import Grid
from .rules import MIN_DAMAGE
from .units import Unit


@dataclass(frozen=True)
class CombatOutcome:
    """Everything an attack changed."""
    damage: float
    attacker: Unit
    defender: Unit
    destroyed: bool
    grid: Grid


def calculate_damage(attacker: Unit, defender: Unit) -> float:
    return max(MIN_DAMAGE, attacker.attack - defender.defense / 2)


def resolve_attack(grid: Grid, attacker: Unit, defender: Unit) -> CombatOutcome:
    """
    Apply one attack to the grid.

    The defender loses health (floored at zero) and is removed from its
    cell if nothing is left. The attacker is marked as having attacked
    and written back to its own cell whatever the outcome.

    Args:
        grid: Board before the attack
        attacker: Acting unit, standing on the grid
        defender: Target unit, standing on the grid

    Returns:
        CombatOutcome with the new grid
    """
    damage = calculate_damage(attacker, defender)
    updated_defender = defender.with_health(max(0, defender.health - damage))
    destroyed = updated_defender.health <= 0

    if destroyed:
        new_grid = grid.remove_unit(defender.position)
    else:
        new_grid = grid.with_unit(defender.position, updated_defender)

    updated_attacker = attacker.mark_attacked()
    new_grid = new_grid.with_unit(attacker.position, updated_attacker)

    return CombatOutcome(
        damage=damage,
        attacker=updated_attacker,
        defender=updated_defender,
        destroyed=destroyed,
        grid=new_grid,
    )
