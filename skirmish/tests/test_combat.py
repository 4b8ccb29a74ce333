"""
Tests for combat resolution.
"""

import pytest

from ..engine_core.combat import calculate_damage, resolve_attack
from ..engine_core.rules import UnitType
from ..engine_core.units import Player, Position


class TestDamage:
    """Tests for the damage formula."""

    def test_tank_against_infantry(self, battle_state):
        """60 attack against 20 defense: max(5, 60 - 10) = 50."""
        attacker = battle_state.grid.unit_at(Position(2, 3))
        defender = battle_state.grid.unit_at(Position(4, 3))

        assert calculate_damage(attacker, defender) == 50

    def test_minimum_damage(self, empty_state, place):
        """Infantry (30) against a tank (50 defense) still deals 5."""
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 0, 0)
        state = place(state, UnitType.TANK, Player.RED, 1, 0)

        damage = calculate_damage(
            state.grid.unit_at(Position(0, 0)),
            state.grid.unit_at(Position(1, 0)),
        )
        assert damage == 5

    def test_fractional_damage_not_rounded(self, empty_state, place):
        """Odd defense halves to a fraction that is kept."""
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 0, 0)
        state = place(state, UnitType.INFANTRY, Player.RED, 1, 0, defense=15)

        damage = calculate_damage(
            state.grid.unit_at(Position(0, 0)),
            state.grid.unit_at(Position(1, 0)),
        )
        assert damage == 22.5


class TestResolveAttack:
    """Tests for applying an attack to the grid."""

    def test_defender_survives(self, battle_state):
        attacker = battle_state.grid.unit_at(Position(2, 3))
        defender = battle_state.grid.unit_at(Position(4, 3))

        outcome = resolve_attack(battle_state.grid, attacker, defender)

        assert outcome.damage == 50
        assert not outcome.destroyed
        assert outcome.grid.unit_at(Position(4, 3)).health == 50
        assert outcome.grid.unit_at(Position(4, 3)).max_health == 100

    def test_lethal_damage_removes_defender(self, battle_state, place):
        """40 health against 50 damage: clamped to 0 and removed."""
        grid = battle_state.grid.remove_unit(Position(4, 3))
        state = place(
            battle_state._copy_with(grid=grid),
            UnitType.INFANTRY, Player.RED, 4, 3, health=40,
        )
        attacker = state.grid.unit_at(Position(2, 3))
        defender = state.grid.unit_at(Position(4, 3))

        outcome = resolve_attack(state.grid, attacker, defender)

        assert outcome.destroyed
        assert outcome.defender.health == 0
        assert outcome.grid.unit_at(Position(4, 3)) is None
        assert outcome.grid.count_units(Player.RED) == 0

    def test_exact_kill(self, battle_state, place):
        grid = battle_state.grid.remove_unit(Position(4, 3))
        state = place(
            battle_state._copy_with(grid=grid),
            UnitType.INFANTRY, Player.RED, 4, 3, health=50,
        )

        outcome = resolve_attack(
            state.grid,
            state.grid.unit_at(Position(2, 3)),
            state.grid.unit_at(Position(4, 3)),
        )
        assert outcome.destroyed

    @pytest.mark.parametrize("lethal", [False, True])
    def test_attacker_marked_in_place(self, battle_state, place, lethal):
        """The attacker is flagged and stays on its own cell either way."""
        state = battle_state
        if lethal:
            grid = state.grid.remove_unit(Position(4, 3))
            state = place(state._copy_with(grid=grid), UnitType.INFANTRY, Player.RED, 4, 3, health=1)
        attacker = state.grid.unit_at(Position(2, 3))

        outcome = resolve_attack(state.grid, attacker, state.grid.unit_at(Position(4, 3)))

        on_grid = outcome.grid.unit_at(Position(2, 3))
        assert on_grid.has_attacked
        assert on_grid.id == attacker.id
        assert outcome.attacker == on_grid

    def test_input_grid_untouched(self, battle_state):
        attacker = battle_state.grid.unit_at(Position(2, 3))
        defender = battle_state.grid.unit_at(Position(4, 3))

        resolve_attack(battle_state.grid, attacker, defender)

        assert battle_state.grid.unit_at(Position(4, 3)).health == 100
        assert not battle_state.grid.unit_at(Position(2, 3)).has_attacked
