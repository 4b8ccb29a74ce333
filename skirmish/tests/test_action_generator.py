"""
Tests for range calculation and legal action generation.
"""

import pytest

from ..engine_core.action import ActionType
from ..engine_core.action_generator import (
    calculate_attacks, calculate_moves, in_deployment_zone, legal_actions,
)
from ..engine_core.rules import UnitType
from ..engine_core.state import GamePhase
from ..engine_core.units import Player, Position


class TestMoveRange:
    """Tests for calculate_moves."""

    def test_open_board_diamond(self, empty_state, place):
        """Infantry (range 3) in the open reaches the 24 cells of its diamond."""
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 4, 4)
        unit = state.grid.unit_at(Position(4, 4))

        moves = calculate_moves(state.grid, unit)

        assert len(moves) == 24
        assert len(set(moves)) == 24

    def test_excludes_own_cell(self, empty_state, place):
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 4, 4)
        unit = state.grid.unit_at(Position(4, 4))

        assert Position(4, 4) not in calculate_moves(state.grid, unit)

    def test_within_manhattan_distance(self, empty_state, place):
        state = place(empty_state, UnitType.TANK, Player.BLUE, 5, 3)
        unit = state.grid.unit_at(Position(5, 3))

        for position in calculate_moves(state.grid, unit):
            assert unit.position.distance_to(position) <= unit.move_range
            assert state.grid.in_bounds(position)

    def test_excludes_occupied_cells_of_either_side(self, empty_state, place):
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 4, 4)
        state = place(state, UnitType.INFANTRY, Player.BLUE, 5, 4)
        state = place(state, UnitType.INFANTRY, Player.RED, 4, 5)
        unit = state.grid.unit_at(Position(4, 4))

        moves = calculate_moves(state.grid, unit)

        assert Position(5, 4) not in moves
        assert Position(4, 5) not in moves
        assert len(moves) == 22

    def test_occupied_cells_do_not_block_cells_behind(self, empty_state, place):
        """Range is a distance test, not a path search."""
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 4, 4)
        state = place(state, UnitType.TANK, Player.RED, 5, 4)
        unit = state.grid.unit_at(Position(4, 4))

        assert Position(6, 4) in calculate_moves(state.grid, unit)

    def test_clipped_at_corner(self, empty_state, place):
        """In the corner only the in-bounds quarter of the diamond remains."""
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 0, 0)
        unit = state.grid.unit_at(Position(0, 0))

        moves = calculate_moves(state.grid, unit)

        # distance 1..3 within the quadrant: 2 + 3 + 4
        assert len(moves) == 9
        assert all(p.x >= 0 and p.y >= 0 for p in moves)

    def test_row_major_order(self, empty_state, place):
        state = place(empty_state, UnitType.INFANTRY, Player.BLUE, 4, 4)
        unit = state.grid.unit_at(Position(4, 4))

        moves = calculate_moves(state.grid, unit)

        assert moves == sorted(moves, key=lambda p: (p.y, p.x))

    def test_no_unit(self, empty_state):
        assert calculate_moves(empty_state.grid, None) == []


class TestAttackRange:
    """Tests for calculate_attacks."""

    def test_only_enemy_units(self, empty_state, place):
        state = place(empty_state, UnitType.TANK, Player.BLUE, 4, 4)
        state = place(state, UnitType.INFANTRY, Player.BLUE, 5, 4)
        state = place(state, UnitType.INFANTRY, Player.RED, 4, 6)
        unit = state.grid.unit_at(Position(4, 4))

        assert calculate_attacks(state.grid, unit) == [Position(4, 6)]

    def test_out_of_range_enemy_ignored(self, empty_state, place):
        """Tank range 2: an enemy at distance 3 is not a target."""
        state = place(empty_state, UnitType.TANK, Player.BLUE, 4, 4)
        state = place(state, UnitType.INFANTRY, Player.RED, 5, 6)
        unit = state.grid.unit_at(Position(4, 4))

        assert calculate_attacks(state.grid, unit) == []

    def test_attack_range_independent_of_move_range(self, empty_state, place):
        """Helicopter attack range is 3 even though it moves 7."""
        state = place(empty_state, UnitType.HELICOPTER, Player.RED, 5, 4)
        state = place(state, UnitType.INFANTRY, Player.BLUE, 2, 4)
        state = place(state, UnitType.INFANTRY, Player.BLUE, 1, 4)
        unit = state.grid.unit_at(Position(5, 4))

        assert calculate_attacks(state.grid, unit) == [Position(2, 4)]

    def test_empty_board(self, empty_state, place):
        state = place(empty_state, UnitType.HELICOPTER, Player.RED, 5, 4)
        unit = state.grid.unit_at(Position(5, 4))

        assert calculate_attacks(state.grid, unit) == []


class TestDeploymentZone:
    """Blue deploys left of width/3, red at or right of width*2/3."""

    @pytest.mark.parametrize("x,allowed", [(0, True), (3, True), (4, False), (9, False)])
    def test_blue(self, x, allowed):
        assert in_deployment_zone(Player.BLUE, Position(x, 0), 10) is allowed

    @pytest.mark.parametrize("x,allowed", [(0, False), (6, False), (7, True), (9, True)])
    def test_red(self, x, allowed):
        assert in_deployment_zone(Player.RED, Position(x, 0), 10) is allowed


class TestLegalActions:
    """Tests for legal_actions."""

    def test_deployment_actions(self, empty_state):
        actions = legal_actions(empty_state)
        types = {a.action_type for a in actions}

        assert types == {ActionType.DEPLOY_UNIT, ActionType.START_BATTLE}
        # 4 blue columns and 3 red columns, 8 rows, 3 affordable types
        deploys = [a for a in actions if a.action_type == ActionType.DEPLOY_UNIT]
        assert len(deploys) == (4 + 3) * 8 * 3

    def test_deployment_leaves_out_battle_commands(self, empty_state):
        """end_turn is accepted during deployment but not offered."""
        from ..engine_core.action import Action
        from ..engine_core.reducer import apply_action

        types = {a.action_type for a in legal_actions(empty_state)}

        assert ActionType.END_TURN not in types
        assert apply_action(empty_state, Action.end_turn()).success

    def test_deployment_respects_credits(self, empty_state):
        state = empty_state.with_credits(Player.BLUE, 150)
        actions = legal_actions(state)

        blue_types = {
            a.payload.unit_type for a in actions
            if a.action_type == ActionType.DEPLOY_UNIT and a.payload.player == Player.BLUE
        }
        assert blue_types == {UnitType.INFANTRY}

    def test_battle_without_selection(self, battle_state):
        actions = legal_actions(battle_state)

        assert [a.action_type for a in actions] == [ActionType.SELECT, ActionType.END_TURN]
        assert actions[0].payload.position == Position(2, 3)

    def test_battle_with_selection(self, battle_state):
        state = battle_state._copy_with(
            selected_unit=battle_state.grid.unit_at(Position(2, 3)),
            available_moves=(Position(2, 4),),
            available_attacks=(Position(4, 3),),
        )
        types = [a.action_type for a in legal_actions(state)]

        assert ActionType.MOVE in types
        assert ActionType.ATTACK in types
        assert ActionType.CANCEL in types
        assert types[-1] == ActionType.END_TURN

    def test_exhausted_units_not_selectable(self, empty_state, place):
        state = place(
            empty_state, UnitType.TANK, Player.BLUE, 1, 1,
            has_moved=True, has_attacked=True,
        )
        state = state._copy_with(phase=GamePhase.BATTLE)

        types = [a.action_type for a in legal_actions(state)]
        assert types == [ActionType.END_TURN]

    def test_game_over_only_reset(self, battle_state):
        state = battle_state._copy_with(phase=GamePhase.GAME_OVER, winner=Player.BLUE)
        assert [a.action_type for a in legal_actions(state)] == [ActionType.RESET_GAME]
