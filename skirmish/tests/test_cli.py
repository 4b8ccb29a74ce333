"""
Tests for the command-line interface.
"""

from ..cli import main, render_board
from ..engine_core.rules import GameConfig, UnitType
from ..engine_core.state import GameState
from ..engine_core.units import Player, Position, create_unit


class TestCLI:

    def test_units_command(self, capsys):
        assert main(["units"]) == 0

        out = capsys.readouterr().out
        assert "helicopter" in out
        assert "Starting credits: 1000" in out

    def test_board_command(self, capsys):
        assert main(["board", "--seed", "4", "--width", "6", "--height", "3"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines[0].split()) == 6
        assert lines[3] == ""

    def test_board_rejects_bad_size(self, capsys):
        assert main(["board", "--width", "0"]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_render_board_units(self):
        state = GameState.create(GameConfig(width=3, height=1, seed=0))
        grid = state.grid.place_unit(create_unit(UnitType.TANK, Player.BLUE, Position(0, 0)))
        grid = grid.place_unit(create_unit(UnitType.HELICOPTER, Player.RED, Position(2, 0)))

        rendered = render_board(state._copy_with(grid=grid))

        symbols = rendered.split()
        assert symbols[0] == "T"
        assert symbols[2] == "h"
