import copy

import pytest

from blockfall.board import PIECE_VALUES
from blockfall.engine import Command, GameEngine
from blockfall.game_state import Phase, SPAWN_X, SPAWN_Y
from blockfall.tetromino import Tetromino, TetrominoType


def _running_engine(seed=0):
    engine = GameEngine(seed=seed)
    assert engine.start()
    return engine


def test_new_engine_is_idle_with_empty_grid():
    engine = GameEngine()
    assert engine.phase is Phase.IDLE
    assert engine.active_cells() == []
    assert engine.next_piece is None
    assert all(cell is None for row in engine.grid() for cell in row)


def test_start_spawns_active_and_next_piece_at_centre_top():
    engine = _running_engine()
    active = engine.state.active
    assert (active.x, active.y, active.rotation) == (SPAWN_X, SPAWN_Y, 0) == (4, 0, 0)
    assert engine.next_piece is not None
    assert (engine.score, engine.lines_cleared, engine.level, engine.drop_interval_ms) == (0, 0, 1, 1000)


def test_start_is_ignored_while_running_but_restart_is_not():
    engine = _running_engine()
    engine.state.score = 50
    assert engine.start() is False
    assert engine.score == 50
    engine.restart()
    assert engine.phase is Phase.RUNNING
    assert engine.score == 0


def test_o_piece_falls_to_floor_and_locks():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.O, x=4, y=0)
    for _ in range(18):
        assert engine.try_move(0, 1)
    assert not engine.try_move(0, 1)
    assert engine.state.active.y == 18

    engine.tick(1001)

    board = engine.state.board
    value = PIECE_VALUES[TetrominoType.O]
    for row, col in [(18, 4), (18, 5), (19, 4), (19, 5)]:
        assert board.get_cell(row, col) == value
    assert int((board.grid != 0).sum()) == 4
    assert engine.grid()[19][4] == "#f0f000"


def test_completing_bottom_row_clears_one_line():
    engine = _running_engine()
    engine.state.board.grid[19, :] = 1
    engine.state.board.grid[19, 3] = 0
    engine.state.active = Tetromino(TetrominoType.I, rotation=1, x=3, y=0)

    rows = engine.hard_drop()

    assert rows == 19
    assert engine.lines_cleared == 1
    assert engine.score == 2 * 19 + 40
    bottom = engine.state.board.grid[19]
    assert [int(c) for c in bottom] == [0, 0, 0, PIECE_VALUES[TetrominoType.I], 0, 0, 0, 0, 0, 0]


@pytest.mark.parametrize("n,points", [(1, 40), (2, 100), (3, 300), (4, 1200)])
def test_multi_line_clear_awards_points_times_level(n, points):
    engine = _running_engine()
    engine.state.lines = 10
    engine.state.level = 2
    board = engine.state.board
    board.grid[20 - n:, 1:] = 1
    board.set_cell(19 - n, 5, 2)
    engine.state.active = Tetromino(TetrominoType.I, rotation=1, x=0, y=19)

    assert engine.hard_drop() == 0

    assert engine.score == points * 2
    assert engine.lines_cleared == 10 + n
    assert engine.level == 2
    assert board is engine.state.board
    assert engine.state.board.get_cell(19, 5) == 2


def test_clearing_ten_lines_raises_level_and_speed():
    engine = _running_engine()
    engine.state.lines = 9
    engine.state.board.grid[19, 1:] = 1
    engine.state.active = Tetromino(TetrominoType.I, rotation=1, x=0, y=19)
    engine.hard_drop()
    assert engine.level == 2
    assert engine.drop_interval_ms == 950


def test_hard_drop_awards_two_points_per_row():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.O, x=4, y=5)
    assert engine.apply_command(Command.HARD_DROP)
    assert engine.score == 2 * 13


def test_soft_drop_scores_only_on_success_and_never_locks():
    engine = _running_engine()
    assert engine.apply_command(Command.SOFT_DROP)
    assert engine.score == 1
    piece = Tetromino(TetrominoType.O, x=4, y=18)
    engine.state.active = piece
    assert not engine.apply_command("soft_drop")
    assert engine.score == 1
    assert engine.state.active is piece
    assert not engine.state.board.grid.any()


def test_horizontal_moves_stop_at_walls():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.O, x=4, y=5)
    for _ in range(10):
        engine.apply_command(Command.MOVE_LEFT)
    assert engine.state.active.x == 0
    for _ in range(10):
        engine.apply_command(Command.MOVE_RIGHT)
    assert engine.state.active.x == 8


def test_failed_rotation_leaves_piece_unchanged():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.I, x=3, y=19)
    before = copy.copy(engine.state.active)
    assert not engine.apply_command(Command.ROTATE_CCW)
    assert engine.state.active == before

    engine.state.active = Tetromino(TetrominoType.I, x=0, y=10)
    assert engine.try_rotate(1)
    assert engine.state.active.rotation == 1
    assert not engine.try_rotate(1)
    assert engine.state.active.rotation == 1


def test_rotation_blocked_by_locked_cell_is_not_kicked():
    engine = _running_engine()
    engine.state.board.set_cell(12, 3, 1)
    engine.state.active = Tetromino(TetrominoType.T, x=4, y=10)
    before = copy.copy(engine.state.active)
    assert not engine.try_rotate(-1)
    assert engine.state.active == before


def test_rotate_cw_four_times_restores_state():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.L, x=4, y=8)
    for _ in range(4):
        assert engine.apply_command(Command.ROTATE_CW)
    assert engine.state.active == Tetromino(TetrominoType.L, x=4, y=8)


def test_next_piece_becomes_active_after_lock():
    engine = _running_engine(seed=5)
    upcoming = engine.next_piece.shape
    engine.apply_command(Command.HARD_DROP)
    active = engine.state.active
    assert active.shape is upcoming
    assert (active.x, active.y, active.rotation) == (4, 0, 0)
    assert engine.next_piece is not None


def test_unknown_command_raises():
    engine = _running_engine()
    with pytest.raises(ValueError):
        engine.apply_command("teleport")


def test_commands_ignored_unless_running():
    engine = GameEngine()
    assert engine.apply_command(Command.HARD_DROP) is False
    engine.start()
    engine.pause()
    before = copy.copy(engine.state.active)
    for cmd in Command:
        assert engine.apply_command(cmd) is False
    assert engine.state.active == before
    assert engine.score == 0


def test_pause_resume_transitions():
    engine = GameEngine()
    assert engine.pause() is False
    assert engine.toggle_pause() is False
    engine.start()
    assert engine.pause()
    assert engine.phase is Phase.PAUSED
    assert engine.pause() is False
    assert engine.start() is False
    assert engine.toggle_pause()
    assert engine.phase is Phase.RUNNING
    assert engine.resume() is False
    assert engine.toggle_pause()
    assert engine.state.paused
    assert engine.resume()
    assert engine.state.running


def test_snapshot_is_plain_data_and_detached():
    engine = _running_engine()
    snap = engine.snapshot()
    assert snap["phase"] == "running"
    assert snap["score"] == 0
    assert snap["active"]["cells"] == engine.active_cells()
    assert snap["next"]["color"] == engine.next_piece.color
    snap["grid"][19][0] = "#ffffff"
    engine.active_cells().clear()
    assert engine.grid()[19][0] is None
    assert len(engine.active_cells()) == 4


def test_render_grid_overlays_active_piece():
    engine = _running_engine()
    engine.state.active = Tetromino(TetrominoType.O, x=0, y=0)
    grid = engine.render_grid()
    assert grid[0][0] == grid[1][1] == PIECE_VALUES[TetrominoType.O]
    assert not engine.state.board.grid.any()


def test_piece_operations_do_nothing_while_paused():
    engine = _running_engine()
    engine.pause()
    before = copy.copy(engine.state.active)
    upcoming = engine.state.upcoming

    assert engine.hard_drop() == 0
    assert engine.try_move(0, 1) is False
    assert engine.try_rotate(1) is False
    assert engine.spawn_next() is False

    assert engine.score == 0
    assert not engine.state.board.grid.any()
    assert engine.state.active == before
    assert engine.state.upcoming is upcoming
    assert engine.phase is Phase.PAUSED


def test_piece_operations_do_nothing_before_start():
    engine = GameEngine(seed=0)
    assert engine.hard_drop() == 0
    assert engine.spawn_next() is False
    assert engine.state.active is None
    assert engine.phase is Phase.IDLE
