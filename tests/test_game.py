"""Unit tests for Tic Tac Toe game logic."""

import itertools

import pytest

from tictactoe.game import (
    WINNING_LINES,
    GameState,
    Mark,
    Outcome,
    Status,
    evaluate,
    winning_line,
)


def _play(game, *indices):
    return [game.place(i) for i in indices]


def _assert_initial(game):
    assert game.board == (Mark.EMPTY,) * 9
    assert game.current_player is Mark.X
    assert game.status is Status.IN_PROGRESS
    assert not game.is_over


def test_initial_state():
    _assert_initial(GameState())


def test_place_alternates_players():
    game = GameState()
    first = game.place(4)
    assert first.outcome is Outcome.ACCEPTED
    assert first.mark is Mark.X
    assert game.current_player is Mark.O

    second = game.place(0)
    assert second.mark is Mark.O
    assert game.cell_at(4) is Mark.X
    assert game.cell_at(0) is Mark.O
    assert game.current_player is Mark.X


def test_diagonal_win():
    game = GameState()
    results = _play(game, 0, 1, 4, 2, 8)
    assert results[-1].accepted
    assert results[-1].status is Status.X_WINS
    assert game.status is Status.X_WINS
    # the winner keeps the turn
    assert game.current_player is Mark.X


def test_full_board_without_line_is_draw():
    game = GameState()
    results = _play(game, 0, 1, 2, 3, 4, 6, 5, 8, 7)
    assert all(r.accepted for r in results)
    assert game.status is Status.DRAW
    assert Mark.EMPTY not in game.board


def test_occupied_cell_is_rejected():
    game = GameState()
    game.place(0)
    result = game.place(0)
    assert result.outcome is Outcome.REJECTED_OCCUPIED
    assert result.mark is None
    assert game.cell_at(0) is Mark.X
    assert game.current_player is Mark.O


def test_repeated_occupied_placement_changes_nothing():
    game = GameState()
    _play(game, 0, 4)
    snapshot = (game.board, game.current_player, game.status)
    for _ in range(5):
        assert game.place(4).outcome is Outcome.REJECTED_OCCUPIED
    assert (game.board, game.current_player, game.status) == snapshot


def test_moves_after_win_are_rejected():
    game = GameState()
    _play(game, 0, 1, 4, 2, 8)
    board = game.board

    result = game.place(5)
    assert result.outcome is Outcome.REJECTED_GAME_OVER
    assert result.status is Status.X_WINS
    assert game.board == board

    for index in range(9):
        game.place(index)
    assert game.board == board
    assert game.current_player is Mark.X
    assert game.status is Status.X_WINS


def test_game_over_checked_before_occupancy():
    game = GameState()
    _play(game, 0, 1, 4, 2, 8)
    assert game.place(0).outcome is Outcome.REJECTED_GAME_OVER


def test_reset_after_win():
    game = GameState()
    _play(game, 0, 1, 4, 2, 8)
    game.reset()
    _assert_initial(game)
    assert game.place(4).accepted


@pytest.mark.parametrize("line", WINNING_LINES)
@pytest.mark.parametrize("winner", [Mark.X, Mark.O])
def test_every_line_wins_for_either_player(line, winner):
    filler = [i for i in range(9) if i not in line]
    if winner is Mark.X:
        # two O marks can never form a line
        loser = filler[:2]
        moves = [line[0], loser[0], line[1], loser[1], line[2]]
    else:
        loser = next(
            combo
            for combo in itertools.combinations(filler, 3)
            if combo not in WINNING_LINES
        )
        moves = [loser[0], line[0], loser[1], line[1], loser[2], line[2]]

    game = GameState()
    results = _play(game, *moves)
    assert all(r.accepted for r in results)
    assert [r.status for r in results[:-1]] == [Status.IN_PROGRESS] * (len(moves) - 1)
    assert results[-1].status is Status.win_for(winner)
    assert results[-1].mark is winner
    assert game.current_player is winner
    assert winning_line(game.board, winner) == line


def test_win_on_last_cell_is_not_draw():
    # X: 0, 2, 4, 5, 6 ; O: 1, 3, 7, 8 -- the ninth move completes 2-4-6
    game = GameState()
    _play(game, 0, 1, 2, 3, 4, 7, 5, 8)
    result = game.place(6)
    assert Mark.EMPTY not in game.board
    assert result.status is Status.X_WINS


def test_mark_counts_stay_balanced():
    game = GameState()
    for index in (4, 0, 8, 2, 1, 7, 6, 3, 5):
        game.place(index)
        x_count = game.board.count(Mark.X)
        o_count = game.board.count(Mark.O)
        assert x_count - o_count in (0, 1)


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_index_raises(index):
    game = GameState()
    with pytest.raises(IndexError):
        game.place(index)
    with pytest.raises(IndexError):
        game.cell_at(index)
    _assert_initial(game)


def test_evaluate_only_checks_last_mark():
    board = [Mark.O, Mark.O, Mark.O, Mark.X, Mark.X, Mark.EMPTY, Mark.EMPTY, Mark.EMPTY, Mark.EMPTY]
    assert evaluate(board, Mark.X) is Status.IN_PROGRESS
    assert evaluate(board, Mark.O) is Status.O_WINS


def test_winning_line_reports_first_completed_line():
    board = [Mark.X] * 3 + [Mark.X, Mark.O, Mark.O] + [Mark.X, Mark.O, Mark.EMPTY]
    assert winning_line(board, Mark.X) == (0, 1, 2)
    assert winning_line(board, Mark.O) is None


X_WIN_MOVES = (0, 1, 4, 2, 8)
O_WIN_MOVES = (0, 3, 1, 4, 8, 5)
DRAW_MOVES = (0, 1, 2, 3, 4, 6, 5, 8, 7)


@pytest.mark.parametrize(
    "moves, status",
    [
        (X_WIN_MOVES, Status.X_WINS),
        (O_WIN_MOVES, Status.O_WINS),
        (DRAW_MOVES, Status.DRAW),
    ],
)
def test_board_frozen_after_any_terminal_status(moves, status):
    game = GameState()
    _play(game, *moves)
    assert game.status is status
    snapshot = (game.board, game.current_player, game.status)

    for index in range(9):
        result = game.place(index)
        assert result.outcome is Outcome.REJECTED_GAME_OVER
        assert result.status is status
        assert result.mark is None

    assert (game.board, game.current_player, game.status) == snapshot


@pytest.mark.parametrize(
    "moves",
    [(), (4,), (4, 0, 8), O_WIN_MOVES, DRAW_MOVES],
    ids=["fresh", "one-move", "mid-game", "o-wins", "draw"],
)
def test_reset_restores_initial_state_from_any_history(moves):
    game = GameState()
    _play(game, *moves)
    game.reset()
    _assert_initial(game)

    result = game.place(0)
    assert result.mark is Mark.X
    assert result.status is Status.IN_PROGRESS


@pytest.mark.parametrize("index", [True, False, 1.5, "3", None])
def test_non_int_index_raises_index_error(index):
    game = GameState()
    with pytest.raises(IndexError):
        game.place(index)
    with pytest.raises(IndexError):
        game.cell_at(index)
    _assert_initial(game)
