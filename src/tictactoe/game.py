"""Core rules for a single 3x3 Tic Tac Toe board."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

BOARD_SIZE = 9

Line = Tuple[int, int, int]

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Mark(str, Enum):
    """Content of a cell: a player's symbol or nothing."""

    EMPTY = " "
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        if self is Mark.EMPTY:
            raise ValueError("Empty cells have no opponent")
        return Mark.O if self is Mark.X else Mark.X


class Status(str, Enum):
    IN_PROGRESS = "in_progress"
    X_WINS = "x_wins"
    O_WINS = "o_wins"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.IN_PROGRESS

    @classmethod
    def win_for(cls, mark: Mark) -> "Status":
        if mark is Mark.X:
            return cls.X_WINS
        if mark is Mark.O:
            return cls.O_WINS
        raise ValueError("Only X or O can win")


class Outcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED_OCCUPIED = "rejected_occupied"
    REJECTED_GAME_OVER = "rejected_game_over"


@dataclass(frozen=True)
class PlaceResult:
    """What happened to a single ``place`` call, for the caller to render."""

    outcome: Outcome
    index: int
    status: Status
    # None unless the placement was accepted
    mark: Optional[Mark] = None

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


# ---------- Evaluation ----------


def winning_line(board: Sequence[Mark], mark: Mark) -> Optional[Line]:
    """Return the first line fully held by ``mark``, if any."""

    for a, b, c in WINNING_LINES:
        if board[a] == board[b] == board[c] == mark:
            return (a, b, c)
    return None


def evaluate(board: Sequence[Mark], last_mark: Mark) -> Status:
    """
    Status of ``board`` right after ``last_mark`` was placed.

    Only ``last_mark`` is checked for a win: a single placement cannot
    complete a line for the other player. A win on the final empty cell
    is a win, not a draw.
    """

    if winning_line(board, last_mark) is not None:
        return Status.win_for(last_mark)
    if all(cell is not Mark.EMPTY for cell in board):
        return Status.DRAW
    return Status.IN_PROGRESS


# ---------- Game ----------


def _empty_board() -> List[Mark]:
    return [Mark.EMPTY] * BOARD_SIZE


def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise IndexError(f"Cell index must be an int, got {index!r}")
    if not 0 <= index < BOARD_SIZE:
        raise IndexError(f"Cell index {index} outside 0..{BOARD_SIZE - 1}")


@dataclass
class GameState:
    _board: List[Mark] = field(default_factory=_empty_board, init=False)
    _current_player: Mark = field(default=Mark.X, init=False)
    _status: Status = field(default=Status.IN_PROGRESS, init=False)

    # ---- read-only accessors ----

    @property
    def board(self) -> Tuple[Mark, ...]:
        return tuple(self._board)

    @property
    def current_player(self) -> Mark:
        return self._current_player

    @property
    def status(self) -> Status:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status.is_terminal

    def cell_at(self, index: int) -> Mark:
        _check_index(index)
        return self._board[index]

    # ---- mutations ----

    def place(self, index: int) -> PlaceResult:
        """Place the current player's mark on ``index``.

        Moves on an occupied cell or after the game ended are ignored and
        reported through the returned ``PlaceResult``.
        """
        _check_index(index)
        if self._status.is_terminal:
            return PlaceResult(Outcome.REJECTED_GAME_OVER, index, self._status)
        if self._board[index] is not Mark.EMPTY:
            return PlaceResult(Outcome.REJECTED_OCCUPIED, index, self._status)

        mark = self._current_player
        self._board[index] = mark
        self._status = evaluate(self._board, mark)
        if not self._status.is_terminal:
            self._current_player = mark.opponent()
        return PlaceResult(Outcome.ACCEPTED, index, self._status, mark)

    def reset(self) -> None:
        self._board = _empty_board()
        self._current_player = Mark.X
        self._status = Status.IN_PROGRESS
