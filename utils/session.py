# utils/session.py
import random
import logging

from .sudoku import (N, Difficulty, generate_sudoku, is_safe, validate_board,
                     is_complete, copy_board)

logger = logging.getLogger('sudoku.session')


class MoveError(Exception):
    """Base class for rejected moves. The working grid is left untouched."""

    def __init__(self, message, row=None, col=None, num=None):
        super().__init__(message)
        self.row = row
        self.col = col
        self.num = num


class OutOfRangeError(MoveError):
    pass


class CellOccupiedError(MoveError):
    pass


class ConstraintViolationError(MoveError):
    pass


class NoHintsLeftError(MoveError):
    pass


class PuzzleSession:
    """
    One puzzle being played: the working grid the player fills in and the
    answer key it was cut from. Coordinates are 1-indexed here, as typed.
    """

    def __init__(self, board, solution, difficulty=Difficulty.MEDIUM, hints=3, rng=None):
        if not validate_board(board):
            raise ValueError("Puzzle board must be a valid 9x9 grid")
        if not validate_board(solution) or not is_complete(solution):
            raise ValueError("Solution must be a complete, valid 9x9 grid")
        if any(board[i][j] not in (0, solution[i][j]) for i in range(N) for j in range(N)):
            raise ValueError("Puzzle givens must match the solution")

        self.board = copy_board(board)
        self.solution = copy_board(solution)
        self.difficulty = Difficulty.parse(difficulty)
        self.hints_left = hints
        self.attempts = 0
        self._rng = rng or random

    @classmethod
    def new(cls, difficulty=Difficulty.MEDIUM, empty_cells=None, rng=None, hints=3):
        """Generate a fresh puzzle and wrap it in a session."""
        difficulty = Difficulty.parse(difficulty)
        board, solution = generate_sudoku(difficulty, empty_cells=empty_cells, rng=rng)
        return cls(board, solution, difficulty=difficulty, hints=hints, rng=rng)

    def attempt_move(self, row, col, num):
        """
        Place num at (row, col) if the move is legal.
        Raises OutOfRangeError, CellOccupiedError or ConstraintViolationError.
        """
        self._check_cell(row, col, num)
        if not _in_range(num):
            raise OutOfRangeError(f"Value {num} is not between 1 and {N}", row, col, num)

        r, c = row - 1, col - 1
        if self.board[r][c] != 0:
            raise CellOccupiedError(f"Cell ({row}, {col}) is already filled", row, col, num)

        self.attempts += 1
        if not is_safe(self.board, r, c, num):
            logger.info(f"Rejected {num} at ({row}, {col}): breaks row, column or box")
            raise ConstraintViolationError(
                f"{num} cannot go at ({row}, {col})", row, col, num)

        self.board[r][c] = num

    def is_filled(self, row, col):
        self._check_cell(row, col)
        return self.board[row - 1][col - 1] != 0

    def is_solved(self):
        return self.board == self.solution

    def renderable_grid(self):
        return copy_board(self.board)

    def empty_cells(self):
        return [(r + 1, c + 1)
                for r in range(N) for c in range(N)
                if self.board[r][c] == 0]

    def hint(self):
        """
        Fill a random empty cell from the answer key.
        Returns (row, col, num).
        """
        if self.hints_left <= 0:
            raise NoHintsLeftError("No hints left")

        empties = self.empty_cells()
        if not empties:
            raise NoHintsLeftError("No empty cells")

        row, col = self._rng.choice(empties)
        num = self.solution[row - 1][col - 1]
        self.board[row - 1][col - 1] = num
        self.hints_left -= 1

        logger.info(f"Hint revealed {num} at ({row}, {col}). Hints left: {self.hints_left}")
        return row, col, num

    def _check_cell(self, row, col, num=None):
        if not _in_range(row) or not _in_range(col):
            raise OutOfRangeError(f"Cell ({row}, {col}) is off the board", row, col, num)


def _in_range(value):
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= N
