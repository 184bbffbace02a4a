# utils/__init__.py
from .sudoku import Difficulty, generate_sudoku, is_safe, board_string
from .session import (PuzzleSession, MoveError, OutOfRangeError, CellOccupiedError,
                      ConstraintViolationError, NoHintsLeftError)

__all__ = ['Difficulty', 'generate_sudoku', 'is_safe', 'board_string',
           'PuzzleSession', 'MoveError', 'OutOfRangeError', 'CellOccupiedError',
           'ConstraintViolationError', 'NoHintsLeftError']
