import os
from dotenv import load_dotenv

from utils.sudoku import N

# Load environment variables before the class body reads them
load_dotenv()


class Config:
    # Logging
    LOG_FILE = os.environ.get("LOG_FILE", "sudoku.log")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_MAX_BYTES = int(os.environ.get("LOG_MAX_BYTES", "10000"))
    LOG_BACKUP_COUNT = int(os.environ.get("LOG_BACKUP_COUNT", "3"))

    # Empty cells per difficulty level
    EASY_EMPTY_CELLS = int(os.environ.get("EASY_EMPTY_CELLS", "13"))
    MEDIUM_EMPTY_CELLS = int(os.environ.get("MEDIUM_EMPTY_CELLS", "29"))
    HARD_EMPTY_CELLS = int(os.environ.get("HARD_EMPTY_CELLS", "41"))

    # Game
    HINTS_PER_PUZZLE = int(os.environ.get("HINTS_PER_PUZZLE", "3"))
    CLEAR_SCREEN = os.environ.get("CLEAR_SCREEN", "1") == "1"
    # Unset means a fresh random game every run
    SUDOKU_SEED = os.environ.get("SUDOKU_SEED")

    # Branding
    BRAND = os.environ.get("BRAND", "Sudoku")

    @classmethod
    def empty_cells(cls, difficulty):
        """Configured number of empty cells for a difficulty level."""
        count = {
            'easy': cls.EASY_EMPTY_CELLS,
            'medium': cls.MEDIUM_EMPTY_CELLS,
            'hard': cls.HARD_EMPTY_CELLS
        }[difficulty.value]
        if count < 0 or count > N * N:
            raise ValueError(f"{difficulty.name}_EMPTY_CELLS must be between 0 and {N * N}, got {count}")
        return count
