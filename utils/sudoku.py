# utils/sudoku.py
import random
import logging
from enum import Enum

logger = logging.getLogger('sudoku.engine')

N = 9       # Size of the board
BOX = 3     # Size of a mini box

# Number of empty cells per difficulty level
EMPTY_CELLS = {
    'easy': 13,
    'medium': 29,
    'hard': 41
}


class Difficulty(Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @classmethod
    def parse(cls, value):
        """
        Resolve a menu choice, a name or a member to a Difficulty.
        Unknown values fall back to MEDIUM, like the menu's default.
        """
        if isinstance(value, cls):
            return value
        choice = str(value).strip().lower()
        by_number = {'1': cls.EASY, '2': cls.MEDIUM, '3': cls.HARD}
        if choice in by_number:
            return by_number[choice]
        for member in cls:
            if choice in (member.value, member.name.lower()):
                return member
        return cls.MEDIUM

    @property
    def empty_cells(self):
        return EMPTY_CELLS[self.value]


def generate_sudoku(difficulty='medium', empty_cells=None, rng=None):
    """
    Generate a Sudoku puzzle of the specified difficulty.
    Returns a tuple of (puzzle, solution)
    """
    rng = rng or random
    difficulty = Difficulty.parse(difficulty)
    if empty_cells is None:
        empty_cells = difficulty.empty_cells

    # Create a solved Sudoku board
    board = [[0] * N for _ in range(N)]
    fill_values(board, rng)

    # Keep the full board as the answer key
    solution = copy_board(board)

    remove_cells(board, empty_cells, rng)
    logger.info(f"Generated {difficulty.value} puzzle with {empty_cells} empty cells")
    return board, solution


def fill_values(board, rng=None):
    """
    Fill an empty board: diagonal boxes first, then everything else.
    """
    fill_diagonal(board, rng)
    if not fill_remaining(board, 0, BOX):
        # A validly filled diagonal always completes
        raise RuntimeError("Backtracking failed to complete the board")
    return board


def fill_diagonal(board, rng=None):
    """
    Fill the three boxes on the main diagonal.
    They share no row, column or box, so only box-local checks are needed.
    """
    for i in range(0, N, BOX):
        fill_box(board, i, i, rng)


def fill_box(board, row, col, rng=None):
    """
    Fill the 3x3 box at (row, col) with a random permutation of 1-9.
    """
    rng = rng or random
    for i in range(BOX):
        for j in range(BOX):
            num = rng.randint(1, N)
            while not absent_in_box(board, row, col, num):
                num = rng.randint(1, N)
            board[row + i][col + j] = num


def fill_remaining(board, row=0, col=BOX):
    """
    Fill the cells outside the diagonal boxes using backtracking.
    Cells are visited row by row; digits are tried from 1 to 9.
    Returns True once the board is full, False to backtrack.
    """
    # Past the last column: move to the next row
    if col >= N and row < N - 1:
        row += 1
        col = 0

    if row >= N and col >= N:
        return True

    # Skip the diagonal box lying in this band of rows
    if row < BOX:
        if col < BOX:
            col = BOX
    elif row < N - BOX:
        if col == (row // BOX) * BOX:
            col += BOX
    else:
        # Last columns of the last rows belong to a diagonal box
        if col == N - BOX:
            row += 1
            col = 0
            if row >= N:
                return True

    for num in range(1, N + 1):
        if is_safe(board, row, col, num):
            board[row][col] = num
            if fill_remaining(board, row, col + 1):
                return True
            board[row][col] = 0

    return False


def remove_cells(board, count, rng=None):
    """
    Blank `count` distinct cells picked at random.
    No check is made that the resulting puzzle has a unique solution.
    """
    if count < 0 or count > N * N:
        raise ValueError(f"Cannot remove {count} cells from a {N}x{N} board")

    rng = rng or random
    while count != 0:
        cell_id = rng.randint(0, N * N - 1)
        i, j = divmod(cell_id, N)
        if board[i][j] != 0:
            board[i][j] = 0
            count -= 1
    return board


def is_safe(board, row, col, num):
    """
    Check if placing num at (row, col) is valid.
    """
    return (absent_in_row(board, row, num)
            and absent_in_col(board, col, num)
            and absent_in_box(board, row - row % BOX, col - col % BOX, num))


def absent_in_row(board, row, num):
    return num not in board[row]


def absent_in_col(board, col, num):
    for i in range(N):
        if board[i][col] == num:
            return False
    return True


def absent_in_box(board, row_start, col_start, num):
    """
    Returns False if the 3x3 box starting at (row_start, col_start) contains num.
    """
    for i in range(row_start, row_start + BOX):
        for j in range(col_start, col_start + BOX):
            if board[i][j] == num:
                return False
    return True


def validate_board(board):
    """Validate a 9x9 Sudoku board for correctness."""
    if not board or len(board) != N or any(len(row) != N for row in board):
        return False
    if any(not isinstance(v, int) or isinstance(v, bool) or v < 0 or v > N for row in board for v in row):
        return False

    groups = [list(row) for row in board]
    groups += [[board[i][j] for i in range(N)] for j in range(N)]
    for br in range(0, N, BOX):
        for bc in range(0, N, BOX):
            groups.append([board[i][j]
                           for i in range(br, br + BOX)
                           for j in range(bc, bc + BOX)])

    for group in groups:
        nums = [v for v in group if v != 0]
        if len(nums) != len(set(nums)):
            return False
    return True


def is_complete(board):
    return count_empty(board) == 0


def count_empty(board):
    return sum(row.count(0) for row in board)


def copy_board(board):
    return [row[:] for row in board]


def board_string(board):
    """
    Render the board as text with X (column) and Y (row) rulers.
    """
    header = "  X"
    for i in range(1, N + 1):
        header += f" {i}"
        if i % BOX == 0:
            header += "  "
    line = "  " + "-" * 25

    lines = [header.rstrip(), "Y" + line[1:]]
    for i, row in enumerate(board):
        if i != 0 and i % BOX == 0:
            lines.append(line)
        text = f"{i + 1} | "
        for j, cell in enumerate(row):
            text += ("." if cell == 0 else str(cell)) + " "
            if (j + 1) % BOX == 0:
                text += "| "
        lines.append(text.rstrip())
    lines.append(line)
    return "\n".join(lines)
