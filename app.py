import os
import random
import logging
from logging.handlers import RotatingFileHandler

from config import Config
from utils.sudoku import Difficulty, board_string
from utils.session import (PuzzleSession, OutOfRangeError, CellOccupiedError,
                           ConstraintViolationError, NoHintsLeftError)

logger = logging.getLogger('sudoku')


class QuitGame(Exception):
    """The player answered 'n' to a try-again prompt."""


# Configure logging
def setup_logging():
    handler = RotatingFileHandler(Config.LOG_FILE, maxBytes=Config.LOG_MAX_BYTES,
                                  backupCount=Config.LOG_BACKUP_COUNT)
    handler.setLevel(Config.LOG_LEVEL)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.setLevel(Config.LOG_LEVEL)
    logger.addHandler(handler)
    # The console belongs to the board, not the log
    logger.propagate = False


def clear_screen():
    if Config.CLEAR_SCREEN:
        os.system('cls' if os.name == 'nt' else 'clear')


def make_rng():
    if Config.SUDOKU_SEED is None:
        return random.Random()
    return random.Random(int(Config.SUDOKU_SEED))


def to_int(text):
    """Parse typed input, None if it is not a whole number."""
    try:
        return int(str(text).strip())
    except ValueError:
        return None


class ConsoleGame:
    """
    Text front end: difficulty menu, move prompts and the replay loop.
    All I/O goes through read/write so the loop can be scripted.
    """

    def __init__(self, read=None, write=None, clear=clear_screen, rng=None):
        self.read = read or input
        self.write = write or print
        self.clear = clear
        self.rng = rng or make_rng()

    def run(self):
        try:
            while True:
                self.clear()
                self.write(f"Welcome to {Config.BRAND}!\n")

                difficulty = self.choose_difficulty()
                session = self.new_session(difficulty)
                self.write(board_string(session.renderable_grid()))

                self.play(session)
                self.write("\nCongratulations! You solved the board!\n")
                logger.info(f"Puzzle solved in {session.attempts} attempts "
                            f"({difficulty.value}, {Config.HINTS_PER_PUZZLE - session.hints_left} hints)")

                if not self.ask_play_again():
                    break
        except QuitGame:
            logger.info("Player quit before solving the board")

    def choose_difficulty(self):
        self.write("Choose difficulty level:")
        self.write("1. Easy")
        self.write("2. Medium (default)")
        self.write("3. Hard")
        difficulty = Difficulty.parse(self.read("Enter your choice: "))
        self.write(f"\n{difficulty.name.capitalize()} level selected\n")
        logger.info(f"Difficulty selected: {difficulty.value}")
        return difficulty

    def new_session(self, difficulty):
        return PuzzleSession.new(difficulty,
                                 empty_cells=Config.empty_cells(difficulty),
                                 rng=self.rng,
                                 hints=Config.HINTS_PER_PUZZLE)

    def play(self, session):
        """Prompt for moves until the board matches the answer key."""
        while not session.is_solved():
            col_text = self.read("Enter column (X axis): ")
            if col_text.strip().lower() == 'h':
                self.use_hint(session)
                continue

            col = to_int(col_text)
            row = to_int(self.read("Enter row (Y axis): "))

            try:
                filled = session.is_filled(row, col)
            except OutOfRangeError as e:
                logger.warning(f"Move rejected: {e}")
                self.try_again("Invalid row or column! Try again? (y/n) ")
                continue

            if filled:
                logger.warning(f"Move rejected: cell ({row}, {col}) is already filled")
                self.try_again("This cell is already filled! Try again? (y/n) ")
                continue

            self.enter_value(session, row, col)
            self.show(session)

    def enter_value(self, session, row, col):
        while True:
            num = to_int(self.read("Enter value: "))
            try:
                session.attempt_move(row, col, num)
            except OutOfRangeError as e:
                logger.warning(f"Move rejected: {e}")
                self.try_again("Invalid value! Try again? (y/n) ")
                continue
            except (CellOccupiedError, ConstraintViolationError) as e:
                logger.warning(f"Move rejected: {e}")
                self.try_again("Invalid value! Try again? (y/n) ")
            return

    def use_hint(self, session):
        try:
            row, col, num = session.hint()
        except NoHintsLeftError as e:
            self.write(f"{e}!")
            return
        self.show(session)
        self.write(f"Hint: {num} placed at column {col}, row {row}. Hints left: {session.hints_left}")

    def show(self, session):
        self.clear()
        self.write(f"Attempted {session.attempts} times\n")
        self.write(board_string(session.renderable_grid()))

    def try_again(self, prompt):
        answer = self.read(prompt).strip().lower()
        if answer == 'n':
            raise QuitGame()

    def ask_play_again(self):
        while True:
            answer = self.read("Do you want to play again? (y/n) ").strip().lower()
            if answer == 'y':
                return True
            if answer == 'n':
                return False


def main():
    setup_logging()
    logger.info(f"Starting {Config.BRAND}...")
    try:
        ConsoleGame().run()
    except (EOFError, KeyboardInterrupt):
        print()
        logger.info("Input closed, exiting")
    logger.info("Goodbye")


if __name__ == '__main__':
    main()
