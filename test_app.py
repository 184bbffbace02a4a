# test_app.py
import builtins
import logging
import random

import pytest

import app
from app import ConsoleGame, QuitGame, to_int
from config import Config
from utils.sudoku import Difficulty, copy_board
from utils.session import PuzzleSession
from test_sudoku import SOLUTION


def scripted(answers):
    """Build a read() that replays answers and records the prompts."""
    answers = iter(answers)
    prompts = []

    def read(prompt=""):
        prompts.append(prompt)
        return next(answers)

    read.prompts = prompts
    return read


def make_game(answers):
    output = []
    game = ConsoleGame(read=scripted(answers), write=output.append,
                       clear=lambda: None, rng=random.Random(0))
    return game, output


def one_blank_session(hints=3):
    board = copy_board(SOLUTION)
    board[0][0] = 0
    return PuzzleSession(board, SOLUTION, hints=hints)


@pytest.fixture
def fixed_session(monkeypatch):
    sessions = []

    def new(difficulty, empty_cells=None, rng=None, hints=3):
        session = one_blank_session(hints=hints)
        sessions.append(session)
        return session

    monkeypatch.setattr(app.PuzzleSession, 'new', staticmethod(new))
    return sessions


def test_to_int():
    assert to_int(" 4 ") == 4
    assert to_int("x") is None
    assert to_int("") is None


def test_choose_difficulty():
    game, output = make_game(["3"])
    assert game.choose_difficulty() is Difficulty.HARD
    assert "\nHard level selected\n" in output


def test_choose_difficulty_defaults_to_medium():
    game, output = make_game(["9"])
    assert game.choose_difficulty() is Difficulty.MEDIUM
    assert "\nMedium level selected\n" in output


def test_play_solves_with_correct_value():
    game, output = make_game(["1", "1", "5"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert "Attempted 1 times\n" in output


def test_play_retries_after_constraint_violation():
    # Column 1, row 1: 3 clashes with its row, then 5 is correct
    game, output = make_game(["1", "1", "3", "y", "1", "1", "5"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert session.attempts == 2
    assert "Invalid value! Try again? (y/n) " in game.read.prompts


def test_play_reasks_value_when_out_of_range():
    game, _ = make_game(["1", "1", "12", "y", "5"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert session.attempts == 1


def test_play_rejects_bad_coordinates():
    game, _ = make_game(["0", "4", "y", "abc", "1", "y", "1", "1", "5"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert game.read.prompts.count("Invalid row or column! Try again? (y/n) ") == 2


def test_play_rejects_filled_cell():
    game, _ = make_game(["2", "2", "y", "1", "1", "5"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert "This cell is already filled! Try again? (y/n) " in game.read.prompts


@pytest.mark.parametrize("answers", [
    ["0", "1", "n"],
    ["2", "2", "N"],
    ["1", "1", "3", "n"],
    ["1", "1", "0", "n"],
])
def test_answering_no_quits(answers):
    game, _ = make_game(answers)
    session = one_blank_session()
    before = session.renderable_grid()
    with pytest.raises(QuitGame):
        game.play(session)
    assert session.renderable_grid() == before


def test_hint_completes_board():
    game, output = make_game(["h"])
    session = one_blank_session()
    game.play(session)
    assert session.is_solved()
    assert session.hints_left == 2
    assert any(line.startswith("Hint: 5 placed at column 1, row 1") for line in output)


def test_hint_when_none_left():
    game, output = make_game(["h", "1", "1", "5"])
    session = one_blank_session(hints=0)
    game.play(session)
    assert "No hints left!" in output
    assert session.is_solved()


def test_ask_play_again_reasks_on_invalid_answer():
    game, _ = make_game(["maybe", "Y"])
    assert game.ask_play_again()
    assert len(game.read.prompts) == 2

    game, _ = make_game(["n"])
    assert not game.ask_play_again()


def test_run_full_game_then_replay(fixed_session):
    game, output = make_game(["1", "1", "1", "5", "y", "2", "1", "1", "5", "n"])
    game.run()
    assert len(fixed_session) == 2
    assert all(session.is_solved() for session in fixed_session)
    assert output.count("\nCongratulations! You solved the board!\n") == 2
    assert f"Welcome to {Config.BRAND}!\n" in output


def test_run_stops_when_player_quits(fixed_session):
    game, output = make_game(["2", "1", "1", "3", "n"])
    game.run()
    assert not fixed_session[0].is_solved()
    assert "\nCongratulations! You solved the board!\n" not in output


def test_run_with_no_empty_cells(monkeypatch):
    monkeypatch.setattr(Config, 'EASY_EMPTY_CELLS', 0)
    game, output = make_game(["1", "n"])
    game.run()
    assert "\nCongratulations! You solved the board!\n" in output


def test_config_empty_cells(monkeypatch):
    assert Config.empty_cells(Difficulty.EASY) == Config.EASY_EMPTY_CELLS
    monkeypatch.setattr(Config, 'HARD_EMPTY_CELLS', 90)
    with pytest.raises(ValueError):
        Config.empty_cells(Difficulty.HARD)


def test_make_rng_uses_seed(monkeypatch):
    monkeypatch.setattr(Config, 'SUDOKU_SEED', '17')
    assert app.make_rng().random() == random.Random(17).random()


def test_config_empty_cells_allows_whole_board(monkeypatch):
    monkeypatch.setattr(Config, 'HARD_EMPTY_CELLS', 81)
    assert Config.empty_cells(Difficulty.HARD) == 81
    monkeypatch.setattr(Config, 'HARD_EMPTY_CELLS', 82)
    with pytest.raises(ValueError):
        Config.empty_cells(Difficulty.HARD)


@pytest.fixture
def log_file(monkeypatch, tmp_path):
    path = tmp_path / "sudoku.log"
    monkeypatch.setattr(Config, 'LOG_FILE', str(path))
    monkeypatch.setattr(Config, 'LOG_LEVEL', 'INFO')

    logger = logging.getLogger('sudoku')
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield path

    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_writes_to_file_only(log_file, capsys):
    app.setup_logging()
    logging.getLogger('sudoku.session').warning("Move rejected: cell (1, 1) is already filled")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert "WARNING - Move rejected: cell (1, 1) is already filled" in log_file.read_text()


def test_main_exits_cleanly_on_eof(log_file, monkeypatch):
    monkeypatch.setattr(Config, 'CLEAR_SCREEN', False)

    def closed_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, 'input', closed_input)
    app.main()

    text = log_file.read_text()
    assert "Input closed, exiting" in text
    assert "Goodbye" in text
