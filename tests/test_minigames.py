"""
Tests for the mini-games and the win/restart contract they share.
"""

from unittest.mock import Mock

import pytest

from codehunt.minigames.catalog import MINI_GAMES, create_mini_game
from codehunt.minigames.code_breaker import CodeBreaker, score_guess
from codehunt.minigames.memory_match import MemoryMatch
from codehunt.minigames.pattern_memory import COLORS as PATTERN_COLORS, PatternMemory
from codehunt.minigames.quick_math import QuickMath
from codehunt.minigames.reaction_test import ReactionTest
from codehunt.minigames.word_scramble import WordScramble
from codehunt.progression.errors import NotFoundError


@pytest.fixture
def callbacks():
    return Mock(name="on_win"), Mock(name="on_restart")


def solve_memory_match(game: MemoryMatch) -> None:
    positions = {}
    for index, symbol in enumerate(game.cards):
        positions.setdefault(symbol, []).append(index + 1)
    for first, second in positions.values():
        game.handle(f"{first} {second}")


def test_catalog_covers_the_roster():
    assert sorted(MINI_GAMES) == [1, 2, 3, 4, 5, 6]
    assert MINI_GAMES[1] is MemoryMatch
    assert MINI_GAMES[6] is CodeBreaker


def test_catalog_unknown_game(callbacks):
    with pytest.raises(NotFoundError):
        create_mini_game(7, *callbacks)


def test_handle_before_start(callbacks, rng):
    game = create_mini_game(1, *callbacks, rng=rng)
    assert "not started" in game.handle("1 2")


# --- Memory Match ---


def test_memory_match_win_fires_once(callbacks, rng):
    on_win, on_restart = callbacks
    game = MemoryMatch(on_win, on_restart, rng=rng)
    game.start()
    solve_memory_match(game)
    assert game.won
    assert game.matched_pairs == 8
    on_win.assert_called_once_with()

    assert game.handle("1 2") == "The game is over."
    game._declare_win()
    on_win.assert_called_once_with()
    on_restart.assert_not_called()


def test_memory_match_mismatch_and_bad_input(rng):
    game = MemoryMatch(rng=rng)
    game.start()
    first = game.cards[0]
    other = next(i for i, c in enumerate(game.cards) if c != first)
    assert "No match" in game.handle(f"1 {other + 1}")
    assert game.moves == 1
    assert "two card numbers" in game.handle("one two")
    assert "different cards" in game.handle("3 3")
    assert "between 1 and 16" in game.handle("0 17")


def test_memory_match_restart(callbacks, rng):
    on_win, on_restart = callbacks
    game = MemoryMatch(on_win, on_restart, rng=rng)
    game.start()
    game.handle("1 2")
    game.restart()
    on_restart.assert_called_once_with()
    assert game.moves == 0
    on_win.assert_not_called()


# --- Quick Math ---


def test_quick_math_win(callbacks, rng, clock):
    on_win, _ = callbacks
    game = QuickMath(on_win, rng=rng, clock=clock)
    game.start()
    assert "Wrong" in game.handle(str(game.answer + 1))
    assert "whole number" in game.handle("abc")
    for _ in range(game.required_score):
        game.handle(str(game.answer))
    assert game.won
    on_win.assert_called_once_with()


def test_quick_math_problems_are_consistent(rng, clock):
    game = QuickMath(rng=rng, clock=clock)
    game.start()
    for _ in range(50):
        question, answer = game.new_problem()
        a, op, b = question.split()
        expected = {"+": int(a) + int(b), "-": int(a) - int(b), "*": int(a) * int(b)}[op]
        assert answer == expected
        assert answer >= 0


def test_quick_math_time_limit(callbacks, rng, clock):
    on_win, _ = callbacks
    game = QuickMath(on_win, rng=rng, clock=clock)
    game.start()
    clock.advance(61)
    assert "Time's up" in game.handle(str(game.answer))
    assert game.lost
    on_win.assert_not_called()


# --- Word Scramble ---


def test_word_scramble_win(callbacks, rng, clock):
    on_win, _ = callbacks
    game = WordScramble(on_win, rng=rng, clock=clock)
    game.start()
    assert sorted(game.scrambled) == sorted(game.word)
    assert game.scrambled != game.word
    assert "Not quite" in game.handle("nope")
    for _ in range(game.required_score):
        game.handle(game.word.lower())
    assert game.won
    on_win.assert_called_once_with()


def test_word_scramble_time_limit(rng, clock):
    game = WordScramble(rng=rng, clock=clock)
    game.start()
    clock.advance(60)
    game.handle(game.word)
    assert game.lost


# --- Pattern Memory ---


def test_pattern_memory_win(callbacks, rng):
    on_win, _ = callbacks
    game = PatternMemory(on_win, rng=rng)
    game.start()
    while not game.finished:
        game.handle(" ".join(PATTERN_COLORS[i][0] for i in game.sequence))
    assert game.won
    assert game.round == game.rounds_to_win
    on_win.assert_called_once_with()


def test_pattern_memory_wrong_pattern_loses(callbacks, rng):
    on_win, on_restart = callbacks
    game = PatternMemory(on_win, on_restart, rng=rng)
    game.start()
    wrong = (game.sequence[0] + 1) % len(PATTERN_COLORS)
    assert "Wrong pattern" in game.handle(PATTERN_COLORS[wrong])
    assert game.lost
    game.restart()
    assert not game.lost
    assert game.round == 1
    on_restart.assert_called_once_with()
    on_win.assert_not_called()


def test_pattern_memory_unknown_color(rng):
    game = PatternMemory(rng=rng)
    game.start()
    assert "Unknown color" in game.handle("purple")
    assert not game.finished


# --- Reaction Test ---


def test_reaction_test_win(callbacks, rng, clock):
    on_win, _ = callbacks
    game = ReactionTest(on_win, rng=rng, clock=clock, target_ms=100)
    game.start()
    for reaction in (0.3, 0.25, 0.08, 0.2, 0.4):
        clock.now = game.signal_at + reaction
        game.handle("")
    assert game.best_ms == 80
    assert game.won
    on_win.assert_called_once_with()


def test_reaction_test_too_slow(callbacks, rng, clock):
    on_win, _ = callbacks
    game = ReactionTest(on_win, rng=rng, clock=clock, target_ms=100)
    game.start()
    for _ in range(game.required_attempts):
        clock.now = game.signal_at + 0.5
        game.handle("")
    assert game.lost
    on_win.assert_not_called()


def test_reaction_test_early_press_does_not_count(rng, clock):
    game = ReactionTest(rng=rng, clock=clock)
    game.start()
    assert "Too early" in game.handle("")
    assert game.attempts == 0
    assert 1.0 <= game.delay <= 5.0


# --- Code Breaker ---


@pytest.mark.parametrize(
    "secret, guess, expected",
    [
        (["red", "red", "blue", "green"], ["red", "blue", "red", "red"], (1, 2)),
        (["red", "blue", "green", "yellow"], ["red", "blue", "green", "yellow"], (4, 0)),
        (["red", "blue", "green", "yellow"], ["yellow", "green", "blue", "red"], (0, 4)),
        (["pink", "pink", "pink", "pink"], ["red", "blue", "green", "yellow"], (0, 0)),
        (["red", "blue", "blue", "blue"], ["blue", "red", "red", "red"], (0, 2)),
    ],
)
def test_score_guess(secret, guess, expected):
    assert score_guess(secret, guess) == expected


def test_code_breaker_win(callbacks, rng):
    on_win, _ = callbacks
    game = CodeBreaker(on_win, rng=rng)
    game.start()
    assert "exactly 4" in game.handle("red blue")
    assert "ambiguous" in game.handle("p r g b")
    game.handle(" ".join(game.secret))
    assert game.won
    on_win.assert_called_once_with()


def test_code_breaker_out_of_attempts(callbacks, rng):
    on_win, _ = callbacks
    game = CodeBreaker(on_win, rng=rng)
    game.start()
    game.secret = ["red", "red", "red", "red"]
    for _ in range(game.max_attempts):
        game.handle("blue blue blue blue")
    assert game.lost
    assert game.attempts == game.max_attempts
    on_win.assert_not_called()


def test_restart_after_win_is_ignored(callbacks, rng):
    on_win, on_restart = callbacks
    game = CodeBreaker(on_win, on_restart, rng=rng)
    game.start()
    game.handle(" ".join(game.secret))
    game.restart()
    on_restart.assert_not_called()
    assert game.won


# --- Wiring to the controller ---


def test_win_reports_digit_to_controller(playing, rng):
    game = create_mini_game(6, lambda: playing.record_win(6), lambda: None, rng=rng)
    game.start()
    game.handle(" ".join(game.secret))
    assert playing.is_completed(6)
    assert playing.collected_digits()[5] == "6"
    assert playing.completed_count == 1
