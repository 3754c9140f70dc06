from typing import Any, Dict, Type

from codehunt.minigames.base import MiniGame, RestartCallback, WinCallback
from codehunt.minigames.code_breaker import CodeBreaker
from codehunt.minigames.memory_match import MemoryMatch
from codehunt.minigames.pattern_memory import PatternMemory
from codehunt.minigames.quick_math import QuickMath
from codehunt.minigames.reaction_test import ReactionTest
from codehunt.minigames.word_scramble import WordScramble
from codehunt.progression.errors import NotFoundError

MINI_GAMES: Dict[int, Type[MiniGame]] = {
    cls.game_id: cls
    for cls in (MemoryMatch, QuickMath, WordScramble, PatternMemory, ReactionTest, CodeBreaker)
}


def create_mini_game(
    game_id: int, on_win: WinCallback, on_restart: RestartCallback, **kwargs: Any
) -> MiniGame:
    """Instantiates the mini-game played for roster slot ``game_id``."""
    try:
        game_cls = MINI_GAMES[game_id]
    except KeyError:
        raise NotFoundError(f"No mini-game for game {game_id}") from None
    return game_cls(on_win, on_restart, **kwargs)
