# codehunt/progression/seed.py
from typing import List

from codehunt.models.enums import Difficulty
from codehunt.models.game import Game
from codehunt.models.team import Team

# Game ids are ordinal positions, the order here is the roster order.
_SEED_GAMES = (
    Game(
        id=1,
        title="Memory Match",
        description="Match all pairs of cards to win",
        difficulty=Difficulty.EASY,
    ),
    Game(
        id=2,
        title="Quick Math",
        description="Solve math problems within the time limit",
        difficulty=Difficulty.MEDIUM,
    ),
    Game(
        id=3,
        title="Word Scramble",
        description="Unscramble words before time runs out",
        difficulty=Difficulty.MEDIUM,
    ),
    Game(
        id=4,
        title="Pattern Memory",
        description="Remember and repeat the pattern sequence",
        difficulty=Difficulty.HARD,
    ),
    Game(
        id=5,
        title="Reaction Test",
        description="Press Enter as fast as you can when the signal appears",
        difficulty=Difficulty.EASY,
    ),
    Game(
        id=6,
        title="Code Breaker",
        description="Guess the correct sequence of colors",
        difficulty=Difficulty.HARD,
    ),
)

_SEED_TEAMS = (
    Team(id="1", name="Team A", code="123456"),
    Team(id="2", name="Team B", code="789012"),
    Team(id="3", name="Team C", code="345678"),
    Team(id="4", name="Team D", code="901234"),
)


def seed_games() -> List[Game]:
    """Fresh, unplayed copies of the game roster."""
    return [game.pristine() for game in _SEED_GAMES]


def seed_teams() -> List[Team]:
    return list(_SEED_TEAMS)
