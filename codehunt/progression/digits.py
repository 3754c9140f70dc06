from typing import Callable

from codehunt.models.team import Team
from codehunt.progression.errors import ValidationError

# (team, 1-based game ordinal) -> revealed code character
DigitPolicy = Callable[[Team, int], str]


def ordinal_digit(team: Team, ordinal: int) -> str:
    """The character of the team's code at the game's ordinal position."""
    if ordinal < 1 or ordinal > len(team.code):
        raise ValidationError(
            f"Game ordinal {ordinal} is outside the {len(team.code)}-digit code of team {team.id}"
        )
    return team.code[ordinal - 1]
