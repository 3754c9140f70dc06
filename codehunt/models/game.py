from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .enums import Difficulty


class Game(BaseModel):
    """A mini-game slot on the hunt roster.

    ``id`` is the 1-based ordinal position of the game and doubles as the index
    into a team's code. ``digit`` holds the revealed code character once the game
    has been completed.
    """

    id: int = Field(..., ge=1)
    title: str
    description: str
    difficulty: Difficulty
    completed: bool = False
    digit: Optional[str] = Field(None, min_length=1, max_length=1)

    @model_validator(mode="after")
    def _digit_matches_completion(self) -> "Game":
        if self.completed != (self.digit is not None):
            raise ValueError(
                f"Game {self.id}: digit must be set if and only if the game is completed"
            )
        return self

    def pristine(self) -> "Game":
        """Copy of this game with its play state cleared."""
        return self.model_copy(update={"completed": False, "digit": None})
