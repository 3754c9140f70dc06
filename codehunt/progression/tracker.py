from typing import Iterable, List, Optional

from loguru import logger

from codehunt.models.game import Game
from codehunt.progression.errors import ValidationError


class CompletionTracker:
    """Fixed game roster plus the completed flag and revealed digit of each game."""

    def __init__(self, seed: Iterable[Game], games: Optional[Iterable[Game]] = None):
        self._seed: List[Game] = [g.pristine() for g in seed]
        ids = [g.id for g in self._seed]
        if ids != list(range(1, len(ids) + 1)):
            raise ValidationError(f"Game ids must run 1..{len(ids)} in roster order, got {ids}")
        if games is not None:
            games = list(games)
            if [g.id for g in games] != ids:
                raise ValidationError("Saved games do not match the roster")
        self._games: List[Game] = (
            [g.model_copy() for g in games] if games is not None else self._pristine()
        )

    def _pristine(self) -> List[Game]:
        return [g.model_copy() for g in self._seed]

    @property
    def games(self) -> List[Game]:
        return [g.model_copy() for g in self._games]

    @property
    def game_count(self) -> int:
        return len(self._games)

    @property
    def completed_count(self) -> int:
        return sum(1 for g in self._games if g.completed)

    def get_game(self, game_id: int) -> Optional[Game]:
        return next((g for g in self._games if g.id == game_id), None)

    def ordinal_of(self, game_id: int) -> Optional[int]:
        """1-based roster position of a game, or None if unknown."""
        for position, game in enumerate(self._games, start=1):
            if game.id == game_id:
                return position
        return None

    def is_completed(self, game_id: int) -> bool:
        game = self.get_game(game_id)
        return game.completed if game else False

    def collected_digits(self) -> List[Optional[str]]:
        return [g.digit for g in self._games]

    def complete_game(self, game_id: int, digit: str) -> bool:
        """Marks a game completed with its digit.

        Returns True only on a genuine transition. Repeat completions keep the
        first digit and unknown game ids are logged and ignored.
        """
        if not isinstance(digit, str) or len(digit) != 1:
            raise ValidationError(f"Digit must be a single character, got {digit!r}")

        position = self.ordinal_of(game_id)
        if position is None:
            logger.warning(f"Ignoring completion for unknown game id {game_id}")
            return False

        game = self._games[position - 1]
        if game.completed:
            logger.debug(
                f"Game {game_id} already completed with digit {game.digit!r}; ignoring {digit!r}"
            )
            return False

        self._games[position - 1] = game.model_copy(
            update={"completed": True, "digit": digit}
        )
        logger.info(f"Game {game_id} ({game.title}) completed")
        return True

    def reset_all(self) -> None:
        self._games = self._pristine()
        logger.info(f"Game roster reset ({len(self._games)} games)")
