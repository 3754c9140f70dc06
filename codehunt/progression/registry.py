import re
import time
from typing import Callable, Iterable, List, Optional

from loguru import logger

from codehunt.models.team import Team
from codehunt.progression.errors import NotFoundError, ValidationError

_DIGITS_ONLY = re.compile(r"[0-9]+")


def _millis() -> int:
    return time.time_ns() // 1_000_000


def validate_code(code: str, length: int) -> str:
    """Checks that ``code`` is exactly ``length`` ASCII digits."""
    if not isinstance(code, str) or len(code) != length or not _DIGITS_ONLY.fullmatch(code):
        raise ValidationError(f"Team code must be exactly {length} digits")
    return code


def validate_name(name: str) -> str:
    """Returns the trimmed team name, rejecting blank names."""
    trimmed = name.strip() if isinstance(name, str) else ""
    if not trimmed:
        raise ValidationError("Team name must not be empty")
    return trimmed


class TeamRegistry:
    """Ordered team roster with code-format enforcement.

    The required code length is supplied by the owner (the number of games on
    the roster) so that every stored code can reveal one digit per game.
    """

    def __init__(
        self,
        code_length: int,
        teams: Optional[Iterable[Team]] = None,
        clock: Callable[[], int] = _millis,
    ):
        self.code_length = code_length
        self._clock = clock
        self._last_id = 0
        self._teams: List[Team] = []
        for team in teams or []:
            try:
                self._teams.append(self._checked(team))
            except ValidationError as e:
                logger.warning(f"Dropping invalid team record {team.id!r}: {e}")

    def _checked(self, team: Team) -> Team:
        validate_name(team.name)
        validate_code(team.code, self.code_length)
        if self.find_team(team.id) is not None:
            raise ValidationError(f"Duplicate team id {team.id!r}")
        return team

    def _next_id(self) -> str:
        # Millisecond timestamp, bumped when it would repeat or collide
        candidate = max(self._clock(), self._last_id + 1)
        existing = {t.id for t in self._teams}
        while str(candidate) in existing:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    @property
    def teams(self) -> List[Team]:
        return list(self._teams)

    def __len__(self) -> int:
        return len(self._teams)

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self._teams if t.id == team_id), None)

    def get_team(self, team_id: str) -> Team:
        team = self.find_team(team_id)
        if team is None:
            raise NotFoundError(f"Team {team_id!r} not found")
        return team

    def add_team(self, name: str, code: str) -> Team:
        team = Team(
            id=self._next_id(),
            name=validate_name(name),
            code=validate_code(code, self.code_length),
        )
        self._teams.append(team)
        logger.info(f"Team added: {team.name} (id={team.id})")
        return team

    def update_team(
        self, team_id: str, name: Optional[str] = None, code: Optional[str] = None
    ) -> Team:
        current = self.get_team(team_id)
        changes = {}
        if name is not None:
            changes["name"] = validate_name(name)
        if code is not None:
            changes["code"] = validate_code(code, self.code_length)
        updated = current.model_copy(update=changes)
        self._teams[self._teams.index(current)] = updated
        logger.info(f"Team updated: {updated.name} (id={team_id})")
        return updated

    def delete_team(self, team_id: str) -> Team:
        team = self.get_team(team_id)
        self._teams.remove(team)
        logger.info(f"Team deleted: {team.name} (id={team_id})")
        return team
