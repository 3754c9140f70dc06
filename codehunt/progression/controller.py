from typing import Any, Iterable, List, Optional

from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from codehunt.models.enums import HuntStage
from codehunt.models.game import Game
from codehunt.models.progress import ProgressSummary
from codehunt.models.team import Team
from codehunt.progression.digits import DigitPolicy, ordinal_digit
from codehunt.progression.errors import (
    BrokenReferenceError,
    NoTeamSelectedError,
    NotFoundError,
)
from codehunt.progression.registry import TeamRegistry
from codehunt.progression.seed import seed_games, seed_teams
from codehunt.progression.tracker import CompletionTracker
from codehunt.storage.base import (
    COMPLETED_GAMES_KEY,
    GAMES_KEY,
    SELECTED_TEAM_KEY,
    TEAMS_KEY,
    MemoryStore,
    StateStore,
)

_TEAMS = TypeAdapter(List[Team])
_SELECTED = TypeAdapter(Optional[Team])
_GAMES = TypeAdapter(List[Game])
_COUNTER = TypeAdapter(int)


def _parse_slice(store: StateStore, key: str, adapter: TypeAdapter) -> Optional[Any]:
    """Parses a persisted slice, returning None when it is absent or malformed."""
    blob = store.load(key)
    if blob is None:
        return None
    try:
        return adapter.validate_json(blob)
    except (SchemaError, ValueError) as e:
        logger.warning(f"Ignoring malformed '{key}' slice, using defaults: {e}")
        return None


class ProgressionController:
    """Single owner of the hunt state: teams, selection, game completion and win.

    Every mutation is applied in memory first and then written to the store, so
    reloading through :meth:`load` reconstructs the same observable state.
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        games: Optional[Iterable[Game]] = None,
        teams: Optional[Iterable[Team]] = None,
        digit_policy: DigitPolicy = ordinal_digit,
    ):
        self.store = store if store is not None else MemoryStore()
        self.digit_policy = digit_policy
        self._seed: List[Game] = list(games) if games is not None else seed_games()
        self.tracker = CompletionTracker(self._seed)
        self.registry = TeamRegistry(
            self.tracker.game_count,
            teams if teams is not None else seed_teams(),
        )
        self._selected_team: Optional[Team] = None
        self._completed_count = 0

    @classmethod
    def load(
        cls,
        store: StateStore,
        games: Optional[Iterable[Game]] = None,
        teams: Optional[Iterable[Team]] = None,
        digit_policy: DigitPolicy = ordinal_digit,
    ) -> "ProgressionController":
        """Rebuilds a controller from the persisted slices in ``store``.

        Each slice falls back to its seed default independently when it is
        missing or cannot be parsed. The reconciled state is written back, so
        every slice exists in the store afterwards.
        """
        controller = cls(store, games=games, teams=teams, digit_policy=digit_policy)

        saved_teams = _parse_slice(store, TEAMS_KEY, _TEAMS)
        if saved_teams is not None:
            controller.registry = TeamRegistry(controller.tracker.game_count, saved_teams)

        saved_games = _parse_slice(store, GAMES_KEY, _GAMES)
        if saved_games is not None:
            seed_ids = [g.id for g in controller._seed]
            if [g.id for g in saved_games] == seed_ids:
                controller.tracker = CompletionTracker(controller._seed, saved_games)
            else:
                logger.warning("Saved game roster does not match the configured games; resetting it.")

        saved_selection = _parse_slice(store, SELECTED_TEAM_KEY, _SELECTED)
        if saved_selection is not None:
            current = controller.registry.find_team(saved_selection.id)
            if current is None:
                logger.warning(
                    f"Saved selection refers to missing team {saved_selection.id!r}; clearing it."
                )
            controller._selected_team = current

        derived = controller.tracker.completed_count
        saved_count = _parse_slice(store, COMPLETED_GAMES_KEY, _COUNTER)
        if saved_count is not None and saved_count != derived:
            logger.warning(
                f"Saved completed-game counter {saved_count} disagrees with roster ({derived}); using roster."
            )
        controller._completed_count = derived
        controller._save_all()

        logger.info(
            f"Hunt state loaded: {len(controller.registry)} teams, "
            f"{controller._completed_count}/{controller.game_count} games completed"
        )
        return controller

    # --- Persistence ---

    def _save_all(self) -> None:
        self._save_teams()
        self._save_selection()
        self._save_games()
        self._save_counter()

    def _save_teams(self) -> None:
        self.store.save(TEAMS_KEY, _TEAMS.dump_json(self.registry.teams).decode())

    def _save_selection(self) -> None:
        self.store.save(SELECTED_TEAM_KEY, _SELECTED.dump_json(self._selected_team).decode())

    def _save_games(self) -> None:
        self.store.save(GAMES_KEY, _GAMES.dump_json(self.tracker.games).decode())

    def _save_counter(self) -> None:
        self.store.save(COMPLETED_GAMES_KEY, _COUNTER.dump_json(self._completed_count).decode())

    # --- Accessors ---

    @property
    def teams(self) -> List[Team]:
        return self.registry.teams

    @property
    def games(self) -> List[Game]:
        return self.tracker.games

    @property
    def game_count(self) -> int:
        return self.tracker.game_count

    @property
    def completed_count(self) -> int:
        return self._completed_count

    @property
    def remaining_games(self) -> int:
        return self.game_count - self._completed_count

    @property
    def selected_team(self) -> Optional[Team]:
        return self._selected_team

    def require_selected_team(self) -> Team:
        if self._selected_team is None:
            raise NoTeamSelectedError("No team selected")
        if self.registry.find_team(self._selected_team.id) is None:
            raise BrokenReferenceError(
                f"Selected team {self._selected_team.id!r} is no longer registered"
            )
        return self._selected_team

    def is_completed(self, game_id: int) -> bool:
        return self.tracker.is_completed(game_id)

    def collected_digits(self) -> List[Optional[str]]:
        return self.tracker.collected_digits()

    def has_won(self) -> bool:
        return self._completed_count == self.game_count

    @property
    def stage(self) -> HuntStage:
        if self._selected_team is None:
            return HuntStage.NO_TEAM_SELECTED
        if self.has_won():
            return HuntStage.WON
        return HuntStage.TEAM_SELECTED

    def summary(self) -> ProgressSummary:
        return ProgressSummary(
            stage=self.stage,
            team_name=self._selected_team.name if self._selected_team else None,
            collected_digits=self.collected_digits(),
            completed_count=self._completed_count,
            total_games=self.game_count,
        )

    # --- Team administration ---

    def add_team(self, name: str, code: str) -> Team:
        team = self.registry.add_team(name, code)
        self._save_teams()
        return team

    def update_team(
        self, team_id: str, name: Optional[str] = None, code: Optional[str] = None
    ) -> Team:
        team = self.registry.update_team(team_id, name=name, code=code)
        self._save_teams()
        if self._selected_team is not None and self._selected_team.id == team_id:
            self._selected_team = team
            self._save_selection()
        return team

    def delete_team(self, team_id: str) -> Team:
        team = self.registry.delete_team(team_id)
        self._save_teams()
        if self._selected_team is not None and self._selected_team.id == team_id:
            logger.warning(f"Deleted team {team.name} was selected; clearing selection.")
            self._selected_team = None
            self._save_selection()
        return team

    # --- Play ---

    def select_team(self, team_id: str) -> Team:
        team = self.registry.get_team(team_id)
        self._selected_team = team
        self._save_selection()
        logger.info(f"Team selected: {team.name}")
        return team

    def digit_for(self, game_id: int) -> str:
        """Digit the selected team earns for winning ``game_id``."""
        team = self.require_selected_team()
        ordinal = self.tracker.ordinal_of(game_id)
        if ordinal is None:
            raise NotFoundError(f"Game {game_id} not found")
        return self.digit_policy(team, ordinal)

    def complete_game(self, game_id: int, digit: str) -> bool:
        """Records ``digit`` for ``game_id``.

        Returns True when the game moved to completed; duplicates and unknown
        game ids return False and leave the state untouched.
        """
        team = self.require_selected_team()
        if not self.tracker.complete_game(game_id, digit):
            return False

        self._completed_count += 1
        self._save_games()
        self._save_counter()
        logger.info(f"Progress: {self._completed_count}/{self.game_count} games completed")
        if self.has_won():
            logger.success(f"All games completed by {team.name}: code collected!")
        return True

    def record_win(self, game_id: int) -> bool:
        """Completes ``game_id`` with the digit the selected team earns for it."""
        return self.complete_game(game_id, self.digit_for(game_id))

    # --- Resets ---

    def reset_progress(self) -> None:
        """Starts the hunt over: clears games, counter and the team selection."""
        self.tracker.reset_all()
        self._completed_count = 0
        self._selected_team = None
        self._save_games()
        self._save_counter()
        self._save_selection()
        logger.info("Progress reset")

    def reset_games(self) -> None:
        """Clears game progress for everyone, keeping teams and the selection."""
        self.tracker.reset_all()
        self._completed_count = 0
        self._save_games()
        self._save_counter()
        logger.info("All games reset")
