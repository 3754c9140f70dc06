import random
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from loguru import logger

WinCallback = Callable[[], None]
RestartCallback = Callable[[], None]


def _noop() -> None:
    pass


class MiniGame(ABC):
    """Abstract base class for the hunt's mini-games.

    A mini-game owns its own rules and reports back through two callbacks only:
    ``on_win`` once its win condition is met, and ``on_restart`` when the
    player abandons an attempt. Play is text driven: :meth:`start` returns the
    opening message and each player entry goes through :meth:`handle`.
    """

    game_id: int = 0
    title: str = "Mini-game"

    def __init__(
        self,
        on_win: WinCallback = _noop,
        on_restart: RestartCallback = _noop,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.on_win = on_win
        self.on_restart = on_restart
        self.rng = rng or random.Random()
        self.clock = clock
        self.started = False
        self.won = False
        self.lost = False

    @property
    def finished(self) -> bool:
        return self.won or self.lost

    def start(self) -> str:
        """Begins a fresh attempt and returns the opening message."""
        self.started = True
        self.lost = False
        self._setup()
        logger.debug(f"{self.title} started")
        return self.intro()

    def handle(self, entry: str) -> str:
        """Feeds one player entry to the game and returns its feedback."""
        if not self.started:
            return "The game has not started yet."
        if self.finished:
            return "The game is over."
        return self._handle(entry.strip())

    def restart(self) -> str:
        """Discards the attempt in progress and starts over."""
        if self.won:
            return "Already won, nothing to restart."
        logger.debug(f"{self.title} restarted")
        self.on_restart()
        return self.start()

    def _declare_win(self) -> None:
        # on_win must fire once, however often the win condition is re-checked
        if self.won:
            return
        self.won = True
        logger.info(f"{self.title} won")
        self.on_win()

    def _declare_loss(self) -> None:
        self.lost = True
        logger.info(f"{self.title} lost")

    @property
    @abstractmethod
    def prompt(self) -> str:
        """What the player is being asked for right now."""
        pass

    @abstractmethod
    def intro(self) -> str:
        pass

    @abstractmethod
    def _setup(self) -> None:
        pass

    @abstractmethod
    def _handle(self, entry: str) -> str:
        pass


class TimedMiniGame(MiniGame):
    """A mini-game played against a countdown."""

    time_limit: float = 60.0

    def _setup(self) -> None:
        self.deadline = self.clock() + self.time_limit

    @property
    def time_left(self) -> float:
        if not self.started:
            return self.time_limit
        return max(self.deadline - self.clock(), 0.0)

    def _out_of_time(self) -> bool:
        if self.time_left <= 0:
            self._declare_loss()
            return True
        return False
