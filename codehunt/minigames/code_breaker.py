from typing import List, Tuple

from codehunt.minigames.base import MiniGame

COLORS = ["red", "blue", "green", "yellow", "purple", "pink"]
CODE_LENGTH = 4


def score_guess(secret: List[str], guess: List[str]) -> Tuple[int, int]:
    """Returns (right color right place, right color wrong place)."""
    exact = sum(1 for s, g in zip(secret, guess) if s == g)
    remaining_secret = [s for s, g in zip(secret, guess) if s != g]
    partial = 0
    for s, g in zip(secret, guess):
        if s != g and g in remaining_secret:
            remaining_secret.remove(g)
            partial += 1
    return exact, partial


class CodeBreaker(MiniGame):
    """Deduce a hidden sequence of colors from exact/partial feedback."""

    game_id = 6
    title = "Code Breaker"
    max_attempts = 10

    def _setup(self) -> None:
        self.secret = [self.rng.choice(COLORS) for _ in range(CODE_LENGTH)]
        self.history: List[Tuple[List[str], int, int]] = []

    @property
    def attempts(self) -> int:
        return len(self.history)

    @property
    def prompt(self) -> str:
        return (
            f"Guess {CODE_LENGTH} colors ({self.attempts + 1}/{self.max_attempts}), "
            "e.g. 'red blue pink green'"
        )

    def intro(self) -> str:
        return (
            f"Crack the {CODE_LENGTH}-color code in {self.max_attempts} attempts. "
            f"Colors: {', '.join(COLORS)}. Repeats allowed."
        )

    def _parse(self, entry: str) -> List[str]:
        guess = []
        for token in entry.lower().replace(",", " ").split():
            matches = [c for c in COLORS if c.startswith(token)]
            if len(matches) != 1:
                raise ValueError(token)
            guess.append(matches[0])
        return guess

    def _handle(self, entry: str) -> str:
        try:
            guess = self._parse(entry)
        except ValueError as e:
            return f"Unknown or ambiguous color '{e}'."
        if len(guess) != CODE_LENGTH:
            return f"Enter exactly {CODE_LENGTH} colors."

        exact, partial = score_guess(self.secret, guess)
        self.history.append((guess, exact, partial))

        if exact == CODE_LENGTH:
            self._declare_win()
            return f"Code cracked in {self.attempts} attempts!"
        if self.attempts >= self.max_attempts:
            self._declare_loss()
            return f"Out of attempts. The code was {' '.join(self.secret)}."
        return f"{exact} exact, {partial} misplaced."
