from typing import List

from codehunt.minigames.base import MiniGame

COLORS = ["red", "blue", "green", "yellow"]


class PatternMemory(MiniGame):
    """Repeat a sequence of colors that grows by one each round."""

    game_id = 4
    title = "Pattern Memory"
    rounds_to_win = 5

    def _setup(self) -> None:
        self.round = 0
        self.sequence: List[int] = []
        self.next_round()

    def next_round(self) -> None:
        self.round += 1
        self.sequence.append(self.rng.randrange(len(COLORS)))

    def pattern(self) -> str:
        return " ".join(COLORS[i] for i in self.sequence)

    @property
    def prompt(self) -> str:
        return f"Round {self.round}: repeat the pattern (first letters work, e.g. 'r b g')"

    def intro(self) -> str:
        return f"Survive {self.rounds_to_win} rounds.\nPattern: {self.pattern()}"

    @staticmethod
    def parse(entry: str) -> List[int]:
        picks = []
        for token in entry.lower().replace(",", " ").split():
            matches = [i for i, c in enumerate(COLORS) if c.startswith(token)]
            if len(matches) != 1:
                raise ValueError(token)
            picks.append(matches[0])
        return picks

    def _handle(self, entry: str) -> str:
        try:
            picks = self.parse(entry)
        except ValueError as e:
            return f"Unknown color '{e}'. Use {', '.join(COLORS)}."
        if not picks:
            return "Enter the pattern, one color per word."

        if picks != self.sequence:
            self._declare_loss()
            return f"Wrong pattern! It was: {self.pattern()}"

        if self.round >= self.rounds_to_win:
            self._declare_win()
            return "Perfect memory! All rounds cleared."
        self.next_round()
        return f"Correct! Next pattern: {self.pattern()}"
