from typing import List, Set

from codehunt.minigames.base import MiniGame

SYMBOLS = ["A", "B", "C", "D", "E", "F", "G", "H"]


class MemoryMatch(MiniGame):
    """Turn over two cards per move and match every pair."""

    game_id = 1
    title = "Memory Match"

    def _setup(self) -> None:
        self.cards: List[str] = SYMBOLS * 2
        self.rng.shuffle(self.cards)
        self.matched: Set[int] = set()
        self.moves = 0

    @property
    def total_pairs(self) -> int:
        return len(SYMBOLS)

    @property
    def matched_pairs(self) -> int:
        return len(self.matched) // 2

    def board(self) -> str:
        cells = [
            self.cards[i] if i in self.matched else str(i + 1)
            for i in range(len(self.cards))
        ]
        rows = [" ".join(f"{c:>2}" for c in cells[r : r + 4]) for r in range(0, len(cells), 4)]
        return "\n".join(rows)

    @property
    def prompt(self) -> str:
        return "Pick two cards (e.g. '3 11')"

    def intro(self) -> str:
        return f"Find all {self.total_pairs} pairs.\n{self.board()}"

    def _handle(self, entry: str) -> str:
        try:
            first, second = (int(p) - 1 for p in entry.replace(",", " ").split())
        except ValueError:
            return "Enter two card numbers separated by a space."

        size = len(self.cards)
        if not (0 <= first < size and 0 <= second < size) or first == second:
            return f"Pick two different cards between 1 and {size}."
        if first in self.matched or second in self.matched:
            return "One of those cards is already matched."

        self.moves += 1
        a, b = self.cards[first], self.cards[second]
        if a != b:
            return f"{first + 1}={a}, {second + 1}={b}. No match."

        self.matched.update((first, second))
        if self.matched_pairs == self.total_pairs:
            self._declare_win()
            return f"All pairs matched in {self.moves} moves!"
        return f"Match! {self.matched_pairs}/{self.total_pairs} pairs.\n{self.board()}"
