from codehunt.minigames.base import TimedMiniGame

WORDS = [
    "PYTHON", "CODE", "PUZZLE", "DEVELOPER",
    "PROGRAMMING", "WEB", "CHALLENGE", "GAME",
    "INTERFACE", "COMPUTER", "SOFTWARE", "DIGITAL",
    "FUNCTION", "MODULE", "ALGORITHM", "ENCRYPTION",
]


class WordScramble(TimedMiniGame):
    """Unscramble enough words before the clock runs out."""

    game_id = 3
    title = "Word Scramble"
    required_score = 5

    def _setup(self) -> None:
        super()._setup()
        self.score = 0
        self.next_word()

    def scramble(self, word: str) -> str:
        letters = list(word)
        # Never hand out the answer itself
        while True:
            self.rng.shuffle(letters)
            scrambled = "".join(letters)
            if scrambled != word or len(set(word)) < 2:
                return scrambled

    def next_word(self) -> None:
        self.word = self.rng.choice(WORDS)
        self.scrambled = self.scramble(self.word)

    @property
    def prompt(self) -> str:
        return f"Unscramble: {self.scrambled}"

    def intro(self) -> str:
        return f"Unscramble {self.required_score} words in {int(self.time_limit)} seconds."

    def _handle(self, entry: str) -> str:
        if self._out_of_time():
            return f"Time's up! The word was {self.word}."
        if entry.upper() != self.word:
            return "Not quite, try again."

        self.score += 1
        if self.score >= self.required_score:
            self._declare_win()
            return "Correct! Every word unscrambled."
        self.next_word()
        return f"Correct! {self.score}/{self.required_score}."
