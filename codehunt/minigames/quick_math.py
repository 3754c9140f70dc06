from typing import Tuple

from codehunt.minigames.base import TimedMiniGame


class QuickMath(TimedMiniGame):
    """Answer enough arithmetic problems before the clock runs out."""

    game_id = 2
    title = "Quick Math"
    required_score = 10

    def _setup(self) -> None:
        super()._setup()
        self.score = 0
        self.question, self.answer = self.new_problem()

    def new_problem(self) -> Tuple[str, int]:
        operation = self.rng.choice(["+", "-", "*"])
        if operation == "+":
            a, b = self.rng.randint(1, 50), self.rng.randint(1, 50)
            answer = a + b
        elif operation == "-":
            a = self.rng.randint(10, 59)
            b = self.rng.randint(1, a)
            answer = a - b
        else:
            a, b = self.rng.randint(1, 12), self.rng.randint(1, 12)
            answer = a * b
        return f"{a} {operation} {b}", answer

    @property
    def prompt(self) -> str:
        return f"{self.question} = ?"

    def intro(self) -> str:
        return (
            f"Solve {self.required_score} problems in {int(self.time_limit)} seconds."
        )

    def _handle(self, entry: str) -> str:
        if self._out_of_time():
            return f"Time's up! You scored {self.score}/{self.required_score}."
        try:
            guess = int(entry)
        except ValueError:
            return "Please enter a whole number."

        if guess != self.answer:
            return f"Wrong. Still {self.score}/{self.required_score}."

        self.score += 1
        if self.score >= self.required_score:
            self._declare_win()
            return "Correct! You've solved them all."
        self.question, self.answer = self.new_problem()
        return f"Correct! {self.score}/{self.required_score}."
