from typing import List, Optional

from pydantic import BaseModel, computed_field

from .enums import HuntStage


class ProgressSummary(BaseModel):
    """Aggregate progress for the code display and the victory screen."""

    stage: HuntStage
    team_name: Optional[str] = None
    collected_digits: List[Optional[str]]
    completed_count: int
    total_games: int

    @computed_field  # type: ignore[misc]
    @property
    def remaining_games(self) -> int:
        return max(self.total_games - self.completed_count, 0)

    @computed_field  # type: ignore[misc]
    @property
    def percent_complete(self) -> float:
        if not self.total_games:
            return 0.0
        return round(self.completed_count / self.total_games * 100, 1)

    @computed_field  # type: ignore[misc]
    @property
    def won(self) -> bool:
        return self.stage == HuntStage.WON

    @property
    def masked_code(self) -> str:
        """Collected digits with '_' in place of the ones still hidden."""
        return "".join(d if d is not None else "_" for d in self.collected_digits)
