# codehunt/models/team.py
from pydantic import BaseModel, ConfigDict


class Team(BaseModel):
    """A hunt team and the secret code its games reveal, one digit at a time."""

    model_config = ConfigDict(frozen=True)  # Edits produce a new record

    id: str
    name: str
    code: str
