from enum import Enum


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class HuntStage(str, Enum):
    NO_TEAM_SELECTED = "no_team_selected"
    TEAM_SELECTED = "team_selected"
    WON = "won"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    SUPABASE = "supabase"
