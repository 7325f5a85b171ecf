from pydantic import BaseModel, Field


class HistoryEntry(BaseModel):
    date: str  # YYYY-MM-DD (UTC)
    count: int


class UserStats(BaseModel):
    solved_count: int = Field(..., alias="solvedCount")
    xp: int
    rank: str
    # Distinct active days over the user's lifetime, not a consecutive run
    streak: int
    history: list[HistoryEntry]
    progress: int

    class Config:
        populate_by_name = True
