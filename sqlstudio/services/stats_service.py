"""
User progress stats derived from the attempt log (nothing persisted).
- solvedCount: distinct assignments with a successful attempt
- xp: 500 per solved assignment; rank: step function over xp (strict >)
- streak: distinct active UTC days over the user's lifetime (not a consecutive run)
- progress: percent of the 4 core assignments, capped at 100
"""
import math
from collections import Counter
from datetime import date, datetime
from typing import Iterable

from sqlalchemy.orm import Session

from sqlstudio.repositories.attempt_repository import attempt_timestamps, solved_assignment_ids

XP_PER_SOLVED = 500
CORE_ASSIGNMENT_COUNT = 4

# Checked top-down; first threshold strictly exceeded wins
RANK_TIERS = (
    (5000, "SQL Master"),
    (2500, "Advanced"),
    (1000, "Intermediate"),
    (0, "Beginner"),
)
DEFAULT_RANK = "Novice I"


def rank_for_xp(xp: int) -> str:
    for threshold, label in RANK_TIERS:
        if xp > threshold:
            return label
    return DEFAULT_RANK


def progress_for(solved_count: int) -> int:
    # Half-up rounding, not Python's banker's rounding
    return min(100, math.floor(solved_count / CORE_ASSIGNMENT_COUNT * 100 + 0.5))


def build_history(timestamps: Iterable[datetime]) -> list[tuple[date, int]]:
    """(day, attempt count) per distinct day, ascending."""
    counts = Counter(ts.date() for ts in timestamps if ts is not None)
    return sorted(counts.items())


def compute_user_stats(db: Session, user_email: str) -> dict:
    solved_count = len(solved_assignment_ids(db, user_email))
    xp = solved_count * XP_PER_SOLVED
    history = build_history(attempt_timestamps(db, user_email))
    return {
        "solvedCount": solved_count,
        "xp": xp,
        "rank": rank_for_xp(xp),
        "streak": len(history),
        "history": [{"date": day.isoformat(), "count": count} for day, count in history],
        "progress": progress_for(solved_count),
    }
