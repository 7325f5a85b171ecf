from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlstudio.database import get_db
from sqlstudio.repositories.attempt_repository import list_attempts
from sqlstudio.schemas.query import AttemptResponse
from sqlstudio.schemas.stats import UserStats
from sqlstudio.services.stats_service import compute_user_stats

router = APIRouter(prefix="/api", tags=["progress"])


@router.get("/attempts/{email}", response_model=list[AttemptResponse])
def get_attempts(email: str, db: Session = Depends(get_db)):
    """Attempt history for a user, newest first."""
    return list_attempts(db, email)


@router.get("/user/stats/{email}", response_model=UserStats)
def get_user_stats(email: str, db: Session = Depends(get_db)):
    """Solved count, xp, rank, active days ("streak"), per-day history and core progress."""
    return compute_user_stats(db, email)
