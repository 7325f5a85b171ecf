"""
Attempt log persistence. Append-only: rows are inserted once and never updated.
Recording runs after the user's query already succeeded, so failures here are
logged and swallowed rather than surfaced.
"""
import logging

from sqlalchemy import desc
from sqlalchemy.orm import Session

from sqlstudio.database import Database
from sqlstudio.models.attempt import Attempt

logger = logging.getLogger(__name__)


def record_attempt(db: Session, user_email: str, assignment_id: str, query: str) -> Attempt:
    """Insert one successful attempt and commit."""
    attempt = Attempt(
        user_email=user_email,
        assignment_id=assignment_id,
        query=query,
        is_success=True,
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    return attempt


def record_attempt_safely(database: Database, user_email: str, assignment_id: str, query: str) -> bool:
    """Best-effort record in a fresh session. Returns False (and logs) on any failure."""
    db = database.session()
    try:
        record_attempt(db, user_email, assignment_id, query)
        return True
    except Exception:
        db.rollback()
        logger.exception("Failed to record attempt for %s on assignment %s", user_email, assignment_id)
        return False
    finally:
        db.close()


def list_attempts(db: Session, user_email: str) -> list[Attempt]:
    """All attempts for the email, newest first."""
    return (
        db.query(Attempt)
        .filter(Attempt.user_email == user_email)
        .order_by(desc(Attempt.executed_at), desc(Attempt.id))
        .all()
    )


def solved_assignment_ids(db: Session, user_email: str) -> set[str]:
    rows = (
        db.query(Attempt.assignment_id)
        .filter(Attempt.user_email == user_email, Attempt.is_success.is_(True))
        .distinct()
        .all()
    )
    return {assignment_id for (assignment_id,) in rows}


def attempt_timestamps(db: Session, user_email: str) -> list:
    rows = db.query(Attempt.executed_at).filter(Attempt.user_email == user_email).all()
    return [executed_at for (executed_at,) in rows]
