from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlstudio.database import get_db
from sqlstudio.models.assignment import Assignment, difficulty_order
from sqlstudio.schemas.assignment import AssignmentResponse

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.get("", response_model=list[AssignmentResponse])
def list_assignments(db: Session = Depends(get_db)):
    """All assignments: Beginner, Intermediate, Advanced, then anything else; title A-Z within each."""
    return db.query(Assignment).order_by(difficulty_order, Assignment.title).all()


@router.get("/{assignment_id}", response_model=AssignmentResponse)
def get_assignment(assignment_id: str, db: Session = Depends(get_db)):
    item = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
    return item
