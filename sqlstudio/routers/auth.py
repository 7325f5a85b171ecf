from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlstudio.auth import (
    INVALID_CREDENTIALS_MESSAGE,
    MIN_PASSWORD_LENGTH,
    DuplicateEmail,
    authenticate_user,
    register_user,
)
from sqlstudio.database import get_db
from sqlstudio.schemas.user import LoginRequest, RegisterRequest, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. Email is unique (case-insensitive)."""
    if "@" not in body.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address")
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    try:
        user = register_user(db, body.name, body.email, body.password)
    except DuplicateEmail:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    return user


@router.post("/login", response_model=UserResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Login with email and password. Same 401 for unknown email and wrong password."""
    user = authenticate_user(db, body.email, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS_MESSAGE)
    return user
