import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sqlstudio.models.user import User

logger = logging.getLogger(__name__)

# Use Argon2 for password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class DuplicateEmail(Exception):
    """Raised when registering an email that already has an account."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_user(db: Session, name: str, email: str, password: str) -> User:
    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise DuplicateEmail(email)
    user = User(name=name.strip(), email=email, password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmail(email) from e
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Returns the user when the credential matches; None for unknown email or wrong password alike."""
    user = get_user_by_email(db, email)
    if not user:
        # Hash anyway so unknown emails cost the same as wrong passwords
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password):
        return None
    return user
