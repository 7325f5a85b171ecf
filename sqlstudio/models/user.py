import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlstudio.database import Base

DEFAULT_ROLE = "Free Member"


class User(Base):
    # Not "users": the sandbox seeds a table with that name.
    __tablename__ = "app_users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # argon2 hash
    role = Column(String(50), nullable=False, default=DEFAULT_ROLE)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
