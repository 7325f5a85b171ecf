"""Query attempt log: one row per successful sandbox execution with a known user and assignment."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlstudio.database import Base


class Attempt(Base):
    __tablename__ = "attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Plain references: no FK so attempts survive catalog reseeding
    user_email = Column(String(255), nullable=False, index=True)
    assignment_id = Column(String(36), nullable=False, index=True)
    query = Column(Text, nullable=False)
    is_success = Column(Boolean, nullable=False, default=True)
    executed_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
