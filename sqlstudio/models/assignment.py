import enum
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, JSON, case
from sqlstudio.database import Base


class Difficulty(str, enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


DIFFICULTY_RANKS = {
    Difficulty.BEGINNER.value: 1,
    Difficulty.INTERMEDIATE.value: 2,
    Difficulty.ADVANCED.value: 3,
}
UNRANKED_DIFFICULTY = 4


def difficulty_rank(difficulty: str | None) -> int:
    return DIFFICULTY_RANKS.get(difficulty or "", UNRANKED_DIFFICULTY)


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    difficulty = Column(String(32), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)  # list[str]
    initial_query = Column(Text, nullable=True)
    schemas = Column(JSON, nullable=False, default=list)  # list of {tableName, columns, sampleData}
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def difficulty_level(self) -> int:
        return difficulty_rank(self.difficulty)


# ORDER BY expression matching difficulty_rank()
difficulty_order = case(DIFFICULTY_RANKS, value=Assignment.difficulty, else_=UNRANKED_DIFFICULTY)
