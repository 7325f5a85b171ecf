from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ExecuteRequest(BaseModel):
    sql: str
    user_email: str | None = None
    assignment_id: str | None = None


class QueryResult(BaseModel):
    rows: list[dict[str, Any]]
    row_count: int = Field(..., alias="rowCount")

    class Config:
        populate_by_name = True


class AttemptResponse(BaseModel):
    id: int
    user_email: str
    assignment_id: str
    query: str
    is_success: bool
    executed_at: datetime

    class Config:
        from_attributes = True
