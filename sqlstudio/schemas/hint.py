from pydantic import BaseModel, Field

from sqlstudio.schemas.assignment import TableSchema


class AssignmentContext(BaseModel):
    title: str
    description: str = ""
    requirements: list[str] = []
    schemas: list[TableSchema] = []


class HintRequest(BaseModel):
    assignment_context: AssignmentContext = Field(..., alias="assignmentContext")
    current_query: str = Field("", alias="currentQuery", max_length=20000)

    class Config:
        populate_by_name = True


class HintResponse(BaseModel):
    hint: str
