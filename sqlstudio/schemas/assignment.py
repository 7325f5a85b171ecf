from typing import Any

from pydantic import BaseModel, Field


class ColumnDef(BaseModel):
    name: str
    type: str


class TableSchema(BaseModel):
    table_name: str = Field(..., alias="tableName")
    columns: list[ColumnDef] = []
    sample_data: list[dict[str, Any]] = Field(default_factory=list, alias="sampleData")

    class Config:
        populate_by_name = True


class AssignmentResponse(BaseModel):
    id: str
    title: str
    difficulty: str
    difficulty_level: int
    description: str
    requirements: list[str]
    initial_query: str | None = None
    schemas: list[TableSchema]

    class Config:
        from_attributes = True
