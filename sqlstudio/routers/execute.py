"""
Sandbox execution: POST /api/execute runs the user's SQL and logs an attempt.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine
from sqlstudio.database import Database, get_database, get_sandbox_engine
from sqlstudio.repositories.attempt_repository import record_attempt_safely
from sqlstudio.schemas.query import ExecuteRequest, QueryResult
from sqlstudio.services.query_gate import QueryRejected, execute_query

router = APIRouter(prefix="/api", tags=["sandbox"])


@router.post("/execute", response_model=QueryResult)
def execute(
    body: ExecuteRequest,
    engine: Engine = Depends(get_sandbox_engine),
    database: Database = Depends(get_database),
):
    """
    Run a query in the sandbox. 400 on forbidden keyword or store error (message verbatim).
    On success with both user_email and assignment_id, one attempt row is written (best-effort).
    """
    if not body.sql or not body.sql.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="sql is required")
    try:
        result = execute_query(engine, body.sql)
    except QueryRejected as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

    if body.user_email and body.assignment_id:
        record_attempt_safely(database, body.user_email, body.assignment_id, body.sql)

    return result
