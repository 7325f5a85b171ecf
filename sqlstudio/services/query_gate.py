"""
Sandbox query gate: keyword blacklist, then the literal SQL goes to the sandbox store.

The blacklist is a plain substring match on the upper-cased statement, so
identifiers such as `update_count` are rejected too. It is not a security
boundary; run the sandbox against a read-only role (sandbox_database_url)
for real isolation.
"""
import logging
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

logger = logging.getLogger(__name__)

FORBIDDEN_KEYWORDS = ("DROP", "DELETE", "TRUNCATE", "ALTER", "UPDATE", "INSERT", "GRANT", "REVOKE")
FORBIDDEN_MESSAGE = "Only SELECT queries are allowed in this sandbox."


class QueryRejected(Exception):
    """Query refused by the blacklist or failed in the store. `message` is safe to show the user."""

    def __init__(self, message: str, keyword: str | None = None):
        super().__init__(message)
        self.message = message
        self.keyword = keyword


def find_forbidden_keyword(sql: str) -> str | None:
    upper_sql = sql.upper()
    for word in FORBIDDEN_KEYWORDS:
        if word in upper_sql:
            return word
    return None


def _error_message(exc: SQLAlchemyError) -> str:
    # Surface the driver's own message, not SQLAlchemy's wrapper text
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc).strip()


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


def execute_query(engine: Engine, sql: str) -> dict:
    """
    Run user SQL on the sandbox engine in its own transaction.
    Returns {"rows": [...], "rowCount": n}. Raises QueryRejected.
    """
    keyword = find_forbidden_keyword(sql)
    if keyword:
        logger.info("Rejected sandbox query containing %s", keyword)
        raise QueryRejected(FORBIDDEN_MESSAGE, keyword=keyword)

    try:
        with engine.begin() as conn:
            # no_parameters: pass the text to the driver untouched (no ":name" / "%" handling)
            result = conn.execution_options(no_parameters=True).exec_driver_sql(sql)
            if result.returns_rows:
                rows = [
                    {key: _jsonable(value) for key, value in row._mapping.items()}
                    for row in result
                ]
                row_count = len(rows)
            else:
                rows = []
                row_count = max(result.rowcount, 0)
    except SQLAlchemyError as e:
        message = _error_message(e)
        logger.info("Sandbox query failed: %s", message)
        raise QueryRejected(message) from e

    return {"rows": rows, "rowCount": row_count}
