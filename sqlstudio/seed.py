"""
Seed the assignment catalog and build the sandbox tables users query against.

    python -m sqlstudio.seed

Sandbox tables are dropped and recreated from each assignment's schema. When two
assignments declare the same table name, the later definition wins.
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sqlstudio.config import get_settings
import sqlstudio.models  # noqa: F401 - application tables on Base.metadata
from sqlstudio.database import Base, Database
from sqlstudio.models.assignment import Assignment

logger = logging.getLogger(__name__)

SEED_ASSIGNMENTS = [
    {
        "id": "1",
        "title": "Customer Directory Cleanup",
        "difficulty": "Beginner",
        "description": "Help the marketing team get a list of all active users from specific regions.",
        "requirements": [
            "Select the first name, last name, and email of all users.",
            'Only include users from the city "London".',
            "Order the results by last name alphabetically.",
        ],
        "initialQuery": "SELECT * FROM users;",
        "schemas": [
            {
                "tableName": "users",
                "columns": [
                    {"name": "id", "type": "INTEGER"},
                    {"name": "first_name", "type": "VARCHAR"},
                    {"name": "last_name", "type": "VARCHAR"},
                    {"name": "email", "type": "VARCHAR"},
                    {"name": "city", "type": "VARCHAR"},
                    {"name": "status", "type": "VARCHAR"},
                ],
                "sampleData": [
                    {"id": 1, "first_name": "John", "last_name": "Doe", "email": "john@example.com", "city": "London", "status": "active"},
                    {"id": 2, "first_name": "Jane", "last_name": "Smith", "email": "jane@test.org", "city": "New York", "status": "active"},
                    {"id": 3, "first_name": "Alice", "last_name": "Brown", "email": "alice@london.uk", "city": "London", "status": "inactive"},
                    {"id": 4, "first_name": "Bob", "last_name": "Wilson", "email": "bob@corp.com", "city": "London", "status": "active"},
                ],
            }
        ],
    },
    {
        "id": "1-2",
        "title": "Inventory Low-Stock Alert",
        "difficulty": "Beginner",
        "description": "The warehouse manager needs to know which electronics are running low on stock.",
        "requirements": [
            "Select the product name and current stock quantity.",
            "Filter for products where the stock is less than 20.",
            'Include only products in the "Electronics" category.',
        ],
        "initialQuery": "SELECT * FROM products;",
        "schemas": [
            {
                "tableName": "products",
                "columns": [
                    {"name": "id", "type": "INTEGER"},
                    {"name": "product_name", "type": "VARCHAR"},
                    {"name": "category", "type": "VARCHAR"},
                    {"name": "stock", "type": "INTEGER"},
                ],
                "sampleData": [
                    {"id": 1, "product_name": "MacBook Pro", "category": "Electronics", "stock": 15},
                    {"id": 2, "product_name": "Office Chair", "category": "Furniture", "stock": 5},
                    {"id": 3, "product_name": "iPhone 15", "category": "Electronics", "stock": 45},
                    {"id": 4, "product_name": "USB-C Cable", "category": "Electronics", "stock": 12},
                ],
            }
        ],
    },
    {
        "id": "2",
        "title": "High Value Orders Analysis",
        "difficulty": "Intermediate",
        "description": "Find orders that exceed a certain amount to identify top-tier customers.",
        "requirements": [
            "Join the users and orders tables.",
            "Show the user name and total order amount.",
            "Only show orders where the total is greater than 500.",
            "Order by amount descending.",
        ],
        "initialQuery": "-- Start your JOIN query here\nSELECT ",
        "schemas": [
            {
                "tableName": "users",
                "columns": [
                    {"name": "id", "type": "INTEGER"},
                    {"name": "name", "type": "VARCHAR"},
                ],
                "sampleData": [
                    {"id": 1, "name": "Alice"},
                    {"id": 2, "name": "Bob"},
                    {"id": 3, "name": "Charlie"},
                ],
            },
            {
                "tableName": "orders",
                "columns": [
                    {"name": "order_id", "type": "INTEGER"},
                    {"name": "user_id", "type": "INTEGER"},
                    {"name": "amount", "type": "DECIMAL"},
                    {"name": "order_date", "type": "DATE"},
                ],
                "sampleData": [
                    {"order_id": 101, "user_id": 1, "amount": 250.00, "order_date": "2023-01-01"},
                    {"order_id": 102, "user_id": 1, "amount": 600.00, "order_date": "2023-01-05"},
                    {"order_id": 103, "user_id": 2, "amount": 150.00, "order_date": "2023-02-10"},
                    {"order_id": 104, "user_id": 3, "amount": 800.00, "order_date": "2023-02-15"},
                ],
            },
        ],
    },
    {
        "id": "2-2",
        "title": "Employee Performance Review",
        "difficulty": "Intermediate",
        "description": "HR wants to see which departments have employees with top performance scores.",
        "requirements": [
            "Join the employees and departments tables.",
            "Select employee name, department name, and score.",
            "Filter for employees with a score of 9 or higher.",
            'Exclude the "Internship" department.',
        ],
        "initialQuery": "SELECT ",
        "schemas": [
            {
                "tableName": "employees",
                "columns": [
                    {"name": "id", "type": "INTEGER"},
                    {"name": "name", "type": "VARCHAR"},
                    {"name": "dept_id", "type": "INTEGER"},
                    {"name": "score", "type": "INTEGER"},
                ],
                "sampleData": [
                    {"id": 1, "name": "Sarah Connor", "dept_id": 1, "score": 10},
                    {"id": 2, "name": "Kyle Reese", "dept_id": 1, "score": 8},
                    {"id": 3, "name": "John Doe", "dept_id": 2, "score": 9},
                    {"id": 4, "name": "Agent Smith", "dept_id": 3, "score": 10},
                ],
            },
            {
                "tableName": "departments",
                "columns": [
                    {"name": "id", "type": "INTEGER"},
                    {"name": "dept_name", "type": "VARCHAR"},
                ],
                "sampleData": [
                    {"id": 1, "dept_name": "Engineering"},
                    {"id": 2, "dept_name": "Marketing"},
                    {"id": 3, "dept_name": "Internship"},
                ],
            },
        ],
    },
]

# Declared column type -> SQLAlchemy type (unknown types fall back to TEXT)
COLUMN_TYPES = {
    "INTEGER": Integer,
    "INT": Integer,
    "BIGINT": Integer,
    "VARCHAR": lambda: String(255),
    "TEXT": Text,
    "DECIMAL": lambda: Numeric(12, 2),
    "NUMERIC": lambda: Numeric(12, 2),
    "FLOAT": Float,
    "REAL": Float,
    "DATE": Date,
    "TIMESTAMP": DateTime,
    "BOOLEAN": Boolean,
}


def column_type(declared: str):
    factory = COLUMN_TYPES.get((declared or "").strip().upper(), Text)
    return factory()


def _coerce(value, declared: str):
    """Sample data comes from JSON; turn strings into the Python types the column expects."""
    if value is None:
        return None
    kind = (declared or "").strip().upper()
    if kind == "DATE" and isinstance(value, str):
        return date.fromisoformat(value)
    if kind == "TIMESTAMP" and isinstance(value, str):
        return datetime.fromisoformat(value)
    if kind in ("DECIMAL", "NUMERIC") and not isinstance(value, Decimal):
        return Decimal(str(value))
    return value


def build_sandbox_table(schema: dict, metadata: MetaData) -> Table:
    columns = [Column(c["name"], column_type(c["type"])) for c in schema.get("columns", [])]
    return Table(schema["tableName"], metadata, *columns)


def check_sandbox_table_names(assignments: list[dict]) -> None:
    """Sandbox tables may not reuse application table names (app_users, assignments, attempts)."""
    reserved = sorted(
        {s["tableName"] for a in assignments for s in a.get("schemas", [])}
        & set(Base.metadata.tables)
    )
    if reserved:
        raise ValueError(f"Sandbox table names clash with application tables: {', '.join(reserved)}")


def create_sandbox_tables(engine: Engine, assignments: list[dict]) -> int:
    """Drop, recreate and fill every sandbox table. Returns number of tables built."""
    # Checked up front: nothing is dropped when any name collides
    check_sandbox_table_names(assignments)
    built = 0
    for assignment in assignments:
        for schema in assignment.get("schemas", []):
            table = build_sandbox_table(schema, MetaData())
            types = {c["name"]: c["type"] for c in schema.get("columns", [])}
            rows = [
                {key: _coerce(value, types.get(key, "")) for key, value in row.items()}
                for row in schema.get("sampleData", [])
            ]
            with engine.begin() as conn:
                table.drop(conn, checkfirst=True)
                table.create(conn)
                if rows:
                    conn.execute(table.insert(), rows)
            built += 1
            logger.info("Sandbox table %s ready (%d rows)", table.name, len(rows))
    return built


def seed_assignments(db: Session, assignments: list[dict]) -> int:
    """Replace the catalog with the given assignments."""
    db.query(Assignment).delete()
    for a in assignments:
        db.add(Assignment(
            id=a["id"],
            title=a["title"],
            difficulty=a["difficulty"],
            description=a["description"],
            requirements=list(a.get("requirements", [])),
            initial_query=a.get("initialQuery"),
            schemas=list(a.get("schemas", [])),
        ))
    db.commit()
    logger.info("Inserted %d assignments", len(assignments))
    return len(assignments)


def seed(database: Database, assignments: list[dict] | None = None) -> None:
    assignments = assignments if assignments is not None else SEED_ASSIGNMENTS
    check_sandbox_table_names(assignments)
    db = database.session()
    try:
        seed_assignments(db, assignments)
    finally:
        db.close()
    create_sandbox_tables(database.sandbox_engine, assignments)


def main() -> None:
    from sqlstudio.logging_config import init_logging

    settings = get_settings()
    init_logging(settings)
    database = Database(settings.database_url, settings.sandbox_database_url or None)
    try:
        seed(database)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
