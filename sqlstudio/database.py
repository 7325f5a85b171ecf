import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def _create_engine(url: str, echo: bool = False) -> Engine:
    # SQLite needs check_same_thread=False for FastAPI
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(url, connect_args=connect_args, echo=echo, pool_pre_ping=True)


class Database:
    """
    Owns the application engine, its session factory and the sandbox engine.
    Built once per process (app lifespan) and disposed on shutdown.
    """

    def __init__(self, url: str, sandbox_url: str | None = None, echo: bool = False):
        self.url = url
        self.engine = _create_engine(url, echo)
        if sandbox_url and sandbox_url != url:
            self.sandbox_engine = _create_engine(sandbox_url, echo)
        else:
            self.sandbox_engine = self.engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self):
        return self.SessionLocal()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", e)
            return False

    def dispose(self) -> None:
        if self.sandbox_engine is not self.engine:
            self.sandbox_engine.dispose()
        self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request):
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()


def get_sandbox_engine(request: Request) -> Engine:
    return get_database(request).sandbox_engine
