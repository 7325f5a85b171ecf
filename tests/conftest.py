import pytest
from fastapi.testclient import TestClient

import sqlstudio.models  # noqa: F401 - register tables on Base.metadata
from sqlstudio.config import Settings
from sqlstudio.database import Base
from sqlstudio.main import create_app
from sqlstudio.seed import seed


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        sandbox_database_url="",
        redis_url="",
        gemini_api_key="",
        vertex_project_id="",
        seed_on_startup=False,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        Base.metadata.create_all(app.state.database.engine)
        yield c


@pytest.fixture
def database(client):
    return client.app.state.database


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(database):
    seed(database)
    return database
