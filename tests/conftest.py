import sys
from pathlib import Path

# Ensure project root is on sys.path so `recipe_server` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest
from fastapi.testclient import TestClient

from recipe_server import schemas
from recipe_server.app import create_app
from recipe_server.config import Settings
from recipe_server.db import init_db, make_engine, make_sessionmaker


def make_recipe(id="r1", **kwargs):
    fields = {
        "name": "Toast",
        "ingredients": ["Bread"],
        "instructions": "Toast it.",
        "tags": ["quick"],
        "source": None,
    }
    fields.update(kwargs)
    return schemas.Recipe(id=id, **fields)


@pytest.fixture
def db():
    # in-memory SQLite, shared across connections through StaticPool
    engine = make_engine("sqlite://")
    init_db(engine)
    session = make_sessionmaker(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", _env_file=None)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client_db(client):
    session = client.app.state.SessionLocal()
    try:
        yield session
    finally:
        session.close()
