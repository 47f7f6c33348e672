import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def app():
    """Aplicação nova com um banco SQLite em memória isolado por teste."""
    return create_app("sqlite://")


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()
