import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.database import create_schema
from app.main import create_app
from app.services import TaskService


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = make_engine()
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def service(engine):
    return TaskService(engine)


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as c:
        yield c


@pytest.fixture
def bare_engine():
    # no schema: every statement fails
    engine = make_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def broken_client(bare_engine):
    with TestClient(create_app(TaskService(bare_engine))) as c:
        yield c
