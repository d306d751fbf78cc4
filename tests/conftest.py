import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# must be set before tasktracker.db.session is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_AUTO_CREATE"] = "false"
os.environ.pop("DB_SSLMODE", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from tasktracker.db.session import get_session  # noqa: E402
from tasktracker.main import app as fastapi_app  # noqa: E402
from tasktracker.models import task as _m_task  # noqa: F401,E402


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def _session_override(engine):
    def _get_session():
        with Session(engine) as s:
            yield s

    return _get_session


@pytest.fixture
def engine():
    eng = _memory_engine()
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def app(engine):
    fastapi_app.dependency_overrides[get_session] = _session_override(engine)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def broken_client():
    """Client whose store has no ``tasks`` table, so every query fails."""
    eng = _memory_engine()
    fastapi_app.dependency_overrides[get_session] = _session_override(eng)
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()
    eng.dispose()
