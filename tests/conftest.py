import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "polyglot-test-secret-key-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "local")

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from polyglot.core.db import create_db_engine, get_db, init_db  # noqa: E402
from polyglot.core.security import create_access_token  # noqa: E402
from polyglot.main import app  # noqa: E402


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test; StaticPool keeps one connection."""
    db_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(db_engine)
    yield db_engine
    SQLModel.metadata.drop_all(db_engine)
    db_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def client(session: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests run on the test's own session."""
    app.dependency_overrides[get_db] = lambda: session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = create_access_token("translator@example.com")
    return {"Authorization": f"Bearer {token}"}
