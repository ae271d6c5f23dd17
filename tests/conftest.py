import os
import tempfile

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="fintrack-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["SECRET_KEY"] = "test-secret-key"

from fintrack.data.base import Base, SessionLocal, engine  # noqa: E402
from fintrack.data.repositories.transaction_repository import (  # noqa: E402
    create_transaction_tables,
)


@pytest.fixture
def db():
    create_transaction_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient

    from fintrack.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    from fintrack.domain.services.auth_service import create_access_token

    def make(owner_id: str = "alice"):
        return {"Authorization": f"Bearer {create_access_token({'sub': owner_id})}"}

    return make
