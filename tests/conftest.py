import os

# Must be set before anything imports shortener.config
os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import delete  # noqa: E402

from shortener.database import Base, SessionLocal, engine, get_db  # noqa: E402
from shortener.main import app  # noqa: E402
from shortener.models.url_mapping import UrlMapping  # noqa: E402

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.dirname(__file__)), "alembic.ini")


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Run Alembic migrations at the start of the test session."""
    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config(ALEMBIC_INI)
    alembic_cfg.attributes["configure_logger"] = False

    # Run all migrations to head
    # This ensures migrations are tested and matches production environment
    command.upgrade(alembic_cfg, "head")

    yield

    try:
        command.downgrade(alembic_cfg, "base")
    except Exception:
        # If downgrade fails, fall back to drop_all
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Each test gets its own session; every mapping it wrote is deleted afterwards."""
    session = SessionLocal()

    yield session

    session.rollback()
    session.execute(delete(UrlMapping))
    session.commit()
    session.close()


@pytest.fixture
def client(db):
    """Test client with the database dependency overridden."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
