"""Shared test fixtures."""
import pytest
from fastapi.testclient import TestClient

from ayursutra.db import reset_db
from ayursutra.seed import seed_base


@pytest.fixture(autouse=True)
def seeded_db():
    """Fresh mock data for every test."""
    reset_db()
    seed_base()
    yield
    reset_db()


@pytest.fixture
def client():
    """FastAPI test client (startup hook not run; data comes from seeded_db)."""
    from ayursutra.api_main import app
    return TestClient(app)
