"""
Field Operations API - test configuration and fixtures.

Every test gets its own SQLite file under ``tmp_path`` with all
migrations applied; the application module itself is imported once.
"""
import pytest
from fastapi.testclient import TestClient

from field_ops_api.app.core import db
from field_ops_api.app.core.config import settings
from field_ops_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the application at a fresh database file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    monkeypatch.setattr(settings, "seed_demo_data", False)
    db.init_db()
    yield tmp_path / "test.db"


@pytest.fixture
def client():
    """Test client without lifespan; ``database`` already migrated."""
    return TestClient(app)


@pytest.fixture
def pop_data():
    return {
        "name": "POP Central",
        "code": "POP-001",
        "address": "Rua Principal, 123, Centro, São Paulo, SP",
        "latitude": -23.5505,
        "longitude": -46.6333,
    }


@pytest.fixture
def create(client):
    """POST a payload to ``/api/<resource>`` and return the created record."""
    def _create(resource, payload):
        response = client.post(f"/api/{resource}", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def generator_data():
    return {
        "name": "Gerador Principal",
        "model": "C150 D6",
        "manufacturer": "Cummins",
        "pop_id": 1,
        "serial_number": "CUM-150-0001",
        "power_kva": 150,
    }


@pytest.fixture
def template_data():
    return {
        "name": "Preventiva de gerador",
        "category": "generator",
        "items": [
            {"id": "oil", "type": "yes_no", "title": "Oil level ok?", "required": True},
            {"id": "fuel", "type": "number", "title": "Fuel level (%)"},
        ],
    }
