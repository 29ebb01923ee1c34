# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import RecordStore
from product_api.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    s = RecordStore(db_path)
    s.load()
    return s


@pytest.fixture
def test_settings(tmp_path):
    return Settings(db_path=str(tmp_path / "db.json"), static_dir=str(tmp_path / "no-build"))


@pytest.fixture
def app(store, test_settings):
    return create_app(store=store, settings=test_settings)


@pytest.fixture
def client(app):
    return TestClient(app)
