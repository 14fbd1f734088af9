import pytest
from fastapi.testclient import TestClient

from content_admin.app import app
from content_admin.services.supabase_service import get_client

from .fakes import FakeSupabaseClient


@pytest.fixture
def fake_db():
    return FakeSupabaseClient()


@pytest.fixture
def api(fake_db):
    app.dependency_overrides[get_client] = lambda: fake_db
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()
