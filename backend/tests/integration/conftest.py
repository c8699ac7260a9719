# backend/tests/integration/conftest.py
"""
HTTP-level fixtures.

The application is exercised through FastAPI's TestClient without entering
its lifespan, so no database or migration runs. Services are wired to the
in-memory operations through dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from travelmap.config import settings
from travelmap.dependencies import (
    get_admin_service,
    get_couple_image_service,
    get_image_pipeline,
    get_location_service,
    get_session_store,
)
from travelmap.main import app
from travelmap.services.admin_service import AdminService
from travelmap.services.couple_image_service import CoupleImageService
from travelmap.services.location_service import LocationService
from travelmap.services.session_store import InMemorySessionStore

ACCESS_CODE = "paris-2019"


@pytest.fixture
def access_code():
    return ACCESS_CODE


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def client(
    monkeypatch,
    session_store,
    counting_pipeline,
    fake_location_ops,
    fake_couple_image_ops,
):
    monkeypatch.setattr(settings, "access_code", ACCESS_CODE)

    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_image_pipeline] = lambda: counting_pipeline
    app.dependency_overrides[get_location_service] = lambda: LocationService(
        None, counting_pipeline, location_ops=fake_location_ops
    )
    app.dependency_overrides[get_admin_service] = lambda: AdminService(
        None,
        counting_pipeline,
        location_ops=fake_location_ops,
        couple_image_ops=fake_couple_image_ops,
    )
    app.dependency_overrides[get_couple_image_service] = lambda: CoupleImageService(
        None,
        counting_pipeline,
        couple_image_ops=fake_couple_image_ops,
        location_ops=fake_location_ops,
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def authed_client(client):
    response = client.post("/api/auth/login", json={"access_code": ACCESS_CODE})
    assert response.status_code == 200
    return client


@pytest.fixture
def location_form():
    return {
        "title": "Paris",
        "description": "Eiffel Tower at night",
        "date": "2019-05",
        "latitude": "48.8584",
        "longitude": "2.2945",
    }
