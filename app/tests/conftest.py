import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.services.contact_service import get_contact_service
from app.tests.fixtures.contact import *


@pytest.fixture(scope="function")
def client():
    """Fixture providing a TestClient for the application."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def contact_client(build_contact_service):
    """Fixture returning a factory for TestClients whose contact pipeline uses test doubles."""
    clients = []

    def _contact_client(has_credentials: bool = False, is_production: bool = False) -> TestClient:
        service = build_contact_service(has_credentials=has_credentials, is_production=is_production)
        app.dependency_overrides[get_contact_service] = lambda: service
        c = TestClient(app)
        clients.append(c)
        return c

    yield _contact_client

    for c in clients:
        c.close()
    # Clean up overrides after the test finished
    app.dependency_overrides.clear()
