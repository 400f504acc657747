import pytest
from fastapi.testclient import TestClient

from backend_fastapi.api.deps import tarea_repository
from backend_fastapi.main import create_app
from fakes import InMemoryTareaRepository
from infrastructure.config import Settings


@pytest.fixture
def repository():
    return InMemoryTareaRepository()


@pytest.fixture
def app(repository):
    app = create_app(Settings())
    app.dependency_overrides[tarea_repository] = lambda: repository
    return app


@pytest.fixture
def client(app):
    # httpx envía "Accept: */*" por defecto, que no es válido para esta API.
    return TestClient(app, headers={"Accept": "application/json"})
