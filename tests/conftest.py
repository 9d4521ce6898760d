import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.stock import StockService
from db.store import JsonStore


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        data_dir=str(tmp_path / "data"),
        upload_dir=str(tmp_path / "uploads"),
        sections=("A", "B", "C"),
        log_level="WARNING",
    )


@pytest.fixture()
def store(settings):
    store = JsonStore(settings)
    store.init()
    return store


@pytest.fixture()
def service(store, settings):
    return StockService(store, settings.sections)


@pytest.fixture()
def client(settings):
    from main import create_app

    # Entering the client runs the lifespan, which creates the data files
    with TestClient(create_app(settings)) as client:
        yield client
