import pytest
from fastapi.testclient import TestClient

from survey_api.core.config import Settings
from survey_api.main import create_app
from survey_api.services.storage import ParticipantStore


@pytest.fixture()
def settings(tmp_path):
    client_dir = tmp_path / "client"
    client_dir.mkdir()
    (client_dir / "index.html").write_text("<html><body>survey</body></html>", encoding="utf-8")
    return Settings(
        _env_file=None,
        data_dir=str(tmp_path / "storage"),
        upload_dir=str(tmp_path / "storage" / "uploads"),
        client_dir=str(client_dir),
        base_url="",
    )


@pytest.fixture()
def store(tmp_path):
    store = ParticipantStore(tmp_path / "data", tmp_path / "data" / "uploads")
    store.ensure_dirs()
    return store


@pytest.fixture()
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
