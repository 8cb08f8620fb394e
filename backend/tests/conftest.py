"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from siteadmin.config import AppConfig, StorageSettings, get_config, set_config
from siteadmin.main import app
from siteadmin.site_config.service import SiteConfigWriter
from siteadmin.uploads.storage import UploadStorage


@pytest.fixture
def storage_root(tmp_path):
    """Point the process-wide config at an isolated storage root."""
    original = get_config()
    set_config(AppConfig(storage=StorageSettings(root=str(tmp_path))))
    UploadStorage.reset_instance()
    SiteConfigWriter.reset_instance()

    yield tmp_path

    UploadStorage.reset_instance()
    SiteConfigWriter.reset_instance()
    set_config(original)


@pytest.fixture
def api_client(storage_root):
    """Provide a TestClient for the main FastAPI app writing into storage_root."""
    return TestClient(app)
