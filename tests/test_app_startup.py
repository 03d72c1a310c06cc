"""Test that the FastAPI application starts successfully."""

import sys
from pathlib import Path
from fastapi.testclient import TestClient

# Add the project root to the path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from hustle.app import app, get_saved_store
from hustle.saved_store import LocalStorage, SavedIdeaStore


def test_app_startup(tmp_path):
    """Ensure the main FastAPI app can start and serve the root page."""
    app.dependency_overrides[get_saved_store] = lambda: SavedIdeaStore(LocalStorage(tmp_path))
    try:
        client = TestClient(app)
        response = client.get("/")
        assert response.status_code == 200
        assert client.get("/static/js/hustle.js").status_code == 200
    finally:
        app.dependency_overrides.clear()
