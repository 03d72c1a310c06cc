"""
Tests for the HTTP API: generation endpoints and the saved list
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hustle.app import app, get_saved_store
from hustle.errors import PromptBlockedError, ProviderError
from hustle.flows import BLOCKED_FAILURE
from hustle.models import HustleIdeasOutput
from hustle.saved_store import LocalStorage, SavedIdeaStore


@pytest.fixture
def store(tmp_path):
    store = SavedIdeaStore(LocalStorage(tmp_path / "local_storage"))
    app.dependency_overrides[get_saved_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture
def client(store):
    return TestClient(app)


IDEAS = HustleIdeasOutput.model_validate({"ideas": [
    {"idea": "Design logos for local shops", "suggestedWebsites": ["99designs.com", "https://www.fiverr.com"]},
    {"idea": "Transcribe podcasts", "suggestedWebsites": []},
]})


class TestGenerationAPI:

    def test_invalid_input_returns_field_errors(self, client, fake_ideator_factory):
        ideator = fake_ideator_factory(result=IDEAS)
        with patch("hustle.flows.get_ideator", return_value=ideator):
            response = client.post("/api/generate-ideas", json={"userSkills": "", "targetAmount": 0})
        assert response.status_code == 422
        errors = response.json()["errors"]
        assert set(errors) == {"userSkills", "targetAmount"}
        assert ideator.requests == []

    def test_non_json_body_is_a_validation_error(self, client):
        response = client.post("/api/generate-ideas", content="nope",
                               headers={"Content-Type": "application/json"})
        assert response.status_code == 422

    def test_generate_ideas_for_page(self, client, fake_ideator_factory):
        with patch("hustle.flows.get_ideator", return_value=fake_ideator_factory(result=IDEAS)):
            response = client.post("/api/generate-ideas",
                                   json={"userSkills": "design", "targetAmount": "3"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert len(data["ideas"]) == 2
        first = data["ideas"][0]
        assert first["id"].startswith("gen-")
        assert first["websites"] == ["99designs.com", "https://www.fiverr.com"]
        assert first["links"][0] == {
            "raw": "99designs.com",
            "label": "99designs.com",
            "href": "https://99designs.com",
            "clickable": True,
        }
        assert data["ideas"][1]["links"] == []
        assert data["highlighted_offer"] is not None
        assert data["highlighted_offer"] not in data["more_offers"]
        assert len(data["more_offers"]) == 21

    def test_generate_ideas_failure_returns_notice(self, client, fake_ideator_factory):
        ideator = fake_ideator_factory(error=PromptBlockedError("The prompt was blocked by safety settings"))
        with patch("hustle.flows.get_ideator", return_value=ideator):
            response = client.post("/api/generate-ideas",
                                   json={"userSkills": "design", "targetAmount": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "error"
        assert data["ideas"] == []
        assert data["notice"]["description"] == BLOCKED_FAILURE

    def test_raw_entry_point_returns_wire_shape(self, client, fake_ideator_factory):
        with patch("hustle.flows.get_ideator", return_value=fake_ideator_factory(result=IDEAS)):
            response = client.post("/api/flows/generate-daily-hustle-ideas",
                                   json={"userSkills": "design", "targetAmount": 3})
        assert response.status_code == 200
        assert response.json() == {"ideas": [
            {"idea": "Design logos for local shops", "suggestedWebsites": ["99designs.com", "https://www.fiverr.com"]},
            {"idea": "Transcribe podcasts", "suggestedWebsites": []},
        ]}

    def test_raw_entry_point_surfaces_provider_errors(self, client, fake_ideator_factory):
        ideator = fake_ideator_factory(error=ProviderError("Provider request failed: quota"))
        with patch("hustle.flows.get_ideator", return_value=ideator):
            response = client.post("/api/flows/generate-daily-hustle-ideas",
                                   json={"userSkills": "design", "targetAmount": 3})
        assert response.status_code == 502
        assert response.json() == {"status": "error", "message": "Provider request failed: quota"}

    def test_raw_entry_point_rejects_bad_input(self, client):
        response = client.post("/api/flows/generate-daily-hustle-ideas", json={"userSkills": "design"})
        assert response.status_code == 422


class TestSavedIdeasAPI:

    IDEA = {"id": "gen-1-0", "text": "Design logos for local shops", "websites": ["99designs.com"]}

    def test_save_then_save_again(self, client, store):
        first = client.post("/api/saved-ideas", json=self.IDEA).json()
        assert first["saved"] is True
        assert first["notice"]["title"] == "Idea Saved"
        assert first["ideas"][0]["links"][0]["href"] == "https://99designs.com"

        second = client.post("/api/saved-ideas", json=self.IDEA).json()
        assert second["saved"] is False
        assert second["notice"]["title"] == "Already Saved"
        assert len(second["ideas"]) == 1
        assert len(store) == 1

    def test_list_and_remove(self, client, store):
        client.post("/api/saved-ideas", json=self.IDEA)
        listed = client.get("/api/saved-ideas").json()
        assert [idea["id"] for idea in listed["ideas"]] == ["gen-1-0"]

        missing = client.delete("/api/saved-ideas/unknown").json()
        assert missing["removed"] is False
        assert len(missing["ideas"]) == 1

        removed = client.delete("/api/saved-ideas/gen-1-0").json()
        assert removed["removed"] is True
        assert removed["notice"]["title"] == "Idea Removed"
        assert removed["ideas"] == []

    def test_save_rejects_malformed_idea(self, client):
        response = client.post("/api/saved-ideas", json={"id": "x"})
        assert response.status_code == 422


class TestPages:

    def test_index_renders_saved_ideas_and_offers(self, client, store):
        client.post("/api/saved-ideas", json={"id": "gen-1-0", "text": "Bake <b>cookies</b>",
                                              "websites": ["not a url"]})
        response = client.get("/")
        assert response.status_code == 200
        assert "Daily Hustle Generator" in response.text
        assert "Bake &lt;b&gt;cookies&lt;/b&gt;" in response.text
        assert "not a url (invalid link)" in response.text
        assert "More Recommended Offers" in response.text

    def test_affiliate_offers_endpoint(self, client):
        data = client.get("/api/affiliate-offers").json()
        assert len(data["offers"]) == 22

    def test_models_endpoint(self, client):
        data = client.get("/api/models").json()
        assert data["default"] in {m["id"] for m in data["models"]}

    def test_prompt_templates_endpoint(self, client):
        data = client.get("/api/prompt-templates").json()
        assert data["status"] == "success"
        assert "daily_hustle" in data["templates"]
