"""
Tests for the prompt library routes.
"""

import pytest
from fastapi.testclient import TestClient

from lectern.run import create_app


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


class TestPromptListing:
    """Tests for GET /api/prompts."""

    def test_list_library(self, client):
        """Without parameters every folder is listed with its prompts."""
        response = client.get("/api/prompts")

        assert response.status_code == 200
        folders = {f["folder"]: f for f in response.json()["folders"]}
        assert folders["support"]["prompts"] == [
            {"name": "overview.yml", "path": "support/overview.yml"}
        ]

    def test_list_folder(self, client):
        """A folder lists its ordered actions and folder-level prompts."""
        body = client.get("/api/prompts", params={"folder": "support"}).json()

        assert body["actions"] == ["escalate", "triage"]
        assert [p["name"] for p in body["prompts"]] == ["overview.yml"]

    def test_list_action(self, client):
        """A folder and action list the action's entries."""
        body = client.get("/api/prompts", params={"folder": "support", "action": "triage"}).json()

        assert body["prompts"] == [{"name": "greeting.yml", "path": "support/triage/greeting.yml"}]

    def test_invalid_folder(self, client):
        """Traversal in a folder name returns 400."""
        assert client.get("/api/prompts", params={"folder": ".."}).status_code == 400


class TestPromptCrud:
    """Tests for reading, writing and deleting prompts."""

    def test_write_then_read(self, client):
        """A posted prompt can be read back."""
        response = client.post("/api/prompts", json={
            "folder": "billing",
            "action": "refunds",
            "filename": "policy.yml",
            "content": "text: refunds",
        })
        assert response.status_code == 200
        assert response.json() == {"success": True}

        read = client.get("/api/prompts", params={
            "folder": "billing", "action": "refunds", "filename": "policy.yml",
        })
        assert read.json() == {"content": "text: refunds"}

    def test_write_requires_folder_and_filename(self, client):
        """Missing parameters return 400."""
        assert client.post("/api/prompts", json={"folder": "x", "content": "y"}).status_code == 400

    def test_read_missing(self, client):
        """Reading a missing prompt returns 404."""
        response = client.get("/api/prompts", params={"folder": "support", "filename": "ghost.yml"})

        assert response.status_code == 404

    def test_delete(self, client, prompt_library):
        """Deleting a prompt removes the file."""
        response = client.delete("/api/prompts", params={
            "folder": "support", "action": "triage", "filename": "greeting.yml",
        })

        assert response.status_code == 200
        assert not (prompt_library / "support" / "triage" / "greeting.yml").exists()

    def test_delete_missing(self, client):
        """Deleting a missing prompt returns 404."""
        response = client.delete("/api/prompts", params={"folder": "support", "filename": "ghost.yml"})

        assert response.status_code == 404

    def test_delete_requires_parameters(self, client):
        """Missing parameters return 400."""
        assert client.delete("/api/prompts", params={"folder": "support"}).status_code == 400

    def test_delete_path(self, client, prompt_library):
        """Whole actions can be deleted."""
        response = client.delete("/api/prompts/path", params={"path": "support/escalate"})

        assert response.status_code == 200
        assert not (prompt_library / "support" / "escalate").exists()

    def test_delete_path_missing(self, client):
        """Deleting a missing path returns 404."""
        assert client.delete("/api/prompts/path", params={"path": "nope"}).status_code == 404


class TestOrderRoutes:
    """Tests for the action order routes."""

    def test_get_missing_order(self, client):
        """A folder without an order file returns an empty list."""
        assert client.get("/api/prompts/order", params={"folder": "sales"}).json()["order"] == []

    def test_save_then_get(self, client):
        """Saved orders come back unchanged."""
        client.put("/api/prompts/order", json={"folder": "sales", "order": ["b", "a"]})

        assert client.get("/api/prompts/order", params={"folder": "sales"}).json()["order"] == ["b", "a"]
