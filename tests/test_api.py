# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# Exercises the API through FastAPI's TestClient. The store, image resolver
# and configuration service are swapped in via dependency overrides
# (see conftest.py), so no external service is contacted.
# =============================================================================

from __future__ import annotations

from unittest.mock import MagicMock

from app.config import settings
from app.dependencies import (
    build_configuration_service,
    get_character_service,
    get_character_store,
    get_configuration_service,
)
from app.main import app
from core.services.character_service import CharacterService
from lib.utils import StoreUnavailableError


# =============================================================================
# Characters
# =============================================================================

class TestCreateCharacter:
    """POST /api/characters"""

    def test_create_returns_201_with_location(self, client, goku_payload):
        response = client.post("/api/characters", json=goku_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert "goku" in body["imageUrl"]
        assert response.headers["location"] == "/api/characters/1"

    def test_response_shape(self, client, goku_payload):
        body = client.post("/api/characters", json=goku_payload).json()

        assert set(body) == {"id", "name", "race", "planet", "transformation", "technique", "imageUrl"}

    def test_supplied_image_url_is_ignored(self, client, goku_payload):
        payload = {**goku_payload, "imageUrl": "https://elsewhere.example/x.png"}

        body = client.post("/api/characters", json=payload).json()

        assert body["imageUrl"] == "http://testserver/images/goku/goku.jpg"

    def test_missing_field_is_rejected(self, client, goku_payload):
        payload = {k: v for k, v in goku_payload.items() if k != "race"}

        response = client.post("/api/characters", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"][0]["field"] == "race"

    def test_blank_field_is_rejected(self, client, goku_payload):
        response = client.post("/api/characters", json={**goku_payload, "name": "   "})

        assert response.status_code == 422
        assert client.get("/api/characters").json() == []

    def test_create_then_read_round_trip(self, client, goku_payload):
        created = client.post("/api/characters", json=goku_payload).json()

        fetched = client.get(f"/api/characters/{created['id']}").json()

        assert fetched == created


class TestReadCharacters:
    """GET /api/characters[/{id}]"""

    def test_list_empty(self, client):
        response = client.get("/api/characters")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_seeded_in_order(self, seeded_client):
        names = [c["name"] for c in seeded_client.get("/api/characters").json()]
        assert names == ["Goku", "Vegeta", "Piccolo", "Gohan", "Frieza"]

    def test_unknown_id_returns_404(self, seeded_client):
        response = seeded_client.get("/api/characters/999")

        assert response.status_code == 404
        assert response.json()["code"] == "CHARACTER_NOT_FOUND"

    def test_non_integer_id_is_rejected(self, client):
        assert client.get("/api/characters/goku").status_code == 422

    def test_zero_and_negative_ids_return_404(self, seeded_client, goku_payload):
        for character_id in (0, -1):
            url = f"/api/characters/{character_id}"
            assert seeded_client.get(url).status_code == 404
            assert seeded_client.put(url, json=goku_payload).status_code == 404
            assert seeded_client.delete(url).status_code == 404


class TestUpdateCharacter:
    """PUT /api/characters/{id}"""

    def test_update_technique(self, seeded_client):
        current = seeded_client.get("/api/characters/2").json()
        payload = {**current, "technique": "Galick Gun"}
        payload.pop("id")
        payload.pop("imageUrl")

        response = seeded_client.put("/api/characters/2", json=payload)

        assert response.status_code == 200
        after = seeded_client.get("/api/characters/2").json()
        assert after["technique"] == "Galick Gun"
        assert after["name"] == "Vegeta"

    def test_update_unknown_id_returns_404_and_changes_nothing(self, seeded_client, goku_payload):
        before = seeded_client.get("/api/characters").json()

        response = seeded_client.put("/api/characters/42", json=goku_payload)

        assert response.status_code == 404
        assert seeded_client.get("/api/characters").json() == before

    def test_update_keeps_explicit_image_url(self, seeded_client, goku_payload):
        payload = {**goku_payload, "imageUrl": "https://cdn.example.com/goku.png"}

        body = seeded_client.put("/api/characters/1", json=payload).json()

        assert body["imageUrl"] == "https://cdn.example.com/goku.png"

    def test_update_validates_like_create(self, seeded_client, goku_payload):
        response = seeded_client.put("/api/characters/1", json={**goku_payload, "planet": ""})
        assert response.status_code == 422


class TestDeleteCharacter:
    """DELETE /api/characters/{id}"""

    def test_delete_returns_204_then_404(self, seeded_client):
        response = seeded_client.delete("/api/characters/3")

        assert response.status_code == 204
        assert response.content == b""
        assert seeded_client.get("/api/characters/3").status_code == 404

    def test_delete_unknown_id_returns_404(self, seeded_client):
        assert seeded_client.delete("/api/characters/999").status_code == 404

    def test_delete_cleans_up_image_after_response(self, client, service, goku_payload):
        images = MagicMock()
        images.resolve_url.return_value = "https://cdn.example.com/goku/goku.jpg"
        service.images = images
        created = client.post("/api/characters", json=goku_payload).json()

        client.delete(f"/api/characters/{created['id']}")

        images.delete.assert_called_once_with("Goku")

    def test_cleanup_failure_does_not_change_response(self, client, service, goku_payload):
        images = MagicMock()
        images.resolve_url.return_value = None
        images.delete.side_effect = ConnectionError("storage unreachable")
        service.images = images
        created = client.post("/api/characters", json=goku_payload).json()

        response = client.delete(f"/api/characters/{created['id']}")

        assert response.status_code == 204


class TestUploadImage:
    """POST /api/characters/{id}/image"""

    def test_upload_jpeg(self, seeded_client):
        response = seeded_client.post(
            "/api/characters/1/image",
            files={"file": ("goku.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json()["imageUrl"].endswith("/goku/goku.jpg")

    def test_wrong_content_type_rejected(self, seeded_client):
        response = seeded_client.post(
            "/api/characters/1/image",
            files={"file": ("goku.gif", b"gif-bytes", "image/gif")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_IMAGE_TYPE"

    def test_unknown_character_returns_404(self, seeded_client):
        response = seeded_client.post(
            "/api/characters/999/image",
            files={"file": ("x.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        assert response.status_code == 404


# =============================================================================
# Store outages
# =============================================================================

class TestStoreUnavailable:
    """Store failures surface as 503 without internal detail."""

    def _broken_store(self):
        store = MagicMock()
        store.list.side_effect = StoreUnavailableError("connection to db.internal:5432 refused")
        store.get.side_effect = StoreUnavailableError("connection to db.internal:5432 refused")
        store.ping.side_effect = StoreUnavailableError("connection to db.internal:5432 refused")
        return store

    def test_list_returns_503(self, client, images):
        broken = self._broken_store()
        app.dependency_overrides[get_character_service] = lambda: CharacterService(broken, images)

        response = client.get("/api/characters")

        assert response.status_code == 503
        assert response.json()["code"] == "STORE_UNAVAILABLE"
        assert "db.internal" not in response.text

    def test_health_returns_503(self, client):
        app.dependency_overrides[get_character_store] = self._broken_store

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


# =============================================================================
# Health / Config / Root
# =============================================================================

class TestHealth:
    """Health endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"]["database"] == "memory"

    def test_liveness(self, client):
        assert client.get("/health/live").json()["status"] == "alive"

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/health"


class TestConfigEndpoint:
    """GET /api/config/{key}"""

    def test_string_value(self, client):
        response = client.get("/api/config/FEATURED_CHARACTER")

        assert response.status_code == 200
        assert response.json() == {"key": "FEATURED_CHARACTER", "value": "goku"}

    def test_typed_values(self, client):
        assert client.get("/api/config/MAX_FAVORITES?type=int").json()["value"] == 12
        assert client.get("/api/config/SHOW_IMAGES?type=bool").json()["value"] is True

    def test_unprefixed_secret_is_not_exposed(self, client):
        body = client.get("/api/config/SUPABASE_SERVICE_KEY").json()
        assert body["value"] == ""

    def test_unknown_type_rejected(self, client):
        assert client.get("/api/config/MAX_FAVORITES?type=float").status_code == 422

    def test_value_from_env_file(self, client, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("CATALOG_FEATURED_CHARACTER=vegeta\nCATALOG_MAX_FAVORITES=3\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CATALOG_FEATURED_CHARACTER", raising=False)
        monkeypatch.setenv("CATALOG_MAX_FAVORITES", "7")
        service = build_configuration_service(settings)
        app.dependency_overrides[get_configuration_service] = lambda: service

        assert client.get("/api/config/FEATURED_CHARACTER").json()["value"] == "vegeta"
        # Process environment wins over the file
        assert client.get("/api/config/MAX_FAVORITES?type=int").json()["value"] == 7
