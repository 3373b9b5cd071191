# =============================================================================
# lib/api_client.py - Character Catalog HTTP Client
# =============================================================================
# Thin httpx client for the catalog API, used by scripts and other services.
#
# The API base URL comes from CATALOG_API_URL (default http://localhost:8000)
# unless passed explicitly.
#
# Usage:
#   with CharacterApiClient() as api:
#       for character in api.list_characters():
#           print(character.name)
# =============================================================================

from __future__ import annotations

import os
from typing import Any

import httpx

from core.models.character import Character, CharacterCreate, CharacterUpdate

DEFAULT_API_URL = "http://localhost:8000"


class CharacterApiError(Exception):
    """Non-success response from the catalog API."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        detail = payload.get("detail") if isinstance(payload, dict) else payload
        super().__init__(f"Catalog API returned {status_code}: {detail}")


class CharacterApiClient:
    """Typed wrapper over the /api/characters endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url or os.getenv("CATALOG_API_URL", DEFAULT_API_URL)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> CharacterApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            raise CharacterApiError(response.status_code, payload)
        return response

    def list_characters(self) -> list[Character]:
        response = self._request("GET", "/api/characters")
        return [Character.model_validate(item) for item in response.json()]

    def get_character(self, character_id: int) -> Character:
        response = self._request("GET", f"/api/characters/{character_id}")
        return Character.model_validate(response.json())

    def create_character(self, character: CharacterCreate) -> Character:
        response = self._request(
            "POST",
            "/api/characters",
            json=character.model_dump(by_alias=True, exclude_none=True),
        )
        return Character.model_validate(response.json())

    def update_character(self, character_id: int, character: CharacterUpdate) -> Character:
        response = self._request(
            "PUT",
            f"/api/characters/{character_id}",
            json=character.model_dump(by_alias=True, exclude_none=True),
        )
        return Character.model_validate(response.json())

    def delete_character(self, character_id: int) -> None:
        self._request("DELETE", f"/api/characters/{character_id}")
