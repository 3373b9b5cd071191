# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides a fresh store, image resolver and service per test
# - Provides a TestClient wired to those instances
# =============================================================================

import os
import tempfile

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ["STORE_BACKEND"] = "memory"
os.environ["IMAGE_BACKEND"] = "local"
os.environ["SEED_SAMPLE_CHARACTERS"] = "false"
os.environ.setdefault("IMAGE_DIR", os.path.join(tempfile.gettempdir(), "character-library-test-images"))
os.environ.setdefault("IMAGE_BASE_URL", "http://testserver/images")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import (
    get_character_service,
    get_character_store,
    get_configuration_service,
)
from app.main import app
from core.models.character import SAMPLE_CHARACTERS
from core.services.character_service import CharacterService
from core.services.configuration_service import ConfigurationService
from core.services.image_service import LocalImageResolver
from lib.character_store import InMemoryCharacterStore, seed_store


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def goku_payload():
    """Request body for creating Goku."""
    return {
        "name": "Goku",
        "race": "Saiyan",
        "planet": "Earth",
        "transformation": "Ultra Instinct",
        "technique": "Kamehameha",
    }


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryCharacterStore()


@pytest.fixture
def seeded_store():
    """In-memory store holding the five sample characters (ids 1-5)."""
    store = InMemoryCharacterStore()
    seed_store(store, SAMPLE_CHARACTERS)
    return store


@pytest.fixture
def images(tmp_path):
    """Local image resolver writing into a per-test directory."""
    return LocalImageResolver(root=tmp_path / "images", base_url="http://testserver/images")


@pytest.fixture
def service(store, images):
    return CharacterService(store, images)


@pytest.fixture
def config_source():
    """Backing mapping for the public configuration service."""
    return {
        "CATALOG_FEATURED_CHARACTER": "goku",
        "CATALOG_MAX_FAVORITES": "12",
        "CATALOG_SHOW_IMAGES": "true",
        "SUPABASE_SERVICE_KEY": "secret",
    }


def _client_for(store, service, config_source):
    app.dependency_overrides[get_character_store] = lambda: store
    app.dependency_overrides[get_character_service] = lambda: service
    app.dependency_overrides[get_configuration_service] = (
        lambda: ConfigurationService(source=config_source, prefix="CATALOG_")
    )
    return TestClient(app)


@pytest.fixture
def client(store, service, config_source):
    """TestClient over an empty store."""
    yield _client_for(store, service, config_source)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(seeded_store, images, config_source):
    """TestClient over a store holding ids 1-5."""
    yield _client_for(seeded_store, CharacterService(seeded_store, images), config_source)
    app.dependency_overrides.clear()
