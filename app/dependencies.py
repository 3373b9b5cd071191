# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# Builds the process-wide store, image resolver and services at startup,
# and hands them to route handlers through Depends().
#
# The instances live on app.state; tests swap them with
# app.dependency_overrides.
# =============================================================================

import logging
import os
from collections import ChainMap
from typing import Annotated

from dotenv import dotenv_values
from fastapi import Depends, Request

from app.config import Settings
from core.models.character import SAMPLE_CHARACTERS
from core.services.character_service import CharacterService
from core.services.configuration_service import ConfigurationService
from core.services.image_service import (
    ImageResolver,
    LocalImageResolver,
    SupabaseImageResolver,
)
from lib.character_store import (
    CharacterStore,
    InMemoryCharacterStore,
    SupabaseCharacterStore,
    seed_store,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Builders (called once from the app lifespan)
# =============================================================================

def build_character_store(config: Settings) -> CharacterStore:
    """Create the configured store and seed it if requested."""
    if config.STORE_BACKEND == "supabase":
        store: CharacterStore = SupabaseCharacterStore(table=config.CHARACTERS_TABLE)
    else:
        store = InMemoryCharacterStore()
    logger.info(f"Using {config.STORE_BACKEND} character store")

    if config.SEED_SAMPLE_CHARACTERS:
        seed_store(store, SAMPLE_CHARACTERS)
    return store


def build_image_resolver(config: Settings) -> ImageResolver:
    """Create the configured image backend."""
    logger.info(f"Using {config.IMAGE_BACKEND} image storage")
    if config.IMAGE_BACKEND == "supabase":
        return SupabaseImageResolver(bucket=config.IMAGE_BUCKET)
    return LocalImageResolver(root=config.IMAGE_DIR, base_url=config.IMAGE_BASE_URL)


def build_configuration_service(config: Settings) -> ConfigurationService:
    """
    Public settings are read from the process environment first, then from
    the .env file Settings loads. Settings ignores unknown keys, so the
    file is parsed again here.
    """
    env_file = config.model_config.get("env_file")
    file_values = {}
    if env_file:
        file_values = {
            key: value
            for key, value in dotenv_values(env_file).items()
            if value is not None
        }
    return ConfigurationService(
        source=ChainMap(os.environ, file_values),
        prefix=config.PUBLIC_CONFIG_PREFIX,
    )


# =============================================================================
# Request-scoped accessors
# =============================================================================

def get_character_store(request: Request) -> CharacterStore:
    return request.app.state.character_store


def get_character_service(request: Request) -> CharacterService:
    return request.app.state.character_service


def get_configuration_service(request: Request) -> ConfigurationService:
    return request.app.state.configuration_service


# Type aliases for dependency injection
CharacterStoreDep = Annotated[CharacterStore, Depends(get_character_store)]
CharacterServiceDep = Annotated[CharacterService, Depends(get_character_service)]
ConfigurationServiceDep = Annotated[ConfigurationService, Depends(get_configuration_service)]
