# =============================================================================
# app/routers/characters.py - Character CRUD Endpoints
# =============================================================================
# Maps HTTP verbs on /api/characters to CharacterService calls.
#
# Handlers are plain `def`: FastAPI runs each request on a worker thread,
# so a slow store or image backend never stalls the event loop.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, File, Path, Response, UploadFile, status

from app.config import settings
from app.dependencies import CharacterServiceDep
from app.exceptions import ImageTooLargeError, InvalidImageTypeError
from core.models.character import Character, CharacterCreate, CharacterUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

CharacterId = Annotated[int, Path(description="Character id")]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Character])
def list_characters(service: CharacterServiceDep):
    """
    List all characters.

    Returns every character in insertion order.
    """
    return service.list_characters()


@router.get("/{character_id}", response_model=Character)
def get_character(character_id: CharacterId, service: CharacterServiceDep):
    """Get a single character."""
    return service.get_character(character_id)


@router.post("", response_model=Character, status_code=status.HTTP_201_CREATED)
def create_character(
    request: CharacterCreate,
    response: Response,
    service: CharacterServiceDep,
):
    """
    Create a character.

    The id is assigned by the store. imageUrl is resolved from the
    character name; if no image backend answers, imageUrl is null and
    the character is still created.
    """
    character = service.create_character(request)
    response.headers["Location"] = f"/api/characters/{character.id}"
    return character


@router.put("/{character_id}", response_model=Character)
def update_character(
    character_id: CharacterId,
    request: CharacterUpdate,
    service: CharacterServiceDep,
):
    """
    Replace a character.

    All fields except the id are replaced. When imageUrl is omitted it is
    resolved again from the (possibly new) name.
    """
    return service.update_character(character_id, request)


@router.delete("/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_character(
    character_id: CharacterId,
    background_tasks: BackgroundTasks,
    service: CharacterServiceDep,
):
    """
    Delete a character.

    The character's image is cleaned up after the response is sent;
    cleanup failures are logged and never change the response.
    """
    service.delete_character(character_id, schedule=background_tasks.add_task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{character_id}/image", response_model=Character)
def upload_character_image(
    character_id: CharacterId,
    file: Annotated[UploadFile, File(description="Image file to upload")],
    service: CharacterServiceDep,
):
    """
    Upload a character's image.

    Stores the image under the character's normalized name and records
    the resulting URL on the character.
    """
    content_type = (file.content_type or "").lower()
    allowed = settings.allowed_image_types_list
    if content_type not in allowed:
        raise InvalidImageTypeError(file.content_type, allowed)

    content = file.file.read()
    if len(content) > settings.max_image_size_bytes:
        raise ImageTooLargeError(len(content) / (1024 * 1024), settings.MAX_IMAGE_SIZE_MB)

    logger.info(f"Processing image upload for character {character_id} ({len(content)} bytes)")
    return service.upload_image(character_id, content, content_type)
