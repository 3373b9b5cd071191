# =============================================================================
# app/routers/settings.py - Public Configuration Endpoint
# =============================================================================
# Lets clients read runtime settings exposed with the public prefix.
# =============================================================================

from typing import Annotated, Literal

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel

from app.dependencies import ConfigurationServiceDep

router = APIRouter()


class ConfigValueResponse(BaseModel):
    """A single configuration value."""
    key: str
    value: str | int | bool


@router.get("/{key}", response_model=ConfigValueResponse)
def get_config_value(
    key: Annotated[str, Path(pattern=r"^[A-Za-z0-9_]+$", description="Setting name without prefix")],
    service: ConfigurationServiceDep,
    value_type: Annotated[
        Literal["string", "int", "bool"],
        Query(alias="type", description="How to interpret the value"),
    ] = "string",
):
    """
    Read a public configuration value.

    Missing or unparseable values return the type's default
    ("", 0 or false).
    """
    if value_type == "int":
        value = service.get_int(key)
    elif value_type == "bool":
        value = service.get_bool(key)
    else:
        value = service.get_string(key)

    return ConfigValueResponse(key=key, value=value)
